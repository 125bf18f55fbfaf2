"""Shared command implementations used by the CLI, API, and MCP layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from .colors import Color, parse_color
from .contrast import contrast, contrast_tone, ink_color, luminance, tone, tone_contrasts
from .runtime import Services
from .variables import (
    FALLBACK_KEY,
    VARNAME_KEY,
    FallbackChainError,
    color_hash,
    get_var_fallback,
    is_var_with_fallback,
    keyframe_name,
    normalize_varname,
    parse_descriptor,
    render_var,
)


class CommandError(RuntimeError):
    """Raised when command parameters are invalid."""


@dataclass(slots=True)
class ContrastParams:
    back: str
    front: str


@dataclass(slots=True)
class WcagLevel:
    name: str
    threshold: float
    passed: bool


@dataclass(slots=True)
class ContrastResponse:
    back: str
    front: str
    ratio: float
    levels: List[WcagLevel]


@dataclass(slots=True)
class ToneParams:
    color: str


@dataclass(slots=True)
class ToneResponse:
    color: str
    tone: str
    contrast_tone: str
    light_contrast: Optional[float]
    dark_contrast: Optional[float]
    ink: Optional[str]


@dataclass(slots=True)
class LuminanceParams:
    color: str


@dataclass(slots=True)
class LuminanceResponse:
    color: str
    luminance: float


@dataclass(slots=True)
class HashParams:
    value: Any
    prefix: Optional[str] = None


@dataclass(slots=True)
class HashResponse:
    value: str
    hash: str
    keyframe_name: str


@dataclass(slots=True)
class RenderParams:
    descriptor: Mapping[str, Any]


@dataclass(slots=True)
class RenderResponse:
    expression: str
    fallback: str
    varnames: List[str]


def _parse_color(text: str) -> Color:
    try:
        return parse_color(text)
    except ValueError as exc:
        raise CommandError(str(exc)) from exc


def _parse_descriptor(raw: Any) -> Any:
    try:
        return parse_descriptor(raw)
    except KeyError as exc:
        raise CommandError(exc.args[0] if exc.args else str(exc)) from exc


def contrast_colors(services: Services, params: ContrastParams) -> ContrastResponse:
    back = _parse_color(params.back)
    front = _parse_color(params.front)
    ratio = contrast(back, front)
    thresholds = services.config.wcag
    levels = [
        WcagLevel(name, threshold, ratio >= threshold)
        for name, threshold in (
            ("AA", thresholds.aa_normal),
            ("AA Large", thresholds.aa_large),
            ("AAA", thresholds.aaa_normal),
            ("AAA Large", thresholds.aaa_large),
        )
    ]
    return ContrastResponse(back=str(back), front=str(front), ratio=ratio, levels=levels)


def classify_tone(services: Services, params: ToneParams) -> ToneResponse:
    raw = (params.color or "").strip()
    minimum = services.minimum_contrast
    if raw in ("light", "dark"):
        return ToneResponse(
            color=raw,
            tone=tone(raw, minimum_contrast=minimum),
            contrast_tone=contrast_tone(raw, minimum_contrast=minimum),
            light_contrast=None,
            dark_contrast=None,
            ink=None,
        )
    color = _parse_color(raw)
    light_contrast, dark_contrast = tone_contrasts(color)
    return ToneResponse(
        color=str(color),
        tone=tone(color, minimum_contrast=minimum),
        contrast_tone=contrast_tone(color, minimum_contrast=minimum),
        light_contrast=light_contrast,
        dark_contrast=dark_contrast,
        ink=str(ink_color(color, minimum_contrast=minimum)),
    )


def color_luminance(services: Services, params: LuminanceParams) -> LuminanceResponse:
    color = _parse_color(params.color)
    return LuminanceResponse(color=str(color), luminance=luminance(color))


def hash_color(services: Services, params: HashParams) -> HashResponse:
    value = _parse_descriptor(params.value)
    prefix = params.prefix or services.config.keyframe_prefix
    try:
        digest = color_hash(value)
        name = keyframe_name(prefix, value)
    except (AttributeError, ValueError) as exc:
        raise CommandError(f"Cannot hash value {params.value!r}") from exc
    return HashResponse(value=str(params.value), hash=digest, keyframe_name=name)


def render_descriptor(services: Services, params: RenderParams) -> RenderResponse:
    descriptor = _parse_descriptor(params.descriptor)
    if not is_var_with_fallback(descriptor):
        raise CommandError(
            f"Descriptor requires {VARNAME_KEY!r} and {FALLBACK_KEY!r} keys."
        )
    depth = services.max_fallback_depth
    try:
        expression = render_var(descriptor, max_depth=depth)
        fallback = get_var_fallback(descriptor, max_depth=depth)
    except FallbackChainError as exc:
        raise CommandError(str(exc)) from exc
    return RenderResponse(
        expression=expression,
        fallback=str(fallback),
        varnames=_collect_varnames(descriptor),
    )


def _collect_varnames(descriptor: Mapping[str, Any]) -> List[str]:
    names: List[str] = []
    current: Any = descriptor
    while is_var_with_fallback(current):
        names.append(normalize_varname(current[VARNAME_KEY]))
        current = current[FALLBACK_KEY]
    return names
