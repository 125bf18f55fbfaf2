"""CSS custom property helpers: fallback chains and color hashes.

A *style descriptor* is any mapping with both a ``varname`` and a ``fallback``
key. It stands for ``var(<varname>, <fallback>)`` and the fallback may itself
be another descriptor, forming a chain. Chains are expected to be finite;
callers that cannot guarantee that should pass ``max_depth``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union
import logging

from .colors import Color, parse_color

logger = logging.getLogger(__name__)

VARNAME_KEY = "varname"
FALLBACK_KEY = "fallback"
_VAR_PREFIX = "var("


class FallbackChainError(ValueError):
    """Raised when a fallback chain is deeper than the allowed depth."""


@dataclass(frozen=True, slots=True)
class CssVar:
    """Reference to a CSS custom property, optionally with a fallback."""

    name: str
    fallback: Optional[Any] = None

    def __str__(self) -> str:
        if self.fallback is None:
            return f"var({normalize_varname(self.name)})"
        return f"var({normalize_varname(self.name)}, {self.fallback})"


ThemeValue = Union[Color, CssVar, str]


def normalize_varname(name: str) -> str:
    name = str(name).strip()
    if name.startswith("--"):
        return name
    return f"--{name}"


def is_var_with_fallback(style: Any) -> bool:
    """Return ``True`` when ``style`` is a descriptor with a name and fallback."""

    return isinstance(style, Mapping) and VARNAME_KEY in style and FALLBACK_KEY in style


def _check_depth(depth: int, max_depth: Optional[int]) -> None:
    if max_depth is not None and depth > max_depth:
        raise FallbackChainError(f"Fallback chain deeper than {max_depth} levels")


def get_var_fallback(style: Mapping[str, Any], *, max_depth: Optional[int] = None) -> Any:
    """Return the terminal fallback of a descriptor chain."""

    fallback = style[FALLBACK_KEY]
    depth = 1
    while is_var_with_fallback(fallback):
        depth += 1
        _check_depth(depth, max_depth)
        fallback = fallback[FALLBACK_KEY]
    return fallback


def render_var(style: Mapping[str, Any], *, max_depth: Optional[int] = None) -> str:
    """Render a descriptor as ``var(--name, fallback)``, keeping nested references."""

    return _render_var(style, 1, max_depth)


def _render_var(style: Mapping[str, Any], depth: int, max_depth: Optional[int]) -> str:
    _check_depth(depth, max_depth)
    varname = normalize_varname(style[VARNAME_KEY])
    fallback = style[FALLBACK_KEY]
    if is_var_with_fallback(fallback):
        return f"var({varname}, {_render_var(fallback, depth + 1, max_depth)})"
    return f"var({varname}, {fallback})"


def prop_value(value: Any, *, max_depth: Optional[int] = None) -> str:
    """Render any theme value as the right-hand side of a declaration."""

    if is_var_with_fallback(value):
        return render_var(value, max_depth=max_depth)
    return str(value)


def is_css_var(value: Any) -> bool:
    return str(value).startswith(_VAR_PREFIX)


def get_css_varname(value: Any) -> Any:
    """Return the ``--name`` inside a ``var()`` reference.

    The name runs from the first ``--`` to the first ``,`` or ``)`` after it.
    Values that are not references are returned unchanged.
    """

    if not is_css_var(value):
        return value
    text = str(value)
    start = text.find("--")
    if start == -1:
        raise ValueError(f"No custom property name in {text!r}")
    ends = [index for index in (text.find(",", start), text.find(")", start)) if index != -1]
    end = min(ends) if ends else len(text)
    return text[start:end]


def color_hash(value: Any) -> str:
    """Return a short stable identifier for a color value."""

    if is_var_with_fallback(value):
        value = value[FALLBACK_KEY]
    if is_css_var(value):
        return get_css_varname(value)
    if isinstance(value, str):
        return value
    digest = value.to_hex()[1:]
    if value.alpha < 1.0:
        digest += f"{round(value.alpha * 255):02x}"
    return digest


def keyframe_name(prefix: str, color: ThemeValue) -> str:
    return f"{prefix}-{color_hash(color)}"


def parse_value(text: Any) -> Any:
    """Turn user text into a :class:`CssVar`, :class:`Color` or plain token."""

    if not isinstance(text, str):
        return text
    value = text.strip()
    if is_css_var(value) and value.endswith(")"):
        inner = value[len(_VAR_PREFIX):-1]
        name, sep, fallback = inner.partition(",")
        parsed_fallback = parse_value(fallback.strip()) if sep else None
        return CssVar(name=name.strip(), fallback=parsed_fallback)
    try:
        return parse_color(value)
    except ValueError:
        logger.debug("Treating %r as a literal token", value)
        return value


def parse_descriptor(raw: Any) -> Any:
    """Convert nested JSON-like mappings into descriptors with parsed leaves."""

    if isinstance(raw, Mapping):
        if not is_var_with_fallback(raw):
            raise KeyError(
                f"Descriptor requires {VARNAME_KEY!r} and {FALLBACK_KEY!r} keys: {dict(raw)!r}"
            )
        return {
            VARNAME_KEY: str(raw[VARNAME_KEY]),
            FALLBACK_KEY: parse_descriptor(raw[FALLBACK_KEY]),
        }
    return parse_value(raw)
