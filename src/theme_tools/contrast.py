"""WCAG luminance and contrast helpers used to pick light or dark tones."""

from __future__ import annotations

from typing import Dict, Literal, Optional, Tuple, Union
import logging

import numpy as np

from .colors import BLACK, NEAR_BLACK, WHITE, Color, parse_color

logger = logging.getLogger(__name__)

Tone = Literal["light", "dark"]
Emphasis = Literal["primary", "secondary", "hint", "disabled", "icon"]

DEFAULT_MINIMUM_CONTRAST = 3.1
_TONES = ("light", "dark")
_LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)


def _build_channel_table() -> np.ndarray:
    channel = np.arange(256, dtype=np.float64) / 255.0
    table = np.where(
        channel <= 0.04045,
        channel / 12.92,
        ((channel + 0.055) / 1.055) ** 2.4,
    )
    table.setflags(write=False)
    return table


# Linear-light intensity for every sRGB byte value, indexed by the byte itself.
LINEAR_CHANNEL_TABLE = _build_channel_table()

# Ink alpha per emphasis, keyed by the tone of the fill the text sits on.
_INK_ALPHA: Dict[Tone, Dict[str, float]] = {
    "light": {"primary": 0.87, "secondary": 0.54, "hint": 0.38, "disabled": 0.38, "icon": 0.38},
    "dark": {"primary": 1.0, "secondary": 0.7, "hint": 0.5, "disabled": 0.5, "icon": 0.5},
}


def luminance(color: Color) -> float:
    """Return the relative luminance of ``color`` (alpha is ignored)."""

    red, green, blue = color.channels
    r_weight, g_weight, b_weight = _LUMA_WEIGHTS
    return float(
        r_weight * LINEAR_CHANNEL_TABLE[red]
        + g_weight * LINEAR_CHANNEL_TABLE[green]
        + b_weight * LINEAR_CHANNEL_TABLE[blue]
    )


def contrast(back: Color, front: Color) -> float:
    """Return the WCAG contrast ratio between two colors."""

    back_lum = luminance(back) + 0.05
    front_lum = luminance(front) + 0.05
    return max(back_lum, front_lum) / min(back_lum, front_lum)


def meets_minimum(back: Color, front: Color, ratio: float) -> bool:
    return contrast(back, front) >= ratio


def tone_contrasts(color: Color) -> Tuple[float, float]:
    """Return ``(light, dark)`` contrasts against white and near-black text."""

    return contrast(color, WHITE), contrast(color, NEAR_BLACK)


def tone(
    color: Union[Color, str],
    *,
    minimum_contrast: float = DEFAULT_MINIMUM_CONTRAST,
) -> Tone:
    """Classify ``color`` as a ``"light"`` or ``"dark"`` background.

    A color is light only when white text misses ``minimum_contrast`` and
    near-black text does better than white. Tone tokens pass through as-is.
    """

    if isinstance(color, str) and color in _TONES:
        return color  # type: ignore[return-value]
    if isinstance(color, str):
        color = parse_color(color)
    light_contrast, dark_contrast = tone_contrasts(color)
    if light_contrast < minimum_contrast and dark_contrast > light_contrast:
        return "light"
    return "dark"


def contrast_tone(
    color: Union[Color, str],
    *,
    minimum_contrast: float = DEFAULT_MINIMUM_CONTRAST,
) -> Tone:
    """Return the text tone that contrasts with ``color``."""

    if tone(color, minimum_contrast=minimum_contrast) == "dark":
        return "light"
    return "dark"


def ink_color(
    fill: Union[Color, str],
    emphasis: Emphasis = "primary",
    *,
    minimum_contrast: float = DEFAULT_MINIMUM_CONTRAST,
) -> Color:
    """Return the text color to draw on ``fill`` for the given emphasis."""

    fill_tone = tone(fill, minimum_contrast=minimum_contrast)
    alphas = _INK_ALPHA[fill_tone]
    if emphasis not in alphas:
        raise ValueError(f"Unknown text emphasis: {emphasis!r}")
    base = BLACK if fill_tone == "light" else WHITE
    return base.with_alpha(alphas[emphasis])


def pick_contrast_color(color: Optional[Union[Color, str]]) -> str:
    """Return ``"black"`` or ``"white"`` for text drawn over ``color``."""

    if color is None:
        return "white"
    try:
        text_tone = contrast_tone(color)
    except ValueError:
        logger.debug("Cannot pick a contrast color for %r", color)
        return "white"
    return "black" if text_tone == "dark" else "white"
