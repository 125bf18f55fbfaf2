"""Utility helpers for working with color values."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional
import re
import string

_HEX_DIGITS = set(string.hexdigits)

_RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(?P<r>\d{1,3})\s*,\s*(?P<g>\d{1,3})\s*,\s*(?P<b>\d{1,3})"
    r"\s*(?:,\s*(?P<a>\d*\.?\d+)\s*)?\)$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class Color:
    """Concrete sRGB color with 0-255 channels and a 0-1 alpha."""

    red: int
    green: int
    blue: int
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
                raise ValueError(f"{name} channel must be an int in 0-255: {value!r}")
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha out of range: {self.alpha}")

    @property
    def channels(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def with_alpha(self, alpha: float) -> "Color":
        return replace(self, alpha=alpha)

    def __str__(self) -> str:
        if self.alpha >= 1.0:
            return self.to_hex()
        return f"rgba({self.red}, {self.green}, {self.blue}, {self.alpha:g})"


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
NEAR_BLACK = BLACK.with_alpha(0.87)

_NAMED_COLORS = {
    "white": WHITE,
    "black": BLACK,
    "transparent": Color(0, 0, 0, 0.0),
}


def normalize_hex_color(color: Optional[str]) -> Optional[str]:
    """Return a normalized ``#rrggbb`` color string or ``None`` if invalid."""

    if color is None:
        return None
    value = str(color).strip()
    if not value:
        return None
    if value.startswith("#"):
        value = value[1:]
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        return None
    if any(ch not in _HEX_DIGITS for ch in value):
        return None
    return f"#{value.lower()}"


def parse_color(text: str) -> Color:
    """Parse hex, ``rgb()``/``rgba()`` or a color keyword into a :class:`Color`.

    Raises ``ValueError`` when the text is not a recognised color.
    """

    value = str(text).strip()
    named = _NAMED_COLORS.get(value.lower())
    if named is not None:
        return named
    match = _RGB_PATTERN.match(value)
    if match:
        alpha = match.group("a")
        return Color(
            int(match.group("r")),
            int(match.group("g")),
            int(match.group("b")),
            float(alpha) if alpha is not None else 1.0,
        )
    if value.startswith("#"):
        normalized = normalize_hex_color(value)
        if normalized:
            return Color(
                int(normalized[1:3], 16),
                int(normalized[3:5], 16),
                int(normalized[5:7], 16),
            )
    raise ValueError(f"Not a color: {text!r}")
