"""Configuration helpers for theme tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
import os
try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11 fallback
    import tomli as tomllib  # type: ignore[assignment]

from dotenv import load_dotenv


DEFAULT_CONFIG_PATH = Path("theme-tools.toml")
DEFAULT_ENV_PATH = Path(".env")
CONFIG_PATH_ENV = "THEME_TOOLS_CONFIG"


@dataclass(slots=True)
class WcagThresholds:
    """Contrast ratios required by the WCAG conformance levels."""

    aa_normal: float = 4.5
    aa_large: float = 3.0
    aaa_normal: float = 7.0
    aaa_large: float = 4.5


@dataclass(slots=True)
class Config:
    """Application configuration."""

    minimum_contrast: float = 3.1
    max_fallback_depth: int = 32
    keyframe_prefix: str = "theme-keyframes"
    wcag: WcagThresholds = field(default_factory=WcagThresholds)


def _load_dict(path: Path) -> Dict[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def load_config(path: Optional[Path] = None, env_path: Optional[Path] = None) -> Config:
    """Load configuration from disk, falling back to defaults."""

    env_file = env_path or DEFAULT_ENV_PATH
    if env_file:
        load_dotenv(env_file)

    config_path = path or Path(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))
    raw = _load_dict(config_path)

    wcag_raw = raw.get("wcag", {}) if isinstance(raw, dict) else {}

    default_wcag = WcagThresholds()
    wcag = WcagThresholds(
        aa_normal=float(wcag_raw.get("aa_normal", default_wcag.aa_normal)),
        aa_large=float(wcag_raw.get("aa_large", default_wcag.aa_large)),
        aaa_normal=float(wcag_raw.get("aaa_normal", default_wcag.aaa_normal)),
        aaa_large=float(wcag_raw.get("aaa_large", default_wcag.aaa_large)),
    )

    defaults = Config()

    return Config(
        minimum_contrast=float(raw.get("minimum_contrast", defaults.minimum_contrast)),
        max_fallback_depth=int(raw.get("max_fallback_depth", defaults.max_fallback_depth)),
        keyframe_prefix=str(raw.get("keyframe_prefix", defaults.keyframe_prefix)),
        wcag=wcag,
    )
