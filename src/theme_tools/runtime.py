"""Runtime helpers for constructing shared application services."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional
import logging

from rich.console import Console

from .config import Config, load_config

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when the loaded configuration is unusable."""


@dataclass(slots=True)
class Services:
    """Bundle of settings shared by every entry point."""

    config: Config

    @property
    def minimum_contrast(self) -> float:
        return self.config.minimum_contrast

    @property
    def max_fallback_depth(self) -> int:
        return self.config.max_fallback_depth


def validate_config(config: Config) -> None:
    if config.minimum_contrast < 1.0:
        raise ConfigurationError(
            f"minimum_contrast must be at least 1.0, got {config.minimum_contrast}."
        )
    if config.max_fallback_depth < 1:
        raise ConfigurationError(
            f"max_fallback_depth must be positive, got {config.max_fallback_depth}."
        )


@contextmanager
def application_services(*, console: Optional[Console] = None) -> Iterator[Services]:
    """Yield initialized services for a single command execution."""

    config = load_config()
    try:
        validate_config(config)
    except ConfigurationError as exc:
        if console is not None:
            console.print(f"[yellow]Warning: {exc}[/yellow]")
        else:
            logger.warning("%s", exc)
        raise

    yield Services(config=config)
