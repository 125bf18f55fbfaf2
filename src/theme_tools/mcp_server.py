"""FastMCP server exposing theme-tools commands for agents."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any, Callable, TypeVar

from fastmcp import FastMCP

from .commands import (
    CommandError,
    ContrastParams,
    HashParams,
    LuminanceParams,
    RenderParams,
    ToneParams,
    classify_tone,
    color_luminance,
    contrast_colors,
    hash_color,
    render_descriptor,
)
from .runtime import ConfigurationError, application_services

server = FastMCP("theme-tools")

T = TypeVar("T")


def _to_serializable(value: Any) -> Any:
    if is_dataclass(value):
        return {key: _to_serializable(val) for key, val in asdict(value).items()}
    if isinstance(value, list):
        return [_to_serializable(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_serializable(val) for key, val in value.items()}
    return value


def _with_services(func: Callable[[Any], T]) -> T:
    try:
        with application_services(console=None) as services:
            return func(services)
    except ConfigurationError as exc:
        raise RuntimeError(str(exc)) from exc
    except CommandError as exc:
        raise ValueError(str(exc)) from exc


@server.tool("contrast")
def contrast_tool(back: str, front: str) -> Any:
    result = _with_services(
        lambda services: contrast_colors(services, ContrastParams(back=back, front=front))
    )
    return _to_serializable(result)


@server.tool("tone")
def tone_tool(color: str) -> Any:
    result = _with_services(lambda services: classify_tone(services, ToneParams(color=color)))
    return _to_serializable(result)


@server.tool("luminance")
def luminance_tool(color: str) -> Any:
    result = _with_services(
        lambda services: color_luminance(services, LuminanceParams(color=color))
    )
    return _to_serializable(result)


@server.tool("hash")
def hash_tool(value: str | dict[str, Any], prefix: str | None = None) -> Any:
    result = _with_services(
        lambda services: hash_color(services, HashParams(value=value, prefix=prefix))
    )
    return _to_serializable(result)


@server.tool("render")
def render_tool(descriptor: dict[str, Any]) -> Any:
    result = _with_services(
        lambda services: render_descriptor(services, RenderParams(descriptor=descriptor))
    )
    return _to_serializable(result)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    server.run()
