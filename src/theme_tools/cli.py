"""Command line interface for theme tools."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar
import json

import typer
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .colors import normalize_hex_color
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
from .contrast import pick_contrast_color
from .runtime import ConfigurationError, application_services

app = typer.Typer(add_completion=True)
console = Console()

T = TypeVar("T")


def _invoke(callback: Callable[[object], T]) -> T:
    try:
        with application_services(console=console) as services:
            return callback(services)
    except ConfigurationError as exc:  # pragma: no cover - exercised via CLI usage
        raise typer.BadParameter(str(exc)) from exc
    except CommandError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def contrast(
    back: str = typer.Argument(..., help="Background color, e.g. '#6200ee'"),
    front: str = typer.Argument(..., help="Foreground color, e.g. 'white'"),
) -> None:
    """Show the WCAG contrast ratio between two colors."""

    result = _invoke(
        lambda services: contrast_colors(services, ContrastParams(back=back, front=front))
    )
    entry = Text(f"Contrast {result.ratio:.2f}:1")
    back_hex = normalize_hex_color(result.back)
    front_hex = normalize_hex_color(result.front)
    if back_hex and front_hex:
        entry.append(" ")
        entry.append(" Aa ", style=Style(color=front_hex, bgcolor=back_hex, bold=True))
    console.print(entry)

    table = Table(show_lines=False)
    table.add_column("Level")
    table.add_column("Required")
    table.add_column("Result")
    for level in result.levels:
        table.add_row(
            level.name,
            f"{level.threshold:g}:1",
            "[green]pass[/green]" if level.passed else "[red]fail[/red]",
        )
    console.print(table)


@app.command()
def tone(
    color: str = typer.Argument(..., help="Background color or a 'light'/'dark' token"),
) -> None:
    """Classify a background color as light or dark."""

    result = _invoke(lambda services: classify_tone(services, ToneParams(color=color)))

    table = Table(show_lines=False)
    table.add_column("Color")
    table.add_column("Tone")
    table.add_column("Text tone")
    table.add_column("vs white")
    table.add_column("vs near-black")
    table.add_column("Ink")
    table.add_row(
        _format_swatch(result.color),
        result.tone,
        result.contrast_tone,
        _format_ratio(result.light_contrast),
        _format_ratio(result.dark_contrast),
        result.ink or "-",
    )
    console.print(table)


@app.command()
def luminance(
    color: str = typer.Argument(..., help="Color to measure"),
) -> None:
    """Print the relative luminance of a color."""

    result = _invoke(lambda services: color_luminance(services, LuminanceParams(color=color)))
    entry = _format_swatch(result.color)
    entry.append(f" {result.luminance:.4f}")
    console.print(entry)


@app.command("hash")
def hash_(
    value: str = typer.Argument(..., help="Color, var() reference, or literal token"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Keyframe name prefix"),
) -> None:
    """Print the stable hash and keyframe name for a color value."""

    result = _invoke(lambda services: hash_color(services, HashParams(value=value, prefix=prefix)))
    console.print(f"Hash: [bold]{result.hash}[/bold]")
    console.print(f"Keyframes: {result.keyframe_name}")


@app.command()
def render(
    descriptor: str = typer.Argument(
        ..., help='JSON descriptor, e.g. \'{"varname": "--primary", "fallback": "#6200ee"}\''
    ),
) -> None:
    """Render a custom property fallback chain as a var() expression."""

    try:
        raw = json.loads(descriptor)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Descriptor is not valid JSON: {exc}") from exc

    result = _invoke(lambda services: render_descriptor(services, RenderParams(descriptor=raw)))
    console.print(result.expression, markup=False, highlight=False)
    console.print(
        f"Fallback: {result.fallback} (via {' -> '.join(result.varnames)})",
        markup=False,
        highlight=False,
    )


def _format_swatch(color: str) -> Text:
    normalized = normalize_hex_color(color)
    if normalized:
        style = Style(color=pick_contrast_color(normalized), bgcolor=normalized, bold=True)
    else:
        style = Style(color="white", bgcolor="grey27", bold=True)
    return Text(f" {color} ", style=style)


def _format_ratio(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:.2f}:1"


if __name__ == "__main__":
    app()
