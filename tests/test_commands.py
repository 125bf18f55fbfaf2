"""Tests for the shared command implementations."""

from __future__ import annotations

import pytest

from theme_tools.commands import (
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
from theme_tools.config import Config, WcagThresholds
from theme_tools.runtime import Services


def make_services(**overrides) -> Services:
    return Services(config=Config(**overrides))


def test_contrast_colors_reports_wcag_levels():
    result = contrast_colors(make_services(), ContrastParams(back="black", front="#fff"))
    assert result.back == "#000000"
    assert result.front == "#ffffff"
    assert result.ratio == pytest.approx(21.0)
    assert [level.name for level in result.levels] == ["AA", "AA Large", "AAA", "AAA Large"]
    assert all(level.passed for level in result.levels)


def test_contrast_colors_uses_configured_thresholds():
    services = make_services(wcag=WcagThresholds(aa_normal=1.0, aa_large=1.0, aaa_normal=30.0))
    result = contrast_colors(services, ContrastParams(back="#ffff00", front="white"))
    passed = {level.name: level.passed for level in result.levels}
    assert passed["AA"] is True
    assert passed["AAA"] is False


def test_contrast_colors_rejects_invalid_colors():
    with pytest.raises(CommandError):
        contrast_colors(make_services(), ContrastParams(back="nope", front="#fff"))


def test_classify_tone_for_concrete_color():
    result = classify_tone(make_services(), ToneParams(color="#6200ee"))
    assert result.color == "#6200ee"
    assert result.tone == "dark"
    assert result.contrast_tone == "light"
    assert result.light_contrast > 3.1
    assert result.dark_contrast is not None
    assert result.ink == "#ffffff"


def test_classify_tone_passes_tokens_through():
    result = classify_tone(make_services(), ToneParams(color=" light "))
    assert result.tone == "light"
    assert result.contrast_tone == "dark"
    assert result.light_contrast is None
    assert result.ink is None


def test_classify_tone_respects_minimum_contrast():
    result = classify_tone(make_services(minimum_contrast=10.0), ToneParams(color="#c8c8c8"))
    assert result.tone == "light"
    assert result.ink == "rgba(0, 0, 0, 0.87)"


def test_color_luminance():
    result = color_luminance(make_services(), LuminanceParams(color="rgb(255, 0, 0)"))
    assert result.color == "#ff0000"
    assert result.luminance == pytest.approx(0.2126)


def test_hash_color_for_literal_and_reference():
    result = hash_color(make_services(), HashParams(value="#FF7070"))
    assert result.hash == "ff7070"
    assert result.keyframe_name == "theme-keyframes-ff7070"

    result = hash_color(
        make_services(), HashParams(value="var(--my-fancy-color, #fff)", prefix="ripple")
    )
    assert result.hash == "--my-fancy-color"
    assert result.keyframe_name == "ripple---my-fancy-color"


def test_hash_color_with_descriptor():
    result = hash_color(
        make_services(keyframe_prefix="fade"),
        HashParams(value={"varname": "--a", "fallback": "rgb(255, 112, 112)"}),
    )
    assert result.hash == "ff7070"
    assert result.keyframe_name == "fade-ff7070"


def test_hash_color_rejects_nested_descriptor():
    value = {"varname": "--a", "fallback": {"varname": "--b", "fallback": "#fff"}}
    with pytest.raises(CommandError):
        hash_color(make_services(), HashParams(value=value))


def test_render_descriptor_expands_chain():
    descriptor = {
        "varname": "--a",
        "fallback": {"varname": "--b", "fallback": {"varname": "--c", "fallback": "#FFF"}},
    }
    result = render_descriptor(make_services(), RenderParams(descriptor=descriptor))
    assert result.expression == "var(--a, var(--b, var(--c, #ffffff)))"
    assert result.fallback == "#ffffff"
    assert result.varnames == ["--a", "--b", "--c"]


def test_render_descriptor_enforces_depth_limit():
    descriptor = {"varname": "--a", "fallback": {"varname": "--b", "fallback": "1px"}}
    with pytest.raises(CommandError):
        render_descriptor(make_services(max_fallback_depth=1), RenderParams(descriptor=descriptor))


@pytest.mark.parametrize(
    "descriptor",
    [{"varname": "--a"}, {"fallback": "#fff"}, {}],
)
def test_render_descriptor_rejects_incomplete_descriptors(descriptor):
    with pytest.raises(CommandError):
        render_descriptor(make_services(), RenderParams(descriptor=descriptor))


@pytest.mark.parametrize("value", ["var(", "var(abc", 4, 4.5])
def test_hash_color_rejects_unhashable_values(value):
    with pytest.raises(CommandError):
        hash_color(make_services(), HashParams(value=value))


def test_hash_color_distinguishes_translucent_colors():
    opaque = hash_color(make_services(), HashParams(value="rgb(0, 0, 0)"))
    translucent = hash_color(make_services(), HashParams(value="rgba(0, 0, 0, 0.5)"))
    assert opaque.hash == "000000"
    assert translucent.hash == "00000080"


def test_render_descriptor_reports_normalized_varnames():
    descriptor = {"varname": "surface", "fallback": {"varname": "--base", "fallback": "#fff"}}
    result = render_descriptor(make_services(), RenderParams(descriptor=descriptor))
    assert result.expression == "var(--surface, var(--base, #ffffff))"
    assert result.varnames == ["--surface", "--base"]
