"""Tests for the FastAPI application."""

from __future__ import annotations

from fastapi.testclient import TestClient

from theme_tools.api import create_app, get_services
from theme_tools.commands import ToneParams, ToneResponse
from theme_tools.config import Config
from theme_tools.runtime import Services


def make_client(config: Config | None = None) -> tuple[TestClient, Services]:
    services = Services(config=config or Config())
    app = create_app()
    app.dependency_overrides[get_services] = lambda: services
    return TestClient(app), services


def test_contrast_endpoint_returns_ratio_and_levels() -> None:
    client, _ = make_client()

    result = client.post("/contrast", json={"back": "#000", "front": "white"})

    assert result.status_code == 200
    body = result.json()
    assert round(body["ratio"], 2) == 21.0
    assert body["levels"][0] == {"name": "AA", "threshold": 4.5, "passed": True}


def test_contrast_endpoint_maps_command_errors() -> None:
    client, _ = make_client()

    result = client.post("/contrast", json={"back": "nope", "front": "white"})

    assert result.status_code == 400
    assert "nope" in result.json()["detail"]


def test_tone_endpoint_passes_services(monkeypatch) -> None:
    client, services = make_client()
    captured: dict[str, object] = {}

    def fake_classify_tone(passed_services, params: ToneParams):
        captured["services"] = passed_services
        captured["params"] = params
        return ToneResponse(
            color="#ffffff",
            tone="light",
            contrast_tone="dark",
            light_contrast=1.0,
            dark_contrast=21.0,
            ink="rgba(0, 0, 0, 0.87)",
        )

    monkeypatch.setattr("theme_tools.api.classify_tone", fake_classify_tone)

    result = client.post("/tone", json={"color": "white"})

    assert result.status_code == 200
    assert result.json()["contrast_tone"] == "dark"
    assert captured["services"] is services
    assert captured["params"].color == "white"


def test_tone_endpoint_for_token() -> None:
    client, _ = make_client()

    result = client.post("/tone", json={"color": "dark"})

    assert result.status_code == 200
    body = result.json()
    assert body["tone"] == "dark"
    assert body["contrast_tone"] == "light"
    assert body["light_contrast"] is None


def test_luminance_endpoint() -> None:
    client, _ = make_client()

    result = client.get("/luminance", params={"color": "#000000"})

    assert result.status_code == 200
    assert result.json() == {"color": "#000000", "luminance": 0.0}


def test_hash_endpoint_accepts_strings_and_descriptors() -> None:
    client, _ = make_client(Config(keyframe_prefix="ripple"))

    result = client.post("/hash", json={"value": "rgb(255, 112, 112)"})
    assert result.status_code == 200
    assert result.json()["keyframe_name"] == "ripple-ff7070"

    result = client.post(
        "/hash",
        json={"value": {"varname": "--a", "fallback": "var(--b, #fff)"}, "prefix": "fade"},
    )
    assert result.status_code == 200
    assert result.json()["hash"] == "--b"
    assert result.json()["keyframe_name"] == "fade---b"


def test_render_endpoint() -> None:
    client, _ = make_client()

    result = client.post(
        "/render",
        json={"descriptor": {"varname": "--a", "fallback": {"varname": "--b", "fallback": "4px"}}},
    )

    assert result.status_code == 200
    body = result.json()
    assert body["expression"] == "var(--a, var(--b, 4px))"
    assert body["fallback"] == "4px"
    assert body["varnames"] == ["--a", "--b"]


def test_render_endpoint_rejects_incomplete_descriptor() -> None:
    client, _ = make_client()

    result = client.post("/render", json={"descriptor": {"varname": "--a"}})

    assert result.status_code == 400


def test_hash_endpoint_maps_unhashable_values_to_bad_request() -> None:
    client, _ = make_client()

    result = client.post("/hash", json={"value": "var(abc"})

    assert result.status_code == 400
    assert "var(abc" in result.json()["detail"]
