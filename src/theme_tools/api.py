"""HTTP API for interacting with theme-tools functionality."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict

from .commands import (
    CommandError,
    ContrastParams,
    ContrastResponse,
    HashParams,
    HashResponse,
    LuminanceParams,
    LuminanceResponse,
    RenderParams,
    RenderResponse,
    ToneParams,
    ToneResponse,
    classify_tone,
    color_luminance,
    contrast_colors,
    hash_color,
    render_descriptor,
)
from .runtime import ConfigurationError, application_services


class ContrastRequest(BaseModel):
    back: str
    front: str


class ToneRequest(BaseModel):
    color: str


class HashRequest(BaseModel):
    value: Union[str, Dict[str, Any]]
    prefix: Optional[str] = None


class RenderRequest(BaseModel):
    descriptor: Dict[str, Any]


class WcagLevelModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    threshold: float
    passed: bool


class ContrastResponseModel(BaseModel):
    back: str
    front: str
    ratio: float
    levels: List[WcagLevelModel]

    @classmethod
    def from_result(cls, result: ContrastResponse) -> "ContrastResponseModel":
        return cls(
            back=result.back,
            front=result.front,
            ratio=result.ratio,
            levels=[WcagLevelModel.model_validate(level) for level in result.levels],
        )


class ToneResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    color: str
    tone: str
    contrast_tone: str
    light_contrast: Optional[float] = None
    dark_contrast: Optional[float] = None
    ink: Optional[str] = None

    @classmethod
    def from_result(cls, result: ToneResponse) -> "ToneResponseModel":
        return cls.model_validate(result)


class LuminanceResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    color: str
    luminance: float

    @classmethod
    def from_result(cls, result: LuminanceResponse) -> "LuminanceResponseModel":
        return cls.model_validate(result)


class HashResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    value: str
    hash: str
    keyframe_name: str

    @classmethod
    def from_result(cls, result: HashResponse) -> "HashResponseModel":
        return cls.model_validate(result)


class RenderResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    expression: str
    fallback: str
    varnames: List[str]

    @classmethod
    def from_result(cls, result: RenderResponse) -> "RenderResponseModel":
        return cls.model_validate(result)


def get_services():
    try:
        with application_services(console=None) as services:
            yield services
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


def create_app() -> FastAPI:
    app = FastAPI(title="Theme Tools API")

    @app.post("/contrast", response_model=ContrastResponseModel)
    def run_contrast(
        request: ContrastRequest, services=Depends(get_services)
    ) -> ContrastResponseModel:
        try:
            result = contrast_colors(
                services, ContrastParams(back=request.back, front=request.front)
            )
        except CommandError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ContrastResponseModel.from_result(result)

    @app.post("/tone", response_model=ToneResponseModel)
    def run_tone(request: ToneRequest, services=Depends(get_services)) -> ToneResponseModel:
        try:
            result = classify_tone(services, ToneParams(color=request.color))
        except CommandError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ToneResponseModel.from_result(result)

    @app.get("/luminance", response_model=LuminanceResponseModel)
    def run_luminance(
        color: str = Query(..., description="Color to measure"),
        services=Depends(get_services),
    ) -> LuminanceResponseModel:
        try:
            result = color_luminance(services, LuminanceParams(color=color))
        except CommandError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return LuminanceResponseModel.from_result(result)

    @app.post("/hash", response_model=HashResponseModel)
    def run_hash(request: HashRequest, services=Depends(get_services)) -> HashResponseModel:
        try:
            result = hash_color(services, HashParams(value=request.value, prefix=request.prefix))
        except CommandError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return HashResponseModel.from_result(result)

    @app.post("/render", response_model=RenderResponseModel)
    def run_render(
        request: RenderRequest, services=Depends(get_services)
    ) -> RenderResponseModel:
        try:
            result = render_descriptor(services, RenderParams(descriptor=request.descriptor))
        except CommandError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return RenderResponseModel.from_result(result)

    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run("theme_tools.api:app", host="0.0.0.0", port=8000, reload=False)
