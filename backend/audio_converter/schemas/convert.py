from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator


class HealthResponse(BaseModel):
    status: str = "ok"
    ffmpeg: bool = True


class Base64ConvertRequest(BaseModel):
    audio: str | None = None
    format: str | None = None
    bitrate: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _non_object_body(cls, data: Any) -> Any:
        # form-encoded or non-object JSON bodies carry no fields
        return data if isinstance(data, (dict, BaseModel)) else {}


class Base64ConvertResponse(BaseModel):
    audio: str
    format: str
    size: int


class InputInfo(BaseModel):
    originalName: str | None = None
    mimetype: str | None = None
    size: int


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    input: InputInfo | None = None
