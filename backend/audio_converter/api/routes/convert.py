from __future__ import annotations

import base64

from fastapi import APIRouter, Body, Depends, File, Query, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from ...core.config import Settings, get_settings
from ...schemas.convert import Base64ConvertRequest, Base64ConvertResponse, ErrorResponse
from ...services.formats import DEFAULT_BITRATE, DEFAULT_FORMAT, validate_format
from ...services.ingest import decode_base64_audio, read_upload
from ...services.pipeline import convert_audio


router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/convert", responses=_ERRORS, response_class=Response)
async def convert(
    audio: UploadFile | None = File(default=None),
    format: str = Query(DEFAULT_FORMAT),
    bitrate: str = Query(DEFAULT_BITRATE),
    settings: Settings = Depends(get_settings),
) -> Response:
    target = validate_format(format or DEFAULT_FORMAT)
    upload = await read_upload(audio, settings.max_upload_bytes)

    result = await run_in_threadpool(
        convert_audio,
        upload,
        target,
        bitrate or DEFAULT_BITRATE,
        settings=settings,
    )
    return Response(
        content=result.data,
        media_type=result.content_type,
        headers={"Content-Length": str(result.size)},
    )


@router.post("/convert-base64", response_model=Base64ConvertResponse, responses=_ERRORS)
async def convert_base64(
    req: Base64ConvertRequest | None = Body(default=None),
    settings: Settings = Depends(get_settings),
) -> Base64ConvertResponse:
    if req is None:
        req = Base64ConvertRequest()
    upload = decode_base64_audio(req.audio)
    target = validate_format(req.format or DEFAULT_FORMAT)

    result = await run_in_threadpool(
        convert_audio,
        upload,
        target,
        req.bitrate or DEFAULT_BITRATE,
        settings=settings,
        include_input_info=False,
    )
    return Base64ConvertResponse(
        audio=base64.b64encode(result.data).decode("ascii"),
        format=result.format,
        size=result.size,
    )
