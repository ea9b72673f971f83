from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import api_router
from .core.config import settings
from .core.errors import ConverterError, InvalidInputError, ServerError
from .core.limits import BodySizeLimitMiddleware
from .core.logging import configure_logging


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s running on port %d", settings.app_name, settings.port)
    logger.info("Endpoints:")
    logger.info("  GET  /health - Health check")
    logger.info("  POST /convert?format=ogg|mp3|opus|m4a|aac&bitrate=128k - Convert audio file")
    logger.info("  POST /convert-base64 - Convert base64 audio")
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router)
app.add_middleware(BodySizeLimitMiddleware, get_limit=lambda: settings.max_json_body_bytes)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for e in exc.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()))
        parts.append(f"{loc}: {e.get('msg', 'invalid')}")
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = InvalidInputError("Invalid request", _describe_validation_errors(exc))
    return JSONResponse(status_code=err.status_code, content=err.to_payload())


@app.exception_handler(ConverterError)
async def converter_error_handler(request: Request, exc: ConverterError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.kind, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Server error on %s", request.url.path)
    err = ServerError("Server error", str(exc))
    return JSONResponse(status_code=err.status_code, content=err.to_payload())
