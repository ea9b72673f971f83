from __future__ import annotations

from fastapi import APIRouter

from ...schemas.convert import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", ffmpeg=True)
