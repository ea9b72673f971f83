from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()

_MIB = 1024 * 1024


@dataclass(frozen=True)
class Settings:
    app_name: str = "FFmpeg Audio Converter"
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    temp_dir: str = os.getenv("TEMP_DIR", tempfile.gettempdir())
    ffmpeg_binary: str | None = os.getenv("FFMPEG_BINARY") or None
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(500 * _MIB)))
    max_json_body_bytes: int = int(os.getenv("MAX_JSON_BODY_BYTES", str(500 * _MIB)))
    max_capture_bytes: int = int(os.getenv("MAX_CAPTURE_BYTES", str(50 * _MIB)))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def get_settings() -> Settings:
    return settings
