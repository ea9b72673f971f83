from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from ..core.config import Settings
from ..storage.temp_files import TempFileStore
from .formats import codec_args, content_type_for, resolve_input_extension
from .ingest import Upload
from .transcode import resolve_ffmpeg, transcode


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    data: bytes
    format: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


def convert_audio(
    upload: Upload,
    target_format: str,
    bitrate: str,
    *,
    settings: Settings,
    include_input_info: bool = True,
) -> ConversionResult:
    """Convert one upload; temp files are always released before returning.

    ``target_format`` must already be validated.
    """
    store = TempFileStore(settings.temp_dir)
    input_ext = resolve_input_extension(upload.filename, upload.mimetype)
    pair = store.allocate(input_ext, target_format)

    logger.info(
        "Converting %s: %d bytes (ext=%s) -> %s @ %s",
        pair.file_id,
        upload.size,
        input_ext or "-",
        target_format,
        bitrate,
    )
    started = time.monotonic()
    try:
        data = transcode(
            upload.data,
            pair,
            codec_args(target_format, bitrate),
            ffmpeg=resolve_ffmpeg(settings.ffmpeg_binary),
            max_capture_bytes=settings.max_capture_bytes,
            input_info=upload.describe() if include_input_info else None,
        )
    finally:
        store.release(pair)

    logger.info(
        "Converted %s: %d bytes in %.2fs",
        pair.file_id,
        len(data),
        time.monotonic() - started,
    )
    return ConversionResult(
        data=data,
        format=target_format,
        content_type=content_type_for(target_format),
    )
