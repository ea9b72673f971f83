from __future__ import annotations

import logging
import subprocess
from typing import IO, Any

import imageio_ffmpeg

from ..core.errors import ConversionFailedError, IOFailureError
from ..storage.temp_files import TempFilePair


logger = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024


def resolve_ffmpeg(binary: str | None = None) -> str:
    return binary or imageio_ffmpeg.get_ffmpeg_exe()


def build_command(ffmpeg: str, pair: TempFilePair, codec: list[str]) -> list[str]:
    return [ffmpeg, "-i", pair.input_path, *codec, "-y", pair.output_path]


def read_tail(stream: IO[bytes] | None, limit: int) -> bytes:
    """Drain ``stream`` keeping at most its last ``limit`` bytes in memory."""
    if stream is None:
        return b""
    tail = bytearray()
    while True:
        chunk = stream.read(_READ_CHUNK)
        if not chunk:
            break
        tail += chunk
        if len(tail) > limit:
            del tail[: len(tail) - limit]
    return bytes(tail)


def transcode(
    data: bytes,
    pair: TempFilePair,
    codec: list[str],
    *,
    ffmpeg: str,
    max_capture_bytes: int,
    input_info: dict[str, Any] | None = None,
) -> bytes:
    """Run ffmpeg over ``data`` and return the encoded output.

    Blocks until the process exits. The caller owns the temp files in
    ``pair`` and must release them.
    """
    try:
        with open(pair.input_path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise IOFailureError("Failed to write input file", str(e)) from e

    cmd = build_command(ffmpeg, pair, codec)
    logger.debug("Running ffmpeg command: %s", " ".join(cmd))
    try:
        process = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except OSError as e:
        logger.error("Could not start ffmpeg (%s): %s", ffmpeg, e)
        raise ConversionFailedError(str(e), input_info) from e

    with process:
        captured = read_tail(process.stdout, max_capture_bytes)
        returncode = process.wait()

    output = captured.decode("utf-8", errors="replace")
    if returncode != 0:
        logger.error("FFmpeg error (exit %d): %s", returncode, output[-2000:])
        details = f"Command failed with exit code {returncode}"
        if output:
            details = f"{details}\n{output}"
        raise ConversionFailedError(details, input_info)

    try:
        with open(pair.output_path, "rb") as f:
            return f.read()
    except OSError as e:
        raise IOFailureError("Failed to read converted output", str(e)) from e
