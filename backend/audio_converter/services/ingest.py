from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Any

from fastapi import UploadFile

from ..core.errors import InvalidInputError, MissingInputError, PayloadTooLargeError


NO_FILE_MESSAGE = "No audio file provided"
NO_DATA_MESSAGE = "No audio data provided"

_READ_CHUNK = 1024 * 1024
_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]*)(?:;[^,]*)?;base64,", re.IGNORECASE)


@dataclass(frozen=True)
class Upload:
    data: bytes
    filename: str | None = None
    mimetype: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    def describe(self) -> dict[str, Any]:
        return {
            "originalName": self.filename,
            "mimetype": self.mimetype,
            "size": self.size,
        }


async def read_upload(file: UploadFile | None, max_bytes: int) -> Upload:
    if file is None:
        raise MissingInputError(NO_FILE_MESSAGE)

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise PayloadTooLargeError(f"File too large. Limit: {max_bytes} bytes")
        chunks.append(chunk)

    if total == 0:
        raise MissingInputError(NO_FILE_MESSAGE)

    return Upload(
        data=b"".join(chunks),
        filename=file.filename or None,
        mimetype=file.content_type or None,
    )


def decode_base64_audio(payload: str | None) -> Upload:
    """Decode the JSON ``audio`` field, with or without a data-URL prefix."""
    if not payload:
        raise MissingInputError(NO_DATA_MESSAGE)

    mimetype = None
    m = _DATA_URL_RE.match(payload)
    if m:
        mimetype = m.group("mime") or None
        payload = payload[m.end():]

    try:
        data = base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError("Invalid base64 audio data", str(e)) from e

    if not data:
        raise MissingInputError(NO_DATA_MESSAGE)
    return Upload(data=data, mimetype=mimetype)
