from __future__ import annotations

import re
from types import MappingProxyType

from ..core.errors import InvalidFormatError


DEFAULT_FORMAT = "ogg"
DEFAULT_BITRATE = "128k"

SUPPORTED_FORMATS: tuple[str, ...] = ("ogg", "mp3", "opus", "m4a", "aac")
_SUPPORTED = frozenset(SUPPORTED_FORMATS)

INVALID_FORMAT_MESSAGE = "Invalid format. Supported: " + ", ".join(SUPPORTED_FORMATS)

# target format -> ffmpeg audio encoder
CODEC_DIRECTIVES = MappingProxyType(
    {
        "mp3": "libmp3lame",
        "ogg": "libvorbis",
        "opus": "libopus",
        "m4a": "aac",
        "aac": "aac",
    }
)
_DEFAULT_ENCODER = "libvorbis"

CONTENT_TYPES = MappingProxyType(
    {
        "mp3": "audio/mpeg",
        "ogg": "audio/ogg",
        "opus": "audio/opus",
        "m4a": "audio/mp4",
        "aac": "audio/aac",
    }
)
_DEFAULT_CONTENT_TYPE = "audio/ogg"

MIME_EXTENSIONS = MappingProxyType(
    {
        "audio/mpeg": "mp3",
        "audio/wav": "wav",
        "audio/ogg": "ogg",
        "audio/flac": "flac",
        "audio/aac": "aac",
        "audio/mp4": "m4a",
        "audio/x-m4a": "m4a",
        "audio/webm": "webm",
        "video/webm": "webm",
    }
)

_EXT_RE = re.compile(r"\.([A-Za-z0-9]+)$")


def validate_format(fmt: str | None) -> str:
    if fmt not in _SUPPORTED:
        raise InvalidFormatError(INVALID_FORMAT_MESSAGE)
    return fmt


def resolve_input_extension(filename: str | None, mimetype: str | None) -> str:
    """Best-effort input extension; empty string lets ffmpeg probe the content."""
    if filename:
        m = _EXT_RE.search(filename.strip())
        if m:
            return m.group(1).lower()
    if mimetype:
        base = mimetype.split(";", 1)[0].strip().lower()
        return MIME_EXTENSIONS.get(base, "")
    return ""


def codec_args(fmt: str, bitrate: str) -> list[str]:
    encoder = CODEC_DIRECTIVES.get(fmt, _DEFAULT_ENCODER)
    return ["-c:a", encoder, "-b:a", bitrate]


def content_type_for(fmt: str) -> str:
    return CONTENT_TYPES.get(fmt, _DEFAULT_CONTENT_TYPE)
