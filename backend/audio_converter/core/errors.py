"""Error taxonomy for the conversion pipeline.

Every failure a request can hit is a ``ConverterError`` subclass. The HTTP
layer turns them into a JSON body plus status code via ``to_payload`` and
``status_code``; nothing here knows about FastAPI.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    MISSING_INPUT = "MissingInput"
    INVALID_FORMAT = "InvalidFormat"
    INVALID_INPUT = "InvalidInput"
    PAYLOAD_TOO_LARGE = "PayloadTooLarge"
    CONVERSION_FAILED = "ConversionFailed"
    IO_FAILURE = "IOFailure"
    SERVER_ERROR = "ServerError"


class ConverterError(Exception):
    """Base exception for request failures."""

    kind: ErrorKind = ErrorKind.SERVER_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message if details is None else f"{message}: {details}")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class MissingInputError(ConverterError):
    kind = ErrorKind.MISSING_INPUT
    status_code = 400


class InvalidFormatError(ConverterError):
    kind = ErrorKind.INVALID_FORMAT
    status_code = 400


class InvalidInputError(ConverterError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class PayloadTooLargeError(ConverterError):
    kind = ErrorKind.PAYLOAD_TOO_LARGE
    status_code = 413


class ConversionFailedError(ConverterError):
    """ffmpeg exited non-zero or could not be started."""

    kind = ErrorKind.CONVERSION_FAILED
    status_code = 500

    def __init__(
        self,
        details: str,
        input_info: dict[str, Any] | None = None,
    ):
        super().__init__("Conversion failed", details)
        self.input_info = input_info

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.input_info is not None:
            payload["input"] = self.input_info
        return payload


class IOFailureError(ConverterError):
    kind = ErrorKind.IO_FAILURE
    status_code = 500


class ServerError(ConverterError):
    kind = ErrorKind.SERVER_ERROR
    status_code = 500
