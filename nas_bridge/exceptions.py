"""
NAS bridge exception hierarchy.

All exceptions inherit from NasBridgeError for easy catching. Every error
carries an ErrorCategory so callers can pick a user-facing reaction
without inspecting the concrete type.
"""

from enum import StrEnum
from typing import Any


class ErrorCategory(StrEnum):
    """Categories surfaced past the transfer/login boundary."""

    NETWORK_UNREACHABLE = "network_unreachable"
    AUTH_FAILURE = "auth_failure"
    BAD_REQUEST = "bad_request"
    UNSUPPORTED_FORMAT = "unsupported_format"
    INVALID_JSON = "invalid_json"
    NO_SELECTION = "no_selection"
    GENERIC = "generic"


class NasBridgeError(Exception):
    """Base exception for all nas_bridge errors."""

    category: ErrorCategory = ErrorCategory.GENERIC

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class NetworkUnreachableError(NasBridgeError):
    """The NAS could not be reached."""

    category = ErrorCategory.NETWORK_UNREACHABLE


class AuthFailureError(NasBridgeError):
    """Credentials or access token rejected."""

    category = ErrorCategory.AUTH_FAILURE


class BadRequestError(NasBridgeError):
    """The NAS rejected a download request as malformed."""

    category = ErrorCategory.BAD_REQUEST


class UnsupportedFormatError(NasBridgeError):
    """No import handler is registered for a file extension."""

    category = ErrorCategory.UNSUPPORTED_FORMAT

    def __init__(self, message: str, *, extension: str) -> None:
        super().__init__(message, extension=extension)
        self.extension = extension


class InvalidJSONError(NasBridgeError):
    """A downloaded JSON file could not be parsed."""

    category = ErrorCategory.INVALID_JSON


class NoSelectionError(NasBridgeError):
    """Export requested with an empty canvas selection."""

    category = ErrorCategory.NO_SELECTION

    def __init__(self, message: str = "Nothing is selected") -> None:
        super().__init__(message)


class DirectoryImportError(NasBridgeError):
    """Folders cannot be imported onto the canvas."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class APIError(NasBridgeError):
    """NAS answered with a non-success HTTP status or an unusable body."""

    def __init__(self, message: str, *, code: int, endpoint: str | None = None) -> None:
        super().__init__(message, code=code, endpoint=endpoint)
        self.code = code
        self.endpoint = endpoint


class NetworkError(NasBridgeError):
    """Network-level error (connection failed, timeout)."""


class MultipartError(NasBridgeError):
    """Multipart body could not be built safely."""


class CodecError(NasBridgeError):
    """Byte/text conversion failed."""
