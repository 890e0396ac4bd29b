"""
Failure classification for login and transfer operations.

Turns raw failures (transport errors, HTTP statuses) into NasBridgeError
subclasses with a user-facing message and an ErrorCategory.
"""

from enum import StrEnum

import httpx

from nas_bridge.exceptions import (
    APIError,
    AuthFailureError,
    BadRequestError,
    ErrorCategory,
    NasBridgeError,
    NetworkError,
    NetworkUnreachableError,
)


class Operation(StrEnum):
    """Operation in which a failure happened."""

    LOGIN = "login"
    UPLOAD = "upload"
    DOWNLOAD = "download"


NETWORK_MESSAGE = "Cannot connect to the NAS, check the server connection"
AUTH_MESSAGE = "Authentication failed, the access token is invalid"
BAD_REQUEST_MESSAGE = "File request rejected, check that the file path is correct"
UNREACHABLE_LOGIN_MESSAGE = (
    "Cannot connect to the NAS server. Please check:\n"
    "1. The server address is correct\n"
    "2. The NAS server is running\n"
    "3. The network connection is working"
)

_FAILURE_PREFIX = {
    Operation.LOGIN: "Login failed",
    Operation.UPLOAD: "Upload failed",
    Operation.DOWNLOAD: "Download failed",
}


def _status_of(error: BaseException) -> int | None:
    if isinstance(error, APIError):
        return error.code
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def categorize(error: BaseException, operation: Operation) -> ErrorCategory:
    """
    Map a failure to its category.

    Args:
        error: The underlying failure.
        operation: Where it happened; 400 is only a bad request on downloads.

    Returns:
        The error category.
    """
    if isinstance(error, (NetworkError, httpx.RequestError)):
        return ErrorCategory.NETWORK_UNREACHABLE
    if isinstance(error, NasBridgeError) and not isinstance(error, APIError):
        return error.category

    status = _status_of(error)
    if status == httpx.codes.UNAUTHORIZED:
        return ErrorCategory.AUTH_FAILURE
    if status == httpx.codes.BAD_REQUEST and operation == Operation.DOWNLOAD:
        return ErrorCategory.BAD_REQUEST
    return ErrorCategory.GENERIC


def classify(error: BaseException, operation: Operation) -> NasBridgeError:
    """
    Wrap a failure into a classified NasBridgeError with a user-facing message.

    Errors that already carry a specific category pass through unchanged.
    """
    category = categorize(error, operation)

    if category == ErrorCategory.NETWORK_UNREACHABLE:
        return NetworkUnreachableError(NETWORK_MESSAGE)
    if category == ErrorCategory.AUTH_FAILURE:
        if isinstance(error, AuthFailureError):
            return error
        return AuthFailureError(AUTH_MESSAGE)
    if category == ErrorCategory.BAD_REQUEST:
        return BadRequestError(BAD_REQUEST_MESSAGE)
    if isinstance(error, NasBridgeError) and not isinstance(error, APIError):
        return error

    if isinstance(error, NasBridgeError):
        detail = error.message
    else:
        detail = str(error) or type(error).__name__
    return NasBridgeError(f"{_FAILURE_PREFIX[operation]}: {detail}")


_CATEGORY_ERRORS: dict[ErrorCategory, type[NasBridgeError]] = {
    ErrorCategory.NETWORK_UNREACHABLE: NetworkUnreachableError,
    ErrorCategory.AUTH_FAILURE: AuthFailureError,
    ErrorCategory.BAD_REQUEST: BadRequestError,
}


def error_for_category(category: ErrorCategory, message: str) -> NasBridgeError:
    """Instantiate the error type of ``category`` with a caller-chosen message."""
    return _CATEGORY_ERRORS.get(category, NasBridgeError)(message)
