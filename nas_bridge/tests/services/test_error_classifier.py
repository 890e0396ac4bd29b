import httpx
import pytest

from nas_bridge.exceptions import (
    APIError,
    AuthFailureError,
    BadRequestError,
    ErrorCategory,
    InvalidJSONError,
    NasBridgeError,
    NetworkError,
    NetworkUnreachableError,
)
from nas_bridge.services.error_classifier import (
    AUTH_MESSAGE,
    BAD_REQUEST_MESSAGE,
    NETWORK_MESSAGE,
    Operation,
    categorize,
    classify,
    error_for_category,
)


def api_error(code: int) -> APIError:
    return APIError(f"HTTP {code}", code=code, endpoint="/x")


@pytest.mark.parametrize("operation", list(Operation))
def test_transport_failures_are_network_unreachable(operation: Operation) -> None:
    assert categorize(NetworkError("refused"), operation) == ErrorCategory.NETWORK_UNREACHABLE
    assert (
        categorize(httpx.ConnectError("refused"), operation)
        == ErrorCategory.NETWORK_UNREACHABLE
    )
    assert (
        categorize(httpx.DecodingError("bad gzip"), operation)
        == ErrorCategory.NETWORK_UNREACHABLE
    )


@pytest.mark.parametrize("operation", list(Operation))
def test_401_is_auth_failure_everywhere(operation: Operation) -> None:
    assert categorize(api_error(401), operation) == ErrorCategory.AUTH_FAILURE


def test_400_is_bad_request_only_on_download() -> None:
    assert categorize(api_error(400), Operation.DOWNLOAD) == ErrorCategory.BAD_REQUEST
    assert categorize(api_error(400), Operation.UPLOAD) == ErrorCategory.GENERIC
    assert categorize(api_error(400), Operation.LOGIN) == ErrorCategory.GENERIC


def test_other_statuses_are_generic() -> None:
    assert categorize(api_error(500), Operation.UPLOAD) == ErrorCategory.GENERIC
    assert categorize(api_error(404), Operation.DOWNLOAD) == ErrorCategory.GENERIC


def test_categorize_reads_httpx_status_errors() -> None:
    request = httpx.Request("GET", "http://nas/x")
    response = httpx.Response(401, request=request)
    error = httpx.HTTPStatusError("401", request=request, response=response)

    assert categorize(error, Operation.DOWNLOAD) == ErrorCategory.AUTH_FAILURE


def test_classify_network_error_message() -> None:
    result = classify(NetworkError("refused"), Operation.UPLOAD)

    assert isinstance(result, NetworkUnreachableError)
    assert result.message == NETWORK_MESSAGE


def test_classify_auth_error_message() -> None:
    result = classify(api_error(401), Operation.DOWNLOAD)

    assert isinstance(result, AuthFailureError)
    assert result.message == AUTH_MESSAGE


def test_classify_bad_request_message() -> None:
    result = classify(api_error(400), Operation.DOWNLOAD)

    assert isinstance(result, BadRequestError)
    assert result.message == BAD_REQUEST_MESSAGE


def test_classify_generic_keeps_status_text() -> None:
    result = classify(
        APIError("HTTP 500: Internal Server Error", code=500), Operation.UPLOAD
    )

    assert type(result) is NasBridgeError
    assert result.message == "Upload failed: HTTP 500: Internal Server Error"


def test_classify_passes_through_categorized_errors() -> None:
    error = InvalidJSONError("Invalid JSON file")

    assert classify(error, Operation.DOWNLOAD) is error


def test_error_for_category_uses_category_type() -> None:
    assert isinstance(
        error_for_category(ErrorCategory.AUTH_FAILURE, "HTTP 401"), AuthFailureError
    )
    generic = error_for_category(ErrorCategory.GENERIC, "Login failed")
    assert type(generic) is NasBridgeError
    assert generic.message == "Login failed"
