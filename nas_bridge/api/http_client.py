"""
Async HTTP client for the NAS API.

Wraps httpx so that every failure leaves this layer as a NasBridgeError:
transport failures become NetworkError and non-2xx answers become APIError.
"""

import asyncio
from typing import Any

import httpx
import structlog

from nas_bridge.config import NasBridgeConfig
from nas_bridge.exceptions import APIError, NetworkError

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "token",
        "access_token",
        "Authorization",
        "authorization",
    }
)


def sanitize_for_log(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a dict before logging.

    Recursively sanitizes nested dictionaries and lists.

    Args:
        data: Dictionary that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, dict):
            result[key] = sanitize_for_log(value)
        elif isinstance(value, list):
            result[key] = [
                sanitize_for_log(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


class AsyncHttpClient:
    """Async HTTP client for NAS requests against arbitrary base URLs."""

    def __init__(
        self,
        config: NasBridgeConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def __aenter__(self) -> "AsyncHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self._config.timeout,
                    transport=self._transport,
                    verify=self._config.verify_ssl,
                    headers={"User-Agent": self._config.user_agent},
                )
        return self._client

    async def close(self) -> None:
        """Close the underlying client. Safe to call more than once."""
        async with self._client_lock:
            if self._client is None:
                logger.debug("Client not open.")
                return
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        url: str,
        *,
        endpoint: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Send a request and return the 2xx response.

        Args:
            method: HTTP method.
            url: Absolute URL.
            endpoint: Endpoint label used in errors and logs (never carries secrets).
            json: JSON body.
            params: Query parameters.
            content: Raw body.
            headers: Extra headers.

        Returns:
            The successful response.

        Raises:
            NetworkError: If no response was received.
            APIError: If the status is not 2xx.
        """
        client = await self._ensure_client()
        logger.debug(
            "Sending request",
            method=method,
            endpoint=endpoint,
            body=sanitize_for_log(json) if json else None,
            headers=sanitize_for_log(headers) if headers else None,
        )
        try:
            response = await client.request(
                method,
                url,
                json=json,
                params=params,
                content=content,
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.warning("Request failed", endpoint=endpoint, error_type=type(e).__name__)
            msg = f"Failed to fetch {endpoint}: {e}"
            raise NetworkError(msg, endpoint=endpoint) from e

        logger.debug("Response received", endpoint=endpoint, status=response.status_code)

        if not response.is_success:
            logger.error(
                "Error response",
                endpoint=endpoint,
                status=response.status_code,
                body=response.text[:500],
            )
            msg = f"HTTP {response.status_code}: {response.reason_phrase}"
            raise APIError(msg, code=response.status_code, endpoint=endpoint)

        return response

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        endpoint: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Send a request and decode a JSON object body.

        Raises:
            APIError: On non-2xx status or when the body is not a JSON object.
            NetworkError: If no response was received.
        """
        response = await self.request(method, url, endpoint=endpoint, json=json, headers=headers)
        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                "Invalid JSON response from NAS",
                code=response.status_code,
                endpoint=endpoint,
            ) from e
        if not isinstance(data, dict):
            raise APIError(
                "Unexpected JSON response from NAS",
                code=response.status_code,
                endpoint=endpoint,
            )
        return data

    async def request_raw(
        self,
        method: str,
        url: str,
        *,
        endpoint: str,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> bytes:
        """
        Send a request and return the raw body bytes.

        Raises:
            APIError: On non-2xx status.
            NetworkError: If no response was received.
        """
        response = await self.request(
            method,
            url,
            endpoint=endpoint,
            params=params,
            content=content,
            headers=headers,
        )
        return response.content
