"""
Login negotiation for NAS servers.

Users type addresses with or without a scheme, and NAS boxes serve HTTP,
HTTPS or both. The negotiator tries both schemes in a fixed order and keeps
the first base URL that hands out a token.
"""

from typing import Any

import structlog

from nas_bridge.api.endpoints.auth import LOGIN_PATH, login
from nas_bridge.api.http_client import AsyncHttpClient
from nas_bridge.exceptions import APIError, AuthFailureError, ErrorCategory, NasBridgeError
from nas_bridge.models.auth import Session
from nas_bridge.services.error_classifier import (
    UNREACHABLE_LOGIN_MESSAGE,
    Operation,
    categorize,
    error_for_category,
)
from nas_bridge.services.session_store import SessionStore

logger = structlog.get_logger(__name__)

LOGIN_SUCCESS_CODE = 200
_HTTP = "http://"
_HTTPS = "https://"


def candidate_base_urls(address: str) -> list[str]:
    """
    Scheme-qualified base URLs to try, in order.

    The scheme the user typed comes first, the other scheme second. Bare
    addresses try plain HTTP first.

    Example:
        >>> candidate_base_urls("10.0.0.5")
        ['http://10.0.0.5', 'https://10.0.0.5']
    """
    address = address.strip().rstrip("/")
    if address.startswith(_HTTP):
        rest = address.removeprefix(_HTTP)
        return [address, f"{_HTTPS}{rest}"]
    if address.startswith(_HTTPS):
        rest = address.removeprefix(_HTTPS)
        return [address, f"{_HTTP}{rest}"]
    return [f"{_HTTP}{address}", f"{_HTTPS}{address}"]


def _parse_token(result: dict[str, Any]) -> tuple[str, int] | None:
    if result.get("success") != LOGIN_SUCCESS_CODE:
        return None
    data = result.get("data")
    if not isinstance(data, dict):
        return None
    token = data.get("token")
    if not isinstance(token, dict):
        return None
    access_token = token.get("access_token")
    expires_at = token.get("expires_at")
    if not isinstance(access_token, str) or not access_token:
        return None
    if isinstance(expires_at, bool) or not isinstance(expires_at, int | float):
        return None
    return access_token, int(expires_at * 1000)


class LoginNegotiator:
    """Authenticates against the first reachable candidate base URL."""

    def __init__(self, http: AsyncHttpClient, session_store: SessionStore) -> None:
        """
        Args:
            http: HTTP client for API requests.
            session_store: Receives the session on success.
        """
        self._http = http
        self._session_store = session_store

    async def login(self, address: str, username: str, password: str) -> Session:
        """
        Log in and persist the resulting session.

        Args:
            address: Server address as typed by the user.
            username: NAS account name.
            password: NAS account password.

        Returns:
            The committed session.

        Raises:
            AuthFailureError: If credentials are empty or rejected.
            NetworkUnreachableError: If no candidate could be reached.
            NasBridgeError: For any other failure, with the last error's message.
        """
        if not username or not password:
            msg = "Username and password required"
            raise AuthFailureError(msg)

        last_error: Exception | None = None
        for base_url in candidate_base_urls(address):
            logger.info("Trying login", base_url=base_url)
            try:
                session = await self._attempt(base_url, username, password)
            except NasBridgeError as e:
                logger.warning(
                    "Login attempt failed",
                    base_url=base_url,
                    error_type=type(e).__name__,
                    error=e.message,
                )
                last_error = e
                continue

            await self._session_store.save(session)
            logger.info("Login successful", base_url=base_url, username=username)
            return session

        logger.error("All login attempts failed", address=address)
        raise self._final_error(last_error) from last_error

    async def _attempt(self, base_url: str, username: str, password: str) -> Session:
        result = await login(self._http, base_url, username, password)
        parsed = _parse_token(result)
        if parsed is None:
            msg = str(result.get("message") or "Login failed")
            code = result.get("success")
            raise APIError(
                msg,
                code=code if isinstance(code, int) else 0,
                endpoint=LOGIN_PATH,
            )
        access_token, expires_at_ms = parsed
        return Session(
            server_base_url=base_url,
            access_token=access_token,
            expires_at_ms=expires_at_ms,
            username=username,
        )

    @staticmethod
    def _final_error(last_error: Exception | None) -> NasBridgeError:
        if last_error is None:
            return NasBridgeError("Login failed")
        category = categorize(last_error, Operation.LOGIN)
        if category == ErrorCategory.NETWORK_UNREACHABLE:
            return error_for_category(category, UNREACHABLE_LOGIN_MESSAGE)
        message = last_error.message if isinstance(last_error, NasBridgeError) else str(last_error)
        return error_for_category(category, message)
