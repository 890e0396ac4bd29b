"""Authentication-related API endpoints."""

from typing import Any

from nas_bridge.api.http_client import AsyncHttpClient

LOGIN_PATH = "/v1/users/login"


async def login(
    http: AsyncHttpClient,
    base_url: str,
    username: str,
    password: str,
) -> dict[str, Any]:
    """
    Exchange credentials for an access token.

    Args:
        http: Configured async HTTP client.
        base_url: Scheme-qualified NAS base URL.
        username: NAS account name.
        password: NAS account password.

    Returns:
        Decoded response, ``{"success": 200, "data": {"token": {...}}}`` on success.
    """
    return await http.request_json(
        "POST",
        f"{base_url}{LOGIN_PATH}",
        endpoint=LOGIN_PATH,
        json={"username": username, "password": password},
        headers={"Accept": "application/json"},
    )
