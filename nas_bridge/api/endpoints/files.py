"""File transfer API endpoints."""

import json
from typing import Any
from urllib.parse import quote

import structlog

from nas_bridge.api.http_client import AsyncHttpClient
from nas_bridge.core.multipart import MultipartBody

logger = structlog.get_logger(__name__)

UPLOAD_PATH = "/v2_1/files/file/uploadV2"
DOWNLOAD_PATH = "/v3/file"

# Characters left unescaped by JavaScript's encodeURIComponent besides the
# alphanumerics and "-_.~" that quote() always keeps.
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encode a query value, including "/", "?" and "&"."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_download_url(base_url: str, token: str, path: str) -> str:
    """Download URL with the token and file path in the query string."""
    return (
        f"{base_url}{DOWNLOAD_PATH}"
        f"?token={encode_uri_component(token)}"
        f"&files={encode_uri_component(path)}"
        "&action=download"
    )


async def upload_file(
    http: AsyncHttpClient,
    base_url: str,
    token: str,
    body: MultipartBody,
) -> dict[str, Any]:
    """
    Upload a prepared multipart body.

    Any 2xx answer counts as success. An empty or non-JSON body is reported
    as a synthetic success result.

    Returns:
        Parsed response, or ``{"success": True, "message": "Upload succeeded"}``.
    """
    response = await http.request(
        "POST",
        f"{base_url}{UPLOAD_PATH}",
        endpoint=UPLOAD_PATH,
        content=body.encode(),
        headers={
            "Authorization": token,
            "Accept": "application/json, text/plain, */*",
            "Content-Type": body.content_type,
        },
    )

    text = response.text
    if not text.strip():
        logger.debug("Upload succeeded with empty response body")
        return {"success": True, "message": "Upload succeeded"}
    try:
        result = json.loads(text)
    except ValueError:
        logger.debug("Upload succeeded with non-JSON response body", body=text[:200])
        return {"success": True, "message": "Upload succeeded"}
    if not isinstance(result, dict):
        return {"success": True, "message": "Upload succeeded", "data": result}
    return result


async def download_file(
    http: AsyncHttpClient,
    base_url: str,
    token: str,
    path: str,
) -> bytes:
    """
    Download a file's raw bytes.

    The token travels in the query string only; no Authorization header is sent.
    """
    return await http.request_raw(
        "GET",
        build_download_url(base_url, token, path),
        endpoint=DOWNLOAD_PATH,
    )
