import json

import httpx
import pytest

from nas_bridge.api.http_client import AsyncHttpClient
from nas_bridge.config import NasBridgeConfig
from nas_bridge.exceptions import AuthFailureError, NasBridgeError, NetworkUnreachableError
from nas_bridge.services.error_classifier import UNREACHABLE_LOGIN_MESSAGE
from nas_bridge.services.login_service import LoginNegotiator, candidate_base_urls
from nas_bridge.services.session_store import SessionStore
from nas_bridge.storage import MemoryKeyValueStore
from nas_bridge.tests.helpers import MockTransport, make_login_response


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("10.0.0.5", ["http://10.0.0.5", "https://10.0.0.5"]),
        ("http://10.0.0.5:8080", ["http://10.0.0.5:8080", "https://10.0.0.5:8080"]),
        ("https://nas.local", ["https://nas.local", "http://nas.local"]),
        ("  nas.local/  ", ["http://nas.local", "https://nas.local"]),
        ("https://nas.local/zima/", ["https://nas.local/zima", "http://nas.local/zima"]),
    ],
)
def test_candidate_base_urls_order(address: str, expected: list[str]) -> None:
    assert candidate_base_urls(address) == expected


def request_urls(transport: MockTransport) -> list[str]:
    return [str(r.url) for r in transport.requests]


async def run_login(
    transport: MockTransport,
    storage: MemoryKeyValueStore,
    address: str = "10.0.0.5",
    username: str = "admin",
    password: str = "secret",
):
    async with AsyncHttpClient(NasBridgeConfig(), transport=transport) as http:
        negotiator = LoginNegotiator(http, SessionStore(storage))
        return await negotiator.login(address, username, password)


@pytest.mark.asyncio
async def test_login_success_on_first_candidate(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_response(json_data=make_login_response("tok", expires_at=1_900_000_000))

    session = await run_login(mock_transport, storage)

    assert session.server_base_url == "http://10.0.0.5"
    assert session.access_token == "tok"
    assert session.expires_at_ms == 1_900_000_000_000
    assert session.username == "admin"
    assert request_urls(mock_transport) == ["http://10.0.0.5/v1/users/login"]


@pytest.mark.asyncio
async def test_login_sends_json_credentials(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_response(json_data=make_login_response())

    await run_login(mock_transport, storage)

    request = mock_transport.requests[0]
    assert request.method == "POST"
    assert json.loads(request.content) == {"username": "admin", "password": "secret"}
    assert request.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_login_persists_session(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_response(json_data=make_login_response("tok", expires_at=1_900_000_000))

    session = await run_login(mock_transport, storage)

    assert await storage.get("loginInfo") == session.to_storage()


@pytest.mark.asyncio
async def test_https_address_tries_https_first(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_error(httpx.ConnectError("TLS handshake failed"))
    mock_transport.add_response(json_data=make_login_response())

    session = await run_login(mock_transport, storage, address="https://nas.local")

    assert request_urls(mock_transport) == [
        "https://nas.local/v1/users/login",
        "http://nas.local/v1/users/login",
    ]
    assert session.server_base_url == "http://nas.local"


@pytest.mark.asyncio
async def test_second_candidate_commits_after_500(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_response(status_code=500, content=b"oops")
    mock_transport.add_response(json_data=make_login_response("tok2"))

    session = await run_login(mock_transport, storage)

    assert session.server_base_url == "https://10.0.0.5"
    assert session.access_token == "tok2"
    assert (await storage.get("loginInfo"))["baseUrl"] == "https://10.0.0.5"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"success": 500, "message": "bad"},
        {"success": 200, "data": {}},
        {"success": 200, "data": {"token": {"access_token": "", "expires_at": 1}}},
        {"success": 200, "data": {"token": {"access_token": "t"}}},
        {"success": "200", "data": {"token": {"access_token": "t", "expires_at": 1}}},
    ],
)
async def test_response_without_usable_token_falls_through(
    mock_transport: MockTransport, storage: MemoryKeyValueStore, body: dict
) -> None:
    mock_transport.add_response(json_data=body)
    mock_transport.add_response(json_data=make_login_response("tok2"))

    session = await run_login(mock_transport, storage)

    assert session.server_base_url == "https://10.0.0.5"


@pytest.mark.asyncio
async def test_all_unreachable_raises_composite_message(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_error(httpx.ConnectError("Connection refused"))
    mock_transport.add_error(httpx.ConnectError("Connection refused"))

    with pytest.raises(NetworkUnreachableError) as exc_info:
        await run_login(mock_transport, storage)

    assert exc_info.value.message == UNREACHABLE_LOGIN_MESSAGE
    assert exc_info.value.message.count("\n") == 3
    assert await storage.get("loginInfo") is None


@pytest.mark.asyncio
async def test_all_rejected_surfaces_last_message_verbatim(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_response(json_data={"success": 400, "message": "first"})
    mock_transport.add_response(json_data={"success": 400, "message": "Invalid password"})

    with pytest.raises(NasBridgeError) as exc_info:
        await run_login(mock_transport, storage)

    assert exc_info.value.message == "Invalid password"


@pytest.mark.asyncio
async def test_last_error_401_is_auth_failure(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_error(httpx.ConnectError("Connection refused"))
    mock_transport.add_response(status_code=401, content=b"")

    with pytest.raises(AuthFailureError) as exc_info:
        await run_login(mock_transport, storage)

    assert exc_info.value.message == "HTTP 401: Unauthorized"


@pytest.mark.asyncio
async def test_missing_message_defaults_to_login_failed(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    mock_transport.add_response(json_data={"success": 0})
    mock_transport.add_response(json_data={"success": 0})

    with pytest.raises(NasBridgeError, match="Login failed"):
        await run_login(mock_transport, storage)


@pytest.mark.asyncio
async def test_empty_credentials_rejected_without_request(
    mock_transport: MockTransport, storage: MemoryKeyValueStore
) -> None:
    with pytest.raises(AuthFailureError, match="Username and password required"):
        await run_login(mock_transport, storage, password="")

    assert mock_transport.requests == []
