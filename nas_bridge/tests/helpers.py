"""Shared test doubles: mock HTTP transport and canvas host."""

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

BASE_URL = "http://10.0.0.5"
ACCESS_TOKEN = "eyJhbGciOiJIUzI1NiJ9.test-token"
FAR_FUTURE_MS = 4_102_444_800_000  # 2100-01-01


class MockTransport(httpx.AsyncBaseTransport):
    """Mock transport returning queued responses in order."""

    def __init__(self) -> None:
        self._responses: list[dict[str, Any]] = []
        self._call_index = 0
        self.requests: list[httpx.Request] = []

    def add_response(
        self,
        status_code: int = httpx.codes.OK,
        json_data: Any = None,
        content: bytes | None = None,
    ) -> None:
        """Add a response to the queue."""
        self._responses.append(
            {"status_code": status_code, "json_data": json_data, "content": content}
        )

    def add_error(self, error: Exception) -> None:
        """Queue a transport-level failure."""
        self._responses.append({"error": error})

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Return next queued response."""
        await request.aread()
        self.requests.append(request)
        if self._call_index >= len(self._responses):
            return httpx.Response(httpx.codes.INTERNAL_SERVER_ERROR, content=b"No mock response")

        resp_data = self._responses[self._call_index]
        self._call_index += 1

        if "error" in resp_data:
            raise resp_data["error"]

        content = resp_data["content"]
        if content is None and resp_data["json_data"] is not None:
            content = json.dumps(resp_data["json_data"]).encode()

        return httpx.Response(status_code=resp_data["status_code"], content=content or b"")


@dataclass
class FakeNode:
    id: str
    name: str
    type: str = "FRAME"


@dataclass
class FakeHost:
    """Canvas host recording every scene-graph call."""

    selection: list[FakeNode] = field(default_factory=list)
    page_name: str = "Page 1"
    unexportable: set[str] = field(default_factory=set)
    created: list[tuple[str, Any, str]] = field(default_factory=list)
    appended: list[Any] = field(default_factory=list)
    selected: list[Any] = field(default_factory=list)
    scrolled: list[Any] = field(default_factory=list)
    exports: list[tuple[str, str, float]] = field(default_factory=list)

    def get_selection(self) -> list[FakeNode]:
        return self.selection

    def get_page_name(self) -> str:
        return self.page_name

    def can_export(self, node: FakeNode) -> bool:
        return node.id not in self.unexportable

    async def export_node(self, node: FakeNode, format: str, scale: float) -> bytes:
        self.exports.append((node.id, format, scale))
        return f"{format}:{node.id}".encode()

    def create_image_node(self, data: bytes, name: str) -> tuple[str, Any, str]:
        node = ("image", data, name)
        self.created.append(node)
        return node

    def create_vector_node_from_markup(self, svg: str, name: str) -> tuple[str, Any, str]:
        node = ("vector", svg, name)
        self.created.append(node)
        return node

    def create_text_node(self, text: str, name: str) -> tuple[str, Any, str]:
        node = ("text", text, name)
        self.created.append(node)
        return node

    def append_to_current_page(self, node: Any) -> None:
        self.appended.append(node)

    def set_selection(self, nodes: list[Any]) -> None:
        self.selected = list(nodes)

    def scroll_into_view(self, nodes: list[Any]) -> None:
        self.scrolled = list(nodes)


def make_login_response(token: str = ACCESS_TOKEN, expires_at: int = 4_102_444_800) -> dict:
    return {
        "success": 200,
        "message": "ok",
        "data": {"token": {"access_token": token, "expires_at": expires_at}},
    }

