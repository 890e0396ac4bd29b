"""
Canvas host protocol.

The design tool owns the scene graph. This is the narrow surface the bridge
needs from it; node objects are opaque to the bridge apart from the
attributes in SceneNode.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SceneNode(Protocol):
    """A canvas node as seen by the bridge."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def type(self) -> str: ...


@runtime_checkable
class CanvasHost(Protocol):
    """Scene-graph operations provided by the host application."""

    def get_selection(self) -> list[SceneNode]:
        """Currently selected nodes on the current page."""
        ...

    def get_page_name(self) -> str:
        """Name of the current page."""
        ...

    def can_export(self, node: SceneNode) -> bool:
        """Whether the node supports image export."""
        ...

    async def export_node(self, node: SceneNode, format: str, scale: float) -> bytes:
        """Render a node to image bytes."""
        ...

    def create_image_node(self, data: bytes, name: str) -> Any:
        """Create a node filled with the given image."""
        ...

    def create_vector_node_from_markup(self, svg: str, name: str) -> Any:
        """Create a node from SVG markup."""
        ...

    def create_text_node(self, text: str, name: str) -> Any:
        """Create a text node."""
        ...

    def append_to_current_page(self, node: Any) -> None: ...

    def set_selection(self, nodes: list[Any]) -> None: ...

    def scroll_into_view(self, nodes: list[Any]) -> None: ...
