"""
Import of NAS files onto the canvas.

Files are routed by extension through a handler registry. Lookup happens
before any download so unsupported files fail fast.
"""

import json
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import structlog

from nas_bridge.core.codec import decode_text
from nas_bridge.exceptions import DirectoryImportError, InvalidJSONError, UnsupportedFormatError
from nas_bridge.host import CanvasHost
from nas_bridge.models.auth import Session
from nas_bridge.models.files import RemoteFileRef
from nas_bridge.services.transfer_service import TransferClient

logger = structlog.get_logger(__name__)

ImportHandler = Callable[[CanvasHost, RemoteFileRef, bytes], Awaitable[Any]]

IMAGE_EXTENSIONS = ("png", "jpg", "jpeg", "gif")


def _place(host: CanvasHost, node: Any) -> Any:
    host.append_to_current_page(node)
    host.set_selection([node])
    host.scroll_into_view([node])
    return node


async def import_image(host: CanvasHost, file_ref: RemoteFileRef, data: bytes) -> Any:
    return _place(host, host.create_image_node(data, file_ref.name))


async def import_svg(host: CanvasHost, file_ref: RemoteFileRef, data: bytes) -> Any:
    return _place(host, host.create_vector_node_from_markup(decode_text(data), file_ref.name))


async def import_json(host: CanvasHost, file_ref: RemoteFileRef, data: bytes) -> Any:
    """
    Show a JSON file's content as a text node.

    Raises:
        InvalidJSONError: If the content does not parse.
    """
    try:
        parsed = json.loads(decode_text(data))
    except ValueError as e:
        msg = "Invalid JSON file"
        raise InvalidJSONError(msg, name=file_ref.name) from e

    logger.debug("Parsed JSON import", name=file_ref.name)
    text = (
        f"Imported JSON file: {file_ref.name}\n"
        f"Data: {json.dumps(parsed, indent=2, ensure_ascii=False)}"
    )
    return _place(host, host.create_text_node(text, file_ref.name))


class ImportDispatcher:
    """Routes a remote file to the import handler for its extension."""

    def __init__(self, transfer: TransferClient, host: CanvasHost) -> None:
        """
        Args:
            transfer: Downloads file content.
            host: Canvas receiving the imported nodes.
        """
        self._transfer = transfer
        self._host = host
        self._handlers: dict[str, ImportHandler] = {}

        self.register(IMAGE_EXTENSIONS, import_image)
        self.register(("svg",), import_svg)
        self.register(("json",), import_json)

    def register(self, extensions: Iterable[str], handler: ImportHandler) -> None:
        """Route the given extensions (case-insensitive, no dot) to ``handler``."""
        for ext in extensions:
            self._handlers[ext.lower().lstrip(".")] = handler

    @property
    def supported_extensions(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def handler_for(self, file_ref: RemoteFileRef) -> ImportHandler:
        """
        Raises:
            DirectoryImportError: If the ref is a folder.
            UnsupportedFormatError: If no handler is registered for the extension.
        """
        if file_ref.is_directory:
            msg = "Folders cannot be imported, please choose a file"
            raise DirectoryImportError(msg, path=file_ref.path)

        ext = file_ref.extension
        handler = self._handlers.get(ext)
        if handler is None:
            msg = f"Unsupported file format: {ext}"
            raise UnsupportedFormatError(msg, extension=ext)
        return handler

    async def import_file(self, file_ref: RemoteFileRef, session: Session) -> Any:
        """
        Download a file and place it on the canvas.

        Returns:
            The node created by the handler.

        Raises:
            DirectoryImportError: If the ref is a folder.
            UnsupportedFormatError: If the extension has no handler.
            InvalidJSONError: If a JSON file does not parse.
            NasBridgeError: Classified download failure.
        """
        handler = self.handler_for(file_ref)
        data = await self._transfer.download(file_ref, session)
        node = await handler(self._host, file_ref, data)
        logger.info("Imported file", name=file_ref.name, extension=file_ref.extension)
        return node
