"""
Export of the canvas selection to the NAS.
"""

import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import structlog

from nas_bridge.config import NasBridgeConfig
from nas_bridge.core.codec import encode_text
from nas_bridge.exceptions import NoSelectionError
from nas_bridge.host import CanvasHost, SceneNode
from nas_bridge.models.auth import Session, now_ms
from nas_bridge.services.transfer_service import TransferClient

logger = structlog.get_logger(__name__)


def _iso_utc(timestamp: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    utc = timestamp.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").removesuffix("+00:00") + "Z"


def selection_summary(page_name: str, nodes: list[SceneNode], timestamp: datetime) -> str:
    """JSON document describing the exported selection."""
    summary: dict[str, Any] = {
        "name": page_name,
        "selection": [{"id": n.id, "name": n.name, "type": n.type} for n in nodes],
        "timestamp": _iso_utc(timestamp),
    }
    return json.dumps(summary, indent=2, ensure_ascii=False)


class ExportService:
    """Renders selected nodes and uploads them."""

    def __init__(
        self,
        transfer: TransferClient,
        host: CanvasHost,
        config: NasBridgeConfig | None = None,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """
        Args:
            transfer: Uploads the rendered files.
            host: Canvas providing the selection.
            config: Export format and scale.
            clock: Epoch milliseconds, used in generated filenames.
        """
        self._transfer = transfer
        self._host = host
        self._config = config or NasBridgeConfig()
        self._clock = clock

    async def export_selection(self, target_path: str, session: Session) -> list[str]:
        """
        Upload every exportable selected node as PNG.

        A single selected node is followed by a JSON summary of the page
        selection.

        Returns:
            Filenames uploaded, in upload order.

        Raises:
            NoSelectionError: If nothing is selected.
            NasBridgeError: Classified upload failure.
        """
        selection = list(self._host.get_selection())
        if not selection:
            raise NoSelectionError()

        logger.info("Exporting selection", count=len(selection), target_path=target_path)
        extension = self._config.export_format.lower()
        uploaded: list[str] = []

        for node in selection:
            if not self._host.can_export(node):
                logger.warning("Node does not support export", node_type=node.type)
                continue
            data = await self._host.export_node(
                node, self._config.export_format, self._config.export_scale
            )
            filename = f"{node.name or 'untitled'}_{self._clock()}.{extension}"
            await self._transfer.upload(data, filename, target_path, session)
            uploaded.append(filename)

        if len(selection) == 1:
            page_name = self._host.get_page_name()
            document = selection_summary(page_name, selection, datetime.now(timezone.utc))
            filename = f"{page_name}_{self._clock()}.json"
            await self._transfer.upload(encode_text(document), filename, target_path, session)
            uploaded.append(filename)

        return uploaded
