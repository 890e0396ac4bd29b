"""
NAS bridge client facade.

This is the main entry point for users of the library. It wires the HTTP
client, session cache and services together behind one async context.
"""

import asyncio
from typing import Any, Self

import httpx
import structlog

from nas_bridge.api.http_client import AsyncHttpClient
from nas_bridge.config import NasBridgeConfig
from nas_bridge.exceptions import AuthFailureError
from nas_bridge.host import CanvasHost
from nas_bridge.models.auth import Session
from nas_bridge.models.files import RemoteFileRef
from nas_bridge.services.export_service import ExportService
from nas_bridge.services.import_service import ImportDispatcher
from nas_bridge.services.login_service import LoginNegotiator
from nas_bridge.services.session_store import SessionStore
from nas_bridge.services.transfer_service import TransferClient
from nas_bridge.storage import KeyValueStore

logger = structlog.get_logger(__name__)


class NasBridgeClient:
    """
    Async client connecting a canvas host to a NAS.

    Example:
        ```python
        async with NasBridgeClient(host, JsonFileKeyValueStore("login.json")) as client:
            if await client.restore_session() is None:
                await client.login("192.168.1.20", "admin", "secret")

            await client.export_selection("/DATA/Figma")
        ```

    Args:
        host: Canvas host used by imports and exports.
        storage: Persistent key-value store holding the login slot.
        config: Client configuration. Uses defaults if not provided.
        transport: Optional httpx transport for testing.
    """

    def __init__(
        self,
        host: CanvasHost,
        storage: KeyValueStore,
        config: NasBridgeConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or NasBridgeConfig()
        self._host = host

        self._http = AsyncHttpClient(self._config, transport=transport)
        self._session_store = SessionStore(storage, key=self._config.storage_key)
        self._login = LoginNegotiator(self._http, self._session_store)
        self._transfer = TransferClient(self._http, self._config)
        self._importer = ImportDispatcher(self._transfer, host)
        self._exporter = ExportService(self._transfer, host, self._config)
        self._close_lock = asyncio.Lock()

    async def __aenter__(self) -> Self:
        await self._http.__aenter__()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client. The cached session is kept."""
        async with self._close_lock:
            await self._http.close()
            logger.debug("Client closed")

    @property
    def session(self) -> Session | None:
        """Active session, if any."""
        return self._session_store.current

    @property
    def importer(self) -> ImportDispatcher:
        """Import registry, for registering extra handlers."""
        return self._importer

    async def restore_session(self) -> Session | None:
        """Load a persisted, unexpired session."""
        return await self._session_store.load()

    async def login(self, address: str, username: str, password: str) -> Session:
        """
        Log in, trying both schemes for the given address.

        Raises:
            AuthFailureError: If credentials are rejected.
            NetworkUnreachableError: If the server cannot be reached.
            NasBridgeError: For other failures.
        """
        return await self._login.login(address, username, password)

    async def logout(self) -> None:
        """Forget the cached session."""
        await self._session_store.clear()
        logger.info("Logged out")

    async def upload(
        self,
        data: bytes,
        filename: str,
        target_path: str,
        session: Session | None = None,
    ) -> dict[str, Any]:
        """Upload bytes into a NAS folder."""
        return await self._transfer.upload(data, filename, target_path, self._resolve(session))

    async def download(self, file_ref: RemoteFileRef, session: Session | None = None) -> bytes:
        """Download a NAS file's bytes."""
        return await self._transfer.download(file_ref, self._resolve(session))

    async def import_file(self, file_ref: RemoteFileRef, session: Session | None = None) -> Any:
        """Download a NAS file and place it on the canvas."""
        return await self._importer.import_file(file_ref, self._resolve(session))

    async def export_selection(
        self, target_path: str, session: Session | None = None
    ) -> list[str]:
        """Upload the canvas selection into a NAS folder."""
        return await self._exporter.export_selection(target_path, self._resolve(session))

    def _resolve(self, session: Session | None) -> Session:
        if session is not None:
            return session
        if (current := self._session_store.current) is None:
            msg = "Not logged in. Call login() first."
            raise AuthFailureError(msg)
        return current
