"""
UI message controller.

Translates command messages from the plugin UI into client operations and
posts response messages back. Every failure ends as a response message;
nothing raised by an operation escapes ``handle_message``. Unexpected
failures of an import are reported as ``import-error``; any other
unexpected failure as ``export-error``.
"""

from collections.abc import Callable
from typing import Any

import structlog

from nas_bridge.client import NasBridgeClient
from nas_bridge.exceptions import ErrorCategory, NasBridgeError, NoSelectionError
from nas_bridge.models.auth import NasConfig, Session
from nas_bridge.models.files import RemoteFileRef

logger = structlog.get_logger(__name__)

PostMessage = Callable[[dict[str, Any]], None]

# Extra signal posted before the operation's own error message.
_CATEGORY_SIGNALS = {
    ErrorCategory.NETWORK_UNREACHABLE: "network-error",
    ErrorCategory.AUTH_FAILURE: "auth-error",
}


class PluginController:
    """Dispatches UI commands (``login``, ``export-to-nas``, ...) to the client."""

    def __init__(
        self,
        client: NasBridgeClient,
        post_message: PostMessage,
        *,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        """
        Args:
            client: Client performing the operations.
            post_message: Delivers a response message to the UI.
            on_close: Called for the ``cancel`` command.
        """
        self._client = client
        self._post = post_message
        self._on_close = on_close
        self._handlers = {
            "login": self._handle_login,
            "export-to-nas": self._handle_export,
            "import-from-nas": self._handle_import,
            "logout": self._handle_logout,
            "cancel": self._handle_cancel,
        }

    async def start(self) -> bool:
        """
        Restore a saved login and announce it to the UI.

        Returns:
            Whether a valid session was restored.
        """
        session = await self._client.restore_session()
        if session is None:
            return False
        self._post({"type": "auto-login-success", "data": session.to_ui_data()})
        return True

    async def handle_message(self, message: dict[str, Any]) -> None:
        """Run the command in ``message`` and post its outcome."""
        msg_type = message.get("type")
        handler = self._handlers.get(msg_type)
        if handler is None:
            logger.warning("Unknown message type", type=msg_type)
            return

        try:
            await handler(message)
        except Exception as e:
            logger.error("Failed to handle message", type=msg_type, exc_info=e)
            self._post({"type": "export-error", "error": str(e) or "Unknown error"})

    async def _handle_login(self, message: dict[str, Any]) -> None:
        try:
            session = await self._client.login(
                message.get("serverUrl", ""),
                message.get("username", ""),
                message.get("password", ""),
            )
        except NasBridgeError as e:
            self._post({"type": "login-error", "error": e.message})
            return
        self._post({"type": "login-success", "data": session.to_ui_data()})

    async def _handle_export(self, message: dict[str, Any]) -> None:
        try:
            session = self._session_for(message)
            await self._client.export_selection(message.get("path", "/"), session)
        except NoSelectionError:
            self._post({"type": "no-selection"})
            return
        except NasBridgeError as e:
            self._post_failure("export-error", e)
            return
        self._post({"type": "export-success"})

    async def _handle_import(self, message: dict[str, Any]) -> None:
        try:
            session = self._session_for(message)
            file_ref = self._file_ref_for(message)
            await self._client.import_file(file_ref, session)
        except NasBridgeError as e:
            self._post_failure("import-error", e)
            return
        except Exception as e:
            logger.error("Import failed", error_type=type(e).__name__, exc_info=e)
            self._post({"type": "import-error", "error": str(e) or "Import failed"})
            return
        self._post({"type": "import-success"})

    async def _handle_logout(self, message: dict[str, Any]) -> None:
        await self._client.logout()
        self._post({"type": "logout-success"})

    async def _handle_cancel(self, message: dict[str, Any]) -> None:
        if self._on_close is not None:
            self._on_close()

    def _session_for(self, message: dict[str, Any]) -> Session | None:
        nas_config = message.get("nasConfig")
        if not nas_config:
            return None
        try:
            config = NasConfig.from_message(nas_config)
        except (KeyError, TypeError) as e:
            msg = "NAS connection details are incomplete"
            raise NasBridgeError(msg) from e
        return config.as_session(self._client.session)

    @staticmethod
    def _file_ref_for(message: dict[str, Any]) -> RemoteFileRef:
        file = message.get("file")
        if not file:
            msg = "No file selected for import"
            raise NasBridgeError(msg)
        try:
            return RemoteFileRef.from_message(file)
        except (KeyError, TypeError, ValueError) as e:
            msg = "File details are incomplete"
            raise NasBridgeError(msg) from e

    def _post_failure(self, response_type: str, error: NasBridgeError) -> None:
        if (signal := _CATEGORY_SIGNALS.get(error.category)) is not None:
            self._post({"type": signal})
        self._post({"type": response_type, "error": error.message})
