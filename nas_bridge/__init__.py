"""
NAS Bridge.

An async bridge between a design-tool canvas and a NAS HTTP file API:
export the selection to the NAS, import NAS files onto the canvas, and keep
one cached login across restarts.

Example:
    ```python
    from nas_bridge import JsonFileKeyValueStore, NasBridgeClient

    async with NasBridgeClient(host, JsonFileKeyValueStore("login.json")) as client:
        await client.login("192.168.1.20", "admin", "secret")
        await client.export_selection("/DATA/Figma")
    ```
"""

from nas_bridge.client import NasBridgeClient
from nas_bridge.config import NasBridgeConfig
from nas_bridge.exceptions import (
    APIError,
    AuthFailureError,
    BadRequestError,
    CodecError,
    DirectoryImportError,
    ErrorCategory,
    InvalidJSONError,
    MultipartError,
    NasBridgeError,
    NetworkError,
    NetworkUnreachableError,
    NoSelectionError,
    UnsupportedFormatError,
)
from nas_bridge.host import CanvasHost, SceneNode
from nas_bridge.models import NasConfig, RemoteFileRef, Session, TransferPayload
from nas_bridge.plugin import PluginController
from nas_bridge.storage import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__version__ = "0.1.0"

__all__ = [
    # Main client
    "NasBridgeClient",
    "NasBridgeConfig",
    "PluginController",
    # Collaborators
    "CanvasHost",
    "SceneNode",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    # Models
    "NasConfig",
    "RemoteFileRef",
    "Session",
    "TransferPayload",
    # Exceptions
    "ErrorCategory",
    "NasBridgeError",
    "NetworkUnreachableError",
    "AuthFailureError",
    "BadRequestError",
    "UnsupportedFormatError",
    "InvalidJSONError",
    "NoSelectionError",
    "DirectoryImportError",
    "APIError",
    "NetworkError",
    "MultipartError",
    "CodecError",
]
