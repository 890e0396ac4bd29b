"""
Domain models for the NAS bridge.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from nas_bridge.models.auth import NasConfig, Session, now_ms
from nas_bridge.models.files import RemoteFileRef, TransferPayload

__all__ = [
    # Auth
    "NasConfig",
    "Session",
    "now_ms",
    # Files
    "RemoteFileRef",
    "TransferPayload",
]
