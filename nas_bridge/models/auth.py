"""
Authentication-related domain models.
"""

import time
from dataclasses import dataclass
from typing import Any, Self


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True, kw_only=True)
class Session:
    """
    Cached login for one NAS.

    Attributes:
        server_base_url: Scheme-qualified base URL that accepted the login.
        access_token: Token sent to the NAS on transfers.
        expires_at_ms: Expiry as epoch milliseconds.
        username: Account the token belongs to.
    """

    server_base_url: str
    access_token: str
    expires_at_ms: int
    username: str

    def is_valid(self, at_ms: int | None = None) -> bool:
        """A session is valid while its expiry lies strictly in the future."""
        return self.expires_at_ms > (now_ms() if at_ms is None else at_ms)

    def to_storage(self) -> dict[str, Any]:
        """Persisted representation (same keys the UI uses)."""
        return {
            "baseUrl": self.server_base_url,
            "token": self.access_token,
            "expiresAt": self.expires_at_ms,
            "username": self.username,
        }

    @classmethod
    def from_storage(cls, data: dict[str, Any]) -> Self:
        """
        Rebuild a session from its persisted representation.

        Raises:
            KeyError: If a field is missing.
            ValueError: If the expiry is not an integer.
        """
        return cls(
            server_base_url=str(data["baseUrl"]),
            access_token=str(data["token"]),
            expires_at_ms=int(data["expiresAt"]),
            username=str(data["username"]),
        )

    def to_ui_data(self) -> dict[str, str]:
        return {
            "baseUrl": self.server_base_url,
            "token": self.access_token,
            "username": self.username,
        }


@dataclass(frozen=True, kw_only=True)
class NasConfig:
    """
    Connection details the UI attaches to export/import commands.

    Attributes:
        base_url: NAS base URL.
        token: Access token.
    """

    base_url: str
    token: str

    @classmethod
    def from_message(cls, data: dict[str, Any]) -> Self:
        return cls(base_url=str(data["baseUrl"]), token=str(data["token"]))

    def as_session(self, fallback: Session | None = None) -> Session:
        """
        Session snapshot for a transfer.

        Expiry and username are taken from ``fallback`` when it belongs to the
        same server, since the UI message only carries URL and token.
        """
        if fallback is not None and fallback.server_base_url == self.base_url:
            return Session(
                server_base_url=self.base_url,
                access_token=self.token,
                expires_at_ms=fallback.expires_at_ms,
                username=fallback.username,
            )
        return Session(
            server_base_url=self.base_url,
            access_token=self.token,
            expires_at_ms=0,
            username="",
        )
