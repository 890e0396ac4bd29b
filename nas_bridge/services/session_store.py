"""
Login session cache.

Keeps the single active Session in memory and mirrors it to one slot of a
persistent key-value store so it survives restarts.
"""

from collections.abc import Callable

import structlog

from nas_bridge.models.auth import Session, now_ms
from nas_bridge.storage import KeyValueStore

logger = structlog.get_logger(__name__)

DEFAULT_STORAGE_KEY = "loginInfo"


class SessionStore:
    """
    Owner of the cached login session.

    Persisted and in-memory views converge after every ``save``, ``clear``
    and successful ``load``. ``load`` never returns an expired session.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """
        Args:
            storage: Persistent key-value store.
            key: Slot holding the session.
            clock: Returns the current time in epoch milliseconds.
        """
        self._storage = storage
        self._key = key
        self._clock = clock
        self._session: Session | None = None

    @property
    def current(self) -> Session | None:
        """In-memory session, without touching storage."""
        return self._session

    async def load(self) -> Session | None:
        """
        Restore the persisted session.

        Returns:
            The session if one is stored and still valid, else None. An
            expired session is deleted from storage.
        """
        try:
            raw = await self._storage.get(self._key)
        except Exception as e:
            logger.error("Failed to read saved login", error_type=type(e).__name__, exc_info=e)
            return None

        if raw is None:
            logger.debug("No saved login found")
            self._session = None
            return None

        try:
            session = Session.from_storage(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding malformed saved login", error_type=type(e).__name__)
            await self.clear()
            return None

        now = self._clock()
        if not session.is_valid(now):
            logger.info("Saved login expired", expires_at_ms=session.expires_at_ms, now_ms=now)
            await self.clear()
            return None

        logger.info("Restored saved login", username=session.username)
        self._session = session
        return session

    async def save(self, session: Session) -> None:
        """
        Make ``session`` the active session and persist it.

        A storage failure is logged; the session stays active in memory.
        """
        self._session = session
        try:
            await self._storage.set(self._key, session.to_storage())
        except Exception as e:
            logger.error("Failed to persist login", error_type=type(e).__name__, exc_info=e)
            return
        logger.debug("Login persisted", username=session.username)

    async def clear(self) -> None:
        """Forget the session in memory and in storage."""
        self._session = None
        try:
            await self._storage.delete(self._key)
        except Exception as e:
            logger.error("Failed to delete saved login", error_type=type(e).__name__, exc_info=e)
