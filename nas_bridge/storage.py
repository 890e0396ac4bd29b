"""
Persistent key-value storage protocol and simple implementations.

The host normally provides the store (plugin client storage). The
implementations here cover tests and standalone use.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Abstract async key-value store.

    Every operation may fail independently of business logic; callers decide
    whether a failure matters.
    """

    async def get(self, key: str) -> Any | None:
        """Return the stored value, or None if the key is absent."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under key."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key. Missing keys are not an error."""
        ...


class MemoryKeyValueStore:
    """Dictionary-backed store; contents are lost with the object."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Any | None:
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileKeyValueStore:
    """
    Store backed by a single JSON document on disk.

    File access runs in a worker thread so the event loop is never blocked.
    """

    def __init__(self, path: Path | str) -> None:
        """
        Args:
            path: JSON file location. Parent directories are created on first write.
        """
        self._path = Path(path)
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data[key] = value
            await asyncio.to_thread(self._write, data)

    async def delete(self, key: str) -> None:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            if key not in data:
                return
            del data[key]
            await asyncio.to_thread(self._write, data)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            msg = f"Storage file does not hold a JSON object: {self._path}"
            raise ValueError(msg)
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self._path)
