"""Storage adapters for game progress and settings.

Adapters expose a small async key/value interface. Values are serialized to
JSON, so anything Pydantic can dump (models, dicts, lists, scalars) can be
saved; ``load`` can validate the decoded value back into a type.

The event bus never talks to storage directly. Game modules receive an adapter
through the service registry (see ``stockquest.services.di``).
"""

import asyncio
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal
from urllib.parse import quote, unquote

from loguru import logger
from pydantic import TypeAdapter, ValidationError
from pydantic_core import from_json, to_json

from stockquest.settings import get_settings

StorageKind = Literal["memory", "file"]

DEFAULT_PREFIX = "stockquest_"
FILE_SUFFIX = ".json"


class StorageAdapter(ABC):
    """Async key/value storage interface."""

    @abstractmethod
    async def save(self, key: str, data: Any) -> None:
        """Serialize ``data`` and store it under ``key``, replacing any previous value."""

    @abstractmethod
    async def load(self, key: str, as_type: Any = None) -> Any | None:
        """Return the value stored under ``key``.

        Args:
            key: Storage key
            as_type: Optional type (e.g. a Pydantic model) the decoded value is
                validated into

        Returns:
            The stored value, or None if the key is absent or the stored data
            cannot be decoded
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if it was present."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether ``key`` holds a value."""

    @abstractmethod
    async def list_keys(self, prefix: str = "") -> list[str]:
        """List stored keys starting with ``prefix``."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key owned by this adapter."""

    @staticmethod
    def _decode(key: str, raw: bytes, as_type: Any = None) -> Any | None:
        try:
            value = from_json(raw)
        except ValueError as e:
            logger.warning(f"Discarding unreadable value for {key!r}: {e}")
            return None

        if as_type is None:
            return value

        try:
            return TypeAdapter(as_type).validate_python(value)
        except ValidationError as e:
            logger.warning(f"Stored value for {key!r} does not match {as_type!r}: {e.error_count()} errors")
            return None


class MemoryStorageAdapter(StorageAdapter):
    """In-memory storage, used for tests and development."""

    def __init__(self) -> None:
        self._storage: dict[str, bytes] = {}

    async def save(self, key: str, data: Any) -> None:
        self._storage[key] = to_json(data)

    async def load(self, key: str, as_type: Any = None) -> Any | None:
        raw = self._storage.get(key)
        if raw is None:
            return None
        return self._decode(key, raw, as_type)

    async def delete(self, key: str) -> bool:
        return self._storage.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return key in self._storage

    async def list_keys(self, prefix: str = "") -> list[str]:
        return [key for key in self._storage if key.startswith(prefix)]

    async def clear(self) -> None:
        self._storage.clear()


class FileStorageAdapter(StorageAdapter):
    """Storage backed by one JSON file per key.

    Files are named ``<prefix><quoted key>.json`` inside ``directory``. Only
    files carrying this adapter's prefix are listed or cleared, so several
    adapters can share a directory.
    """

    def __init__(self, directory: str | Path, prefix: str = DEFAULT_PREFIX) -> None:
        self.directory = Path(directory)
        self.prefix = prefix

    def _path(self, key: str) -> Path:
        return self.directory / f"{self.prefix}{quote(key, safe='')}{FILE_SUFFIX}"

    def _owned_keys(self) -> list[tuple[str, Path]]:
        if not self.directory.is_dir():
            return []

        keys = []
        for path in sorted(self.directory.iterdir()):
            name = path.name
            if path.is_file() and name.startswith(self.prefix) and name.endswith(FILE_SUFFIX):
                keys.append((unquote(name[len(self.prefix) : -len(FILE_SUFFIX)]), path))
        return keys

    def _write(self, key: str, raw: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_bytes(raw)

    def _read(self, key: str) -> bytes | None:
        try:
            return self._path(key).read_bytes()
        except FileNotFoundError:
            return None

    def _unlink(self, key: str) -> bool:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            return False
        return True

    def _remove_all(self) -> int:
        owned = self._owned_keys()
        for _, path in owned:
            path.unlink(missing_ok=True)
        return len(owned)

    async def save(self, key: str, data: Any) -> None:
        await asyncio.to_thread(self._write, key, to_json(data))

    async def load(self, key: str, as_type: Any = None) -> Any | None:
        raw = await asyncio.to_thread(self._read, key)
        if raw is None:
            return None
        return self._decode(key, raw, as_type)

    async def delete(self, key: str) -> bool:
        return await asyncio.to_thread(self._unlink, key)

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._path(key).is_file)

    async def list_keys(self, prefix: str = "") -> list[str]:
        owned = await asyncio.to_thread(self._owned_keys)
        return [key for key, _ in owned if key.startswith(prefix)]

    async def clear(self) -> None:
        removed = await asyncio.to_thread(self._remove_all)
        logger.debug(f"Removed {removed} stored keys from {self.directory}")


def create_storage_adapter(
    kind: StorageKind = "memory",
    directory: str | Path | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> StorageAdapter:
    """Create a storage adapter.

    Args:
        kind: ``"memory"`` or ``"file"``
        directory: Directory for the file backend (defaults to ``Settings.storage_dir``)
        prefix: Key prefix for the file backend

    Raises:
        ValueError: If kind is not a known backend
    """
    if kind == "memory":
        return MemoryStorageAdapter()
    if kind == "file":
        return FileStorageAdapter(directory if directory is not None else get_settings().storage_dir, prefix)
    raise ValueError(f"Unknown storage backend: {kind!r}")


@lru_cache
def get_storage_adapter() -> StorageAdapter:
    """Get the shared storage adapter configured by ``Settings``."""
    settings = get_settings()
    logger.debug(f"Creating {settings.storage_backend} storage adapter")
    return create_storage_adapter(settings.storage_backend, settings.storage_dir, settings.storage_prefix)
