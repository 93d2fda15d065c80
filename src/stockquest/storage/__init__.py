"""Key/value persistence used by the game modules."""

from stockquest.storage.adapter import (
    FileStorageAdapter,
    MemoryStorageAdapter,
    StorageAdapter,
    create_storage_adapter,
    get_storage_adapter,
)

__all__ = [
    "FileStorageAdapter",
    "MemoryStorageAdapter",
    "StorageAdapter",
    "create_storage_adapter",
    "get_storage_adapter",
]
