"""
Durable store factory
"""

from enum import Enum
from pathlib import Path
from typing import Dict

from ..config import StorageConfig
from .base import DurableStore
from .memory_store import InMemoryStore
from .sqlite_store import SQLiteStore


class StoreType(Enum):
    """Available durable store backends"""
    SQLITE = "sqlite"
    MEMORY = "memory"


def create_store(config: StorageConfig) -> DurableStore:
    """Create the store backend named in the storage configuration."""
    try:
        store_type = StoreType(config.backend.lower())
    except ValueError:
        raise ValueError(f"Unknown storage backend: {config.backend}")

    if store_type == StoreType.SQLITE:
        return SQLiteStore(Path(config.db_path))
    return InMemoryStore()


def get_available_stores() -> Dict[str, str]:
    """Get list of available store backends with descriptions"""
    return {
        StoreType.SQLITE.value: "SQLite database file (durable)",
        StoreType.MEMORY.value: "Process memory (lost on exit)",
    }
