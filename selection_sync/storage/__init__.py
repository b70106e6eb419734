"""
Durable store package
"""

from .base import DurableStore
from .factory import StoreType, create_store, get_available_stores
from .memory_store import InMemoryStore
from .sqlite_store import SQLiteStore

__all__ = [
    "DurableStore",
    "StoreType",
    "create_store",
    "get_available_stores",
    "InMemoryStore",
    "SQLiteStore",
]
