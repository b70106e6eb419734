"""
Base durable store interface
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models import Assistant, Topic


class DurableStore(ABC):
    """Abstract base class for durable selection storage.

    Read methods raise ``StorageReadFailure`` and write methods raise
    ``StorageWriteFailure`` when the backend fails.
    """

    @abstractmethod
    async def get_setting(self, key: str) -> Optional[Any]:
        """Return the stored value for a setting key, or None."""
        pass

    @abstractmethod
    async def save_setting(self, key: str, value: Any) -> None:
        """Store a setting value."""
        pass

    @abstractmethod
    async def get_assistant(self, assistant_id: str) -> Optional[Assistant]:
        """Return an assistant without hydrated topics, or None."""
        pass

    @abstractmethod
    async def save_assistant(self, assistant: Assistant) -> None:
        """Insert or update an assistant. Hydrated topics are not stored."""
        pass

    @abstractmethod
    async def get_topic(self, topic_id: str) -> Optional[Topic]:
        """Return a topic, or None."""
        pass

    @abstractmethod
    async def save_topic(self, topic: Topic) -> None:
        """Insert or update a topic."""
        pass

    @abstractmethod
    async def list_assistants(self) -> List[Assistant]:
        """Return all assistants in insertion order."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
