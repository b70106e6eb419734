"""
In-process durable store, used for tests and dry runs.
"""

import copy
from typing import Any, Dict, List, Optional

from ..models import Assistant, Topic
from .base import DurableStore


class InMemoryStore(DurableStore):
    """Dictionary-backed store that copies entities on the way in and out."""

    def __init__(self):
        self.settings: Dict[str, Any] = {}
        self.assistants: Dict[str, Assistant] = {}
        self.topics: Dict[str, Topic] = {}

    async def get_setting(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self.settings.get(key))

    async def save_setting(self, key: str, value: Any) -> None:
        self.settings[key] = copy.deepcopy(value)

    async def get_assistant(self, assistant_id: str) -> Optional[Assistant]:
        assistant = self.assistants.get(assistant_id)
        return assistant.model_copy(deep=True) if assistant else None

    async def save_assistant(self, assistant: Assistant) -> None:
        self.assistants[assistant.id] = assistant.model_copy(
            update={"topics": None}, deep=True
        )

    async def get_topic(self, topic_id: str) -> Optional[Topic]:
        topic = self.topics.get(topic_id)
        return topic.model_copy(deep=True) if topic else None

    async def save_topic(self, topic: Topic) -> None:
        self.topics[topic.id] = topic.model_copy(deep=True)

    async def list_assistants(self) -> List[Assistant]:
        return [a.model_copy(deep=True) for a in self.assistants.values()]
