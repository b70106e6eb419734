"""
Hydrates assistants with their topics from the durable store.
"""

from typing import List, Optional, Sequence

from .logging_config import get_logger
from .models import Assistant, Topic
from .storage.base import DurableStore

logger = get_logger("entity_loader")


def sort_topics_by_recency(topics: Sequence[Topic]) -> List[Topic]:
    """Most recently active first.

    Activity is ``last_message_time``, else ``updated_at``, else ``created_at``,
    else epoch zero. Equal activity keeps the input order.
    """
    return sorted(topics, key=lambda topic: topic.activity_time, reverse=True)


def most_recent_topic(topics: Sequence[Topic]) -> Optional[Topic]:
    """Return the most recently active topic, or None for an empty list."""
    ordered = sort_topics_by_recency(topics)
    return ordered[0] if ordered else None


class EntityLoader:
    """Resolves ids to entities and fills in an assistant's topic cache."""

    def __init__(self, store: DurableStore):
        self.store = store

    async def load_assistant(self, assistant_id: str) -> Optional[Assistant]:
        """Load and hydrate an assistant by id. Returns None if it doesn't exist."""
        assistant = await self.store.get_assistant(assistant_id)
        if assistant is None:
            return None
        return await self.hydrate(assistant)

    async def load_topics(self, topic_ids: Sequence[str]) -> List[Topic]:
        """Load topics in id order, skipping ids with no stored record."""
        topics = []
        for topic_id in topic_ids:
            topic = await self.store.get_topic(topic_id)
            if topic is None:
                logger.debug("Topic %s listed but not found in storage", topic_id)
                continue
            topics.append(topic)
        return topics

    async def hydrate(self, assistant: Assistant) -> Assistant:
        """Return a copy of the assistant with ``topics`` loaded and sorted by recency."""
        topics = await self.load_topics(assistant.topic_ids)
        return assistant.model_copy(update={"topics": sort_topics_by_recency(topics)})

    async def ensure_hydrated(self, assistant: Assistant) -> Assistant:
        """Hydrate an assistant that has no topic cache, otherwise re-sort its cache."""
        if assistant.topics is None:
            return await self.hydrate(assistant)
        return assistant.model_copy(
            update={"topics": sort_topics_by_recency(assistant.topics)}
        )
