"""
Data models for assistants, topics and the selection they form
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Topic(BaseModel):
    """A timestamped conversation owned by exactly one assistant."""

    id: str
    assistant_id: str
    name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_message_time: Optional[datetime] = None

    @property
    def activity_time(self) -> float:
        """Most relevant activity timestamp as epoch seconds (0 when unknown)."""
        moment = self.last_message_time or self.updated_at or self.created_at
        if moment is None:
            return 0.0
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.timestamp()


class Assistant(BaseModel):
    """A selectable assistant and the ordered ids of the topics it owns.

    ``topics`` is a denormalized cache filled in by hydration. ``None`` means
    the assistant has not been hydrated; it is never written to storage.
    """

    id: str
    name: str = ""
    description: str = ""
    topic_ids: List[str] = Field(default_factory=list)
    topics: Optional[List[Topic]] = None

    def owns_topic(self, topic_id: str) -> bool:
        """True if the topic id is listed in ``topic_ids`` or the hydrated topics."""
        if topic_id in self.topic_ids:
            return True
        return any(topic.id == topic_id for topic in self.topics or [])

    @property
    def has_topics(self) -> bool:
        return bool(self.topics)


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of the current (assistant, topic) selection"""
    current_assistant: Optional[Assistant] = None
    current_topic_id: Optional[str] = None

    @property
    def is_consistent(self) -> bool:
        """Whether the selected topic, if any, belongs to the selected assistant."""
        if self.current_assistant is None or self.current_topic_id is None:
            return True
        return self.current_assistant.owns_topic(self.current_topic_id)


class EffectKind(Enum):
    """Mutations the reconciler can request"""
    SET_CURRENT_ASSISTANT = "set_current_assistant"
    SET_CURRENT_TOPIC = "set_current_topic"


@dataclass(frozen=True)
class Effect:
    """A single selection mutation produced by a reconciliation pass"""
    kind: EffectKind
    assistant: Optional[Assistant] = None
    topic_id: Optional[str] = None

    @classmethod
    def set_current_assistant(cls, assistant: Assistant) -> "Effect":
        return cls(kind=EffectKind.SET_CURRENT_ASSISTANT, assistant=assistant)

    @classmethod
    def set_current_topic(cls, topic_id: str) -> "Effect":
        return cls(kind=EffectKind.SET_CURRENT_TOPIC, topic_id=topic_id)

    def describe(self) -> str:
        """Short human-readable form used in logs and activity feeds."""
        if self.kind is EffectKind.SET_CURRENT_ASSISTANT:
            return f"assistant -> {self.assistant.id}"
        return f"topic -> {self.topic_id}"


@dataclass
class PermissionStatus:
    """Outcome of an auxiliary capability check"""
    granted: bool
    detail: str = ""
