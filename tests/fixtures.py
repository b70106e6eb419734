"""
Shared test fixtures for storage, reconciler and sync tests
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from selection_sync.errors import StorageReadFailure, StorageWriteFailure
from selection_sync.models import Assistant, Topic
from selection_sync.provisioner import DefaultProvisioner
from selection_sync.storage.memory_store import InMemoryStore


def ts(seconds: float) -> datetime:
    """Timezone-aware datetime at the given epoch offset."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def create_topic(
    topic_id: str,
    assistant_id: str = "A1",
    name: Optional[str] = None,
    created_at: Optional[float] = None,
    updated_at: Optional[float] = None,
    last_message_time: Optional[float] = None,
) -> Topic:
    """Create a topic with epoch-second timestamps"""
    return Topic(
        id=topic_id,
        assistant_id=assistant_id,
        name=name or f"Topic {topic_id}",
        created_at=ts(created_at) if created_at is not None else None,
        updated_at=ts(updated_at) if updated_at is not None else None,
        last_message_time=ts(last_message_time) if last_message_time is not None else None,
    )


def create_assistant(
    assistant_id: str,
    topics: Optional[Sequence[Topic]] = None,
    topic_ids: Optional[List[str]] = None,
    hydrated: bool = True,
) -> Assistant:
    """Create an assistant; topic_ids default to the ids of ``topics``."""
    topics = list(topics or [])
    return Assistant(
        id=assistant_id,
        name=f"Assistant {assistant_id}",
        topic_ids=topic_ids if topic_ids is not None else [t.id for t in topics],
        topics=topics if hydrated else None,
    )


async def seed_store(store: InMemoryStore, assistants: Sequence[Assistant],
                     extra_topics: Sequence[Topic] = ()) -> None:
    """Persist assistants, their hydrated topics and any extra topics."""
    for assistant in assistants:
        for topic in assistant.topics or []:
            await store.save_topic(topic)
        await store.save_assistant(assistant)
    for topic in extra_topics:
        await store.save_topic(topic)


class RecordingStore(InMemoryStore):
    """In-memory store that records calls and can be told to fail."""

    def __init__(self):
        super().__init__()
        self.calls: List[str] = []
        self.fail_reads: set = set()
        self.fail_writes: set = set()

    def _check(self, operation: str, failing: set, error):
        self.calls.append(operation)
        if operation in failing:
            raise error(operation, "injected failure")

    async def get_setting(self, key):
        self._check("get_setting", self.fail_reads, StorageReadFailure)
        return await super().get_setting(key)

    async def save_setting(self, key, value):
        self._check("save_setting", self.fail_writes, StorageWriteFailure)
        await super().save_setting(key, value)

    async def get_assistant(self, assistant_id):
        self._check("get_assistant", self.fail_reads, StorageReadFailure)
        return await super().get_assistant(assistant_id)

    async def save_assistant(self, assistant):
        self._check("save_assistant", self.fail_writes, StorageWriteFailure)
        await super().save_assistant(assistant)

    async def get_topic(self, topic_id):
        self._check("get_topic", self.fail_reads, StorageReadFailure)
        return await super().get_topic(topic_id)

    async def save_topic(self, topic):
        self._check("save_topic", self.fail_writes, StorageWriteFailure)
        await super().save_topic(topic)

    def count(self, operation: str) -> int:
        return self.calls.count(operation)


class StubProvisioner(DefaultProvisioner):
    """Provisioner returning canned results"""

    def __init__(self, topic: Optional[Topic] = None,
                 defaults: Optional[List[Assistant]] = None):
        self.topic = topic
        self.defaults = defaults or []
        self.topic_requests: List[str] = []
        self.bootstrap_calls = 0

    async def create_default_topic(self, assistant_id: str) -> Optional[Topic]:
        self.topic_requests.append(assistant_id)
        return self.topic

    async def initialize_default_assistants(self) -> List[Assistant]:
        self.bootstrap_calls += 1
        return list(self.defaults)


SAMPLE_CONFIG_YAML = """
storage:
  backend: memory
  db_path: custom.db
  current_assistant_key: lastAssistant
provisioning:
  default_topic_name: Fresh Chat
  default_assistants:
    - name: Writer
      description: Helps with prose
    - name: Coder
sync:
  check_permissions: false
  workspace_dir: /tmp/ws
logging:
  level: WARNING
  file: null
"""


def topic_ids(topics: Sequence[Topic]) -> List[str]:
    return [t.id for t in topics]


