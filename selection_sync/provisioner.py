"""
Default content provisioning: creates a starter assistant and topic when
none exist.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .config import ProvisioningConfig
from .logging_config import get_logger
from .models import Assistant, Topic
from .storage.base import DurableStore

logger = get_logger("provisioner")


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class DefaultProvisioner(ABC):
    """Abstract base class for default content providers"""

    @abstractmethod
    async def create_default_topic(self, assistant_id: str) -> Optional[Topic]:
        """Build one new topic owned by the assistant. The caller persists it."""
        pass

    @abstractmethod
    async def initialize_default_assistants(self) -> List[Assistant]:
        """Create, persist and return the default assistants, each with its topics attached."""
        pass


class TemplateProvisioner(DefaultProvisioner):
    """Provisions assistants and topics from configured templates."""

    def __init__(self, store: DurableStore, config: Optional[ProvisioningConfig] = None):
        self.store = store
        self.config = config or ProvisioningConfig()

    async def create_default_topic(self, assistant_id: str) -> Optional[Topic]:
        now = datetime.now(timezone.utc)
        topic = Topic(
            id=new_id(),
            assistant_id=assistant_id,
            name=self.config.default_topic_name,
            created_at=now,
            updated_at=now,
        )
        logger.debug("Built default topic %s for assistant %s", topic.id, assistant_id)
        return topic

    async def initialize_default_assistants(self) -> List[Assistant]:
        assistants = []
        for template in self.config.default_assistants:
            assistant = await self._create_from_template(template)
            assistants.append(assistant)
        logger.info("Created %d default assistant(s)", len(assistants))
        return assistants

    async def _create_from_template(self, template: Dict[str, Any]) -> Assistant:
        assistant_id = template.get("id") or new_id()
        topic = await self.create_default_topic(assistant_id)
        await self.store.save_topic(topic)

        assistant = Assistant(
            id=assistant_id,
            name=template.get("name", "Assistant"),
            description=template.get("description", ""),
            topic_ids=[topic.id],
            topics=[topic],
        )
        await self.store.save_assistant(assistant)
        return assistant
