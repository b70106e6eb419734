"""
Selection reconciler: converges the (assistant, topic) selection to a valid pair.

Each pass looks at a snapshot of the selection and the assistant collection
and returns the effects needed to repair it. Durable writes that a repair
depends on (persisting the chosen assistant id, a newly provisioned topic)
are made during the pass; selection changes are only returned, never applied.
Re-running a pass on the state its effects produce yields no effects.
"""

from typing import List, Optional, Sequence

from .entity_loader import EntityLoader, most_recent_topic
from .errors import ProvisionerFailure, SelectionSyncError
from .logging_config import get_logger
from .models import Assistant, Effect, SelectionState
from .provisioner import DefaultProvisioner
from .storage.base import DurableStore

logger = get_logger("reconciler")

CURRENT_ASSISTANT_KEY = "currentAssistant"


class DebounceGuard:
    """Remembers the last topic id whose ownership was re-verified."""

    def __init__(self):
        self.last_verified: Optional[str] = None

    def should_verify(self, topic_id: str) -> bool:
        """False if this topic id was the last one asked about. Always records it."""
        verify = topic_id != self.last_verified
        self.last_verified = topic_id
        return verify


class Reconciler:
    """Decides which selection effects restore a consistent selection."""

    def __init__(
        self,
        store: DurableStore,
        provisioner: DefaultProvisioner,
        loader: Optional[EntityLoader] = None,
        setting_key: str = CURRENT_ASSISTANT_KEY,
    ):
        self.store = store
        self.provisioner = provisioner
        self.loader = loader or EntityLoader(store)
        self.setting_key = setting_key
        self.debounce = DebounceGuard()
        self.last_failure: Optional[SelectionSyncError] = None

    async def reconcile(
        self, selection: SelectionState, assistants: Sequence[Assistant]
    ) -> List[Effect]:
        """Run one pass. Returns effects in the order they must be applied.

        Storage and provisioning failures abort the pass with no effects; the
        failure is logged and kept in ``last_failure``.
        """
        try:
            effects = await self._decide(selection, list(assistants))
        except SelectionSyncError as e:
            logger.error("Reconciliation pass aborted: %s", e)
            self.last_failure = e
            return []
        self.last_failure = None
        return effects

    async def _decide(
        self, selection: SelectionState, assistants: List[Assistant]
    ) -> List[Effect]:
        assistant = selection.current_assistant
        if assistant is None:
            logger.info("No assistant selected, restoring the persisted one")
            return await self._restore_persisted(selection, assistants)

        if not assistant.has_topics:
            # An already selected assistant without topics is left alone.
            return []

        first_topic = most_recent_topic(assistant.topics)
        topic_id = selection.current_topic_id
        if topic_id is None:
            logger.info(
                "Assistant %s has no topic selected, selecting %s",
                assistant.id, first_topic.id,
            )
            return [Effect.set_current_topic(first_topic.id)]

        if assistant.owns_topic(topic_id):
            return []

        if not self.debounce.should_verify(topic_id):
            return []

        stored = await self.store.get_topic(topic_id)
        if stored is not None and stored.assistant_id == assistant.id:
            logger.info(
                "Topic %s belongs to assistant %s in storage, keeping selection",
                topic_id, assistant.id,
            )
            return []

        logger.info(
            "Topic %s does not belong to assistant %s, switching to %s",
            topic_id, assistant.id, first_topic.id,
        )
        return [Effect.set_current_topic(first_topic.id)]

    async def _restore_persisted(
        self, selection: SelectionState, assistants: List[Assistant]
    ) -> List[Effect]:
        assistant_id = await self.store.get_setting(self.setting_key)
        if not assistant_id:
            logger.info("No persisted assistant id, selecting the first assistant")
            return await self.select_first_assistant(assistants)

        assistant = await self.loader.load_assistant(assistant_id)
        if assistant is None:
            logger.info(
                "Persisted assistant %s not found, selecting the first assistant",
                assistant_id,
            )
            return await self.select_first_assistant(assistants)

        logger.info("Restored assistant %s (%s)", assistant.id, assistant.name)
        effects = [Effect.set_current_assistant(assistant)]
        if selection.current_topic_id is None and assistant.has_topics:
            effects.append(Effect.set_current_topic(assistant.topics[0].id))
        return effects

    async def select_first_assistant(self, assistants: List[Assistant]) -> List[Effect]:
        """Select the first assistant of the collection, provisioning defaults as needed."""
        if not assistants:
            return await self._bootstrap_defaults()

        first = await self.loader.ensure_hydrated(assistants[0])
        logger.info("Selecting first assistant %s (%s)", first.id, first.name)
        await self.store.save_setting(self.setting_key, first.id)

        if first.has_topics:
            return [
                Effect.set_current_assistant(first),
                Effect.set_current_topic(first.topics[0].id),
            ]

        logger.info("Assistant %s has no topics, creating a default topic", first.id)
        topic = await self.provisioner.create_default_topic(first.id)
        if topic is None:
            raise ProvisionerFailure(f"no default topic created for assistant {first.id}")

        await self.store.save_topic(topic)
        updated = first.model_copy(update={
            "topic_ids": [*first.topic_ids, topic.id],
            "topics": [*(first.topics or []), topic],
        })
        await self.store.save_assistant(updated)
        return [
            Effect.set_current_assistant(updated),
            Effect.set_current_topic(topic.id),
        ]

    async def _bootstrap_defaults(self) -> List[Effect]:
        logger.info("No assistants available, creating default assistants")
        defaults = await self.provisioner.initialize_default_assistants()
        if not defaults:
            raise ProvisionerFailure("default assistant initialization returned nothing")

        first = await self.loader.ensure_hydrated(defaults[0])
        await self.store.save_setting(self.setting_key, first.id)

        effects = [Effect.set_current_assistant(first)]
        if first.has_topics:
            effects.append(Effect.set_current_topic(first.topics[0].id))
        return effects
