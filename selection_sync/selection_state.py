"""
Selection state container with change notification
"""
from typing import Callable, List, Optional, Sequence

from .logging_config import get_logger
from .models import Assistant, SelectionState

logger = get_logger("selection_state")

Listener = Callable[[], None]


class SelectionStateContainer:
    """Owns the current selection and the assistant collection.

    Listeners are called synchronously after a watched field (current
    assistant, current topic id, assistant collection) changes value.
    Setting a field to its current value does not notify.
    """

    def __init__(
        self,
        assistants: Optional[Sequence[Assistant]] = None,
        current_assistant: Optional[Assistant] = None,
        current_topic_id: Optional[str] = None,
    ):
        self._assistants: List[Assistant] = list(assistants or [])
        self._current_assistant = current_assistant
        self._current_topic_id = current_topic_id
        self._listeners: List[Listener] = []

    @property
    def current_assistant(self) -> Optional[Assistant]:
        return self._current_assistant

    @property
    def current_topic_id(self) -> Optional[str]:
        return self._current_topic_id

    @property
    def assistants(self) -> List[Assistant]:
        return list(self._assistants)

    def snapshot(self) -> SelectionState:
        """Return an immutable view of the current selection."""
        return SelectionState(
            current_assistant=self._current_assistant,
            current_topic_id=self._current_topic_id,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_current_assistant(self, assistant: Optional[Assistant]) -> None:
        if assistant == self._current_assistant:
            return
        self._current_assistant = assistant
        logger.debug("Current assistant -> %s", assistant.id if assistant else None)
        self._notify()

    def set_current_topic_id(self, topic_id: Optional[str]) -> None:
        if topic_id == self._current_topic_id:
            return
        self._current_topic_id = topic_id
        logger.debug("Current topic -> %s", topic_id)
        self._notify()

    def set_assistants(self, assistants: Sequence[Assistant]) -> None:
        assistants = list(assistants)
        if assistants == self._assistants:
            return
        self._assistants = assistants
        logger.debug("Assistant collection now has %d item(s)", len(assistants))
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
