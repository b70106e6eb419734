"""
Async driver that runs reconciliation passes whenever the selection changes
"""
import asyncio
from typing import Callable, List, Optional

from .capabilities import CapabilityChecker
from .logging_config import get_logger
from .models import Effect, EffectKind
from .reconciler import Reconciler
from .selection_state import SelectionStateContainer
from .status_tracker import StatusTracker, get_status_tracker

logger = get_logger("sync_worker")


def apply_effects(container: SelectionStateContainer, effects: List[Effect]) -> None:
    """Apply effects to the container in order."""
    for effect in effects:
        if effect.kind is EffectKind.SET_CURRENT_ASSISTANT:
            container.set_current_assistant(effect.assistant)
        elif effect.kind is EffectKind.SET_CURRENT_TOPIC:
            container.set_current_topic_id(effect.topic_id)


class SelectionSync:
    """Feeds container change notifications through a single-consumer queue.

    Every notification becomes one queued event. A single worker task takes
    events one at a time, snapshots the container, runs a reconciliation pass
    and applies the resulting effects, which may enqueue further events.
    """

    def __init__(
        self,
        container: SelectionStateContainer,
        reconciler: Reconciler,
        capability_checker: Optional[CapabilityChecker] = None,
        status_tracker: Optional[StatusTracker] = None,
    ):
        self.container = container
        self.reconciler = reconciler
        self.capability_checker = capability_checker
        self.status_tracker = status_tracker or get_status_tracker()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None
        self._permission_task: Optional[asyncio.Task] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def start(self) -> None:
        """Subscribe to the container, start the worker and queue the initial pass."""
        if self.running:
            return
        self._unsubscribe = self.container.subscribe(self.notify)
        if self.capability_checker is not None:
            self._permission_task = asyncio.create_task(self._check_permissions())
        self._worker = asyncio.create_task(self._run(), name="selection-sync")
        self.notify()

    def notify(self) -> None:
        """Queue a reconciliation pass. Ignored while the worker is stopped."""
        if not self.running:
            return
        self._queue.put_nowait(True)

    async def wait_until_idle(self) -> None:
        """Wait until every queued pass, including ones they triggered, has run."""
        if not self.running:
            return
        await self._queue.join()

    async def stop(self) -> None:
        """Unsubscribe and let the worker finish the passes already queued."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._worker is not None:
            self._queue.put_nowait(None)
            await self._worker
            self._worker = None
        if self._permission_task is not None:
            await self._permission_task
            self._permission_task = None

    async def run_until_settled(self) -> None:
        """Start, run passes until no more changes are queued, then stop."""
        await self.start()
        await self.wait_until_idle()
        await self.stop()

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                if event is None:
                    break
                await self._run_pass()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception("Unexpected error during reconciliation pass")
                self.status_tracker.record_failure(e)
            finally:
                self._queue.task_done()

    async def _run_pass(self) -> None:
        snapshot = self.container.snapshot()
        effects = await self.reconciler.reconcile(snapshot, self.container.assistants)
        if self.reconciler.last_failure is not None:
            self.status_tracker.record_failure(self.reconciler.last_failure)
            return
        self.status_tracker.record_pass(effects)
        apply_effects(self.container, effects)

    async def _check_permissions(self) -> None:
        logger.info("Checking workspace permission status...")
        try:
            status = await self.capability_checker.check_permissions()
        except Exception as e:
            logger.error("Workspace permission check failed: %s", e)
            return
        self.status_tracker.record_permission(status.granted)
        if status.granted:
            logger.info("Workspace permission granted")
        else:
            logger.info("Workspace permission not granted (%s)", status.detail)
