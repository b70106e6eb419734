"""
Status tracking for reconciliation activity
"""
import time
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import Effect


@dataclass
class PassStats:
    """Counters for reconciliation passes"""
    passes: int = 0
    effects_applied: int = 0
    failed_passes: int = 0
    no_op_passes: int = 0
    last_error: Optional[str] = None
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_time(self) -> float:
        """Get elapsed time since start in seconds."""
        return time.time() - self.start_time


class StatusTracker:
    """Centralized status tracking for selection sync"""

    def __init__(self):
        """Initialize status tracker with empty state containers."""
        self.stats = PassStats()
        self.recent_activities: deque = deque(maxlen=100)
        self.permission_granted: Optional[bool] = None

    def record_pass(self, effects: Sequence[Effect]) -> None:
        """Count a completed pass and log the effects it produced."""
        self.stats.passes += 1
        if not effects:
            self.stats.no_op_passes += 1
            return
        self.stats.effects_applied += len(effects)
        self.add_activity(", ".join(effect.describe() for effect in effects))

    def record_failure(self, error: BaseException) -> None:
        """Count a failed pass and remember its error."""
        self.stats.passes += 1
        self.stats.failed_passes += 1
        self.stats.last_error = str(error)
        self.add_activity(f"Pass failed: {error}")

    def record_permission(self, granted: bool) -> None:
        self.permission_granted = granted
        self.add_activity(f"Workspace permission {'granted' if granted else 'not granted'}")

    def add_activity(self, message: str):
        """Add timestamped activity message to recent activities log."""
        timestamp = time.strftime("%H:%M:%S")
        self.recent_activities.append(f"[{timestamp}] {message}")

    def get_recent_activities(self, count: int = 20) -> List[str]:
        """Get recent activity messages up to specified count."""
        return list(self.recent_activities)[-count:]


# Global status tracker instance
_status_tracker = None


def get_status_tracker() -> StatusTracker:
    """Get the global singleton status tracker instance."""
    global _status_tracker
    if _status_tracker is None:
        _status_tracker = StatusTracker()
    return _status_tracker
