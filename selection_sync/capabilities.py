"""
Auxiliary capability checks run once at startup for information only
"""
import os
from abc import ABC, abstractmethod
from pathlib import Path

from .errors import AuxiliaryCheckFailure
from .models import PermissionStatus


class CapabilityChecker(ABC):
    """Abstract base class for permission status queries"""

    @abstractmethod
    async def check_permissions(self) -> PermissionStatus:
        """Report whether the capability is available. Never requests it."""
        pass


class WorkspacePermissionChecker(CapabilityChecker):
    """Checks read/write access to the workspace directory."""

    def __init__(self, workspace_dir: Path):
        self.workspace_dir = workspace_dir

    async def check_permissions(self) -> PermissionStatus:
        try:
            exists = self.workspace_dir.is_dir()
        except OSError as e:
            raise AuxiliaryCheckFailure(f"cannot stat {self.workspace_dir}: {e}") from e

        if not exists:
            return PermissionStatus(granted=False, detail=f"{self.workspace_dir} does not exist")
        if not os.access(self.workspace_dir, os.R_OK | os.W_OK):
            return PermissionStatus(granted=False, detail=f"{self.workspace_dir} is not read/write")
        return PermissionStatus(granted=True, detail=str(self.workspace_dir))
