"""
Error types raised by the selection sync components
"""


class SelectionSyncError(Exception):
    """Base class for all selection sync failures"""


class StorageError(SelectionSyncError):
    """Durable store call failed"""

    def __init__(self, operation: str, message: str = ""):
        self.operation = operation
        detail = f"{operation} failed"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(detail)


class StorageReadFailure(StorageError):
    """Reading a setting or entity from the durable store failed"""


class StorageWriteFailure(StorageError):
    """Writing a setting or entity to the durable store failed"""


class ProvisionerFailure(SelectionSyncError):
    """Default assistant or topic creation produced nothing"""


class AuxiliaryCheckFailure(SelectionSyncError):
    """Capability check failed. Informational only, never aborts a pass."""
