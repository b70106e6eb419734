"""
Selection sync package: keeps the current assistant and topic selection consistent
"""
from .models import Assistant, Topic, SelectionState, Effect, EffectKind, PermissionStatus
from .errors import (
    SelectionSyncError,
    StorageError,
    StorageReadFailure,
    StorageWriteFailure,
    ProvisionerFailure,
    AuxiliaryCheckFailure,
)
from .entity_loader import EntityLoader, sort_topics_by_recency, most_recent_topic
from .provisioner import DefaultProvisioner, TemplateProvisioner
from .reconciler import Reconciler, DebounceGuard
from .selection_state import SelectionStateContainer
from .sync_worker import SelectionSync, apply_effects
from .status_tracker import StatusTracker, get_status_tracker

__all__ = [
    'Assistant',
    'Topic',
    'SelectionState',
    'Effect',
    'EffectKind',
    'PermissionStatus',
    'SelectionSyncError',
    'StorageError',
    'StorageReadFailure',
    'StorageWriteFailure',
    'ProvisionerFailure',
    'AuxiliaryCheckFailure',
    'EntityLoader',
    'sort_topics_by_recency',
    'most_recent_topic',
    'DefaultProvisioner',
    'TemplateProvisioner',
    'Reconciler',
    'DebounceGuard',
    'SelectionStateContainer',
    'SelectionSync',
    'apply_effects',
    'StatusTracker',
    'get_status_tracker',
]
