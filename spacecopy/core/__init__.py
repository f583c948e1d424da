"""Core domain logic for the spacecopy resource adapter.

This package contains zero external dependencies and represents
the pure business logic of the application. All adapters and
external integrations are handled by the adapters package.
"""

from .models import (
    ConfigurationError,
    CopyRequest,
    CopyResult,
    CopySavedObjectsParameters,
    ForceUpdateTrigger,
    PlannedAction,
    ReconcileResult,
    ResourceState,
    SavedObjectRef,
    SpaceCopyOutcome,
    StateStoreError,
)

__all__ = [
    "ConfigurationError",
    "CopyRequest",
    "CopyResult",
    "CopySavedObjectsParameters",
    "ForceUpdateTrigger",
    "PlannedAction",
    "ReconcileResult",
    "ResourceState",
    "SavedObjectRef",
    "SpaceCopyOutcome",
    "StateStoreError",
]
