"""Port interfaces for the spacecopy resource adapter.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - SpaceCopyPort: Copy saved objects between spaces
   - StateStorePort: Persist locally tracked resource state

2. **Driving Ports** (orchestrators call into core)
   - ResourceLifecyclePort: create / read / update / delete hooks
"""

from abc import ABC, abstractmethod

from .models import CopyRequest, CopyResult, CopySavedObjectsParameters, ResourceState


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class SpaceCopyPort(ABC):
    """Port for copying saved objects from one space to others.

    Adapters implementing this port talk to the content backend
    (Kibana spaces API). Authentication, transport and serialization
    are owned by the adapter.
    """

    @abstractmethod
    async def copy_saved_objects(
        self, parameters: CopySavedObjectsParameters, source_space: str
    ) -> CopyResult:
        """Copy saved objects out of ``source_space``.

        Args:
            parameters: Target spaces, objects and copy flags.
            source_space: Space the objects are copied from.

        Returns:
            Per target space outcome reported by the backend.

        Raises:
            Exception: If the backend is unreachable or rejects the call.
                Errors are surfaced as-is; callers do not retry.
        """


class StateStorePort(ABC):
    """Port for persisting locally tracked resource state.

    State is keyed by the tracking identifier (the resource name).
    """

    @abstractmethod
    async def get(self, name: str) -> ResourceState | None:
        """Return tracked state for ``name``, or None if not tracked.

        Raises:
            StateStoreError: If stored state cannot be read.
        """

    @abstractmethod
    async def save(self, state: ResourceState) -> None:
        """Persist a tracked state under its identifier.

        Raises:
            StateStoreError: If the state cannot be written.
        """

    @abstractmethod
    async def remove(self, name: str) -> None:
        """Stop tracking ``name``. Removing an unknown name is a no-op.

        Raises:
            StateStoreError: If the state cannot be written.
        """

    @abstractmethod
    async def list_names(self) -> list[str]:
        """Return all tracked identifiers in sorted order."""


# ============================================================================
# DRIVING PORTS (Orchestrators call into core)
# ============================================================================


class ResourceLifecyclePort(ABC):
    """Lifecycle hooks exposed to a configuration-management orchestrator.

    The orchestrator is expected to serialize invocations per resource.
    """

    @abstractmethod
    async def create(self, request: CopyRequest) -> ResourceState:
        """Copy the declared objects and start tracking the resource."""

    @abstractmethod
    async def read(self, state: ResourceState) -> ResourceState:
        """Normalize tracked state without contacting the backend."""

    @abstractmethod
    async def update(
        self, state: ResourceState, request: CopyRequest
    ) -> ResourceState:
        """Copy the declared objects again and normalize state."""

    @abstractmethod
    async def delete(self, state: ResourceState) -> ResourceState:
        """Stop tracking the resource. Copied objects are left in place."""
