"""Copy adapter: implements ResourceLifecyclePort for space copy resources.

Each create or update issues exactly one copy call and then re-reads
the tracked state. Read and delete never contact the backend. Copied
objects are never compared against the source space; ``overwrite`` and
``force_update`` stand in for real remote reconciliation.
"""

import logging

from .models import ConfigurationError, CopyRequest, ResourceState, StateStoreError
from .ports import ResourceLifecyclePort, SpaceCopyPort


class CopyAdapter(ResourceLifecyclePort):
    """Core implementation of ResourceLifecyclePort."""

    def __init__(
        self,
        client: SpaceCopyPort,
        logger: logging.Logger | None = None,
    ):
        """Initialize the copy adapter.

        Args:
            client: SpaceCopyPort implementation performing the copy.
            logger: Optional logger; defaults to the module logger.
        """
        self.client = client
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    async def create(self, request: CopyRequest) -> ResourceState:
        """Copy objects and start tracking the resource under its name.

        Raises:
            Exception: Any failure of the copy call, unchanged. No state
                is produced in that case.
        """
        await self._copy(request)

        self.logger.info(
            f"Copy objects {request.name} successfully",
            extra={"resource": request.name},
        )
        return await self.read(ResourceState(id=request.name, request=request))

    async def read(self, state: ResourceState) -> ResourceState:
        """Re-populate declared fields from tracked state.

        ``force_update`` is always cleared. Absent state is returned as is.

        Raises:
            StateStoreError: If a tracked state carries no declared fields.
        """
        if not state.tracked:
            return state
        if state.request is None:
            raise StateStoreError(f"Resource {state.id} has no tracked attributes")

        request = state.request
        self.logger.debug(
            f"Resource id: {state.id}",
            extra={
                "source_space": request.source_space,
                "target_spaces": sorted(request.target_spaces),
                "objects": [o.to_config() for o in request.objects],
                "include_references": request.include_references,
                "overwrite": request.overwrite,
                "create_new_copies": request.create_new_copies,
                "force_update": state.force_update,
            },
        )

        # name is never recomputed: it is restored from the identifier
        normalized = CopyRequest(
            name=state.id,
            source_space=request.source_space,
            target_spaces=request.target_spaces,
            objects=request.objects,
            include_references=request.include_references,
            overwrite=request.overwrite,
            create_new_copies=request.create_new_copies,
        )

        self.logger.info(f"Read resource {state.id} successfully")
        return ResourceState(id=state.id, request=normalized, force_update=False)

    async def update(
        self, state: ResourceState, request: CopyRequest
    ) -> ResourceState:
        """Copy objects again, whether or not anything changed.

        Raises:
            ConfigurationError: If the resource is not tracked or the
                name differs from the tracked identifier.
            Exception: Any failure of the copy call, unchanged.
        """
        if not state.tracked:
            raise ConfigurationError(
                f"Cannot update untracked resource {request.name}"
            )
        if request.name != state.id:
            raise ConfigurationError(
                f"name is immutable: cannot rename {state.id} to {request.name}"
            )

        await self._copy(request)

        self.logger.info(f"Updated resource {state.id} successfully")
        return await self.read(ResourceState(id=state.id, request=request))

    async def delete(self, state: ResourceState) -> ResourceState:
        """Stop tracking the resource; copied objects stay in the target spaces."""
        self.logger.info(
            "Delete object is not supported - just removing from state",
            extra={"resource": state.id},
        )
        return ResourceState()

    async def _copy(self, request: CopyRequest) -> None:
        parameters = request.to_parameters()
        self.logger.debug(
            f"Copying objects for {request.name}",
            extra={
                "source_space": request.source_space,
                "target_spaces": list(parameters.spaces),
                "objects": [o.to_config() for o in parameters.objects],
                "include_references": parameters.include_references,
                "overwrite": parameters.overwrite,
                "create_new_copies": parameters.create_new_copies,
            },
        )

        result = await self.client.copy_saved_objects(
            parameters, request.source_space
        )

        if not result.success:
            self.logger.warning(
                f"Copy for {request.name} reported failures in spaces "
                f"{', '.join(result.failed_spaces)}",
                extra={"resource": request.name},
            )
        self.logger.debug(f"Copy object for resource successfully: {request.name}")
