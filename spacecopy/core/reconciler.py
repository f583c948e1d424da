"""Reconciler: drives the resource lifecycle from declared configuration.

Plans one lifecycle step per resource by comparing the declaration
with locally tracked state, executes it through ResourceLifecyclePort,
and persists the outcome through StateStorePort. State is only written
after the lifecycle step succeeded.
"""

import logging

from .models import (
    CopyRequest,
    ForceUpdateTrigger,
    PlannedAction,
    ReconcileResult,
    ResourceState,
)
from .ports import ResourceLifecyclePort, StateStorePort


class Reconciler:
    """Plans and applies lifecycle steps for declared copy resources."""

    def __init__(
        self,
        lifecycle: ResourceLifecyclePort,
        store: StateStorePort,
        logger: logging.Logger | None = None,
    ):
        """Initialize the reconciler.

        Args:
            lifecycle: ResourceLifecyclePort executing create/read/update/delete.
            store: StateStorePort holding tracked state.
            logger: Optional logger; defaults to the module logger.
        """
        self.lifecycle = lifecycle
        self.store = store
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def plan(
        self,
        declared: CopyRequest | None,
        current: ResourceState | None,
        force_update: ForceUpdateTrigger | None = None,
    ) -> PlannedAction:
        """Choose the lifecycle step for one resource.

        The force update trigger is consumed on every call, so it is
        cleared whichever action is chosen.
        """
        forced = force_update.consume() if force_update is not None else False
        tracked = current is not None and current.tracked

        if declared is None:
            return PlannedAction.DELETE if tracked else PlannedAction.NOOP
        if not tracked:
            return PlannedAction.CREATE

        assert current is not None
        if forced or current.force_update:
            return PlannedAction.UPDATE
        if current.request is None or not current.request.same_declaration(declared):
            return PlannedAction.UPDATE
        return PlannedAction.NOOP

    async def apply(
        self, declared: CopyRequest, force_update: bool = False
    ) -> ReconcileResult:
        """Reconcile one declared resource.

        Args:
            declared: The declared copy request.
            force_update: Arm the one-shot trigger forcing a re-copy.

        Returns:
            ReconcileResult with the action taken and the resulting state.

        Raises:
            Exception: Copy or state store failures, unchanged. Tracked
                state is left untouched when the copy fails.
        """
        current = await self.store.get(declared.name)
        trigger = ForceUpdateTrigger(armed=force_update)
        action = self.plan(declared, current, trigger)

        self.logger.debug(
            f"Planned {action.value} for {declared.name}",
            extra={"resource": declared.name, "action": action.value},
        )

        if action is PlannedAction.CREATE:
            state = await self.lifecycle.create(declared)
        elif action is PlannedAction.UPDATE:
            assert current is not None
            state = await self.lifecycle.update(current, declared)
        else:
            assert current is not None
            state = await self.lifecycle.read(current)

        await self.store.save(state)

        self.logger.info(
            f"Reconciled resource {declared.name}: {action.value}",
            extra={"resource": declared.name, "action": action.value},
        )
        return ReconcileResult(name=declared.name, action=action, state=state)

    async def destroy(self, name: str) -> ReconcileResult:
        """Stop tracking ``name``. Succeeds even when nothing is tracked."""
        current = await self.store.get(name)
        action = self.plan(None, current)

        state = ResourceState()
        if current is not None:
            state = await self.lifecycle.delete(current)
        await self.store.remove(name)

        self.logger.info(
            f"Destroyed resource {name}: {action.value}",
            extra={"resource": name, "action": action.value},
        )
        return ReconcileResult(name=name, action=action, state=state)

    async def show(self, name: str) -> ResourceState:
        """Return the normalized tracked state for ``name``."""
        current = await self.store.get(name)
        if current is None:
            return ResourceState()
        return await self.lifecycle.read(current)
