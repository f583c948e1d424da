"""Unit tests for the Reconciler.

Tests verify action planning, the one-shot force update edge, and that
tracked state is persisted only after successful lifecycle steps.
"""

import pytest

from spacecopy.core.copy_adapter import CopyAdapter
from spacecopy.core.models import (
    CopyRequest,
    ForceUpdateTrigger,
    PlannedAction,
    ResourceState,
    SavedObjectRef,
    StateStoreError,
)
from spacecopy.core.reconciler import Reconciler
from spacecopy.tests.fakes import FakeSpaceCopyPort, FakeStateStorePort


@pytest.fixture
def declared() -> CopyRequest:
    """Create a declared copy request."""
    return CopyRequest(
        name="copy-dash",
        target_spaces=frozenset({"staging", "prod"}),
        objects=(SavedObjectRef(id="abc123", type="dashboard"),),
    )


@pytest.fixture
def client() -> FakeSpaceCopyPort:
    return FakeSpaceCopyPort()


@pytest.fixture
def store() -> FakeStateStorePort:
    return FakeStateStorePort()


@pytest.fixture
def reconciler(client, store) -> Reconciler:
    """Create a Reconciler over a CopyAdapter and fakes."""
    return Reconciler(lifecycle=CopyAdapter(client=client), store=store)


class TestPlan:
    """Tests for action planning."""

    def test_absent_and_declared_creates(self, reconciler, declared):
        assert reconciler.plan(declared, None) is PlannedAction.CREATE
        assert reconciler.plan(declared, ResourceState()) is PlannedAction.CREATE

    def test_tracked_and_undeclared_deletes(self, reconciler, declared):
        current = ResourceState(id="copy-dash", request=declared)

        assert reconciler.plan(None, current) is PlannedAction.DELETE

    def test_absent_and_undeclared_is_noop(self, reconciler):
        assert reconciler.plan(None, None) is PlannedAction.NOOP

    def test_unchanged_is_noop(self, reconciler, declared):
        current = ResourceState(id="copy-dash", request=declared)

        assert reconciler.plan(declared, current) is PlannedAction.NOOP

    def test_changed_updates(self, reconciler, declared):
        current = ResourceState(
            id="copy-dash",
            request=CopyRequest(
                name="copy-dash",
                target_spaces=frozenset({"staging"}),
                objects=declared.objects,
            ),
        )

        assert reconciler.plan(declared, current) is PlannedAction.UPDATE

    def test_armed_trigger_forces_update_and_clears(self, reconciler, declared):
        current = ResourceState(id="copy-dash", request=declared)
        trigger = ForceUpdateTrigger(armed=True)

        assert reconciler.plan(declared, current, trigger) is PlannedAction.UPDATE
        assert trigger.armed is False
        assert reconciler.plan(declared, current, trigger) is PlannedAction.NOOP

    def test_trigger_is_cleared_on_create(self, reconciler, declared):
        trigger = ForceUpdateTrigger(armed=True)

        assert reconciler.plan(declared, None, trigger) is PlannedAction.CREATE
        assert trigger.armed is False

    def test_stored_force_update_forces_update(self, reconciler, declared):
        current = ResourceState(id="copy-dash", request=declared, force_update=True)

        assert reconciler.plan(declared, current) is PlannedAction.UPDATE


class TestApply:
    """Tests for applying declared resources."""

    @pytest.mark.asyncio
    async def test_first_apply_creates_and_persists(self, reconciler, client, store, declared):
        result = await reconciler.apply(declared)

        assert result.action is PlannedAction.CREATE
        assert client.copy_call_count == 1
        assert store.states["copy-dash"].request == declared
        assert store.states["copy-dash"].force_update is False

    @pytest.mark.asyncio
    async def test_second_apply_is_noop(self, reconciler, client, declared):
        await reconciler.apply(declared)

        result = await reconciler.apply(declared)

        assert result.action is PlannedAction.NOOP
        assert client.copy_call_count == 1

    @pytest.mark.asyncio
    async def test_force_update_copies_once_then_settles(self, reconciler, client, declared):
        await reconciler.apply(declared)

        forced = await reconciler.apply(declared, force_update=True)
        settled = await reconciler.apply(declared)

        assert forced.action is PlannedAction.UPDATE
        assert forced.state.force_update is False
        assert settled.action is PlannedAction.NOOP
        assert client.copy_call_count == 2

    @pytest.mark.asyncio
    async def test_changed_declaration_updates(self, reconciler, client, store, declared):
        await reconciler.apply(declared)
        changed = CopyRequest(
            name="copy-dash",
            target_spaces=declared.target_spaces,
            objects=declared.objects,
            overwrite=True,
        )

        result = await reconciler.apply(changed)

        assert result.action is PlannedAction.UPDATE
        assert client.get_last_call()[0].overwrite is True
        assert store.states["copy-dash"].request.overwrite is True

    @pytest.mark.asyncio
    async def test_reordered_objects_are_noop(self, reconciler, client):
        dashboard = SavedObjectRef(id="abc123", type="dashboard")
        visualization = SavedObjectRef(id="v1", type="visualization")
        first = CopyRequest(
            name="copy-dash",
            target_spaces=frozenset({"staging"}),
            objects=(dashboard, visualization),
        )
        reordered = CopyRequest(
            name="copy-dash",
            target_spaces=frozenset({"staging"}),
            objects=(visualization, dashboard),
        )
        await reconciler.apply(first)

        result = await reconciler.apply(reordered)

        assert result.action is PlannedAction.NOOP
        assert client.copy_call_count == 1

    @pytest.mark.asyncio
    async def test_failed_create_persists_nothing(self, reconciler, client, store, declared):
        client.set_should_fail(True)

        with pytest.raises(ConnectionError):
            await reconciler.apply(declared)

        assert store.saved_states == []
        assert "copy-dash" not in store.states

    @pytest.mark.asyncio
    async def test_failed_update_keeps_previous_state(self, reconciler, client, store, declared):
        await reconciler.apply(declared)
        previous = store.states["copy-dash"]
        client.set_should_fail(True)
        changed = CopyRequest(
            name="copy-dash",
            target_spaces=frozenset({"qa"}),
            objects=declared.objects,
        )

        with pytest.raises(ConnectionError):
            await reconciler.apply(changed)

        assert store.states["copy-dash"] is previous

    @pytest.mark.asyncio
    async def test_state_write_failure_propagates(self, reconciler, store, declared):
        store.fail_writes = True

        with pytest.raises(StateStoreError):
            await reconciler.apply(declared)


class TestDestroy:
    """Tests for destroying tracked resources."""

    @pytest.mark.asyncio
    async def test_destroy_removes_tracking_without_copy(
        self, reconciler, client, store, declared
    ):
        await reconciler.apply(declared)
        client.reset()

        result = await reconciler.destroy("copy-dash")

        assert result.action is PlannedAction.DELETE
        assert result.state.id == ""
        assert "copy-dash" not in store.states
        assert client.copy_call_count == 0

    @pytest.mark.asyncio
    async def test_destroy_untracked_succeeds(self, reconciler):
        result = await reconciler.destroy("missing")

        assert result.action is PlannedAction.NOOP
        assert result.state.tracked is False

    @pytest.mark.asyncio
    async def test_destroy_succeeds_when_backend_unreachable(
        self, reconciler, client, declared
    ):
        await reconciler.apply(declared)
        client.set_should_fail(True)

        result = await reconciler.destroy("copy-dash")

        assert result.state.tracked is False


class TestShow:
    """Tests for showing tracked state."""

    @pytest.mark.asyncio
    async def test_show_tracked(self, reconciler, declared):
        await reconciler.apply(declared)

        state = await reconciler.show("copy-dash")

        assert state.request == declared

    @pytest.mark.asyncio
    async def test_show_untracked(self, reconciler):
        state = await reconciler.show("missing")

        assert state.tracked is False
