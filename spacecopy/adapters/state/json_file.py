"""JSON file state store adapter.

Implements StateStorePort with a single JSON document holding the
tracked state of every resource, keyed by tracking identifier. Writes
go to a temporary file that replaces the document atomically.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from spacecopy.core.models import ResourceState, StateStoreError
from spacecopy.core.ports import StateStorePort

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class JsonFileStateStore(StateStorePort):
    """File-backed store of tracked resource state."""

    def __init__(self, state_path: str):
        """Initialize the store.

        Args:
            state_path: Path to the JSON state file. Created on first write.
        """
        self.state_path = Path(state_path)
        self._lock = asyncio.Lock()

    def _load(self) -> dict[str, Any]:
        if not self.state_path.exists():
            return {}
        try:
            document = json.loads(self.state_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StateStoreError(f"Cannot read state file {self.state_path}: {e}") from e

        if not isinstance(document, dict) or document.get("version") != STATE_VERSION:
            raise StateStoreError(f"Unsupported state file format: {self.state_path}")
        resources = document.get("resources", {})
        if not isinstance(resources, dict):
            raise StateStoreError(f"Malformed resources in state file: {self.state_path}")
        return resources

    def _write(self, resources: dict[str, Any]) -> None:
        document = {"version": STATE_VERSION, "resources": resources}
        tmp_path = self.state_path.with_name(self.state_path.name + ".tmp")
        try:
            self.state_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(document, indent=2, sort_keys=True), encoding="utf-8"
            )
            os.replace(tmp_path, self.state_path)
        except OSError as e:
            raise StateStoreError(f"Cannot write state file {self.state_path}: {e}") from e

    async def get(self, name: str) -> ResourceState | None:
        async with self._lock:
            data = self._load().get(name)
        if data is None:
            return None
        return ResourceState.from_dict(data)

    async def save(self, state: ResourceState) -> None:
        if not state.tracked:
            raise StateStoreError("Cannot save state without a tracking identifier")
        async with self._lock:
            resources = self._load()
            resources[state.id] = state.to_dict()
            self._write(resources)
        logger.debug(f"Saved state for {state.id}", extra={"state_path": str(self.state_path)})

    async def remove(self, name: str) -> None:
        async with self._lock:
            resources = self._load()
            if name not in resources:
                return
            del resources[name]
            self._write(resources)
        logger.debug(f"Removed state for {name}", extra={"state_path": str(self.state_path)})

    async def list_names(self) -> list[str]:
        async with self._lock:
            return sorted(self._load())
