"""CLI command implementations for spacecopy.

Maps CLI commands (apply, destroy, show, list) onto the Reconciler and
loads declaration files. It handles CLI-specific formatting and error
reporting.
"""

import json
import logging
from pathlib import Path
from typing import Any

from spacecopy.core.models import (
    ConfigurationError,
    CopyRequest,
    force_update_from_config,
)
from spacecopy.core.reconciler import Reconciler

logger = logging.getLogger(__name__)


def load_declarations(path: str) -> list[tuple[CopyRequest, bool]]:
    """Load declared copy resources from a JSON file.

    The file holds a single resource block, a list of blocks, or an
    object with a ``resources`` list.

    Returns:
        List of (request, force_update) pairs in file order.

    Raises:
        ConfigurationError: If the file is unreadable or malformed, or
            declares the same name twice.
    """
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read declaration file {path}: {e}") from e

    if isinstance(document, dict) and "resources" in document:
        blocks = document["resources"]
    elif isinstance(document, dict):
        blocks = [document]
    else:
        blocks = document
    if not isinstance(blocks, list):
        raise ConfigurationError("Declaration file must hold resource blocks")

    declarations: list[tuple[CopyRequest, bool]] = []
    seen: set[str] = set()
    for block in blocks:
        request = CopyRequest.from_config(block)
        if request.name in seen:
            raise ConfigurationError(f"Duplicate resource name: {request.name}")
        seen.add(request.name)
        declarations.append((request, force_update_from_config(block)))
    return declarations


class CLICommandHandler:
    """Handles CLI commands by delegating to the Reconciler."""

    def __init__(self, reconciler: Reconciler):
        """Initialize the CLI command handler.

        Args:
            reconciler: Reconciler executing lifecycle steps.
        """
        self.reconciler = reconciler

    async def apply(
        self, declaration_path: str, force_update: bool = False
    ) -> dict[str, Any]:
        """Apply every resource declared in ``declaration_path``.

        Stops at the first failing resource; resources applied before it
        keep their persisted state.

        Args:
            declaration_path: JSON declaration file.
            force_update: Force a re-copy of every declared resource.

        Returns:
            Dictionary with status and per resource results.
        """
        results: list[dict[str, Any]] = []
        try:
            declarations = load_declarations(declaration_path)
            for request, declared_force in declarations:
                result = await self.reconciler.apply(
                    request, force_update=force_update or declared_force
                )
                results.append(result.to_dict())
        except Exception as e:
            logger.error(f"Failed to apply declarations: {e}")
            return {
                "status": "error",
                "operation": "apply",
                "results": results,
                "message": str(e),
            }

        return {
            "status": "success",
            "operation": "apply",
            "results": results,
            "message": f"Applied {len(results)} resource(s)",
        }

    async def destroy(self, name: str) -> dict[str, Any]:
        """Stop tracking a resource. Copied objects are not removed."""
        try:
            result = await self.reconciler.destroy(name)
        except Exception as e:
            logger.error(f"Failed to destroy resource: {e}")
            return {
                "status": "error",
                "operation": "destroy",
                "name": name,
                "message": str(e),
            }

        return {
            "status": "success",
            "operation": "destroy",
            "name": name,
            "action": result.action.value,
            "message": f"Resource {name} removed from state",
        }

    async def show(self, name: str) -> dict[str, Any]:
        """Show the tracked state of a resource."""
        try:
            state = await self.reconciler.show(name)
        except Exception as e:
            logger.error(f"Failed to show resource: {e}")
            return {
                "status": "error",
                "operation": "show",
                "name": name,
                "message": str(e),
            }

        return {
            "status": "success",
            "operation": "show",
            "name": name,
            "tracked": state.tracked,
            "attributes": state.request.to_config() if state.request else None,
            "force_update": state.force_update,
        }

    async def list_resources(self) -> dict[str, Any]:
        """List tracked resource names."""
        try:
            names = await self.reconciler.store.list_names()
        except Exception as e:
            logger.error(f"Failed to list resources: {e}")
            return {"status": "error", "operation": "list", "message": str(e)}

        return {"status": "success", "operation": "list", "names": names}
