"""Domain models for the spacecopy resource adapter.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_SPACE = "default"

# Keys accepted in a declared configuration block.
CONFIG_KEYS = frozenset(
    {
        "name",
        "source_space",
        "target_spaces",
        "object",
        "include_reference",
        "overwrite",
        "create_new_copies",
        "force_update",
    }
)


class ConfigurationError(ValueError):
    """Raised when a declared configuration block is malformed."""


class StateStoreError(RuntimeError):
    """Raised when tracked local state cannot be read or written."""


def _require_str(raw: Mapping[str, Any], key: str) -> str:
    value = raw[key]
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{key} must be a non-empty string, got {value!r}")
    return value


def _require_bool(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a boolean, got {value!r}")
    return value


@dataclass(frozen=True)
class SavedObjectRef:
    """A saved object addressed by its (id, type) pair."""

    id: str
    type: str

    def __post_init__(self) -> None:
        """Validate saved object reference on creation."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ConfigurationError("object id must be a non-empty string")
        if not isinstance(self.type, str) or not self.type.strip():
            raise ConfigurationError("object type must be a non-empty string")

    @classmethod
    def from_config(cls, raw: Any) -> "SavedObjectRef":
        """Build a reference from an ``{"id": ..., "type": ...}`` block."""
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"object entries must be mappings, got {raw!r}")
        unknown = set(raw) - {"id", "type"}
        if unknown:
            raise ConfigurationError(f"Unknown object keys: {sorted(unknown)}")
        for key in ("id", "type"):
            if key not in raw:
                raise ConfigurationError(f"object entry is missing '{key}'")
        return cls(id=raw["id"], type=raw["type"])

    def to_config(self) -> dict[str, str]:
        return {"id": self.id, "type": self.type}


@dataclass(frozen=True)
class CopySavedObjectsParameters:
    """Wire parameters of one copy saved objects call."""

    spaces: tuple[str, ...]
    objects: tuple[SavedObjectRef, ...]
    include_references: bool = True
    overwrite: bool = False
    create_new_copies: bool = True

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON body expected by the Kibana spaces API."""
        return {
            "spaces": list(self.spaces),
            "objects": [obj.to_config() for obj in self.objects],
            "includeReferences": self.include_references,
            "overwrite": self.overwrite,
            "createNewCopies": self.create_new_copies,
        }


@dataclass(frozen=True)
class CopyRequest:
    """A declared copy of saved objects from one space to target spaces.

    ``name`` doubles as the tracking identifier and is never recomputed
    once the resource has been created.
    """

    name: str
    target_spaces: frozenset[str]
    objects: tuple[SavedObjectRef, ...]
    source_space: str = DEFAULT_SPACE
    include_references: bool = True
    overwrite: bool = False
    create_new_copies: bool = True

    def __post_init__(self) -> None:
        """Normalize collections and validate request invariants."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError("name must be a non-empty string")
        if not isinstance(self.source_space, str) or not self.source_space.strip():
            raise ConfigurationError("source_space must be a non-empty string")

        # Target spaces and objects are sets in the resource schema
        spaces = frozenset(self.target_spaces)
        if not spaces:
            raise ConfigurationError("target_spaces must not be empty")
        for space in spaces:
            if not isinstance(space, str) or not space.strip():
                raise ConfigurationError(
                    f"target_spaces entries must be non-empty strings, got {space!r}"
                )
        object.__setattr__(self, "target_spaces", spaces)

        objects = tuple(dict.fromkeys(self.objects))
        if not objects:
            raise ConfigurationError("object must contain at least one entry")
        object.__setattr__(self, "objects", objects)

    @classmethod
    def from_config(cls, raw: Mapping[str, Any]) -> "CopyRequest":
        """Build a request from a raw configuration block.

        Args:
            raw: Mapping keyed by the resource schema field names.

        Returns:
            Validated CopyRequest. ``force_update`` is accepted but not part
            of the request; read it with ``force_update_from_config``.

        Raises:
            ConfigurationError: If the block is missing keys, carries unknown
                keys, or holds values of the wrong type.
        """
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"resource block must be a mapping, got {raw!r}")

        unknown = set(raw) - CONFIG_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        for key in ("name", "target_spaces", "object"):
            if key not in raw:
                raise ConfigurationError(f"Missing required configuration key: {key}")

        target_spaces = raw["target_spaces"]
        if isinstance(target_spaces, (str, bytes, Mapping)) or not isinstance(
            target_spaces, Iterable
        ):
            raise ConfigurationError("target_spaces must be a list of space names")
        target_spaces = list(target_spaces)
        for space in target_spaces:
            if not isinstance(space, str):
                raise ConfigurationError(
                    f"target_spaces entries must be strings, got {space!r}"
                )

        raw_objects = raw["object"]
        if isinstance(raw_objects, Mapping):
            raw_objects = [raw_objects]
        if isinstance(raw_objects, (str, bytes)) or not isinstance(
            raw_objects, Iterable
        ):
            raise ConfigurationError("object must be a list of {id, type} blocks")

        return cls(
            name=_require_str(raw, "name"),
            source_space=(
                _require_str(raw, "source_space")
                if "source_space" in raw
                else DEFAULT_SPACE
            ),
            target_spaces=frozenset(target_spaces),
            objects=tuple(SavedObjectRef.from_config(o) for o in raw_objects),
            include_references=_require_bool(raw, "include_reference", True),
            overwrite=_require_bool(raw, "overwrite", False),
            create_new_copies=_require_bool(raw, "create_new_copies", True),
        )

    def to_config(self) -> dict[str, Any]:
        """Render the normalized configuration block.

        Target spaces are sorted so that the rendering is stable.
        """
        return {
            "name": self.name,
            "source_space": self.source_space,
            "target_spaces": sorted(self.target_spaces),
            "object": [obj.to_config() for obj in self.objects],
            "include_reference": self.include_references,
            "overwrite": self.overwrite,
            "create_new_copies": self.create_new_copies,
        }

    def same_declaration(self, other: "CopyRequest") -> bool:
        """Compare declared fields, ignoring the order of objects.

        Objects form a set in the resource schema; reordering them is
        not a change.
        """
        return (
            self.name == other.name
            and self.source_space == other.source_space
            and self.target_spaces == other.target_spaces
            and frozenset(self.objects) == frozenset(other.objects)
            and self.include_references == other.include_references
            and self.overwrite == other.overwrite
            and self.create_new_copies == other.create_new_copies
        )

    def to_parameters(self) -> CopySavedObjectsParameters:
        return CopySavedObjectsParameters(
            spaces=tuple(sorted(self.target_spaces)),
            objects=self.objects,
            include_references=self.include_references,
            overwrite=self.overwrite,
            create_new_copies=self.create_new_copies,
        )


def force_update_from_config(raw: Mapping[str, Any]) -> bool:
    """Return the ``force_update`` value of a configuration block."""
    return _require_bool(raw, "force_update", False)


@dataclass
class ForceUpdateTrigger:
    """One-shot trigger forcing a re-copy regardless of diff detection.

    Consuming the trigger reports whether it was armed and always
    disarms it, so a single arming drives at most one update.
    """

    armed: bool = False

    def arm(self) -> None:
        self.armed = True

    def consume(self) -> bool:
        fired = self.armed
        self.armed = False
        return fired


@dataclass(frozen=True)
class SpaceCopyOutcome:
    """Per target space result reported by the copy call."""

    space: str
    success: bool
    success_count: int = 0
    errors: tuple[dict[str, Any], ...] = ()


@dataclass(frozen=True)
class CopyResult:
    """Outcome of a copy call, informational only.

    The adapter never reconciles against this result; it is logged so
    that partial failures are visible.
    """

    outcomes: tuple[SpaceCopyOutcome, ...] = ()

    @property
    def failed_spaces(self) -> tuple[str, ...]:
        return tuple(o.space for o in self.outcomes if not o.success)

    @property
    def success(self) -> bool:
        return not self.failed_spaces


@dataclass
class ResourceState:
    """Locally tracked state of one copy resource.

    An empty ``id`` means the resource is absent (not tracked).
    """

    id: str = ""
    request: CopyRequest | None = None
    force_update: bool = False

    @property
    def tracked(self) -> bool:
        return bool(self.id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize state for a state store."""
        data: dict[str, Any] = {"id": self.id, "force_update": self.force_update}
        data["attributes"] = self.request.to_config() if self.request else None
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResourceState":
        """Deserialize state written by ``to_dict``.

        Raises:
            StateStoreError: If the stored data is malformed.
        """
        try:
            attributes = data.get("attributes")
            request = CopyRequest.from_config(attributes) if attributes else None
            return cls(
                id=str(data.get("id", "")),
                request=request,
                force_update=_require_bool(data, "force_update", False),
            )
        except (AttributeError, ConfigurationError) as e:
            raise StateStoreError(f"Malformed resource state: {e}") from e


class PlannedAction(Enum):
    """Lifecycle step chosen for a resource during reconciliation."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of reconciling one resource."""

    name: str
    action: PlannedAction
    state: ResourceState

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "action": self.action.value,
            "tracked": self.state.tracked,
            "attributes": self.state.request.to_config() if self.state.request else None,
        }
