"""Fake SpaceCopyPort implementation for testing."""

from spacecopy.core.models import (
    CopyResult,
    CopySavedObjectsParameters,
    SpaceCopyOutcome,
)
from spacecopy.core.ports import SpaceCopyPort


class FakeSpaceCopyPort(SpaceCopyPort):
    """In-memory space copy adapter for testing.

    Captures every copy call for test assertions and reports success
    for each target space unless told otherwise.
    """

    def __init__(self):
        """Initialize with empty call history."""
        self.copy_calls: list[tuple[CopySavedObjectsParameters, str]] = []
        self.failed_spaces: set[str] = set()
        self.should_fail: bool = False
        self.fail_error: Exception = ConnectionError("Kibana is unreachable")

    async def copy_saved_objects(
        self, parameters: CopySavedObjectsParameters, source_space: str
    ) -> CopyResult:
        """Record the call and return a per space result."""
        self.copy_calls.append((parameters, source_space))

        if self.should_fail:
            raise self.fail_error

        return CopyResult(
            outcomes=tuple(
                SpaceCopyOutcome(
                    space=space,
                    success=space not in self.failed_spaces,
                    success_count=0 if space in self.failed_spaces else len(parameters.objects),
                )
                for space in parameters.spaces
            )
        )

    @property
    def copy_call_count(self) -> int:
        return len(self.copy_calls)

    def get_last_call(self) -> tuple[CopySavedObjectsParameters, str] | None:
        """Get the most recent copy call, if any."""
        if self.copy_calls:
            return self.copy_calls[-1]
        return None

    def set_should_fail(self, should_fail: bool, error: Exception | None = None) -> None:
        """Configure the adapter to fail on the next operations."""
        self.should_fail = should_fail
        if error is not None:
            self.fail_error = error

    def reset(self) -> None:
        """Reset all collected calls and state."""
        self.copy_calls.clear()
        self.failed_spaces.clear()
        self.should_fail = False
        self.fail_error = ConnectionError("Kibana is unreachable")
