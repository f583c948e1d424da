"""Fake implementations of core ports for testing.

These in-memory implementations allow core domain logic to be tested
without external dependencies:

- FakeSpaceCopyPort: Captured copy calls with canned results
- FakeStateStorePort: In-memory tracked state
"""

from .spaces import FakeSpaceCopyPort
from .store import FakeStateStorePort

__all__ = [
    "FakeSpaceCopyPort",
    "FakeStateStorePort",
]
