"""CLI adapter for apply, destroy, show and list commands."""

from .commands import CLICommandHandler, load_declarations

__all__ = ["CLICommandHandler", "load_declarations"]
