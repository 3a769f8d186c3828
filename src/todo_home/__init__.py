"""Per-user task list rendered into a chat "home" surface."""

__version__ = "0.1.0"
