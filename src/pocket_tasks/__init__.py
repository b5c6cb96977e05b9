"""pocket-tasks: a small console to-do list backed by a local key-value store."""

__version__ = "0.1.0"
