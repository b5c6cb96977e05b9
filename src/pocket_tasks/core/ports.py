# src/pocket_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """
    Durable string -> string map.

    get() returns None for an absent key and raises StorageError when the read
    itself fails. set() reports success/failure through its return value.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> bool: ...

