"""Mutation guard for write operations.

A mutation guard is a zero-argument callable consulted before every write.
Returning False vetoes the write with a PersistenceError before any
network call. Guards are injected into file systems at construction time.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

MutationGuard = Callable[[], bool]


def allow_all() -> bool:
    """Default guard: every write is permitted."""
    return True


def deny_all() -> bool:
    """Guard that vetoes every write."""
    return False


class MutationSwitch:
    """Process-wide kill switch usable as a MutationGuard.

    Starts enabled. ``disable()`` vetoes all subsequent writes of every file
    system sharing this switch until ``enable()`` is called, e.g. during
    shutdown or maintenance windows.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._lock = threading.Lock()

    def __call__(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def enabled(self) -> bool:
        return self()

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    def disable(self) -> None:
        with self._lock:
            self._enabled = False
