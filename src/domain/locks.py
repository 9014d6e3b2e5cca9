"""In-process mutual exclusion per aggregation scope."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from domain.common import ScopeRef
from domain.errors import ScopeLockTimeout


@dataclass
class _ScopeLockEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class ScopeLockRegistry:
    """One lock per scope; callers for the same scope wait their turn.

    Entries exist only while some caller holds or waits for the scope, so the
    registry does not grow with the number of scopes ever recomputed.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[ScopeRef, _ScopeLockEntry] = {}

    def _checkout(self, scope: ScopeRef) -> _ScopeLockEntry:
        with self._guard:
            entry = self._entries.get(scope)
            if entry is None:
                entry = _ScopeLockEntry()
                self._entries[scope] = entry
            entry.users += 1
            return entry

    def _checkin(self, scope: ScopeRef, entry: _ScopeLockEntry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[scope]

    @contextmanager
    def hold(self, scope: ScopeRef, *, timeout: float | None = None) -> Iterator[None]:
        """Hold the scope lock; `timeout=None` blocks until it is free."""
        entry = self._checkout(scope)
        try:
            acquired = entry.lock.acquire() if timeout is None else entry.lock.acquire(timeout=timeout)
            if not acquired:
                raise ScopeLockTimeout(
                    f"scope={scope.label} still locked by another recompute after {timeout}s"
                )
            try:
                yield
            finally:
                entry.lock.release()
        finally:
            self._checkin(scope, entry)

    def is_locked(self, scope: ScopeRef) -> bool:
        with self._guard:
            entry = self._entries.get(scope)
            return entry is not None and entry.lock.locked()

    @property
    def tracked_scope_count(self) -> int:
        with self._guard:
            return len(self._entries)


DEFAULT_SCOPE_LOCKS = ScopeLockRegistry()

__all__ = ["DEFAULT_SCOPE_LOCKS", "ScopeLockRegistry"]
