"""Failure taxonomy for scope recomputes."""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    """Why a recompute did not commit."""

    SCOPE_NOT_FOUND = "scope_not_found"
    TRANSIENT_STORE_FAILURE = "transient_store_failure"
    WRITE_CONFLICT = "write_conflict"


class RecomputeError(Exception):
    reason: FailureReason


class ScopeNotFound(RecomputeError):
    reason = FailureReason.SCOPE_NOT_FOUND


class TransientStoreFailure(RecomputeError):
    reason = FailureReason.TRANSIENT_STORE_FAILURE


class ScopeLockTimeout(TransientStoreFailure):
    """Another recompute held the scope for longer than the configured timeout."""


class WriteConflict(RecomputeError):
    reason = FailureReason.WRITE_CONFLICT


__all__ = [
    "FailureReason",
    "RecomputeError",
    "ScopeLockTimeout",
    "ScopeNotFound",
    "TransientStoreFailure",
    "WriteConflict",
]
