"""Player statistics domain modules."""

from domain.common import GameResult, Role, ScopeKind, ScopeRef, SeatRecord, SeatResult
from domain.outcome import Outcome, WinBucket, classify
from domain.points import normalize_additional_points

__all__ = [
    "GameResult",
    "Outcome",
    "Role",
    "ScopeKind",
    "ScopeRef",
    "SeatRecord",
    "SeatResult",
    "WinBucket",
    "classify",
    "normalize_additional_points",
]
