"""Shared types for the player statistics engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Role dealt to one seat."""

    CIVILIAN = "civilian"
    SHERIFF = "sheriff"
    MAFIA = "mafia"
    DON = "don"

    @classmethod
    def parse(cls, raw: object) -> Role | None:
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


class GameResult(str, Enum):
    """Declared outcome of one game."""

    CIVILIANS_WIN = "civilians_win"
    MAFIA_WIN = "mafia_win"
    DRAW = "draw"

    @classmethod
    def parse(cls, raw: object) -> GameResult | None:
        """Return the declared result, or None when the game is undetermined."""
        if raw is None:
            return None
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


class ScopeKind(str, Enum):
    """Which family of games a recompute aggregates over."""

    ALL_GAMES = "all_games"
    RATING = "rating"


@dataclass(frozen=True)
class ScopeRef:
    """One concrete aggregation scope."""

    kind: ScopeKind
    scope_id: int | None = None

    def __post_init__(self) -> None:
        if self.kind is ScopeKind.ALL_GAMES and self.scope_id is not None:
            raise ValueError("all_games scope does not take a scope_id")
        if self.kind is ScopeKind.RATING and self.scope_id is None:
            raise ValueError("rating scope requires a scope_id")

    @classmethod
    def all_games(cls) -> ScopeRef:
        return cls(kind=ScopeKind.ALL_GAMES)

    @classmethod
    def rating(cls, rating_id: int) -> ScopeRef:
        return cls(kind=ScopeKind.RATING, scope_id=int(rating_id))

    @property
    def label(self) -> str:
        if self.scope_id is None:
            return self.kind.value
        return f"{self.kind.value}:{self.scope_id}"


@dataclass(frozen=True)
class SeatRecord:
    """One player's participation in one game."""

    game_id: int
    player_id: int
    slot_number: int
    role: Role | None
    fouls: int = 0
    additional_points: Any = None
    first_out: bool = False


@dataclass(frozen=True)
class SeatResult:
    """A seat joined with the declared result of its game."""

    seat: SeatRecord
    game_result: GameResult | None

    @property
    def player_id(self) -> int:
        return self.seat.player_id


__all__ = [
    "GameResult",
    "Role",
    "ScopeKind",
    "ScopeRef",
    "SeatRecord",
    "SeatResult",
]
