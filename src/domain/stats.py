"""Persisted player result snapshots and their display-side derivations."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from domain.common import Role
from domain.outcome import WIN_BONUS

_DISPLAY_QUANTUM = Decimal("0.01")


@dataclass(frozen=True)
class PlayerResultRecord:
    """Final totals for one player in one scope, as stored."""

    player_id: int
    points: float
    games_played: int
    wins: int
    civilian_wins: int
    mafia_wins: int
    don_games: int
    sheriff_games: int
    first_outs: int = 0
    fouls: int = 0
    civilian_games: int = 0
    mafia_games: int = 0
    sheriff_wins: int = 0
    don_wins: int = 0


def round_for_display(value: float) -> float:
    """Round to two decimals, half away from zero.

    Only applied when reading results; stored points stay unrounded. Non-finite
    values are returned as they are.
    """
    if not math.isfinite(value):
        return float(value)
    return float(Decimal(repr(float(value))).quantize(_DISPLAY_QUANTUM, rounding=ROUND_HALF_UP))


def role_games(record: PlayerResultRecord, role: Role) -> int:
    if role is Role.CIVILIAN:
        return record.civilian_games
    if role is Role.SHERIFF:
        return record.sheriff_games
    if role is Role.MAFIA:
        return record.mafia_games
    return record.don_games


def role_wins(record: PlayerResultRecord, role: Role) -> int:
    # Faction win counters include the special roles of that faction.
    if role is Role.CIVILIAN:
        return record.civilian_wins - record.sheriff_wins
    if role is Role.SHERIFF:
        return record.sheriff_wins
    if role is Role.MAFIA:
        return record.mafia_wins - record.don_wins
    return record.don_wins


def _percentage(numerator: int, denominator: int) -> float:
    if denominator <= 0:
        return 0.0
    return round_for_display(numerator / denominator * 100.0)


def role_win_rate(record: PlayerResultRecord, role: Role) -> float:
    """Win rate for one role as a display percentage (0.0 when never played)."""
    return _percentage(role_wins(record, role), role_games(record, role))


def win_rate(record: PlayerResultRecord) -> float:
    return _percentage(record.wins, record.games_played)


def average_additional_points(record: PlayerResultRecord) -> float:
    """Mean additional points per game played, excluding win bonuses.

    Seats without additional points count as 0.0 and stay in the denominator,
    so this is not an average over annotated seats only.
    """
    if record.games_played <= 0:
        return 0.0
    additional = record.points - (record.wins * WIN_BONUS)
    return round_for_display(additional / record.games_played)


@dataclass(frozen=True)
class LeaderboardRow:
    position: int
    player_id: int
    points: float
    games_played: int
    wins: int
    win_rate: float
    civilian_win_rate: float
    sheriff_win_rate: float
    mafia_win_rate: float
    don_win_rate: float
    average_additional_points: float
    fouls: int


def leaderboard_rows(records: Iterable[PlayerResultRecord]) -> list[LeaderboardRow]:
    """Order records by points, then games played, then player id, and format them."""
    ordered = sorted(records, key=lambda item: (-item.points, -item.games_played, item.player_id))
    return [
        LeaderboardRow(
            position=position,
            player_id=record.player_id,
            points=round_for_display(record.points),
            games_played=record.games_played,
            wins=record.wins,
            win_rate=win_rate(record),
            civilian_win_rate=role_win_rate(record, Role.CIVILIAN),
            sheriff_win_rate=role_win_rate(record, Role.SHERIFF),
            mafia_win_rate=role_win_rate(record, Role.MAFIA),
            don_win_rate=role_win_rate(record, Role.DON),
            average_additional_points=average_additional_points(record),
            fouls=record.fouls,
        )
        for position, record in enumerate(ordered, start=1)
    ]


__all__ = [
    "LeaderboardRow",
    "PlayerResultRecord",
    "average_additional_points",
    "leaderboard_rows",
    "role_games",
    "role_win_rate",
    "role_wins",
    "round_for_display",
    "win_rate",
]
