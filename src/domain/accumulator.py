"""Fold seats into per-player totals."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields

from domain.common import Role, SeatResult
from domain.outcome import WIN_BONUS, WinBucket, classify
from domain.points import normalize_additional_points
from domain.stats import PlayerResultRecord


@dataclass(frozen=True)
class PlayerTotals:
    """Running totals for one player. Points are accumulated unrounded."""

    player_id: int
    games_played: int = 0
    wins: int = 0
    civilian_wins: int = 0
    mafia_wins: int = 0
    don_games: int = 0
    sheriff_games: int = 0
    first_outs: int = 0
    points: float = 0.0
    fouls: int = 0
    civilian_games: int = 0
    mafia_games: int = 0
    sheriff_wins: int = 0
    don_wins: int = 0

    def __add__(self, other: PlayerTotals) -> PlayerTotals:
        if not isinstance(other, PlayerTotals):
            return NotImplemented
        if other.player_id != self.player_id:
            raise ValueError(
                f"Cannot merge totals of player_id={self.player_id} with player_id={other.player_id}"
            )
        summed = {
            field.name: getattr(self, field.name) + getattr(other, field.name)
            for field in fields(self)
            if field.name != "player_id"
        }
        return PlayerTotals(player_id=self.player_id, **summed)

    def to_record(self) -> PlayerResultRecord:
        return PlayerResultRecord(
            player_id=self.player_id,
            points=self.points,
            games_played=self.games_played,
            wins=self.wins,
            civilian_wins=self.civilian_wins,
            mafia_wins=self.mafia_wins,
            don_games=self.don_games,
            sheriff_games=self.sheriff_games,
            first_outs=self.first_outs,
            fouls=self.fouls,
            civilian_games=self.civilian_games,
            mafia_games=self.mafia_games,
            sheriff_wins=self.sheriff_wins,
            don_wins=self.don_wins,
        )


AccumulatorState = Mapping[int, PlayerTotals]


def seat_contribution(seat_result: SeatResult) -> PlayerTotals:
    """Totals contributed by a single seat."""
    seat = seat_result.seat
    outcome = classify(seat.role, seat_result.game_result)
    won = 1 if outcome.is_win else 0

    points = normalize_additional_points(seat.additional_points)
    if outcome.is_win:
        points += WIN_BONUS

    return PlayerTotals(
        player_id=seat.player_id,
        games_played=1,
        wins=won,
        civilian_wins=1 if outcome.bucket is WinBucket.CIVILIAN_WIN else 0,
        mafia_wins=1 if outcome.bucket is WinBucket.MAFIA_WIN else 0,
        don_games=1 if seat.role is Role.DON else 0,
        sheriff_games=1 if seat.role is Role.SHERIFF else 0,
        first_outs=1 if seat.first_out else 0,
        points=points,
        fouls=max(int(seat.fouls or 0), 0),
        civilian_games=1 if seat.role is Role.CIVILIAN else 0,
        mafia_games=1 if seat.role is Role.MAFIA else 0,
        sheriff_wins=won if seat.role is Role.SHERIFF else 0,
        don_wins=won if seat.role is Role.DON else 0,
    )


def fold(state: AccumulatorState, seat_result: SeatResult) -> dict[int, PlayerTotals]:
    """Return a new state with one more seat folded in; `state` is left untouched."""
    contribution = seat_contribution(seat_result)
    updated = dict(state)
    current = updated.get(contribution.player_id)
    updated[contribution.player_id] = contribution if current is None else current + contribution
    return updated


def merge_states(left: AccumulatorState, right: AccumulatorState) -> dict[int, PlayerTotals]:
    """Merge two partial states built from disjoint sets of seats."""
    merged = dict(left)
    for player_id, totals in right.items():
        current = merged.get(player_id)
        merged[player_id] = totals if current is None else current + totals
    return merged


class PlayerStatsCalculator:
    """Seat-by-seat player totals owned by one recompute invocation."""

    def __init__(self) -> None:
        self._totals: dict[int, PlayerTotals] = {}

    def process_seat(self, seat_result: SeatResult) -> PlayerTotals:
        contribution = seat_contribution(seat_result)
        current = self._totals.get(contribution.player_id)
        updated = contribution if current is None else current + contribution
        self._totals[contribution.player_id] = updated
        return updated

    def process_seats(self, seat_results: Iterable[SeatResult]) -> int:
        processed = 0
        for seat_result in seat_results:
            self.process_seat(seat_result)
            processed += 1
        return processed

    def tracked_entity_count(self) -> int:
        return len(self._totals)

    def totals(self) -> dict[int, PlayerTotals]:
        """Return a snapshot of current per-player totals."""
        return dict(self._totals)

    def snapshot(self) -> list[PlayerResultRecord]:
        """Result records ordered by player id."""
        return [self._totals[player_id].to_record() for player_id in sorted(self._totals)]


__all__ = [
    "AccumulatorState",
    "PlayerStatsCalculator",
    "PlayerTotals",
    "fold",
    "merge_states",
    "seat_contribution",
]
