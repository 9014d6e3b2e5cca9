"""Unit tests for folding seats into player totals."""

from __future__ import annotations

import random

import pytest

from domain.accumulator import PlayerStatsCalculator, PlayerTotals, fold, merge_states, seat_contribution
from domain.common import GameResult, Role, SeatRecord, SeatResult


def _seat(
    player_id: int,
    role: Role | None,
    result: GameResult | None,
    *,
    game_id: int = 1,
    slot_number: int = 1,
    points: object = None,
    fouls: int = 0,
    first_out: bool = False,
) -> SeatResult:
    return SeatResult(
        seat=SeatRecord(
            game_id=game_id,
            player_id=player_id,
            slot_number=slot_number,
            role=role,
            fouls=fouls,
            additional_points=points,
            first_out=first_out,
        ),
        game_result=result,
    )


def _sample_seats() -> list[SeatResult]:
    roles = [Role.CIVILIAN, Role.SHERIFF, Role.MAFIA, Role.DON]
    results = [GameResult.CIVILIANS_WIN, GameResult.MAFIA_WIN, GameResult.DRAW, None]
    raw_points = ["0.3", "1,5", "00.500.900.202.00", None, "garbage", 0.1, "-0.25"]
    seats: list[SeatResult] = []
    for game_id in range(1, 13):
        result = results[game_id % len(results)]
        for slot_number in range(1, 6):
            player_id = 100 + ((game_id + slot_number) % 7)
            seats.append(
                _seat(
                    player_id,
                    roles[(game_id * slot_number) % len(roles)],
                    result,
                    game_id=game_id,
                    slot_number=slot_number,
                    points=raw_points[(game_id + 2 * slot_number) % len(raw_points)],
                    fouls=(game_id + slot_number) % 3,
                )
            )
    return seats


def _assert_states_match(left: dict[int, PlayerTotals], right: dict[int, PlayerTotals]) -> None:
    assert left.keys() == right.keys()
    for player_id, totals in left.items():
        other = right[player_id]
        assert totals.points == pytest.approx(other.points, abs=1e-9)
        assert totals == PlayerTotals(**{**other.__dict__, "points": totals.points})


def test_civilian_win_adds_bonus_to_normalized_points() -> None:
    calculator = PlayerStatsCalculator()
    calculator.process_seat(_seat(1, Role.CIVILIAN, GameResult.CIVILIANS_WIN, points="0.3"))

    totals = calculator.totals()[1]
    assert totals.points == pytest.approx(1.3)
    assert totals.wins == 1
    assert totals.civilian_wins == 1
    assert totals.mafia_wins == 0
    assert totals.games_played == 1


def test_don_counters_across_three_games() -> None:
    calculator = PlayerStatsCalculator()
    calculator.process_seats(
        [
            _seat(7, Role.DON, GameResult.MAFIA_WIN, game_id=1),
            _seat(7, Role.DON, GameResult.MAFIA_WIN, game_id=2),
            _seat(7, Role.DON, GameResult.CIVILIANS_WIN, game_id=3),
        ]
    )

    totals = calculator.totals()[7]
    assert totals.don_games == 3
    assert totals.mafia_wins == 2
    assert totals.wins == 2
    assert totals.don_wins == 2
    assert totals.games_played == 3
    assert totals.points == pytest.approx(2.0)


def test_undetermined_game_counts_games_and_points_but_no_win() -> None:
    contribution = seat_contribution(_seat(3, Role.SHERIFF, None, points="0.5", fouls=2))

    assert contribution.games_played == 1
    assert contribution.points == pytest.approx(0.5)
    assert contribution.wins == 0
    assert contribution.sheriff_games == 1
    assert contribution.fouls == 2


def test_loss_still_counts_special_role_game() -> None:
    contribution = seat_contribution(_seat(4, Role.SHERIFF, GameResult.MAFIA_WIN))
    assert contribution.sheriff_games == 1
    assert contribution.sheriff_wins == 0
    assert contribution.wins == 0


def test_first_outs_only_counted_when_seat_reports_it() -> None:
    assert seat_contribution(_seat(5, Role.CIVILIAN, GameResult.DRAW)).first_outs == 0
    assert seat_contribution(_seat(5, Role.CIVILIAN, GameResult.DRAW, first_out=True)).first_outs == 1


def test_unknown_role_counts_game_without_role_counters() -> None:
    contribution = seat_contribution(_seat(6, None, GameResult.CIVILIANS_WIN, points="1"))
    assert contribution.games_played == 1
    assert contribution.points == pytest.approx(1.0)
    assert contribution.wins == 0
    assert contribution.civilian_games == 0
    assert contribution.sheriff_games == 0


def test_fold_does_not_mutate_input_state() -> None:
    initial: dict[int, PlayerTotals] = {}
    first = fold(initial, _seat(1, Role.MAFIA, GameResult.MAFIA_WIN, points="0.2"))
    second = fold(first, _seat(1, Role.MAFIA, GameResult.CIVILIANS_WIN, game_id=2))

    assert initial == {}
    assert first[1].games_played == 1
    assert second[1].games_played == 2
    assert second[1].mafia_games == 2
    assert second[1].points == pytest.approx(1.2)


def test_fold_matches_calculator() -> None:
    seats = _sample_seats()
    state: dict[int, PlayerTotals] = {}
    for seat in seats:
        state = fold(state, seat)

    calculator = PlayerStatsCalculator()
    calculator.process_seats(seats)

    _assert_states_match(state, calculator.totals())


def test_fold_is_order_independent() -> None:
    seats = _sample_seats()
    baseline = PlayerStatsCalculator()
    baseline.process_seats(seats)

    rng = random.Random(4545)
    for _ in range(10):
        shuffled = seats[:]
        rng.shuffle(shuffled)
        calculator = PlayerStatsCalculator()
        calculator.process_seats(shuffled)
        _assert_states_match(calculator.totals(), baseline.totals())


def test_merging_partial_states_equals_single_fold() -> None:
    seats = _sample_seats()
    left = PlayerStatsCalculator()
    right = PlayerStatsCalculator()
    for seat in seats:
        (left if seat.seat.game_id % 2 else right).process_seat(seat)

    merged = merge_states(left.totals(), right.totals())

    baseline = PlayerStatsCalculator()
    baseline.process_seats(seats)
    _assert_states_match(merged, baseline.totals())


def test_totals_for_different_players_cannot_be_added() -> None:
    with pytest.raises(ValueError, match="Cannot merge totals"):
        PlayerTotals(player_id=1) + PlayerTotals(player_id=2)


def test_snapshot_is_sorted_by_player_id() -> None:
    calculator = PlayerStatsCalculator()
    calculator.process_seats(
        [
            _seat(30, Role.CIVILIAN, GameResult.DRAW, slot_number=1),
            _seat(10, Role.MAFIA, GameResult.DRAW, slot_number=2),
            _seat(20, Role.DON, GameResult.DRAW, slot_number=3),
        ]
    )

    assert [record.player_id for record in calculator.snapshot()] == [10, 20, 30]
    assert calculator.tracked_entity_count() == 3
