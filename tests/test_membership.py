"""Rating membership changes and the recompute that follows them."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session, sessionmaker

from conftest import add_game, add_rating
from domain.errors import ScopeNotFound
from domain.membership import add_games_and_recompute, remove_game_and_recompute
from repositories.membership import add_rating_games, create_rating, list_ratings, remove_rating_game
from repositories.results import RATING_RESULT_REPOSITORY


def _seed_games(session_factory: sessionmaker[Session]) -> list[int]:
    with session_factory() as session:
        game_ids = [
            add_game(session, "civilians_win", [(1, "civilian", "0.5", 0), (2, "don", "0.1", 0)]),
            add_game(session, "mafia_win", [(1, "mafia", "0.2", 0), (3, "sheriff", "0.3", 2)]),
        ]
        session.commit()
    return game_ids


def test_add_rating_games_skips_unknown_and_existing(session_factory: sessionmaker[Session]) -> None:
    game_ids = _seed_games(session_factory)
    with session_factory() as session:
        rating_id = add_rating(session, game_ids[:1])
        added = add_rating_games(session, rating_id, [game_ids[0], game_ids[1], game_ids[1], 999])
        session.commit()

    assert added == [game_ids[1]]


def test_membership_helpers_require_existing_rating(session_factory: sessionmaker[Session]) -> None:
    with session_factory() as session:
        with pytest.raises(ScopeNotFound):
            add_rating_games(session, 41, [1])
        with pytest.raises(ScopeNotFound):
            remove_rating_game(session, 41, 1)


def test_create_rating_requires_name(session_factory: sessionmaker[Session]) -> None:
    with session_factory() as session:
        with pytest.raises(ValueError, match="rating name is required"):
            create_rating(session, name="  ")
        rating = create_rating(session, name="Spring cup", description="Club season")
        session.commit()
        assert [(item.id, count) for item, count in list_ratings(session)] == [(rating.id, 0)]


def test_adding_games_recomputes_rating(session_factory: sessionmaker[Session]) -> None:
    game_ids = _seed_games(session_factory)
    with session_factory() as session:
        rating_id = add_rating(session)
        session.commit()

    change = add_games_and_recompute(
        session_factory=session_factory,
        rating_id=rating_id,
        game_ids=game_ids,
    )

    assert change.changed_game_ids == tuple(game_ids)
    assert change.outcome is not None and change.outcome.ok
    assert change.outcome.affected_player_count == 3
    with session_factory() as session:
        records = {record.player_id: record for record in RATING_RESULT_REPOSITORY.fetch_results(session, rating_id)}
    assert records[1].games_played == 2
    assert records[1].points == pytest.approx(1.5 + 1.2)
    assert records[3].fouls == 2


def test_removing_game_recomputes_rating(session_factory: sessionmaker[Session]) -> None:
    game_ids = _seed_games(session_factory)
    with session_factory() as session:
        rating_id = add_rating(session)
        session.commit()
    add_games_and_recompute(session_factory=session_factory, rating_id=rating_id, game_ids=game_ids)

    change = remove_game_and_recompute(
        session_factory=session_factory,
        rating_id=rating_id,
        game_id=game_ids[1],
    )

    assert change.outcome is not None and change.outcome.ok
    with session_factory() as session:
        records = RATING_RESULT_REPOSITORY.fetch_results(session, rating_id)
    assert [record.player_id for record in records] == [1, 2]
    assert records[0].games_played == 1


def test_no_change_skips_recompute(session_factory: sessionmaker[Session]) -> None:
    game_ids = _seed_games(session_factory)
    with session_factory() as session:
        rating_id = add_rating(session, game_ids)
        session.commit()

    added = add_games_and_recompute(session_factory=session_factory, rating_id=rating_id, game_ids=game_ids)
    removed = remove_game_and_recompute(session_factory=session_factory, rating_id=rating_id, game_id=999)

    assert added.outcome is None and added.changed_game_ids == ()
    assert removed.outcome is None


def test_adding_to_missing_rating_raises(session_factory: sessionmaker[Session]) -> None:
    with pytest.raises(ScopeNotFound):
        add_games_and_recompute(session_factory=session_factory, rating_id=77, game_ids=[1])


def test_list_ratings_counts_member_games(session_factory: sessionmaker[Session]) -> None:
    game_ids = _seed_games(session_factory)
    with session_factory() as session:
        full = add_rating(session, game_ids, name="full")
        empty = add_rating(session, name="empty")
        session.commit()

        assert [(rating.id, count) for rating, count in list_ratings(session)] == [(full, 2), (empty, 0)]
