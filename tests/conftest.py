"""Shared fixtures for database-backed tests (SQLite files under tmp_path)."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from models import Game, GamePlayer, Rating, RatingGame
from repositories.results import ensure_stats_schema

# (player_id, role, additional_points, fouls)
Seat = tuple[int, str, object, int]


@pytest.fixture()
def session_factory(tmp_path: Path) -> sessionmaker[Session]:
    engine = create_db_engine(
        f"sqlite:///{tmp_path / 'stats.db'}",
        connect_args={"check_same_thread": False},
    )
    ensure_stats_schema(engine)
    yield create_session_factory(engine)
    engine.dispose()


def add_game(session: Session, result: str | None, seats: Sequence[Seat]) -> int:
    game = Game(result=result)
    session.add(game)
    session.flush()
    for slot_number, (player_id, role, additional_points, fouls) in enumerate(seats, start=1):
        session.add(
            GamePlayer(
                game_id=game.id,
                player_id=player_id,
                role=role,
                fouls=fouls,
                additional_points=None if additional_points is None else str(additional_points),
                slot_number=slot_number,
            )
        )
    session.flush()
    return int(game.id)


def add_rating(session: Session, game_ids: Sequence[int] = (), name: str = "league") -> int:
    rating = Rating(name=name)
    session.add(rating)
    session.flush()
    for game_id in game_ids:
        session.add(RatingGame(rating_id=rating.id, game_id=game_id))
    session.flush()
    return int(rating.id)
