"""Curation of ratings and their member games."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from domain.errors import ScopeNotFound
from models import Game, Rating, RatingGame


def create_rating(
    session: Session,
    *,
    name: str,
    description: str | None = None,
    club_id: int | None = None,
) -> Rating:
    """Create one rating; the caller commits."""
    name = name.strip()
    if not name:
        raise ValueError("rating name is required")
    rating = Rating(name=name, description=description, club_id=club_id)
    session.add(rating)
    session.flush()
    return rating


def _require_rating(session: Session, rating_id: int) -> None:
    if session.get(Rating, rating_id) is None:
        raise ScopeNotFound(f"rating_id={rating_id} does not exist")


def add_rating_games(session: Session, rating_id: int, game_ids: Iterable[int]) -> list[int]:
    """Attach games to a rating, skipping unknown games and existing members.

    Returns the ids that were actually added; the caller commits.
    """
    _require_rating(session, rating_id)

    requested: list[int] = []
    for game_id in game_ids:
        if int(game_id) not in requested:
            requested.append(int(game_id))
    if not requested:
        return []

    known = set(session.scalars(select(Game.id).where(Game.id.in_(requested))))
    existing = set(
        session.scalars(
            select(RatingGame.game_id).where(
                RatingGame.rating_id == rating_id,
                RatingGame.game_id.in_(requested),
            )
        )
    )

    added = [game_id for game_id in requested if game_id in known and game_id not in existing]
    for game_id in added:
        session.add(RatingGame(rating_id=rating_id, game_id=game_id))
    session.flush()
    return added


def remove_rating_game(session: Session, rating_id: int, game_id: int) -> bool:
    """Detach one game from a rating; returns False when it was not a member."""
    _require_rating(session, rating_id)
    result = session.execute(
        delete(RatingGame).where(
            RatingGame.rating_id == rating_id,
            RatingGame.game_id == game_id,
        )
    )
    return bool(result.rowcount)


def list_ratings(session: Session) -> list[tuple[Rating, int]]:
    """Every rating with its member game count, ordered by id."""
    statement = (
        select(Rating, func.count(RatingGame.id))
        .outerjoin(RatingGame, RatingGame.rating_id == Rating.id)
        .group_by(Rating.id)
        .order_by(Rating.id)
    )
    return [(rating, int(game_count)) for rating, game_count in session.execute(statement)]


__all__ = ["add_rating_games", "create_rating", "list_ratings", "remove_rating_game"]
