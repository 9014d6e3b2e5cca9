"""Read access to games, seats and scope membership."""

from __future__ import annotations

import zlib
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from domain.common import GameResult, Role, ScopeKind, SeatRecord, SeatResult
from domain.errors import ScopeNotFound
from models import Game, GamePlayer, Rating, RatingGame

_GAME_ID_CHUNK_SIZE = 5000


def load_all_game_ids(session: Session, scope_id: int | None = None) -> list[int]:
    """Every recorded game, ordered by id."""
    return [int(game_id) for game_id in session.scalars(select(Game.id).order_by(Game.id))]


def load_rating_game_ids(session: Session, scope_id: int | None) -> list[int]:
    """Member games of one rating, ordered by id."""
    if scope_id is None:
        raise ValueError("rating scope requires a scope_id")
    statement = (
        select(RatingGame.game_id)
        .where(RatingGame.rating_id == scope_id)
        .order_by(RatingGame.game_id)
    )
    return [int(game_id) for game_id in session.scalars(statement)]


def scope_lock_key(kind: ScopeKind, scope_id: int | None) -> int:
    """Stable signed 32-bit key for transaction-scoped advisory locks."""
    label = kind.value if scope_id is None else f"{kind.value}:{scope_id}"
    return zlib.crc32(label.encode("utf-8")) - 2**31


def _advisory_lock(session: Session, kind: ScopeKind, scope_id: int | None) -> None:
    bind = session.get_bind()
    if bind is None or bind.dialect.name != "postgresql":
        return
    session.execute(select(func.pg_advisory_xact_lock(scope_lock_key(kind, scope_id))))


def lock_all_games_scope(session: Session, scope_id: int | None = None) -> None:
    """Serialize writers of the all-games aggregate until the transaction ends."""
    _advisory_lock(session, ScopeKind.ALL_GAMES, None)


def lock_rating_scope(session: Session, scope_id: int | None) -> None:
    """Row-lock the rating until the transaction ends; raise if it does not exist."""
    if scope_id is None:
        raise ValueError("rating scope requires a scope_id")
    rating_id = session.execute(
        select(Rating.id).where(Rating.id == scope_id).with_for_update()
    ).scalar_one_or_none()
    if rating_id is None:
        raise ScopeNotFound(f"rating_id={scope_id} does not exist")
    _advisory_lock(session, ScopeKind.RATING, scope_id)


def fetch_seat_results(session: Session, game_ids: Sequence[int]) -> list[SeatResult]:
    """Seats of the given games joined with each game's declared result.

    Rows come back ordered by (game_id, slot_number) so folding is deterministic.
    """
    seat_results: list[SeatResult] = []
    unique_ids = sorted(set(int(game_id) for game_id in game_ids))

    for start in range(0, len(unique_ids), _GAME_ID_CHUNK_SIZE):
        chunk = unique_ids[start : start + _GAME_ID_CHUNK_SIZE]
        statement = (
            select(
                GamePlayer.game_id,
                GamePlayer.player_id,
                GamePlayer.slot_number,
                GamePlayer.role,
                GamePlayer.fouls,
                GamePlayer.additional_points,
                Game.result.label("game_result"),
            )
            .select_from(GamePlayer)
            .join(Game, GamePlayer.game_id == Game.id)
            .where(GamePlayer.game_id.in_(chunk))
            .order_by(GamePlayer.game_id, GamePlayer.slot_number)
        )
        for row in session.execute(statement).mappings():
            seat_results.append(
                SeatResult(
                    seat=SeatRecord(
                        game_id=int(row["game_id"]),
                        player_id=int(row["player_id"]),
                        slot_number=int(row["slot_number"]),
                        role=Role.parse(row["role"]),
                        fouls=int(row["fouls"] or 0),
                        additional_points=row["additional_points"],
                    ),
                    game_result=GameResult.parse(row["game_result"]),
                )
            )

    return seat_results


__all__ = [
    "fetch_seat_results",
    "load_all_game_ids",
    "load_rating_game_ids",
    "lock_all_games_scope",
    "lock_rating_scope",
    "scope_lock_key",
]
