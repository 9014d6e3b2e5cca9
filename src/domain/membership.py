"""Rating membership changes followed by a synchronous recompute."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from domain.common import ScopeRef
from domain.config import RecomputeConfig
from domain.locks import ScopeLockRegistry
from domain.recompute import RecomputeOutcome, recompute_scope
from repositories.membership import add_rating_games, remove_rating_game


@dataclass(frozen=True)
class MembershipChange:
    """Games actually added/removed and the recompute that followed, if any."""

    rating_id: int
    changed_game_ids: tuple[int, ...]
    outcome: RecomputeOutcome | None


def add_games_and_recompute(
    *,
    session_factory,
    rating_id: int,
    game_ids: Iterable[int],
    config: RecomputeConfig | None = None,
    locks: ScopeLockRegistry | None = None,
    echo: Callable[[str], None] | None = None,
) -> MembershipChange:
    """Attach games to a rating, commit, then recompute the rating.

    Raises ScopeNotFound when the rating does not exist. No recompute runs
    when nothing was added.
    """
    with session_factory() as session:
        try:
            added = add_rating_games(session, rating_id, game_ids)
            session.commit()
        except Exception:
            session.rollback()
            raise

    if echo is not None:
        echo(f"rating_id={rating_id} added_games={len(added)}")
    if not added:
        return MembershipChange(rating_id=rating_id, changed_game_ids=(), outcome=None)

    outcome = recompute_scope(
        session_factory=session_factory,
        scope=ScopeRef.rating(rating_id),
        config=config,
        locks=locks,
        echo=echo,
    )
    return MembershipChange(rating_id=rating_id, changed_game_ids=tuple(added), outcome=outcome)


def remove_game_and_recompute(
    *,
    session_factory,
    rating_id: int,
    game_id: int,
    config: RecomputeConfig | None = None,
    locks: ScopeLockRegistry | None = None,
    echo: Callable[[str], None] | None = None,
) -> MembershipChange:
    """Detach one game from a rating, commit, then recompute the rating."""
    with session_factory() as session:
        try:
            removed = remove_rating_game(session, rating_id, game_id)
            session.commit()
        except Exception:
            session.rollback()
            raise

    if echo is not None:
        echo(f"rating_id={rating_id} removed_game={game_id} removed={removed}")
    if not removed:
        return MembershipChange(rating_id=rating_id, changed_game_ids=(), outcome=None)

    outcome = recompute_scope(
        session_factory=session_factory,
        scope=ScopeRef.rating(rating_id),
        config=config,
        locks=locks,
        echo=echo,
    )
    return MembershipChange(rating_id=rating_id, changed_game_ids=(int(game_id),), outcome=outcome)


__all__ = ["MembershipChange", "add_games_and_recompute", "remove_game_and_recompute"]
