"""Registry of recomputable aggregation scopes."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from domain.common import ScopeKind, SeatResult
from repositories.games import (
    fetch_seat_results,
    load_all_game_ids,
    load_rating_game_ids,
    lock_all_games_scope,
    lock_rating_scope,
)
from repositories.results import (
    PLAYER_STATS_REPOSITORY,
    RATING_RESULT_REPOSITORY,
    BaseResultRepository,
)

LoadGameIdsFn = Callable[[Session, int | None], list[int]]
LoadSeatsFn = Callable[[Session, Sequence[int]], list[SeatResult]]
LockScopeFn = Callable[[Session, int | None], None]


@dataclass(frozen=True)
class ScopeDescriptor:
    """Everything required to recompute one kind of scope."""

    kind: ScopeKind
    description: str
    load_game_ids: LoadGameIdsFn
    load_seats: LoadSeatsFn
    lock: LockScopeFn
    repository: BaseResultRepository[Any]


_REGISTRY: dict[ScopeKind, ScopeDescriptor] = {}


def register(descriptor: ScopeDescriptor) -> None:
    """Register one scope descriptor."""
    if descriptor.kind in _REGISTRY:
        raise ValueError(f"Duplicate scope descriptor registration for kind={descriptor.kind.value}")
    _REGISTRY[descriptor.kind] = descriptor


def get_all() -> list[ScopeDescriptor]:
    """Return all registered descriptors in deterministic order."""
    return [_REGISTRY[kind] for kind in sorted(_REGISTRY, key=lambda item: item.value)]


def get(kind: ScopeKind) -> ScopeDescriptor:
    try:
        return _REGISTRY[kind]
    except KeyError as exc:
        available = ", ".join(sorted(item.value for item in _REGISTRY))
        raise KeyError(
            f"No scope descriptor registered for {kind.value}. Available: {available}"
        ) from exc


def _register_defaults() -> None:
    register(
        ScopeDescriptor(
            kind=ScopeKind.ALL_GAMES,
            description="Every recorded game (player_stats).",
            load_game_ids=load_all_game_ids,
            load_seats=fetch_seat_results,
            lock=lock_all_games_scope,
            repository=PLAYER_STATS_REPOSITORY,
        )
    )
    register(
        ScopeDescriptor(
            kind=ScopeKind.RATING,
            description="Games curated into one rating (rating_results).",
            load_game_ids=load_rating_game_ids,
            load_seats=fetch_seat_results,
            lock=lock_rating_scope,
            repository=RATING_RESULT_REPOSITORY,
        )
    )


_register_defaults()


__all__ = ["ScopeDescriptor", "get", "get_all", "register"]
