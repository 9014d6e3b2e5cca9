"""Database repository helpers."""

from repositories.games import (
    fetch_seat_results,
    load_all_game_ids,
    load_rating_game_ids,
    lock_all_games_scope,
    lock_rating_scope,
)
from repositories.membership import add_rating_games, create_rating, list_ratings, remove_rating_game
from repositories.results import (
    PLAYER_STATS_REPOSITORY,
    RATING_RESULT_REPOSITORY,
    BaseResultRepository,
    ensure_stats_schema,
)

__all__ = [
    "BaseResultRepository",
    "PLAYER_STATS_REPOSITORY",
    "RATING_RESULT_REPOSITORY",
    "add_rating_games",
    "create_rating",
    "ensure_stats_schema",
    "fetch_seat_results",
    "list_ratings",
    "load_all_game_ids",
    "load_rating_game_ids",
    "lock_all_games_scope",
    "lock_rating_scope",
    "remove_rating_game",
]
