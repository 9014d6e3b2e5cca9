"""Persistence of per-player result snapshots."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.errors import WriteConflict
from domain.stats import PlayerResultRecord
from models import Base, PlayerStats, RatingResult

ResultModelT = TypeVar("ResultModelT")

_RECORD_FIELDS = tuple(PlayerResultRecord.__dataclass_fields__)


class BaseResultRepository(Generic[ResultModelT]):
    """Delete/insert/read operations for one result table.

    `scope_id_column` is None for tables that hold a single unscoped snapshot.
    """

    def __init__(
        self,
        *,
        result_model: type[ResultModelT],
        scope_id_column: str | None,
    ) -> None:
        self.result_model = result_model
        self.scope_id_column = scope_id_column

    def _scope_filter(self, scope_id: int | None) -> list[Any]:
        if self.scope_id_column is None:
            return []
        if scope_id is None:
            raise ValueError(f"{self.result_model.__name__} rows require a scope_id")
        return [getattr(self.result_model, self.scope_id_column) == scope_id]

    def record_to_row(self, record: PlayerResultRecord, scope_id: int | None) -> dict[str, Any]:
        row = asdict(record)
        if self.scope_id_column is not None:
            row[self.scope_id_column] = scope_id
        return row

    def delete_results_for_scope(self, session: Session, scope_id: int | None) -> None:
        """Delete every stored row of one scope."""
        session.execute(delete(self.result_model).where(*self._scope_filter(scope_id)))

    def insert_results(
        self,
        session: Session,
        records: Sequence[PlayerResultRecord],
        *,
        scope_id: int | None,
    ) -> None:
        """Bulk insert result rows."""
        if not records:
            return
        payload = [self.record_to_row(record, scope_id) for record in records]
        session.execute(insert(self.result_model), payload)

    def replace_results(
        self,
        session: Session,
        scope_id: int | None,
        records: Sequence[PlayerResultRecord],
        *,
        batch_size: int = 1000,
    ) -> int:
        """Delete then insert inside the caller's transaction; never commits.

        Constraint violations surface as WriteConflict; the caller rolls back.
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be greater than 0")

        try:
            self.delete_results_for_scope(session, scope_id)
            for start in range(0, len(records), batch_size):
                self.insert_results(session, records[start : start + batch_size], scope_id=scope_id)
            session.flush()
        except IntegrityError as exc:
            raise WriteConflict(
                f"{self.result_model.__tablename__} scope_id={scope_id}: {exc.orig}"
            ) from exc
        return len(records)

    def count_tracked_players(self, session: Session, scope_id: int | None) -> int:
        """Count players with a stored row in one scope."""
        statement = (
            select(func.count())
            .select_from(self.result_model)
            .where(*self._scope_filter(scope_id))
        )
        return int(session.scalar(statement) or 0)

    def fetch_results(self, session: Session, scope_id: int | None) -> list[PlayerResultRecord]:
        """Stored snapshot of one scope, ordered by player id."""
        player_column = getattr(self.result_model, "player_id")
        statement = (
            select(self.result_model)
            .where(*self._scope_filter(scope_id))
            .order_by(player_column)
        )
        return [
            PlayerResultRecord(**{name: getattr(row, name) for name in _RECORD_FIELDS})
            for row in session.scalars(statement)
        ]


PLAYER_STATS_REPOSITORY = BaseResultRepository[PlayerStats](
    result_model=PlayerStats,
    scope_id_column=None,
)

RATING_RESULT_REPOSITORY = BaseResultRepository[RatingResult](
    result_model=RatingResult,
    scope_id_column="rating_id",
)


def ensure_stats_schema(engine: Engine) -> None:
    """Create every table the statistics engine reads or writes."""
    Base.metadata.create_all(bind=engine, checkfirst=True)


__all__ = [
    "BaseResultRepository",
    "PLAYER_STATS_REPOSITORY",
    "RATING_RESULT_REPOSITORY",
    "ensure_stats_schema",
]
