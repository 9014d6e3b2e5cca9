"""Full from-scratch recompute of player results for one scope."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from db import apply_statement_timeout
from domain.accumulator import PlayerStatsCalculator
from domain.common import ScopeRef
from domain.config import RecomputeConfig, default_recompute_config
from domain.errors import FailureReason, RecomputeError
from domain.locks import DEFAULT_SCOPE_LOCKS, ScopeLockRegistry
from domain.registry import ScopeDescriptor, get

_TRANSIENT_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, DisconnectionError)


class RecomputeStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class RecomputePhase(str, Enum):
    """Lifecycle of one recompute invocation."""

    IDLE = "idle"
    LOADING = "loading"
    ACCUMULATING = "accumulating"
    WRITING = "writing"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class RecomputeOutcome:
    """Result of one recompute invocation."""

    scope: ScopeRef
    status: RecomputeStatus
    affected_player_count: int
    phase: RecomputePhase
    processed_games: int = 0
    processed_seats: int = 0
    error: FailureReason | None = None
    detail: str | None = None
    failed_during: RecomputePhase | None = None

    @property
    def ok(self) -> bool:
        return self.status is RecomputeStatus.SUCCESS


def recompute_scope(
    *,
    session_factory,
    scope: ScopeRef,
    config: RecomputeConfig | None = None,
    locks: ScopeLockRegistry | None = None,
    descriptor: ScopeDescriptor | None = None,
    echo: Callable[[str], None] | None = None,
) -> RecomputeOutcome:
    """Recompute and atomically replace the stored results of one scope.

    At most one recompute per scope runs at a time within `locks`; the scope is
    additionally locked inside the database transaction. Store failures come
    back as a failed outcome with the previous results left in place.
    """
    config = config or default_recompute_config()
    locks = locks or DEFAULT_SCOPE_LOCKS
    descriptor = descriptor or get(scope.kind)
    if descriptor.kind is not scope.kind:
        raise ValueError(
            f"Descriptor kind={descriptor.kind.value} does not match scope={scope.label}"
        )

    try:
        with locks.hold(scope, timeout=config.lock_timeout):
            return _recompute_locked(
                session_factory=session_factory,
                scope=scope,
                config=config,
                descriptor=descriptor,
                echo=echo,
            )
    except RecomputeError as exc:
        # Only lock acquisition failures reach here; nothing was opened yet.
        return _failure(
            scope,
            reason=exc.reason,
            detail=str(exc),
            failed_during=RecomputePhase.IDLE,
            echo=echo,
        )


def _recompute_locked(
    *,
    session_factory,
    scope: ScopeRef,
    config: RecomputeConfig,
    descriptor: ScopeDescriptor,
    echo: Callable[[str], None] | None,
) -> RecomputeOutcome:
    phase = RecomputePhase.LOADING
    processed_games = 0
    processed_seats = 0

    with session_factory() as session:
        try:
            apply_statement_timeout(session, config.parameters.statement_timeout_ms)
            descriptor.lock(session, scope.scope_id)

            game_ids = descriptor.load_game_ids(session, scope.scope_id)
            processed_games = len(game_ids)
            seat_results = descriptor.load_seats(session, game_ids) if game_ids else []
            processed_seats = len(seat_results)
            if echo is not None:
                echo(
                    f"loaded scope={scope.label} "
                    f"games={processed_games} "
                    f"seats={processed_seats}"
                )

            phase = RecomputePhase.ACCUMULATING
            calculator = PlayerStatsCalculator()
            calculator.process_seats(seat_results)
            records = calculator.snapshot()

            phase = RecomputePhase.WRITING
            affected = descriptor.repository.replace_results(
                session,
                scope.scope_id,
                records,
                batch_size=config.parameters.batch_size,
            )
            session.commit()
        except RecomputeError as exc:
            session.rollback()
            return _failure(
                scope,
                reason=exc.reason,
                detail=str(exc),
                failed_during=phase,
                echo=echo,
            )
        except SQLAlchemyError as exc:
            session.rollback()
            return _failure(
                scope,
                reason=_store_failure_reason(exc, phase),
                detail=f"{type(exc).__name__}: {exc}",
                failed_during=phase,
                echo=echo,
            )
        except Exception:
            session.rollback()
            raise

    if echo is not None:
        echo(
            "completed "
            f"scope={scope.label} "
            f"config={config.name} "
            f"processed_games={processed_games} "
            f"processed_seats={processed_seats} "
            f"affected_players={affected}"
        )

    return RecomputeOutcome(
        scope=scope,
        status=RecomputeStatus.SUCCESS,
        affected_player_count=affected,
        phase=RecomputePhase.COMMITTED,
        processed_games=processed_games,
        processed_seats=processed_seats,
    )


def _store_failure_reason(exc: SQLAlchemyError, phase: RecomputePhase) -> FailureReason:
    if isinstance(exc, IntegrityError):
        return FailureReason.WRITE_CONFLICT
    if isinstance(exc, _TRANSIENT_ERRORS):
        return FailureReason.TRANSIENT_STORE_FAILURE
    if phase is RecomputePhase.WRITING:
        return FailureReason.WRITE_CONFLICT
    return FailureReason.TRANSIENT_STORE_FAILURE


def _failure(
    scope: ScopeRef,
    *,
    reason: FailureReason,
    detail: str,
    failed_during: RecomputePhase,
    echo: Callable[[str], None] | None,
) -> RecomputeOutcome:
    if echo is not None:
        echo(
            "rolled_back "
            f"scope={scope.label} "
            f"reason={reason.value} "
            f"phase={failed_during.value} "
            f"detail={detail}"
        )
    return RecomputeOutcome(
        scope=scope,
        status=RecomputeStatus.FAILURE,
        affected_player_count=0,
        phase=RecomputePhase.ROLLED_BACK,
        error=reason,
        detail=detail,
        failed_during=failed_during,
    )


__all__ = [
    "RecomputeOutcome",
    "RecomputePhase",
    "RecomputeStatus",
    "recompute_scope",
]
