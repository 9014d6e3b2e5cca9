"""Database engine/session helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def create_db_engine(db_url: str, *, connect_args: dict[str, Any] | None = None) -> Engine:
    """Create a SQLAlchemy engine with conservative defaults for scripts."""
    return create_engine(
        db_url,
        pool_pre_ping=True,
        future=True,
        connect_args=connect_args or {},
    )


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


def apply_statement_timeout(session: Session, timeout_ms: int) -> None:
    """Bound every statement of the current transaction (PostgreSQL only)."""
    if timeout_ms <= 0:
        return
    bind = session.get_bind()
    if bind is None or bind.dialect.name != "postgresql":
        return
    # SET does not accept bind parameters.
    session.execute(text(f"SET LOCAL statement_timeout = {int(timeout_ms)}"))
