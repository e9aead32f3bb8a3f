"""Database storage for the roster blob using SQLModel."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

import structlog
from sqlalchemy.pool import NullPool
from sqlmodel import Field, Session, SQLModel, create_engine

from elite_tournament.core.config import DEFAULT_ROSTER_KEY
from elite_tournament.models import Player

from .base import decode_roster, encode_roster

logger = structlog.get_logger()


class RosterBlob(SQLModel, table=True):
    """A single key-value row holding a serialized roster."""

    __tablename__ = "roster_blob"

    key: str = Field(primary_key=True)
    payload: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class DBRosterStore:
    """Persist the roster as one row in a key-value table."""

    def __init__(self, db_url: str, key: str = DEFAULT_ROSTER_KEY) -> None:
        self.db_url = db_url
        self.key = key
        _ensure_sqlite_dir(db_url)
        # Use NullPool so file handles are released between operations
        self._engine = create_engine(db_url, poolclass=NullPool)
        SQLModel.metadata.create_all(self._engine, tables=[RosterBlob.__table__])

    def load(self) -> list[Player]:
        with Session(self._engine) as session:
            row = session.get(RosterBlob, self.key)
            payload = row.payload if row else None
        return decode_roster(payload)

    def save(self, players: Sequence[Player]) -> None:
        payload = encode_roster(players)
        with Session(self._engine) as session:
            row = session.get(RosterBlob, self.key)
            if row:
                row.payload = payload
                row.updated_at = datetime.now(UTC)
            else:
                row = RosterBlob(key=self.key, payload=payload)
            session.add(row)
            session.commit()
        logger.debug("roster_saved", key=self.key, players=len(players))

    def clear(self) -> None:
        with Session(self._engine) as session:
            row = session.get(RosterBlob, self.key)
            if row:
                session.delete(row)
                session.commit()
        logger.debug("roster_cleared", key=self.key)

    def close(self) -> None:
        self._engine.dispose()


def _ensure_sqlite_dir(db_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    prefix = "sqlite:///"
    if db_url.startswith(prefix) and db_url != f"{prefix}:memory:":
        Path(db_url[len(prefix) :]).parent.mkdir(parents=True, exist_ok=True)
