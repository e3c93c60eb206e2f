"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    players: Mapped[list[str]] = mapped_column(JSON)
    board_state: Mapped[list[int]] = mapped_column(JSON)
    current_player_index: Mapped[int]
    move_count: Mapped[int]
    moves: Mapped[list[str]] = mapped_column(JSON, default=list)
    status: Mapped[str]
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBRecord(Base):
    """One row per won game."""

    __tablename__ = "records"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    winner: Mapped[str]
    loser: Mapped[str]
    move_count: Mapped[int]
    played_at: Mapped[datetime] = mapped_column(default=utc_now)
