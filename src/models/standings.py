"""League standings table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class League(Base):
    """One standings ledger snapshot, identified by name."""

    __tablename__ = "leagues"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(512), nullable=True)
    ranking: Mapped[str] = mapped_column(
        Enum("wins", "points", name="ranking_policy", native_enum=False),
        nullable=False,
        default="wins",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class LeagueTeam(Base):
    """Current counters for one team, in table order."""

    __tablename__ = "league_teams"
    __table_args__ = (
        UniqueConstraint("league_id", "position", name="uq_league_team_position"),
        Index("idx_league_team_league", "league_id", "position"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    league_id: Mapped[int] = mapped_column(
        ForeignKey("leagues.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    scored_draws: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    no_score_draws: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    goals_scored: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    goals_against: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ResultBatch(Base):
    """One applied result batch; ``sequence`` orders the undo history."""

    __tablename__ = "result_batches"
    __table_args__ = (
        UniqueConstraint("league_id", "sequence", name="uq_result_batch_sequence"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    league_id: Mapped[int] = mapped_column(
        ForeignKey("leagues.id", ondelete="CASCADE"),
        nullable=False,
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)


class ResultBatchEntry(Base):
    __tablename__ = "result_batch_entries"
    __table_args__ = (
        UniqueConstraint("batch_id", "entry_index", name="uq_result_batch_entry_index"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    batch_id: Mapped[int] = mapped_column(
        ForeignKey("result_batches.id", ondelete="CASCADE"),
        nullable=False,
    )
    entry_index: Mapped[int] = mapped_column(Integer, nullable=False)
    team_name: Mapped[str] = mapped_column(String(128), nullable=False)
    goals_scored: Mapped[int] = mapped_column(Integer, nullable=False)
    goals_against: Mapped[int] = mapped_column(Integer, nullable=False)
    did_not_play: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
