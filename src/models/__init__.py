"""ORM models."""

from models.base import Base
from models.standings import League, LeagueTeam, ResultBatch, ResultBatchEntry

__all__ = [
    "Base",
    "League",
    "LeagueTeam",
    "ResultBatch",
    "ResultBatchEntry",
]
