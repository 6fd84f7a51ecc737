"""Shared match-result payloads used by the standings ledger."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class OutcomeKind(str, Enum):
    WIN = "win"
    LOSS = "loss"
    SCORED_DRAW = "scored_draw"
    SCORELESS_DRAW = "scoreless_draw"


@dataclass(frozen=True)
class MatchOutcome:
    """One team's side of a match, as entered in a result batch."""

    team_name: str
    goals_scored: int = 0
    goals_against: int = 0
    did_not_play: bool = False

    @classmethod
    def not_played(cls, team_name: str) -> MatchOutcome:
        return cls(team_name=team_name, did_not_play=True)


MatchResultBatch = tuple[MatchOutcome, ...]


def make_batch(outcomes: Iterable[MatchOutcome]) -> MatchResultBatch:
    """Freeze an iterable of outcomes into a batch."""
    batch = tuple(outcomes)
    for outcome in batch:
        if not isinstance(outcome, MatchOutcome):
            raise TypeError(f"Unsupported batch entry type: {type(outcome)!r}")
    return batch


@dataclass(frozen=True)
class Fixture:
    """A played match between two teams."""

    home: str
    away: str
    home_goals: int
    away_goals: int

    def outcomes(self) -> MatchResultBatch:
        """Expand into the mirrored outcome for each side."""
        if self.home == self.away:
            raise ValueError(f"Fixture has identical teams ({self.home!r})")
        return (
            MatchOutcome(self.home, self.home_goals, self.away_goals),
            MatchOutcome(self.away, self.away_goals, self.home_goals),
        )


__all__ = ["Fixture", "MatchOutcome", "MatchResultBatch", "OutcomeKind", "make_batch"]
