"""Per-team cumulative statistics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import total_ordering
from typing import Any

from domain.common import OutcomeKind
from domain.standings.errors import MalformedRowError

# Order of the counters in the persisted table line.
COUNTER_FIELDS = (
    "wins",
    "losses",
    "scored_draws",
    "no_score_draws",
    "goals_scored",
    "goals_against",
)

NAME_FORBIDDEN_CHARACTERS = (",", "\n", "\r")

_OUTCOME_COUNTERS = {
    OutcomeKind.WIN: "wins",
    OutcomeKind.LOSS: "losses",
    OutcomeKind.SCORED_DRAW: "scored_draws",
    OutcomeKind.SCORELESS_DRAW: "no_score_draws",
}


def classify_outcome(goals_scored: int, goals_against: int) -> OutcomeKind:
    """Classify a single match from one team's point of view."""
    if goals_scored > goals_against:
        return OutcomeKind.WIN
    if goals_against > goals_scored:
        return OutcomeKind.LOSS
    if goals_scored > 0:
        return OutcomeKind.SCORED_DRAW
    return OutcomeKind.SCORELESS_DRAW


@total_ordering
@dataclass(eq=False)
class TeamRecord:
    """Mutable standings row for one team.

    Counters change only through ``apply_outcome`` and ``undo_outcome``.
    Equality compares the six counters and ignores the name.
    """

    name: str
    wins: int = 0
    losses: int = 0
    scored_draws: int = 0
    no_score_draws: int = 0
    goals_scored: int = 0
    goals_against: int = 0

    @classmethod
    def from_fields(cls, fields: Sequence[str], *, line_number: int | None = None) -> TeamRecord:
        """Build a record from a split table line; blank counters read as 0."""
        if not fields or not fields[0].strip():
            raise MalformedRowError("missing team name", line_number=line_number)
        if len(fields) > len(COUNTER_FIELDS) + 1:
            raise MalformedRowError(
                f"expected at most {len(COUNTER_FIELDS) + 1} fields, got {len(fields)}",
                line_number=line_number,
            )

        counters: dict[str, int] = {}
        for index, field_name in enumerate(COUNTER_FIELDS, start=1):
            raw = fields[index].strip() if index < len(fields) else ""
            if not raw:
                counters[field_name] = 0
                continue
            try:
                counters[field_name] = int(raw)
            except ValueError as exc:
                raise MalformedRowError(
                    f"{field_name} is not an integer: {raw!r}",
                    line_number=line_number,
                ) from exc

        return cls(name=fields[0], **counters)

    def __post_init__(self) -> None:
        # Names are the first field of a comma-separated table line.
        if any(separator in self.name for separator in NAME_FORBIDDEN_CHARACTERS):
            raise ValueError(f"Team name cannot contain a comma or line break: {self.name!r}")

    @property
    def goal_difference(self) -> int:
        return self.goals_scored - self.goals_against

    @property
    def points(self) -> int:
        return self.wins * 3 + self.scored_draws * 2 + self.no_score_draws

    @property
    def played(self) -> int:
        return self.wins + self.losses + self.scored_draws + self.no_score_draws

    def counters(self) -> tuple[int, ...]:
        return tuple(getattr(self, field_name) for field_name in COUNTER_FIELDS)

    def apply_outcome(self, goals_scored: int, goals_against: int) -> OutcomeKind:
        self.goals_scored += goals_scored
        self.goals_against += goals_against
        kind = classify_outcome(goals_scored, goals_against)
        counter = _OUTCOME_COUNTERS[kind]
        setattr(self, counter, getattr(self, counter) + 1)
        return kind

    def undo_outcome(self, goals_scored: int, goals_against: int) -> OutcomeKind:
        """Reverse an earlier ``apply_outcome`` called with the same arguments."""
        self.goals_scored -= goals_scored
        self.goals_against -= goals_against
        kind = classify_outcome(goals_scored, goals_against)
        counter = _OUTCOME_COUNTERS[kind]
        setattr(self, counter, getattr(self, counter) - 1)
        return kind

    def same_statistics(self, other: TeamRecord) -> bool:
        return self.counters() == other.counters()

    def compare_to(self, other: TeamRecord) -> int:
        """Two-key comparison: wins first, then goal difference.

        Records with different draws/losses but equal wins and goal difference
        return -1 in both directions.
        """
        if self.same_statistics(other):
            return 0
        if self.wins > other.wins:
            return 1
        if self.wins == other.wins and self.goal_difference > other.goal_difference:
            return 1
        return -1

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TeamRecord):
            return NotImplemented
        return self.same_statistics(other)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, TeamRecord):
            return NotImplemented
        return self.compare_to(other) < 0

    def to_line(self) -> str:
        return ",".join([self.name, *(str(value) for value in self.counters())])

    def __str__(self) -> str:
        return self.to_line()

    def to_export_row(self, rank: int) -> list[str | int]:
        return [
            self.name,
            self.wins,
            self.wins * 3,
            self.scored_draws,
            self.scored_draws * 2,
            self.no_score_draws,
            self.no_score_draws,
            self.losses,
            self.goals_scored,
            self.goals_against,
            self.goal_difference,
            self.points,
            rank,
        ]


__all__ = ["COUNTER_FIELDS", "NAME_FORBIDDEN_CHARACTERS", "TeamRecord", "classify_outcome"]
