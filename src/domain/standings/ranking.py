"""Sort keys for ranking a standings table."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from domain.standings.team import TeamRecord


class RankingPolicy(str, Enum):
    WINS = "wins"
    POINTS = "points"


def _wins_key(team: TeamRecord) -> tuple[int, int]:
    return team.wins, team.goal_difference


class _PointsKey:
    """Points and goal difference descend while the name ascends."""

    __slots__ = ("_values", "_name")

    def __init__(self, team: TeamRecord) -> None:
        self._values = (team.points, team.goal_difference)
        self._name = team.name

    def __lt__(self, other: Any) -> bool:
        if self._values != other._values:
            return self._values < other._values
        return self._name > other._name

    def __eq__(self, other: Any) -> bool:
        return self._values == other._values and self._name == other._name


def ranking_key(policy: RankingPolicy | str) -> Callable[[TeamRecord], Any]:
    """Return an ascending sort key; callers sort with ``reverse=True``."""
    resolved = RankingPolicy(policy)
    if resolved is RankingPolicy.POINTS:
        return _PointsKey
    return _wins_key


def parse_ranking_policy(value: str) -> RankingPolicy:
    try:
        return RankingPolicy(value.strip().lower())
    except ValueError as exc:
        available = ", ".join(policy.value for policy in RankingPolicy)
        raise ValueError(f"Unsupported ranking policy {value!r}. Choose one of: {available}.") from exc


__all__ = ["RankingPolicy", "parse_ranking_policy", "ranking_key"]
