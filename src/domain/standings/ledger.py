"""Standings ledger: team table plus a reversible history of result batches."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from pathlib import Path

from domain.common import MatchOutcome, MatchResultBatch, make_batch
from domain.standings.errors import TeamNotFoundError
from domain.standings.persistence import read_table, write_ranked_csv, write_table
from domain.standings.ranking import RankingPolicy, ranking_key
from domain.standings.team import TeamRecord

logger = logging.getLogger(__name__)


class StandingsLedger:
    """Ordered team table with LIFO undo of applied result batches.

    Batches are applied with a validate-first policy: every played entry's
    team is resolved before any counter changes, so an unknown name leaves
    the ledger untouched. Every public operation holds the ledger lock, so a
    reader never sees a half-applied batch.
    """

    def __init__(
        self,
        teams: Iterable[TeamRecord] | None = None,
        *,
        history: Iterable[MatchResultBatch] | None = None,
        ranking: RankingPolicy | str = RankingPolicy.WINS,
    ) -> None:
        self._teams: list[TeamRecord] = list(teams or [])
        self._history: list[MatchResultBatch] = [make_batch(batch) for batch in history or []]
        self._modified = False
        self._lock = threading.RLock()
        self.ranking = RankingPolicy(ranking)

    @classmethod
    def from_names(
        cls,
        names: Iterable[str],
        *,
        ranking: RankingPolicy | str = RankingPolicy.WINS,
    ) -> StandingsLedger:
        return cls((TeamRecord(name) for name in names), ranking=ranking)

    @classmethod
    def load(cls, path: Path, *, ranking: RankingPolicy | str = RankingPolicy.WINS) -> StandingsLedger:
        """Load a saved table file; the history starts empty."""
        ledger = cls(read_table(path), ranking=ranking)
        logger.info("Loaded %d teams from %s", ledger.team_count, path)
        return ledger

    @property
    def team_count(self) -> int:
        return len(self._teams)

    def __len__(self) -> int:
        return len(self._teams)

    def __iter__(self) -> Iterator[TeamRecord]:
        with self._lock:
            return iter(list(self._teams))

    @property
    def teams(self) -> tuple[TeamRecord, ...]:
        with self._lock:
            return tuple(self._teams)

    @property
    def history(self) -> tuple[MatchResultBatch, ...]:
        """Applied batches, oldest first."""
        with self._lock:
            return tuple(self._history)

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def is_modified(self) -> bool:
        return self._modified

    def mark_saved(self) -> None:
        with self._lock:
            self._modified = False

    def add_teams(self, names: Iterable[str]) -> None:
        with self._lock:
            added = [TeamRecord(name) for name in names]
            self._teams.extend(added)
            self._modified = True
        logger.debug("Added %d teams (total=%d)", len(added), self.team_count)

    def get_team(self, index: int) -> TeamRecord:
        with self._lock:
            if index < 0 or index >= len(self._teams):
                raise IndexError(f"Team index {index} out of range for {len(self._teams)} teams")
            return self._teams[index]

    def find_team(self, name: str) -> TeamRecord:
        with self._lock:
            for team in self._teams:
                if team.name == name:
                    return team
        raise TeamNotFoundError(name)

    def _resolve(self, team: int | str) -> TeamRecord:
        if isinstance(team, str):
            return self.find_team(team)
        return self.get_team(team)

    def apply_match_result(self, team: int | str, goals_scored: int, goals_against: int) -> None:
        """Apply one outcome outside of any batch; it cannot be undone."""
        with self._lock:
            self._resolve(team).apply_outcome(goals_scored, goals_against)
            self._modified = True

    def apply_match_result_batch(self, batch: Iterable[MatchOutcome]) -> MatchResultBatch:
        frozen = make_batch(batch)
        with self._lock:
            resolved = [
                (self.find_team(outcome.team_name), outcome)
                for outcome in frozen
                if not outcome.did_not_play
            ]
            for team, outcome in resolved:
                team.apply_outcome(outcome.goals_scored, outcome.goals_against)
            self._history.append(frozen)
            self._modified = True
        logger.debug(
            "Applied batch of %d entries (%d played), history depth=%d",
            len(frozen),
            len(resolved),
            len(self._history),
        )
        return frozen

    def undo_match_result_batch(self) -> MatchResultBatch | None:
        """Pop and reverse the most recent batch; ``None`` when nothing to undo."""
        with self._lock:
            if not self._history:
                return None
            batch = self._history[-1]
            # All names resolve before the batch leaves the stack.
            resolved = [
                (self.find_team(outcome.team_name), outcome)
                for outcome in batch
                if not outcome.did_not_play
            ]
            self._history.pop()
            for team, outcome in reversed(resolved):
                team.undo_outcome(outcome.goals_scored, outcome.goals_against)
            self._modified = True
        logger.debug("Undid batch of %d entries, history depth=%d", len(batch), len(self._history))
        return batch

    def sort(self) -> None:
        """Reorder teams best-first according to the ranking policy."""
        with self._lock:
            self._teams.sort(key=ranking_key(self.ranking), reverse=True)

    def ranked(self) -> list[tuple[int, TeamRecord]]:
        with self._lock:
            self.sort()
            return list(enumerate(self._teams, start=1))

    def save(self, path: Path) -> None:
        with self._lock:
            write_table(path, self._teams)
            self._modified = False
        logger.info("Saved %d teams to %s", self.team_count, path)

    def export_csv(self, path: Path) -> None:
        with self._lock:
            write_ranked_csv(path, self.ranked())
        logger.info("Exported ranked table to %s", path)


__all__ = ["StandingsLedger"]
