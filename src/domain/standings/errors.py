"""Exceptions raised by the standings ledger."""

from __future__ import annotations


class StandingsError(Exception):
    """Base class for standings failures."""


class TeamNotFoundError(StandingsError, LookupError):
    """No team in the ledger has the requested name."""

    def __init__(self, team_name: str) -> None:
        super().__init__(f"Team not found: {team_name!r}")
        self.team_name = team_name


class MalformedRowError(StandingsError, ValueError):
    """A persisted table row could not be parsed."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


__all__ = ["MalformedRowError", "StandingsError", "TeamNotFoundError"]
