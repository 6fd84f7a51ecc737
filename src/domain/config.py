"""Load league definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

from domain.standings.ledger import StandingsLedger
from domain.standings.ranking import RankingPolicy, parse_ranking_policy


@dataclass(frozen=True)
class LeagueConfig:
    """One league: its roster, ranking policy and optional table file."""

    name: str
    description: str | None
    file_path: Path
    teams: tuple[str, ...]
    ranking: RankingPolicy = RankingPolicy.WINS
    table_file: Path | None = None

    def create_ledger(self) -> StandingsLedger:
        """Load ``table_file`` when it exists, otherwise seed the roster."""
        if self.table_file is not None and self.table_file.exists():
            return StandingsLedger.load(self.table_file, ranking=self.ranking)
        return StandingsLedger.from_names(self.teams, ranking=self.ranking)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "teams": list(self.teams),
            "ranking": self.ranking.value,
            "table_file": None if self.table_file is None else str(self.table_file),
        }


def load_league_config(file_path: Path) -> LeagueConfig:
    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_league_config(raw, file_path)


def load_league_configs(config_dir: Path) -> list[LeagueConfig]:
    """Load all TOML files in a directory with duplicate-name validation."""
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    leagues = [load_league_config(file_path) for file_path in config_files]

    names = [league.name for league in leagues]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate league names found in {config_dir}: {names}")

    return leagues


def _parse_league_config(raw: dict[str, Any], file_path: Path) -> LeagueConfig:
    league_raw = raw.get("league", {})

    name = str(league_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [league].name is required")

    description_value = league_raw.get("description")
    description = None if description_value is None else str(description_value)

    teams_raw = league_raw.get("teams", [])
    if not isinstance(teams_raw, list):
        raise ValueError(f"{file_path}: [league].teams must be a list of names")
    teams = tuple(str(team) for team in teams_raw)

    try:
        ranking = parse_ranking_policy(str(league_raw.get("ranking", RankingPolicy.WINS.value)))
    except ValueError as exc:
        raise ValueError(f"{file_path}: [league].ranking {exc}") from exc

    table_file_value = league_raw.get("table_file")
    table_file = None
    if table_file_value is not None:
        table_file = Path(str(table_file_value))
        if not table_file.is_absolute():
            table_file = file_path.parent / table_file

    return LeagueConfig(
        name=name,
        description=description,
        file_path=file_path,
        teams=teams,
        ranking=ranking,
        table_file=table_file,
    )


__all__ = ["LeagueConfig", "load_league_config", "load_league_configs"]
