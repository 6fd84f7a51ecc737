"""End-to-end tests for the standings CLI script."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest
import typer
from typer.testing import CliRunner

from domain.common import MatchOutcome
from domain.standings.persistence import EXPORT_HEADER

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "standings.py"

runner = CliRunner()


@pytest.fixture(scope="module")
def cli() -> ModuleType:
    module_spec = importlib.util.spec_from_file_location("standings_cli", SCRIPT_PATH)
    assert module_spec is not None and module_spec.loader is not None
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'standings.db'}"


def _invoke(cli: ModuleType, *args: str):
    return runner.invoke(cli.app, list(args))


def test_parse_result(cli: ModuleType) -> None:
    assert cli.parse_result("Arsenal:2:1") == MatchOutcome("Arsenal", 2, 1)
    assert cli.parse_result("Man Utd:dnp") == MatchOutcome.not_played("Man Utd")
    assert cli.parse_result("A:B:0:0") == MatchOutcome("A:B", 0, 0)
    with pytest.raises(typer.BadParameter):
        cli.parse_result("Arsenal:two:1")
    with pytest.raises(typer.BadParameter):
        cli.parse_result("Arsenal")


def test_record_show_undo_cycle(cli: ModuleType, db_url: str) -> None:
    result = _invoke(cli, "init", "premier", "-t", "Arsenal", "-t", "Chelsea", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "teams=2" in result.output

    result = _invoke(cli, "fixture", "premier", "Chelsea", "Arsenal", "3", "0", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "history=1" in result.output

    result = _invoke(cli, "show", "premier", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "Chelsea" in lines[1]
    assert "Arsenal" in lines[2]

    result = _invoke(cli, "undo", "premier", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "undid Chelsea=3-0 Arsenal=0-3" in result.output

    result = _invoke(cli, "undo", "premier", "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "nothing to undo" in result.output


def test_record_unknown_team_fails_without_changes(cli: ModuleType, db_url: str) -> None:
    _invoke(cli, "init", "cup", "-t", "A", "--db-url", db_url)

    result = _invoke(cli, "record", "cup", "A:1:0", "Ghost:0:1", "--db-url", db_url)
    assert result.exit_code != 0

    result = _invoke(cli, "undo", "cup", "--db-url", db_url)
    assert "nothing to undo" in result.output


def test_export_and_table_round_trip(cli: ModuleType, db_url: str, tmp_path: Path) -> None:
    _invoke(cli, "init", "league", "-t", "X", "-t", "Y", "--db-url", db_url)
    _invoke(cli, "record", "league", "X:2:1", "Y:dnp", "--db-url", db_url)
    _invoke(cli, "add-teams", "league", "Z", "--db-url", db_url)

    csv_path = tmp_path / "ranked.csv"
    result = _invoke(cli, "export", "league", str(csv_path), "--db-url", db_url)
    assert result.exit_code == 0, result.output
    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == EXPORT_HEADER
    assert lines[1] == "X,1,3,0,0,0,0,0,2,1,1,3,1"
    assert len(lines) == 4

    table_path = tmp_path / "league.txt"
    result = _invoke(cli, "save-table", "league", str(table_path), "--db-url", db_url)
    assert result.exit_code == 0, result.output

    result = _invoke(cli, "import-table", "copy", str(table_path), "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "teams=3" in result.output

    result = _invoke(cli, "list-leagues", "--db-url", db_url)
    assert result.output.splitlines() == ["copy", "league"]


def test_init_from_config(cli: ModuleType, db_url: str, tmp_path: Path) -> None:
    config_path = tmp_path / "league.toml"
    config_path.write_text('[league]\nname = "cfg"\nranking = "points"\nteams = ["A", "B", "C"]\n')

    result = _invoke(cli, "init", "cfg", "--config", str(config_path), "--db-url", db_url)
    assert result.exit_code == 0, result.output
    assert "teams=3 ranking=points" in result.output

    result = _invoke(cli, "init", "cfg", "--db-url", db_url)
    assert result.exit_code != 0


def test_import_malformed_table_exits_with_error(cli: ModuleType, db_url: str, tmp_path: Path) -> None:
    table_path = tmp_path / "bad.txt"
    table_path.write_text("A,1,x,0,0,0,0\n", encoding="utf-8")

    result = _invoke(cli, "import-table", "bad", str(table_path), "--db-url", db_url)
    assert result.exit_code == 1


def test_ranking_option_overrides_config(cli: ModuleType, db_url: str, tmp_path: Path) -> None:
    config_path = tmp_path / "league.toml"
    config_path.write_text('[league]\nname = "cfg"\nranking = "points"\nteams = ["A", "B"]\n')

    result = _invoke(
        cli, "init", "cfg", "--config", str(config_path), "--ranking", "wins", "--db-url", db_url
    )
    assert result.exit_code == 0, result.output
    assert "ranking=wins" in result.output

    result = _invoke(cli, "show", "cfg", "--db-url", db_url)
    assert "ranking=wins" in result.output.splitlines()[0]


def test_add_teams_rejects_comma_name(cli: ModuleType, db_url: str) -> None:
    _invoke(cli, "init", "cup", "-t", "A", "--db-url", db_url)

    result = _invoke(cli, "add-teams", "cup", "Brighton, Hove", "--db-url", db_url)
    assert result.exit_code == 2

    result = _invoke(cli, "show", "cup", "--db-url", db_url)
    assert "teams=1" in result.output
