from __future__ import annotations

from unittest.mock import MagicMock

import psycopg2
import pytest

from raci_import.cli import main
from raci_import.config.loader import load_config
from raci_import.logging.init import reset_logging
from raci_import.models.validation_result import ImportOutcome
from raci_import.services import orchestrator
from raci_import.services.classifier import build_create_plan
from raci_import.services.orchestrator import run_import

ROWS = [
    ["Carol Le", "IT", "Developer", "Alice Nguyen"],
    ["Dan Vo", "IT", "Developer", "Bob Tran"],
    ["Eve Pham", "Finance", "Sales Manager", None],
    ["Finn Ho", "Finance", "Developer", "Bob Tran"],
    ["Gia Lam", "IT", "Sales Manager", "Alice Nguyen"],
    ["Hanh Mai", "Marketing", "Developer", "Alice Nguyen"],
    ["Ivy Chu", "Marketing", "Designer", "Kim Ta"],
]


@pytest.fixture()
def employees_xlsx(write_xlsx):
    return write_xlsx("employees.xlsx", [["Name", "Department", "Position", "Manager"], *ROWS])


@pytest.fixture()
def employees_csv(write_csv):
    return write_csv("employees.csv", [",".join(v or "" for v in r) for r in ROWS])


def test_five_valid_two_creation_warnings_auto_accepted(write_config, employees_csv):
    run = run_import("employees", employees_csv, load_config(write_config))
    result = run.result

    assert result.summary.valid_count == 5
    assert result.summary.warning_count == 2
    assert result.summary.error_count == 0
    assert result.warnings_accepted
    assert run.importable

    plan = build_create_plan(result)
    assert len(plan) == 7
    assert [r.name for r in plan[:5]] == [r[0] for r in ROWS[:5]]

    creations = result.summary.creations
    assert (creations.departments, creations.positions, creations.managers) == (1, 1, 1)


def test_xlsx_with_header_commits_full_plan(monkeypatch, write_config, employees_xlsx, snapshot):
    monkeypatch.setattr(orchestrator, "load_reference_snapshot", lambda cursor: snapshot)
    commit = MagicMock(return_value=ImportOutcome(employees_created=7))
    monkeypatch.setattr(orchestrator, "commit_employees", commit)

    run = run_import("employees", employees_xlsx, load_config(write_config), cursor=object(), skip_header=True)

    assert run.committed
    plan = commit.call_args.args[1]
    assert len(plan) == 7
    assert plan[-1].name == "Ivy Chu"
    assert plan[-1].manager_name == "Kim Ta"
    assert plan[2].manager_name is None
    assert plan[2].position_can_manage is True


def test_auto_accept_can_be_disabled(write_config, employees_csv):
    text = write_config.read_text(encoding="utf-8")
    write_config.write_text(
        text.replace("auto_accept_creation_warnings: true", "auto_accept_creation_warnings: false"),
        encoding="utf-8",
    )
    run = run_import("employees", employees_csv, load_config(write_config))
    assert not run.result.warnings_accepted
    assert not run.importable


def test_cli_dry_run_on_xlsx(monkeypatch, write_config, employees_xlsx, capsys):
    monkeypatch.delenv("DISABLE_DB_CONNECT", raising=False)
    # dry run with a reference file never opens a connection
    connect = MagicMock()
    monkeypatch.setattr(psycopg2, "connect", connect)
    reset_logging()

    code = main(["employees", str(employees_xlsx), "--config", str(write_config), "--dry-run", "--skip-header"])
    out = capsys.readouterr().out
    reset_logging()

    assert code == 0
    connect.assert_not_called()
    assert "SUMMARY kind=employees rows=7 valid=5 warning=2 error=0" in out
