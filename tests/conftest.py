# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from raci_import.models.snapshot import ReferenceSnapshot


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """export_directory: ./logs
auto_accept_creation_warnings: true
default_project_client: Internal
reference_file: ./config/reference.yml
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: raci
"""


@pytest.fixture()
def sample_reference_yaml() -> str:
    return """departments:
  - IT
  - Finance
  - {name: Legacy, active: false}
positions:
  - Developer
  - {name: Sales Manager, can_manage: true}
  - {name: Retired Role, active: false}
employees:
  - Alice Nguyen
  - Bob Tran
projects:
  - Apollo
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str, sample_reference_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    (temp_workdir / "config" / "reference.yml").write_text(sample_reference_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def snapshot() -> ReferenceSnapshot:
    """Same content as sample_reference_yaml."""
    return ReferenceSnapshot.from_names(
        departments=["IT", "Finance"],
        positions=["Developer", "Sales Manager"],
        employees=["Alice Nguyen", "Bob Tran"],
        projects=["Apollo"],
        managing_positions=["Sales Manager"],
    )


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(name: str, lines: list[str]) -> Path:
        p = temp_workdir / "data" / name
        p.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return p
    return _write


@pytest.fixture()
def write_xlsx(temp_workdir: Path):
    def _write(name: str, rows: list[list[object]]) -> Path:
        p = temp_workdir / "data" / name
        with pd.ExcelWriter(p) as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
        return p
    return _write
