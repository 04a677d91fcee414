from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ship.cli.app import app
from ship.cli.context import PROJECT_ROOT_ENV, build_context, project_root
from ship.core.config import ShipConfig

runner = CliRunner()

MALFORMED = '[project]\nname = "echo"\nversion = "0.1.0"\n\n[tool]\nship = 3\n'


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv(PROJECT_ROOT_ENV, str(tmp_path))
    return tmp_path


def test_project_root_from_environment(project: Path) -> None:
    assert project_root() == project.resolve()


def test_project_root_falls_back_to_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv(PROJECT_ROOT_ENV, raising=False)
    monkeypatch.chdir(tmp_path)

    assert project_root() == tmp_path.resolve()


def test_build_context_reads_tool_ship(project: Path) -> None:
    (project / "pyproject.toml").write_text(
        '[project]\nname = "echo"\nversion = "0.1.0"\n\n[tool.ship]\nremote = "upstream"\n',
        encoding="utf-8",
    )

    cli = build_context()

    assert cli.root == project.resolve()
    assert cli.manifest.path == project.resolve() / "pyproject.toml"
    assert cli.config.remote == "upstream"


def test_build_context_without_config_uses_defaults(project: Path) -> None:
    (project / "pyproject.toml").write_text(MALFORMED, encoding="utf-8")

    assert build_context(with_config=False).config == ShipConfig()


def test_malformed_tool_ship_is_a_release_error(project: Path) -> None:
    (project / "pyproject.toml").write_text(MALFORMED, encoding="utf-8")

    result = runner.invoke(app, ["deploy", "--patch"])

    assert result.exit_code == 1
    assert "error: invalid configuration" in result.output
    assert "0.1.0" in (project / "pyproject.toml").read_text(encoding="utf-8")


def test_show_version_ignores_malformed_tool_ship(project: Path) -> None:
    (project / "pyproject.toml").write_text(MALFORMED, encoding="utf-8")

    result = runner.invoke(app, ["deploy", "-v"])

    assert result.exit_code == 0
    assert "Current version: 0.1.0" in result.output
