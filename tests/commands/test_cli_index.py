"""Tests for the ``index`` command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.conftest import write_doc
from wikigraph.cli import cli


@pytest.fixture
def seeded(vault_root: Path) -> Path:
    write_doc(vault_root, "A.md", "[[B]] [[C]]")
    write_doc(vault_root, "B.md", "[[A]]")
    write_doc(vault_root, "C.md")
    write_doc(vault_root, ".Hidden.md", "[[A]] [[B]]")
    return vault_root


@pytest.mark.usefixtures("_isolated_cwd")
class TestIndexRebuild:
    def test_json(self, cli_runner: CliRunner, seeded: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "--vault", str(seeded), "index", "rebuild"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["ok"] is True
        assert payload["op"] == "rebuild_index"
        assert payload["data"]["total_files"] == 3
        assert payload["data"]["total_links"] == 3
        assert payload["data"]["root"] == str(seeded.resolve())

    def test_human(self, cli_runner: CliRunner, seeded: Path) -> None:
        result = cli_runner.invoke(cli, ["--vault", str(seeded), "index", "rebuild"])
        assert result.exit_code == 0
        assert "rebuild_index" in result.stdout
        assert "total_files: 3" in result.stdout

    def test_verbose_shows_duration(self, cli_runner: CliRunner, seeded: Path) -> None:
        result = cli_runner.invoke(cli, ["-v", "--vault", str(seeded), "index", "rebuild"])
        assert result.exit_code == 0
        assert "duration_ms" in result.stdout

    def test_skipped_document_warning(self, cli_runner: CliRunner, seeded: Path) -> None:
        (seeded / "Broken.md").write_bytes(b"\xff\xfe")
        result = cli_runner.invoke(cli, ["--vault", str(seeded), "index", "rebuild"])
        assert result.exit_code == 0
        assert "WARNING: Skipped document Broken.md" in result.stderr

    def test_missing_root(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        missing = tmp_path / "absent"
        result = cli_runner.invoke(cli, ["--json", "--vault", str(missing), "index", "rebuild"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["data"]["total_files"] == 0
        assert any("does not exist" in w for w in payload["warnings"])


@pytest.mark.usefixtures("_isolated_cwd")
class TestIndexStats:
    def test_json(self, cli_runner: CliRunner, seeded: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "--vault", str(seeded), "index", "stats"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"] == {"total_files": 3, "total_links": 3}

    def test_quiet(self, cli_runner: CliRunner, seeded: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "--vault", str(seeded), "index", "stats"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "OK: index_stats"
