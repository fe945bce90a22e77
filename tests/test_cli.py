"""
Tests for the CLI — argument handling, output modes, exit codes.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from aside2gfm.main import cli


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "GFM alerts" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_missing_path_argument(self):
        runner = CliRunner()
        result = runner.invoke(cli, [])
        assert result.exit_code == 2
        assert "PATH" in result.output

    def test_nonexistent_path(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [str(tmp_path / "nowhere")])
        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_bad_worker_count(self, docs_tree: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree), "--workers", "0"])
        assert result.exit_code == 2


class TestRewriteCommand:
    """Tests for rewriting a tree through the CLI."""

    def test_rewrites_tree(self, docs_tree: Path, golden_expected):
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree)])
        assert result.exit_code == 0
        assert "3 file(s) processed, 2 changed, 0 failed" in result.output
        assert (docs_tree / "index.md").read_text(encoding="utf-8") == golden_expected

    def test_quiet(self, docs_tree: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree), "--quiet"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_dry_run(self, docs_tree: Path, golden_input):
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree), "--dry-run"])
        assert result.exit_code == 0
        assert "would rewrite" in result.output
        assert "2 would change" in result.output
        assert (docs_tree / "index.md").read_text(encoding="utf-8") == golden_input

    def test_json(self, docs_tree: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "ok"
        assert data["total"] == 3
        assert {Path(f["path"]).name for f in data["files"]} == {"index.md", "plain.md", "tip.md"}

    def test_failed_file_exits_one(self, docs_tree: Path, golden_expected):
        (docs_tree / "broken.md").write_bytes(b"\xff\xfe")
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree)])
        assert result.exit_code == 1
        assert "broken.md" in result.output
        assert "1 failed" in result.output
        # Siblings still rewritten
        assert (docs_tree / "index.md").read_text(encoding="utf-8") == golden_expected

    def test_failed_file_reported_once(self, docs_tree: Path, monkeypatch):
        monkeypatch.delenv("ASIDE2GFM_LOG_LEVEL", raising=False)
        (docs_tree / "broken.md").write_bytes(b"\xff\xfe")
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree)])
        assert result.exit_code == 1
        assert result.output.count("broken.md") == 1

    def test_failed_file_json_default_level(self, docs_tree: Path, monkeypatch):
        monkeypatch.delenv("ASIDE2GFM_LOG_LEVEL", raising=False)
        (docs_tree / "broken.md").write_bytes(b"\xff\xfe")
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["failed"] == 1

    def test_failed_file_json(self, docs_tree: Path):
        (docs_tree / "broken.md").write_bytes(b"\xff\xfe")
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree), "--json", "--quiet"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["status"] == "partial"
        assert data["failed"] == 1

    def test_single_file_path(self, docs_tree: Path):
        runner = CliRunner()
        result = runner.invoke(cli, [str(docs_tree / "guides" / "deep" / "tip.md")])
        assert result.exit_code == 0
        assert "1 file(s) processed, 1 changed" in result.output
