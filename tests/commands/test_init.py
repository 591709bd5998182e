"""Tests for the init command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from blogctl.cli import cli


class TestInitCommand:
    def test_non_interactive(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "my-blog"
        result = cli_runner.invoke(cli, ["--no-interact", "--json", "init", str(target)])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["data"]["title"] == "my-blog"
        assert (target / "blogctl.toml").is_file()
        assert (target / "src" / "posts" / "hello-world.md").is_file()

    def test_prompts_for_title_and_author(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        target = tmp_path / "blog"
        result = cli_runner.invoke(cli, ["init", str(target)], input="Prompted\nsomeone\n")
        assert result.exit_code == 0, result.output
        config = (target / "blogctl.toml").read_text(encoding="utf-8")
        assert 'title = "Prompted"' in config
        assert 'author = "someone"' in config

    def test_options_skip_prompts(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli, ["init", str(tmp_path), "--title", "Given", "--author", "me"]
        )
        assert result.exit_code == 0, result.output
        assert "Site title" not in result.output
        assert "files_created: 2" in result.stdout

    def test_already_initialized(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "blogctl.toml").write_text("")
        result = cli_runner.invoke(cli, ["--no-interact", "init", str(tmp_path)])
        assert result.exit_code == 1
        assert "already exists" in result.stderr

    def test_init_then_build(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["--no-interact", "init", str(tmp_path), "--title", "Fresh"])
        config = str(tmp_path / "blogctl.toml")
        result = cli_runner.invoke(cli, ["-c", config, "build"])
        assert result.exit_code == 0, result.output
        assert "<title>Fresh</title>" in (tmp_path / "public" / "index.html").read_text()
