"""Integration tests for the cardflow command line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from cardflow import __version__
from cardflow.cli.commands.root import cli
from cardflow.config import CardflowConfig

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit

SCRIPT = """\
# seed two cards, then rearrange them
add column1 first
add "To Do" second
move card-1 column2
drop card-2 card-1
"""


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.toml"


def _invoke(config_path: Path, *args: str, input: str | None = None):
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(config_path), *args], input=input)


class TestRoot:
    def test_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])

        assert result.exit_code == 0
        for command in ("shell", "run", "config"):
            assert command in result.output


class TestRunCommand:
    def test_replays_script(self, config_path: Path, tmp_path: Path) -> None:
        script = tmp_path / "moves.txt"
        script.write_text(SCRIPT, encoding="utf-8")

        result = _invoke(config_path, "run", str(script))

        assert result.exit_code == 0, result.output
        assert "+ card-1 -> column1[0]" in result.output
        assert "+ card-2 -> column1[1]" in result.output
        assert "~ card-1 column1[0] -> column2[0]" in result.output
        assert "~ card-2 column1[0] -> column2[0]" in result.output
        assert "In Progress" in result.output

    def test_reports_failures_and_continues(self, config_path: Path, tmp_path: Path) -> None:
        script = tmp_path / "bad.txt"
        script.write_text("add nowhere text\nadd column1 ok\n", encoding="utf-8")

        result = _invoke(config_path, "run", str(script))

        assert result.exit_code == 0
        assert "Unknown column: nowhere" in result.output
        assert "+ card-1 -> column1[0]" in result.output
        assert "1 command(s) failed" in result.output

    def test_strict_stops_on_failure(self, config_path: Path, tmp_path: Path) -> None:
        script = tmp_path / "bad.txt"
        script.write_text("move card-9 column2\nadd column1 never\n", encoding="utf-8")

        result = _invoke(config_path, "run", "--strict", str(script))

        assert result.exit_code == 1
        assert "Card card-9 not found" in result.output
        assert "bad.txt:1" in result.output
        assert "never" not in result.output

    def test_uses_configured_columns(self, config_path: Path, tmp_path: Path) -> None:
        config_path.write_text(
            '[[columns]]\nid = "ideas"\ntitle = "Ideas"\n', encoding="utf-8"
        )
        script = tmp_path / "s.txt"
        script.write_text("add ideas spark\n", encoding="utf-8")

        result = _invoke(config_path, "run", str(script))

        assert result.exit_code == 0, result.output
        assert "+ card-1 -> ideas[0]" in result.output
        assert "To Do" not in result.output

    def test_card_text_kept_verbatim(self, config_path: Path, tmp_path: Path) -> None:
        script = tmp_path / "text.txt"
        script.write_text(
            "# only whole-line comments are skipped\nadd column1 fix #12, don't wait\n",
            encoding="utf-8",
        )

        result = _invoke(config_path, "run", str(script))

        assert result.exit_code == 0, result.output
        assert "+ card-1 -> column1[0]" in result.output
        assert "#12" in result.output
        assert "don't" in result.output
        assert "failed" not in result.output

    def test_invalid_config_reported(self, config_path: Path, tmp_path: Path) -> None:
        config_path.write_text("[[columns]]\nid = \"a\"\ntitle = \"A\"\n" * 2, encoding="utf-8")
        script = tmp_path / "s.txt"
        script.write_text("show\n", encoding="utf-8")

        result = _invoke(config_path, "run", str(script))

        assert result.exit_code == 1
        assert "Invalid config file" in result.output


class TestShellCommand:
    def test_interactive_session(self, config_path: Path) -> None:
        result = _invoke(
            config_path,
            "shell",
            input="add column1 write tests\nmove card-1 column4\nquit\n",
        )

        assert result.exit_code == 0, result.output
        assert "+ card-1 -> column1[0]" in result.output
        assert "~ card-1 column1[0] -> column4[0]" in result.output

    def test_blank_content_rejected(self, config_path: Path) -> None:
        result = _invoke(config_path, "shell", input="add column1    \n")

        assert result.exit_code == 0
        assert "Card content cannot be empty" in result.output
        assert "+ card-1" not in result.output

    def test_noop_move_reported(self, config_path: Path) -> None:
        result = _invoke(config_path, "shell", input="add column1 a\nmove card-1 column1 0\n")

        assert "card-1 already there" in result.output

    def test_unknown_command(self, config_path: Path) -> None:
        result = _invoke(config_path, "shell", input="frobnicate\n")

        assert "unknown command 'frobnicate'" in result.output

    def test_bad_index(self, config_path: Path) -> None:
        result = _invoke(config_path, "shell", input="add column1 a\nmove card-1 column2 top\n")

        assert "INDEX must be an integer" in result.output

    def test_logs_with_debug(self, config_path: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(
            cli,
            ["--config", str(config_path), "--debug", "shell"],
            input="add column1 a\nlogs\n",
        )

        assert result.exit_code == 0, result.output
        assert "Added card card-1 to column1" in result.output


class TestConfigCommands:
    def test_init_and_show(self, config_path: Path) -> None:
        result = _invoke(config_path, "config", "init")

        assert result.exit_code == 0
        assert config_path.exists()
        assert CardflowConfig.load(config_path) == CardflowConfig()

        shown = _invoke(config_path, "config", "show")
        assert shown.exit_code == 0
        assert "[general]" in shown.output
        assert 'id = "column1"' in shown.output

    def test_init_refuses_overwrite(self, config_path: Path) -> None:
        config_path.write_text("", encoding="utf-8")

        result = _invoke(config_path, "config", "init")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_force(self, config_path: Path) -> None:
        config_path.write_text("garbage = [", encoding="utf-8")

        result = _invoke(config_path, "config", "init", "--force")

        assert result.exit_code == 0
        assert CardflowConfig.load(config_path) == CardflowConfig()

    def test_path(self, config_path: Path) -> None:
        result = _invoke(config_path, "config", "path")

        assert result.output.strip() == str(config_path)
