"""Tests for the command line interface."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import AsyncMock, patch

import typer
from typer.testing import CliRunner

from changelog_watcher.cli import main
from changelog_watcher.core import FileWatermarkStore

runner = CliRunner()


def make_app() -> typer.Typer:
    app = typer.Typer()
    app.command()(main)
    return app


def invoke(args: list[str]):
    with patch("changelog_watcher.cli.setup_logging"), patch("changelog_watcher.cli.load_dotenv"):
        return runner.invoke(make_app(), args)


def test_invalid_target_exits_with_usage_error() -> None:
    """Test an unknown source id is rejected before any check runs."""
    with TemporaryDirectory() as tmpdir:
        with patch("changelog_watcher.cli.async_run", new=AsyncMock(return_value=0)) as mock_run:
            result = invoke(["nope", "--config", str(Path(tmpdir) / "missing.yaml")])

        assert result.exit_code == 2
        mock_run.assert_not_awaited()


def test_invalid_config_exits_with_usage_error() -> None:
    """Test a broken config file is reported."""
    with TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("- not a mapping\n", encoding="utf-8")

        result = invoke(["--config", str(config_path)])

        assert result.exit_code == 2


def test_single_target_runs_one_source() -> None:
    """Test a source id limits the run to that source."""
    with TemporaryDirectory() as tmpdir:
        with patch("changelog_watcher.cli.async_run", new=AsyncMock(return_value=0)) as mock_run:
            result = invoke(["gemini", "--dry-run", "--config", str(Path(tmpdir) / "missing.yaml")])

        assert result.exit_code == 0
        _, sources, dry_run = mock_run.await_args.args
        assert [s.id for s in sources] == ["gemini"]
        assert dry_run


def test_errors_set_exit_code() -> None:
    """Test hard failures make the run exit non-zero."""
    with TemporaryDirectory() as tmpdir:
        with patch("changelog_watcher.cli.async_run", new=AsyncMock(return_value=2)):
            result = invoke(["--config", str(Path(tmpdir) / "missing.yaml")])

        assert result.exit_code == 1


def test_show_state() -> None:
    """Test stored watermarks are printed."""
    with TemporaryDirectory() as tmpdir:
        data_dir = Path(tmpdir) / "data"
        FileWatermarkStore(data_dir).write("claude-code", "1.2.0")
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text(f"paths:\n  data_dir: {data_dir}\n", encoding="utf-8")

        result = invoke(["--show-state", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "Claude Code: 1.2.0" in result.output
        assert "Gemini: -" in result.output


def test_malformed_source_entry_exits_with_usage_error() -> None:
    """Test a non-mapping source entry is a config error, not a crash."""
    with TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("sources:\n  - claude-code\n", encoding="utf-8")

        result = invoke(["--config", str(config_path)])

        assert result.exit_code == 2
