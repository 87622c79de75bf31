"""Tests for CLI main module."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from retrolambda_runner.cli.main import main
from retrolambda_runner.core.config.settings import Settings
from retrolambda_runner.core.exceptions.errors import EmbeddedInvocationError
from retrolambda_runner.models.execution import ExecutionResult
from retrolambda_runner.models.project import Goal
from retrolambda_runner.models.runtime import RuntimeCandidate, RuntimeSource


@pytest.fixture(autouse=True)
def quiet_setup(settings: Settings):
    """Keep CLI runs away from the user's environment and logging setup."""
    with patch("retrolambda_runner.cli.main.setup_logging"), patch(
        "retrolambda_runner.cli.main.get_settings", return_value=settings
    ):
        yield


@pytest.fixture
def mock_runner_class():
    with patch("retrolambda_runner.cli.main.RetrolambdaRunner") as mock_class:
        yield mock_class


class TestMainCommand:
    """Test main CLI group."""

    def test_help(self) -> None:
        """Test that all commands are listed."""
        result = CliRunner().invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "process-main" in result.output
        assert "process-test" in result.output
        assert "resolve-java" in result.output

    def test_missing_config_file(self) -> None:
        """Test that a missing --config file is rejected."""
        result = CliRunner().invoke(main, ["--config", "/no/such/config.yaml", "process-main"])

        assert result.exit_code != 0

    def test_config_file(self, temp_dir: Path, mock_runner_class: MagicMock) -> None:
        """Test that --config settings reach the runner."""
        config_file = temp_dir / "config.yaml"
        config_file.write_text("runner:\n  retrolambda_version: '2.5.1'\n")
        mock_runner_class.return_value.execute.return_value = ExecutionResult.success_result(
            backend="embedded"
        )

        result = CliRunner().invoke(main, ["--config", str(config_file), "process-main"])

        assert result.exit_code == 0
        settings = mock_runner_class.call_args.kwargs["settings"]
        assert settings.runner.retrolambda_version == "2.5.1"


class TestProcessCommands:
    """Test process-main and process-test."""

    def test_fork_help_names_entry_point(self) -> None:
        """Test that --fork help points at the in-process entry point setting."""
        result = CliRunner().invoke(main, ["process-main", "--help"])

        assert result.exit_code == 0
        assert "embedded_entry_point" in result.output

    def test_process_main(self, mock_runner_class: MagicMock, temp_dir: Path) -> None:
        """Test that options become ProcessParameters."""
        mock_runner = mock_runner_class.return_value
        mock_runner.execute.return_value = ExecutionResult.success_result(backend="forked")

        result = CliRunner().invoke(
            main,
            [
                "process-main",
                "--project-dir",
                str(temp_dir),
                "--target",
                "1.8",
                "--fork",
                "--default-methods",
                "-cp",
                "/a.jar",
                "-cp",
                "/b.jar",
                "--java8home",
                "/opt/jdk8",
            ],
        )

        assert result.exit_code == 0
        parameters, goal = mock_runner.execute.call_args.args
        assert goal == Goal.PROCESS_MAIN
        assert parameters.target == "1.8"
        assert parameters.fork is True
        assert parameters.default_methods is True
        assert parameters.java8home == Path("/opt/jdk8")
        assert parameters.classpath is None

        project = mock_runner_class.call_args.args[0]
        assert project.base_dir == temp_dir.absolute()
        assert project.compile_classpath == ["/a.jar", "/b.jar"]
        assert project.test_classpath == []

    def test_process_test(self, mock_runner_class: MagicMock) -> None:
        """Test that process-test uses the test goal and classpath."""
        mock_runner = mock_runner_class.return_value
        mock_runner.execute.return_value = ExecutionResult.success_result(backend="embedded")

        result = CliRunner().invoke(main, ["process-test", "-cp", "/junit.jar"])

        assert result.exit_code == 0
        assert mock_runner.execute.call_args.args[1] == Goal.PROCESS_TEST
        project = mock_runner_class.call_args.args[0]
        assert project.test_classpath == ["/junit.jar"]

    def test_skip(self, mock_runner_class: MagicMock) -> None:
        """Test that a skipped run exits cleanly."""
        mock_runner = mock_runner_class.return_value
        mock_runner.execute.return_value = ExecutionResult.skipped_result("skip=true")

        result = CliRunner().invoke(main, ["process-main", "--skip"])

        assert result.exit_code == 0
        assert mock_runner.execute.call_args.args[0].skip is True

    @patch("retrolambda_runner.cli.main.show_error")
    def test_failure(self, mock_error: MagicMock, mock_runner_class: MagicMock) -> None:
        """Test that a failed run exits with status 1 and shows the cause."""
        try:
            raise ModuleNotFoundError("No module named 'retrolambda'")
        except ModuleNotFoundError as cause:
            error = EmbeddedInvocationError("Failed to run Retrolambda")
            error.__cause__ = cause
        mock_runner_class.return_value.execute.side_effect = error

        result = CliRunner().invoke(main, ["process-main"])

        assert result.exit_code == 1
        title, message = mock_error.call_args.args
        assert title == "Retrolambda Failed"
        assert "Caused by: ModuleNotFoundError" in message


class TestResolveJavaCommand:
    """Test resolve-java."""

    @patch("retrolambda_runner.cli.main.show_runtime")
    def test_resolve_java(self, mock_show: MagicMock, mock_runner_class: MagicMock) -> None:
        """Test that the resolved runtime is displayed."""
        candidate = RuntimeCandidate(executable="/opt/jdk8/bin/java", source=RuntimeSource.EXPLICIT)
        mock_runner_class.return_value.resolve_java.return_value = candidate

        result = CliRunner().invoke(main, ["resolve-java", "--java8home", "/opt/jdk8"])

        assert result.exit_code == 0
        parameters = mock_runner_class.return_value.resolve_java.call_args.args[0]
        assert parameters.java8home == Path("/opt/jdk8")
        mock_show.assert_called_once_with(candidate)
