"""Unit tests for execute_command."""

import io
import subprocess
from unittest.mock import patch

import pytest
from rich.console import Console

from c2rust_clean.core.errors import CommandExecutionFailed
from c2rust_clean.core.executor import execute_command


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return Console(file=output, highlight=False, soft_wrap=True)


class TestExecuteCommand:
    """Test execute_command."""

    def test_empty_command_rejected(self, tmp_path):
        """Should refuse to spawn an empty command."""
        with pytest.raises(CommandExecutionFailed, match="No command provided"):
            execute_command(tmp_path, [])

    @patch("subprocess.run")
    def test_runs_in_directory_and_relays_output(self, mock_run, tmp_path, console, output):
        """Should spawn in the given directory and print captured streams."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=["make", "clean"], returncode=0, stdout="removed objs\n", stderr="warn\n"
        )

        exit_code = execute_command(tmp_path, ["make", "clean"], console=console)

        assert exit_code == 0
        mock_run.assert_called_once_with(
            ["make", "clean"],
            cwd=tmp_path,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
        text = output.getvalue()
        assert "Executing command: make clean" in text
        assert f"In directory: {tmp_path}" in text
        assert "removed objs" in text
        assert "warn" in text
        assert "Exit code: 0" in text

    @patch("subprocess.run")
    def test_non_zero_exit_raises_with_code(self, mock_run, tmp_path, console):
        """Should raise and carry the child's exit status."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=["make"], returncode=2, stdout="", stderr="no rule"
        )

        with pytest.raises(CommandExecutionFailed) as exc_info:
            execute_command(tmp_path, ["make"], console=console)

        assert exc_info.value.exit_code == 2
        assert "failed with exit code 2" in str(exc_info.value)

    @patch("subprocess.run")
    def test_signal_termination_maps_to_exit_one(self, mock_run, tmp_path, console, output):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["make"], returncode=-9, stdout="", stderr=""
        )

        with pytest.raises(CommandExecutionFailed) as exc_info:
            execute_command(tmp_path, ["make"], console=console)

        assert exc_info.value.exit_code == 1
        assert "terminated by signal" in output.getvalue()

    def test_spawn_failure(self, tmp_path, console):
        """Should wrap a missing executable as CommandExecutionFailed."""
        with pytest.raises(CommandExecutionFailed, match="Failed to execute command"):
            execute_command(
                tmp_path, ["definitely-not-a-real-program-c2rust-xyz"], console=console
            )

    def test_real_command_succeeds(self, tmp_path, console, output):
        (tmp_path / "test.txt").write_text("content")

        assert execute_command(tmp_path, ["ls", "test.txt"], console=console) == 0
        assert "test.txt" in output.getvalue()

    @patch("subprocess.run")
    def test_output_relayed_verbatim(self, mock_run, tmp_path, console, output):
        """Emoji codes and bracketed text in child output must not be rendered."""
        mock_run.return_value = subprocess.CompletedProcess(
            args=["echo"], returncode=0, stdout="status :thumbs_up: [done]\n",
            stderr="[bold]warn[/bold] :x:\n",
        )

        execute_command(tmp_path, ["echo", ":smile: [red]x"], console=console)

        text = output.getvalue()
        assert "Executing command: echo :smile: [red]x" in text
        assert "status :thumbs_up: [done]" in text
        assert "[bold]warn[/bold] :x:" in text
        assert "👍" not in text
        assert "😄" not in text

    def test_real_output_with_emoji_code(self, tmp_path, console, output):
        execute_command(tmp_path, ["echo", "status :thumbs_up: [done]"], console=console)

        assert "status :thumbs_up: [done]" in output.getvalue()
