"""Tests for the subprocess runner (infra/process_runner.py).

All tests mock :func:`shutil.which` and :func:`subprocess.run` — no
process is ever started.
"""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from devstrap.core.models import EnvironmentView
from devstrap.exceptions import CommandLaunchError
from devstrap.infra.process_runner import TIMEOUT_RETURNCODE, SubprocessRunner


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    completed = MagicMock()
    completed.returncode = returncode
    completed.stdout = stdout
    completed.stderr = stderr
    return completed


@patch("devstrap.infra.process_runner.subprocess.run")
@patch("devstrap.infra.process_runner.shutil.which", return_value="/usr/bin/choco")
class TestRun:
    def test_returns_result(self, _mock_which: MagicMock, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed(0, stdout="2.3.0\n")
        result = SubprocessRunner().run(["choco", "--version"])

        assert result.succeeded is True
        assert result.stdout == "2.3.0\n"

    def test_non_zero_exit_is_not_raised(
        self, _mock_which: MagicMock, mock_run: MagicMock,
    ) -> None:
        mock_run.return_value = _completed(1, stderr="boom")
        result = SubprocessRunner().run(["choco", "install", "x"])

        assert result.returncode == 1
        assert result.stderr == "boom"

    def test_uses_resolved_executable(
        self, _mock_which: MagicMock, mock_run: MagicMock,
    ) -> None:
        mock_run.return_value = _completed()
        SubprocessRunner().run(["choco", "--version"])

        argv = mock_run.call_args.args[0]
        assert argv == ["/usr/bin/choco", "--version"]

    def test_is_non_interactive(self, _mock_which: MagicMock, mock_run: MagicMock) -> None:
        mock_run.return_value = _completed()
        SubprocessRunner().run(["choco", "--version"])

        kwargs = mock_run.call_args.kwargs
        assert kwargs["stdin"] is subprocess.DEVNULL
        assert kwargs["capture_output"] is True
        assert kwargs["check"] is False

    def test_environment_passed_to_subprocess(
        self, mock_which: MagicMock, mock_run: MagicMock,
    ) -> None:
        mock_run.return_value = _completed()
        view = EnvironmentView({"PATH": "/opt/choco/bin", "FOO": "1"})
        SubprocessRunner().run(["choco", "--version"], environment=view)

        assert mock_run.call_args.kwargs["env"] == {"PATH": "/opt/choco/bin", "FOO": "1"}
        assert mock_which.call_args.kwargs["path"] == "/opt/choco/bin"

    def test_without_environment_inherits_process_env(
        self, mock_which: MagicMock, mock_run: MagicMock,
    ) -> None:
        mock_run.return_value = _completed()
        SubprocessRunner().run(["choco", "--version"])

        assert mock_run.call_args.kwargs["env"] is None
        assert mock_which.call_args.kwargs["path"] is None

    def test_timeout_becomes_result(
        self, _mock_which: MagicMock, mock_run: MagicMock,
    ) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="choco", timeout=5)
        result = SubprocessRunner(timeout=5).run(["choco", "install", "x"])

        assert result.returncode == TIMEOUT_RETURNCODE
        assert "timed out" in result.stderr

    def test_oserror_becomes_launch_error(
        self, _mock_which: MagicMock, mock_run: MagicMock,
    ) -> None:
        original = PermissionError("denied")
        mock_run.side_effect = original

        with pytest.raises(CommandLaunchError) as exc_info:
            SubprocessRunner().run(["choco", "--version"])
        assert exc_info.value.__cause__ is original


class TestResolution:
    @patch("devstrap.infra.process_runner.subprocess.run")
    @patch("devstrap.infra.process_runner.shutil.which", return_value=None)
    def test_missing_executable(self, _mock_which: MagicMock, mock_run: MagicMock) -> None:
        with pytest.raises(CommandLaunchError, match="not found on PATH"):
            SubprocessRunner().run(["npm", "--version"])
        mock_run.assert_not_called()

    def test_empty_command(self) -> None:
        with pytest.raises(CommandLaunchError, match="empty"):
            SubprocessRunner().run([])
