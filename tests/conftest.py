"""Shared pytest fixtures and configuration for the devstrap test suite.

Guidelines
----------
* No test starts a real package manager or touches the network.
* External commands go through :class:`FakeRunner`, which records every
  invocation and replays scripted results.
* Delays are injected as a recording ``sleep`` — no test waits.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from devstrap.core.models import CommandResult, EnvironmentView, OverallReport


class FakeRunner:
    """Scripted :class:`~devstrap.core.protocols.CommandRunner`.

    *script* maps a command prefix (joined with spaces) to a result, an
    exception to raise, or a list of those consumed in order.  The
    longest matching prefix wins; unmatched commands succeed.
    """

    def __init__(
        self,
        script: dict[str, object] | None = None,
        default: CommandResult | None = None,
    ) -> None:
        self.script: dict[str, object] = dict(script or {})
        self.default = default if default is not None else CommandResult(0, "ok")
        self.calls: list[list[str]] = []
        self.environments: list[EnvironmentView | None] = []

    def run(
        self,
        command: Sequence[str],
        *,
        environment: EnvironmentView | None = None,
    ) -> CommandResult:
        argv = list(command)
        self.calls.append(argv)
        self.environments.append(environment)

        joined = " ".join(argv)
        matches = [key for key in self.script if joined.startswith(key)]
        if not matches:
            return self.default
        entry = self.script[max(matches, key=len)]
        if isinstance(entry, list):
            entry = entry.pop(0) if len(entry) > 1 else entry[0]
        if isinstance(entry, BaseException):
            raise entry
        assert isinstance(entry, CommandResult)
        return entry

    def calls_starting_with(self, prefix: str) -> list[list[str]]:
        return [call for call in self.calls if " ".join(call).startswith(prefix)]


class RecordingReporter:
    """Reporter that keeps every line instead of printing it."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []
        self.summaries: list[OverallReport] = []

    def header(self, message: str) -> None:
        self.lines.append(("header", message))

    def section(self, message: str) -> None:
        self.lines.append(("section", message))

    def success(self, message: str) -> None:
        self.lines.append(("success", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def summary(self, report: OverallReport) -> None:
        self.summaries.append(report)

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message in self.lines if lvl == level]


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def make_runner() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def env_view() -> EnvironmentView:
    return EnvironmentView({"PATH": "/usr/bin"})
