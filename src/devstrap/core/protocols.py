"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
presentation layer must satisfy.  Core code depends ONLY on these
protocols — never on concrete implementations — preserving the
dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

from devstrap.core.models import CommandResult, EnvironmentView, OverallReport


class CommandRunner(Protocol):
    """Contract for synchronous external-command execution."""

    def run(
        self,
        command: Sequence[str],
        *,
        environment: EnvironmentView | None = None,
    ) -> CommandResult:
        """Run *command* to completion and return its exit status.

        A non-zero exit is reported through the result, not raised.
        Implementations raise
        :class:`~devstrap.exceptions.CommandLaunchError` when the
        executable cannot be started at all.
        """
        ...


EnvironmentRefresher = Callable[[], EnvironmentView]
"""Zero-argument callable returning a freshly read environment."""

Sleeper = Callable[[float], None]
"""``time.sleep``-compatible callable."""


class Reporter(Protocol):
    """Presentation collaborator.

    The core only hands it plain strings and finished reports; it never
    receives control flow back.
    """

    def header(self, message: str) -> None: ...

    def section(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def summary(self, report: OverallReport) -> None: ...


class OptionalSetupStep(Protocol):
    """Post-run hook for an optional companion-application setup."""

    name: str

    def run(self, report: OverallReport) -> None:
        """Execute the step after the summary has been rendered."""
        ...
