"""Package-manager bootstrap.

Makes sure the system package manager answers its version probe before
any tier runs.  When it is missing, the manager's own bootstrap command
is executed once; any failure there is fatal for the whole run.

Every successful path ends with an environment refresh, because the
freshly installed binaries are not on the PATH this process started
with.
"""

from __future__ import annotations

import logging

from devstrap.core.models import EnvironmentView, PackageManagerSpec
from devstrap.core.protocols import CommandRunner, EnvironmentRefresher, Reporter
from devstrap.exceptions import BootstrapError

logger = logging.getLogger(__name__)


class PackageManagerBootstrap:
    """Ensure-present-and-current step for the system package manager.

    Parameters
    ----------
    manager:
        The system package manager, including its bootstrap command.
    runner:
        Executes probe, upgrade and bootstrap commands.
    refresh:
        Re-reads the environment after a change.
    reporter:
        Receives progress lines.
    environment:
        Starting view; defaults to a fresh ``refresh()``.
    """

    def __init__(
        self,
        manager: PackageManagerSpec,
        runner: CommandRunner,
        refresh: EnvironmentRefresher,
        reporter: Reporter,
        environment: EnvironmentView | None = None,
    ) -> None:
        self._manager = manager
        self._runner = runner
        self._refresh = refresh
        self._reporter = reporter
        self._environment: EnvironmentView = (
            environment if environment is not None else refresh()
        )

    @property
    def environment(self) -> EnvironmentView:
        """The most recently refreshed environment view."""
        return self._environment

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def ensure_available(self) -> bool:
        """Make the package manager available; return ``True``.

        Raises
        ------
        BootstrapError
            When the manager is absent and cannot be installed.
        """
        if self.is_available():
            self._reporter.success(f"{self._manager.name} is already installed")
            self._upgrade()
            self._environment = self._refresh()
            return True

        self._reporter.warning(f"{self._manager.name} not found; installing it")
        self._install()
        self._environment = self._refresh()

        if not self.is_available():
            raise BootstrapError(
                f"{self._manager.name} was installed but "
                f"'{self._manager.executable}' is still not reachable.",
                hint="Open a new elevated terminal and run devstrap again.",
            )

        self._reporter.success(f"{self._manager.name} installed")
        return True

    def is_available(self) -> bool:
        """Return whether the version probe exits successfully."""
        try:
            result = self._runner.run(
                self._manager.probe_command(), environment=self._environment,
            )
        except Exception as exc:
            logger.debug("%s probe raised: %s", self._manager.name, exc)
            return False
        return result.succeeded

    # ------------------------------------------------------------------
    # Internal steps
    # ------------------------------------------------------------------

    def _install(self) -> None:
        command = list(self._manager.bootstrap_command)
        if not command:
            raise BootstrapError(
                f"No bootstrap command is defined for {self._manager.name}.",
            )

        try:
            result = self._runner.run(command, environment=self._environment)
        except Exception as exc:
            raise BootstrapError(
                f"Installing {self._manager.name} failed: {exc}",
                hint="Check your network connection and PowerShell availability.",
            ) from exc

        if not result.succeeded:
            raise BootstrapError(
                f"Installing {self._manager.name} failed: {result.error_text}",
                hint="Check your network connection and PowerShell availability.",
            )

    def _upgrade(self) -> None:
        command = self._manager.upgrade_command()
        if command is None:
            return
        try:
            result = self._runner.run(command, environment=self._environment)
        except Exception as exc:
            self._reporter.warning(f"{self._manager.name} self-upgrade failed: {exc}")
            return
        if not result.succeeded:
            self._reporter.warning(
                f"{self._manager.name} self-upgrade failed: {result.error_text}"
            )
