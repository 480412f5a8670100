"""Single-package installer with a catch-and-convert boundary.

:meth:`Installer.install` always returns an
:class:`~devstrap.core.models.InstallOutcome`.  Whatever goes wrong
while invoking the package manager (non-zero exit, missing executable,
unexpected exception) is captured as ``succeeded=False`` with the error
text in ``detail``, so batch runners never need a ``try`` of their own.
"""

from __future__ import annotations

import logging

from devstrap.core.models import LATEST, EnvironmentView, InstallOutcome, PackageManagerSpec
from devstrap.core.protocols import CommandRunner

logger = logging.getLogger(__name__)


class Installer:
    """Installs one package at a time through a given package manager.

    Parameters
    ----------
    manager:
        Command-line shape of the package manager to invoke.
    runner:
        Executes the install command.
    """

    def __init__(self, manager: PackageManagerSpec, runner: CommandRunner) -> None:
        self._manager: PackageManagerSpec = manager
        self._runner: CommandRunner = runner

    @property
    def manager(self) -> PackageManagerSpec:
        return self._manager

    def install(
        self,
        name: str,
        version_spec: str = LATEST,
        environment: EnvironmentView | None = None,
    ) -> InstallOutcome:
        """Install *name* at *version_spec* and report the outcome.

        Never raises ``Exception`` subclasses.
        """
        command = self._manager.install_command(name, version_spec)
        subject = name if version_spec == LATEST else f"{name} {version_spec}"
        logger.debug("Installing %s via %s: %s", subject, self._manager.name, command)

        try:
            result = self._runner.run(command, environment=environment)
        except Exception as exc:
            logger.debug("Install of %s raised %s", subject, type(exc).__name__)
            return InstallOutcome.failed(subject, str(exc) or type(exc).__name__)

        if not result.succeeded:
            logger.debug("Install of %s exited %d", subject, result.returncode)
            return InstallOutcome.failed(subject, result.error_text)

        return InstallOutcome.ok(subject)
