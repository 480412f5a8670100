"""Subprocess-backed implementation of :class:`~devstrap.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that starts external
processes.  ``OSError`` from process creation is caught here and
re-raised as :class:`~devstrap.exceptions.CommandLaunchError`.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence

from devstrap.core.models import CommandResult, EnvironmentView
from devstrap.exceptions import CommandLaunchError

logger = logging.getLogger(__name__)

TIMEOUT_RETURNCODE: int = 124
"""Exit status reported for a command killed by the timeout."""


class SubprocessRunner:
    """Blocking command runner.

    The executable is resolved against the PATH of the supplied
    :class:`EnvironmentView` (not the PATH this process started with),
    so tools installed earlier in the run are found.  On Windows this
    also resolves ``npm`` to ``npm.cmd`` via ``PATHEXT``.

    Parameters
    ----------
    timeout:
        Optional per-command limit in seconds.  ``None`` waits forever.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    def run(
        self,
        command: Sequence[str],
        *,
        environment: EnvironmentView | None = None,
    ) -> CommandResult:
        if not command:
            raise CommandLaunchError("Cannot run an empty command.")

        argv = list(command)
        search_path = environment.path if environment is not None else None
        resolved = shutil.which(argv[0], path=search_path or None)
        if resolved is None:
            raise CommandLaunchError(
                f"'{argv[0]}' was not found on PATH.",
                hint="Open a new terminal so PATH changes take effect.",
            )
        argv[0] = resolved

        logger.debug("Running: %s", " ".join(argv))
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                stdin=subprocess.DEVNULL,
                env=environment.as_env() if environment is not None else None,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.debug("Timed out after %ss: %s", self._timeout, argv[0])
            return CommandResult(
                returncode=TIMEOUT_RETURNCODE,
                stderr=f"timed out after {self._timeout}s",
            )
        except OSError as exc:
            raise CommandLaunchError(
                f"Could not start '{argv[0]}': {exc}",
            ) from exc

        logger.debug("Exit %d: %s", completed.returncode, argv[0])
        if completed.stdout:
            logger.debug("stdout:\n%s", completed.stdout.rstrip())
        if completed.stderr:
            logger.debug("stderr:\n%s", completed.stderr.rstrip())

        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
