"""Post-install verification sweep.

Re-probes each expected executable and classifies it by exit status.
Observational only: nothing is installed or changed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from devstrap.core.models import (
    EnvironmentView,
    InstallOutcome,
    TallyResult,
    VerificationEntry,
)
from devstrap.core.protocols import CommandRunner, Reporter

logger = logging.getLogger(__name__)

VERIFICATION_PHASE: str = "verification"


class Verifier:
    """Runs ``<executable> <probe_argument>`` for each entry."""

    def __init__(self, runner: CommandRunner, reporter: Reporter) -> None:
        self._runner = runner
        self._reporter = reporter

    def probe(
        self,
        entry: VerificationEntry,
        environment: EnvironmentView | None = None,
    ) -> bool:
        """Return ``True`` iff the probe command exits with status 0."""
        try:
            result = self._runner.run(entry.command, environment=environment)
        except Exception as exc:
            logger.debug("Probe of %s raised: %s", entry.executable_name, exc)
            return False
        return result.succeeded

    def verify_all(
        self,
        entries: Sequence[VerificationEntry],
        environment: EnvironmentView | None = None,
    ) -> TallyResult:
        """Probe every entry in order and tally reachable executables.

        Probes run against *environment* so tools installed earlier in the
        run are found without a new shell.
        """
        tally = TallyResult(phase=VERIFICATION_PHASE)
        for entry in entries:
            name = entry.executable_name
            if self.probe(entry, environment):
                self._reporter.success(f"{name} is available")
                tally = tally.record(InstallOutcome.ok(name))
            else:
                self._reporter.error(f"{name} is not reachable")
                tally = tally.record(InstallOutcome.failed(name, "probe failed"))
        return tally
