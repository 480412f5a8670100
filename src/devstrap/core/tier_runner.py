"""Tier runner — installs every entry of a tier and tallies the outcomes.

The loop always runs to exhaustion: a failed entry is reported by name
and counted, then the next entry is attempted.  Nothing is retried.
"""

from __future__ import annotations

import time

from devstrap.core.installer import Installer
from devstrap.core.models import EnvironmentView, Tier, TallyResult
from devstrap.core.protocols import Reporter, Sleeper

DEFAULT_INSTALL_DELAY: float = 0.5
"""Seconds between consecutive install attempts."""


class TierRunner:
    """Drives an :class:`Installer` over the entries of a :class:`Tier`.

    Parameters
    ----------
    installer:
        Converts each entry into exactly one ``InstallOutcome``.
    reporter:
        Receives one success or error line per entry.
    delay:
        Pause between attempts, to stay under repository rate limits.
    sleep:
        Injected for tests; defaults to :func:`time.sleep`.
    """

    def __init__(
        self,
        installer: Installer,
        reporter: Reporter,
        *,
        delay: float = DEFAULT_INSTALL_DELAY,
        sleep: Sleeper = time.sleep,
    ) -> None:
        self._installer = installer
        self._reporter = reporter
        self._delay = delay
        self._sleep = sleep

    def run_tier(
        self,
        tier: Tier,
        environment: EnvironmentView | None = None,
    ) -> TallyResult:
        """Install every entry of *tier*; return its tally."""
        tally = TallyResult(phase=tier.name)

        for index, entry in enumerate(tier):
            if index > 0 and self._delay > 0:
                self._sleep(self._delay)

            outcome = self._installer.install(
                entry.name, entry.version_spec, environment,
            )
            if outcome.succeeded:
                self._reporter.success(f"{outcome.subject} installed")
            else:
                self._reporter.error(
                    f"{outcome.subject} failed: {outcome.detail or 'unknown error'}"
                )
            tally = tally.record(outcome)

        return tally
