"""Run sequence: privilege check → bootstrap → tiers → ecosystems →
verification → aggregation → optional companion step.

Phases are strictly sequential.  Each phase receives an environment
view re-read after the previous one, never the ambient process state.
Only a missing privilege or a failed bootstrap stops the run; install
and probe failures travel as tallies.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from devstrap.core.bootstrap import PackageManagerBootstrap
from devstrap.core.ecosystem import EcosystemInstaller
from devstrap.core.installer import Installer
from devstrap.core.models import (
    OverallReport,
    PackageList,
    PackageManagerSpec,
    RunOptions,
    TallyResult,
    Tier,
    VerificationEntry,
)
from devstrap.core.protocols import (
    CommandRunner,
    EnvironmentRefresher,
    OptionalSetupStep,
    Reporter,
    Sleeper,
)
from devstrap.core.report import aggregate
from devstrap.core.tier_runner import DEFAULT_INSTALL_DELAY, TierRunner
from devstrap.core.verifier import Verifier
from devstrap.exceptions import PrivilegeError

logger = logging.getLogger(__name__)

DEFAULT_PHASE_DELAY: float = 3.0
"""Seconds between phases."""


class Orchestrator:
    """Wires the phases together for one run.

    All collaborators are injected; :func:`devstrap.cli.app.build_orchestrator`
    assembles the production set.
    """

    def __init__(
        self,
        *,
        manager: PackageManagerSpec,
        tiers: Sequence[Tier],
        ecosystems: Sequence[tuple[PackageManagerSpec, PackageList]],
        verification_entries: Sequence[VerificationEntry],
        runner: CommandRunner,
        refresh: EnvironmentRefresher,
        reporter: Reporter,
        is_elevated: Callable[[], bool],
        setup_step: OptionalSetupStep | None = None,
        install_delay: float = DEFAULT_INSTALL_DELAY,
        phase_delay: float = DEFAULT_PHASE_DELAY,
        sleep: Sleeper = time.sleep,
    ) -> None:
        self._manager = manager
        self._tiers = tuple(tiers)
        self._ecosystems = tuple(ecosystems)
        self._verification_entries = tuple(verification_entries)
        self._runner = runner
        self._refresh = refresh
        self._reporter = reporter
        self._is_elevated = is_elevated
        self._setup_step = setup_step
        self._install_delay = install_delay
        self._phase_delay = phase_delay
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, options: RunOptions) -> OverallReport:
        """Execute every phase and return the aggregated report.

        Raises
        ------
        PrivilegeError
            Before any phase, when not running elevated.
        BootstrapError
            When the package manager cannot be made available.
        """
        self._reporter.header("devstrap — dependency bootstrap")
        self._check_privilege()

        self._reporter.section(f"Bootstrapping {self._manager.name}")
        bootstrap = PackageManagerBootstrap(
            self._manager, self._runner, self._refresh, self._reporter,
        )
        bootstrap.ensure_available()
        environment = bootstrap.environment

        tallies: list[TallyResult] = []

        tier_runner = TierRunner(
            Installer(self._manager, self._runner),
            self._reporter,
            delay=self._install_delay,
            sleep=self._sleep,
        )
        for tier in self._tiers:
            self._pause_between_phases()
            self._reporter.section(f"Installing {tier.name} tier ({len(tier)} packages)")
            tallies.append(tier_runner.run_tier(tier, environment))
            environment = self._refresh()

        for manager, packages in self._ecosystems:
            self._pause_between_phases()
            self._reporter.section(f"Installing {manager.name} packages ({len(packages)})")
            ecosystem = EcosystemInstaller(
                manager,
                self._runner,
                self._reporter,
                delay=self._install_delay,
                sleep=self._sleep,
            )
            tallies.append(ecosystem.run_package_list(packages, environment))

        verification: TallyResult | None = None
        if options.skip_verification:
            logger.info("Verification sweep skipped")
        else:
            self._pause_between_phases()
            self._reporter.section("Verifying installed executables")
            environment = self._refresh()
            verification = Verifier(self._runner, self._reporter).verify_all(
                self._verification_entries, environment,
            )

        report = aggregate(tallies, verification)
        self._reporter.summary(report)
        self._run_setup_step(options, report)
        return report

    # ------------------------------------------------------------------
    # Internal steps
    # ------------------------------------------------------------------

    def _check_privilege(self) -> None:
        if not self._is_elevated():
            raise PrivilegeError(
                "devstrap must run with administrator privileges.",
                hint="Re-run from an elevated terminal (Run as administrator / sudo).",
            )

    def _pause_between_phases(self) -> None:
        if self._phase_delay > 0:
            self._sleep(self._phase_delay)

    def _run_setup_step(self, options: RunOptions, report: OverallReport) -> None:
        if self._setup_step is None or options.skip_companion:
            return
        if report.verification_passed is False:
            self._reporter.warning(
                f"Skipping {self._setup_step.name}: some executables are not reachable yet"
            )
            return
        self._reporter.section(f"Optional step: {self._setup_step.name}")
        try:
            self._setup_step.run(report)
        except Exception as exc:
            logger.debug("Optional step %s raised", self._setup_step.name, exc_info=True)
            self._reporter.warning(
                f"{self._setup_step.name} did not complete: {exc or type(exc).__name__}"
            )
