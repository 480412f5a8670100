"""Secondary-ecosystem installer (npm, pip, ...).

Same loop as the tier runner, routed through the ecosystem's own CLI.
The ecosystem tool is probed first; when it is unreachable the whole
package list is counted as failed without a single install attempt.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from devstrap.core.installer import Installer
from devstrap.core.models import (
    CatalogEntry,
    EnvironmentView,
    PackageManagerSpec,
    TallyResult,
    Tier,
)
from devstrap.core.protocols import CommandRunner, Reporter, Sleeper
from devstrap.core.tier_runner import DEFAULT_INSTALL_DELAY, TierRunner

logger = logging.getLogger(__name__)


class EcosystemInstaller:
    """Installs a :data:`~devstrap.core.models.PackageList` via *manager*."""

    def __init__(
        self,
        manager: PackageManagerSpec,
        runner: CommandRunner,
        reporter: Reporter,
        *,
        delay: float = DEFAULT_INSTALL_DELAY,
        sleep: Sleeper = time.sleep,
    ) -> None:
        self._manager = manager
        self._runner = runner
        self._reporter = reporter
        self._tier_runner = TierRunner(
            Installer(manager, runner),
            reporter,
            delay=delay,
            sleep=sleep,
        )

    def is_available(self, environment: EnvironmentView | None = None) -> bool:
        """Return whether the ecosystem CLI answers its version probe."""
        try:
            result = self._runner.run(
                self._manager.probe_command(), environment=environment,
            )
        except Exception as exc:
            logger.debug("%s probe raised: %s", self._manager.name, exc)
            return False
        return result.succeeded

    def run_package_list(
        self,
        packages: Sequence[str],
        environment: EnvironmentView | None = None,
    ) -> TallyResult:
        """Install every package in *packages* at its latest version."""
        if not self.is_available(environment):
            self._reporter.error(
                f"{self._manager.executable} is not available; "
                f"skipping {len(packages)} {self._manager.name} package(s)"
            )
            return TallyResult(
                success_count=0,
                failure_count=len(packages),
                phase=self._manager.name,
            )

        tier = Tier(
            name=self._manager.name,
            entries=tuple(CatalogEntry(name=package) for package in packages),
        )
        return self._tier_runner.run_tier(tier, environment)
