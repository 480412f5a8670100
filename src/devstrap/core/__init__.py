"""Core / service layer — the tiered install and verify pipeline.

Rules
-----
* No ``print()`` calls.
* No direct subprocess, registry or filesystem access — external
  effects go through the protocols in :mod:`devstrap.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from devstrap.core.bootstrap import PackageManagerBootstrap
from devstrap.core.ecosystem import EcosystemInstaller
from devstrap.core.installer import Installer
from devstrap.core.models import (
    LATEST,
    CatalogEntry,
    CommandResult,
    EnvironmentView,
    InstallOutcome,
    OverallReport,
    PackageManagerSpec,
    RunOptions,
    TallyResult,
    Tier,
    VerificationEntry,
)
from devstrap.core.orchestrator import Orchestrator
from devstrap.core.report import aggregate
from devstrap.core.tier_runner import TierRunner
from devstrap.core.verifier import Verifier

__all__: list[str] = [
    "LATEST",
    "CatalogEntry",
    "CommandResult",
    "EcosystemInstaller",
    "EnvironmentView",
    "InstallOutcome",
    "Installer",
    "Orchestrator",
    "OverallReport",
    "PackageManagerBootstrap",
    "PackageManagerSpec",
    "RunOptions",
    "TallyResult",
    "Tier",
    "TierRunner",
    "VerificationEntry",
    "Verifier",
    "aggregate",
]
