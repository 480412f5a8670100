"""Domain models for devstrap.

All models are **frozen** dataclasses — immutable value objects built
once at the start of a run from static catalog data and environment
state.  They carry zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType


LATEST: str = "latest"
"""Version-spec sentinel meaning "install whatever is current"."""


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One named tool together with its desired version."""

    name: str
    """Package identifier understood by the package manager."""

    version_spec: str = LATEST
    """Literal version string, or :data:`LATEST`."""

    @property
    def is_latest(self) -> bool:
        return self.version_spec == LATEST


@dataclass(frozen=True, slots=True)
class Tier:
    """A named priority group of catalog entries installed as a batch.

    Entries are logically independent; their order carries no meaning.
    """

    name: str
    entries: tuple[CatalogEntry, ...]

    @classmethod
    def from_mapping(cls, name: str, entries: Mapping[str, str]) -> Tier:
        """Build a tier from a ``{package: version_spec}`` mapping."""
        return cls(
            name=name,
            entries=tuple(
                CatalogEntry(name=entry, version_spec=spec)
                for entry, spec in entries.items()
            ),
        )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries)


PackageList = tuple[str, ...]
"""Bare package names for a secondary ecosystem (always latest)."""


# ---------------------------------------------------------------------------
# Outcomes and tallies
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InstallOutcome:
    """Result of exactly one install attempt."""

    succeeded: bool
    subject: str
    detail: str | None = None
    """Captured error text for failures, ``None`` otherwise."""

    @classmethod
    def ok(cls, subject: str) -> InstallOutcome:
        return cls(succeeded=True, subject=subject)

    @classmethod
    def failed(cls, subject: str, detail: str | None) -> InstallOutcome:
        return cls(succeeded=False, subject=subject, detail=detail)


@dataclass(frozen=True, slots=True)
class TallyResult:
    """Success/failure counts accumulated over one phase.

    ``success_count + failure_count`` always equals the number of
    attempts made in the phase.
    """

    success_count: int = 0
    failure_count: int = 0
    phase: str = ""

    @property
    def attempts(self) -> int:
        return self.success_count + self.failure_count

    def record(self, outcome: InstallOutcome) -> TallyResult:
        """Return a new tally with *outcome* counted."""
        if outcome.succeeded:
            return replace(self, success_count=self.success_count + 1)
        return replace(self, failure_count=self.failure_count + 1)

    def __add__(self, other: TallyResult) -> TallyResult:
        if not isinstance(other, TallyResult):
            return NotImplemented
        return TallyResult(
            success_count=self.success_count + other.success_count,
            failure_count=self.failure_count + other.failure_count,
        )


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VerificationEntry:
    """An executable expected on PATH after installation."""

    executable_name: str
    probe_argument: str = "--version"

    @property
    def command(self) -> list[str]:
        return [self.executable_name, self.probe_argument]


# ---------------------------------------------------------------------------
# Overall report
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OverallReport:
    """Sum of every phase tally plus the optional verification tally.

    Never built by hand outside :func:`devstrap.core.report.aggregate`.
    """

    success_count: int
    failure_count: int
    phases: tuple[TallyResult, ...]
    verification: TallyResult | None = None

    @property
    def fully_successful(self) -> bool:
        return all(phase.failure_count == 0 for phase in self.phases)

    @property
    def verification_passed(self) -> bool | None:
        """``None`` when verification was skipped."""
        if self.verification is None:
            return None
        return self.verification.failure_count == 0


# ---------------------------------------------------------------------------
# External process results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and captured streams of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """Best available description of a failure."""
        text = (self.stderr or self.stdout).strip()
        if text:
            # The tail of a package-manager log holds the actual error.
            lines = text.splitlines()
            return "\n".join(lines[-5:])
        return f"exit code {self.returncode}"


# ---------------------------------------------------------------------------
# Environment snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EnvironmentView:
    """Immutable snapshot of the environment handed to every command.

    A new view is produced by ``refresh_environment()`` whenever a phase
    may have put new executables on PATH.
    """

    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "variables", MappingProxyType(dict(self.variables)),
        )

    @property
    def path(self) -> str:
        for key, value in self.variables.items():
            if key.upper() == "PATH":
                return value
        return ""

    @property
    def path_entries(self) -> tuple[str, ...]:
        return tuple(entry for entry in self.path.split(os.pathsep) if entry)

    def as_env(self) -> dict[str, str]:
        """Return a fresh mutable copy suitable for ``subprocess``."""
        return dict(self.variables)


# ---------------------------------------------------------------------------
# Package-manager descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PackageManagerSpec:
    """Command-line shape of a package manager.

    The install command is ``executable *install_args <name>
    *install_flags [version_option <version>]``.
    """

    name: str
    executable: str
    install_args: tuple[str, ...]
    install_flags: tuple[str, ...] = ()
    probe_args: tuple[str, ...] = ("--version",)
    version_option: str | None = None
    upgrade_args: tuple[str, ...] = ()
    bootstrap_command: tuple[str, ...] = ()

    def probe_command(self) -> list[str]:
        return [self.executable, *self.probe_args]

    def install_command(self, name: str, version_spec: str = LATEST) -> list[str]:
        command = [self.executable, *self.install_args, name, *self.install_flags]
        if version_spec != LATEST and self.version_option is not None:
            command.extend((self.version_option, version_spec))
        return command

    def upgrade_command(self) -> list[str] | None:
        if not self.upgrade_args:
            return None
        return [self.executable, *self.upgrade_args]


# ---------------------------------------------------------------------------
# Invocation toggles
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunOptions:
    """The three coarse-grained switches accepted on the command line."""

    skip_verification: bool = False
    skip_companion: bool = False
    verbose: bool = False

