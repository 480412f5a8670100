"""Custom exception hierarchy for devstrap.

All exceptions that cross layer boundaries must inherit from
:class:`DevstrapError`.  Raw ``OSError`` / ``subprocess`` exceptions
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Only :class:`PrivilegeError` and :class:`BootstrapError` are fatal to
a run.  Everything raised while installing a single package is
converted into data by the phase that owns it.

Hierarchy
---------
DevstrapError
├── PrivilegeError
├── BootstrapError
├── CommandLaunchError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class DevstrapError(Exception):
    """Base exception for all devstrap errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Fatal run preconditions -----------------------------------------------

class PrivilegeError(DevstrapError):
    """Raised when the process lacks Administrator-equivalent privilege."""


class BootstrapError(DevstrapError):
    """Raised when the system package manager cannot be made available."""


# --- External processes ----------------------------------------------------

class CommandLaunchError(DevstrapError):
    """Raised when an external command cannot be started at all."""


# --- Configuration / tooling -----------------------------------------------

class ConfigurationError(DevstrapError):
    """Raised when an environment-variable setting has an invalid value."""


class EnvironmentError(DevstrapError):
    """Raised when a required runtime dependency is not available."""
