"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Run completed, including runs where some installs failed."""

GENERAL_ERROR: int = 1
"""A DevstrapError was caught (missing privilege, bootstrap failure, ...)."""

UNEXPECTED_ERROR: int = 1
"""An unhandled exception escaped the phase sequence."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
