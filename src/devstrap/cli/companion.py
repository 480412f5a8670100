"""Optional companion-application setup step.

Implements :class:`~devstrap.core.protocols.OptionalSetupStep` with a
single questionary prompt: show the setup guidance now, or skip.  The
guidance itself is static text supplied by the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from devstrap.cli.console import console
from devstrap.core.models import OverallReport
from devstrap.exceptions import EnvironmentError

SHOW_GUIDE: str = "show"
SKIP: str = "skip"

DEFAULT_GUIDANCE: tuple[str, ...] = (
    "Open a new elevated terminal so the refreshed PATH is picked up.",
    "Run 'git config --global user.name' and 'user.email' to finish git setup.",
    "Sign in to the GitHub CLI with 'gh auth login'.",
    "Re-run 'devstrap --skip-companion' at any time to repair missing tools.",
)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class CompanionSetupPrompt:
    """Asks once whether to print the companion setup guide."""

    name: str = "companion setup"

    def __init__(self, guidance: Sequence[str] = DEFAULT_GUIDANCE) -> None:
        self._guidance: tuple[str, ...] = tuple(guidance)

    def run(self, report: OverallReport) -> None:
        questionary = _import_questionary()

        choice: str | None = questionary.select(
            "Show the companion setup guide now?",
            choices=[
                questionary.Choice(title="Show setup guide", value=SHOW_GUIDE),
                questionary.Choice(title="Skip", value=SKIP),
            ],
            use_arrow_keys=True,
        ).ask()  # Returns None on Ctrl+C / Esc

        if choice != SHOW_GUIDE:
            console.print("[dim]Companion setup skipped.[/dim]")
            return

        console.print("[bold]Next steps:[/bold]")
        for number, line in enumerate(self._guidance, start=1):
            console.print(f"  {number}. {line}")
        if not report.fully_successful:
            console.print(
                f"  [yellow]{report.failure_count} package(s) still need attention.[/yellow]"
            )
