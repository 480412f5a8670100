"""Console implementation of :class:`~devstrap.core.protocols.Reporter`.

Renders progress lines with five severity styles and the final summary
table.  Rich is used when installed; otherwise everything degrades to
plain text on stderr.
"""

from __future__ import annotations

import sys

from devstrap.cli.console import console, escape_markup, rich_available
from devstrap.core.models import OverallReport, TallyResult


# Rich style and plain-text prefix per severity.
_STYLES: dict[str, tuple[str, str]] = {
    "header": ("bold cyan", "=="),
    "section": ("bold", "--"),
    "success": ("green", "[OK]"),
    "error": ("bold red", "[FAIL]"),
    "warning": ("yellow", "[WARN]"),
    "info": ("dim", "[..]"),
}


class ConsoleReporter:
    """Writes run progress to stderr."""

    def __init__(self) -> None:
        self._rich: bool = rich_available()

    # ------------------------------------------------------------------
    # Severity helpers
    # ------------------------------------------------------------------

    def header(self, message: str) -> None:
        self._emit("header", message, blank_before=True)

    def section(self, message: str) -> None:
        self._emit("section", message, blank_before=True)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def _emit(self, level: str, message: str, *, blank_before: bool = False) -> None:
        style, prefix = _STYLES[level]
        if not self._rich:
            if blank_before:
                print(file=sys.stderr)
            print(f"{prefix} {message}", file=sys.stderr)
            return
        if blank_before:
            console.print()
        console.print(f"[{style}]{escape_markup(prefix)}[/{style}] {escape_markup(message)}")

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def summary(self, report: OverallReport) -> None:
        rows = summary_rows(report)
        if self._rich:
            self._print_rich_summary(rows)
        else:
            self._print_plain_summary(rows)

        if report.fully_successful:
            self.success("All packages installed successfully.")
        else:
            self.warning(
                f"{report.failure_count} package(s) failed to install; "
                "see the errors above."
            )
        if report.verification_passed is False:
            self.warning("Some executables are not reachable. Open a new terminal and re-check.")

    def _print_rich_summary(self, rows: list[tuple[str, str, str]]) -> None:
        from rich.table import Table

        table = Table(
            title="Installation summary",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Phase", style="bold", min_width=12)
        table.add_column("Succeeded", justify="right", style="green")
        table.add_column("Failed", justify="right", style="red")
        for label, succeeded, failed in rows:
            table.add_row(label, succeeded, failed)

        console.print()
        console.print(table)
        console.print()

    @staticmethod
    def _print_plain_summary(rows: list[tuple[str, str, str]]) -> None:
        print("\nInstallation summary", file=sys.stderr)
        print("=" * 40, file=sys.stderr)
        print(f"{'Phase':<16} {'Succeeded':>10} {'Failed':>10}", file=sys.stderr)
        print("-" * 40, file=sys.stderr)
        for label, succeeded, failed in rows:
            print(f"{label:<16} {succeeded:>10} {failed:>10}", file=sys.stderr)
        print(file=sys.stderr)


def summary_rows(report: OverallReport) -> list[tuple[str, str, str]]:
    """Flatten *report* into ``(label, succeeded, failed)`` rows.

    The verification row is present only when the sweep ran.
    """
    rows = [_row(tally.phase or "(unnamed)", tally) for tally in report.phases]
    rows.append(("total", str(report.success_count), str(report.failure_count)))
    if report.verification is not None:
        rows.append(_row("verification", report.verification))
    return rows


def _row(label: str, tally: TallyResult) -> tuple[str, str, str]:
    return label, str(tally.success_count), str(tally.failure_count)
