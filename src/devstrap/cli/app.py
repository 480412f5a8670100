"""CLI application entry point for devstrap.

This module is the **sole error boundary** for the entire application.
It catches :class:`~devstrap.exceptions.DevstrapError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the
  orchestrator in the core layer.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from devstrap.cli import exit_codes
from devstrap.cli.console import console, escape_markup
from devstrap.config import Settings
from devstrap.core.models import RunOptions
from devstrap.core.orchestrator import Orchestrator
from devstrap.exceptions import DevstrapError
from devstrap.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="devstrap",
        description=(
            "Bootstrap the system package manager, install the tool catalog "
            "tier by tier, and verify the result."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--skip-verify",
        action="store_true",
        help="Skip the post-install verification sweep.",
    )
    parser.add_argument(
        "--skip-companion",
        action="store_true",
        help="Skip the optional companion-application setup step.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose diagnostic logging.",
    )
    return parser


def parse_options(argv: list[str] | None = None) -> RunOptions:
    """Translate command-line arguments into :class:`RunOptions`."""
    args = _build_parser().parse_args(argv)
    return RunOptions(
        skip_verification=args.skip_verify,
        skip_companion=args.skip_companion,
        verbose=args.verbose,
    )


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_orchestrator(settings: Settings) -> Orchestrator:
    """Assemble the production collaborators."""
    from devstrap.cli.companion import CompanionSetupPrompt
    from devstrap.cli.reporter import ConsoleReporter
    from devstrap.core import catalog
    from devstrap.infra.environment import is_elevated, refresh_environment
    from devstrap.infra.process_runner import SubprocessRunner

    return Orchestrator(
        manager=catalog.CHOCOLATEY,
        tiers=catalog.TIERS,
        ecosystems=catalog.ECOSYSTEMS,
        verification_entries=catalog.VERIFICATION_ENTRIES,
        runner=SubprocessRunner(timeout=settings.command_timeout),
        refresh=refresh_environment,
        reporter=ConsoleReporter(),
        is_elevated=is_elevated,
        setup_step=CompanionSetupPrompt(),
        install_delay=settings.install_delay,
        phase_delay=settings.phase_delay,
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the devstrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.  Install failures still return
        :data:`exit_codes.SUCCESS`; fatal conditions raise.
    """
    from devstrap.cli.logging_setup import setup_logging

    options = parse_options(argv)
    settings = Settings.from_env()
    setup_logging(
        "DEBUG" if options.verbose else settings.log_level,
        settings.log_file,
    )
    logger.debug("Options: %s; settings: %s", options, settings)

    build_orchestrator(settings).run(options)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DevstrapError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unhandled error", exc_info=True)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
