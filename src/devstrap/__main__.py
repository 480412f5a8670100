"""Allow ``python -m devstrap`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m devstrap`` behaves identically to the ``devstrap``
console script.
"""

from __future__ import annotations

from devstrap.cli.app import cli

if __name__ == "__main__":
    cli()
