"""devstrap — tiered dependency bootstrapper.

Ensures a system package manager is present, installs a declarative
catalog of tools tier by tier, and verifies the result.
"""

from devstrap.version import __version__

__all__: list[str] = ["__version__"]
