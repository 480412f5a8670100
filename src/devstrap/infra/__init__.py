"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: process
execution, environment/registry reads and privilege detection.  Every
raw ``OSError`` must be caught here and re-raised as a
:class:`~devstrap.exceptions.DevstrapError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from devstrap.infra.environment import is_elevated, merge_path, refresh_environment
from devstrap.infra.process_runner import SubprocessRunner

__all__: list[str] = [
    "SubprocessRunner",
    "is_elevated",
    "merge_path",
    "refresh_environment",
]
