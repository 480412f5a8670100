"""Infrastructure: environment snapshots and privilege detection.

Rules
-----
* The process's own ``os.environ`` is never modified.
* Windows registry access is guarded; other platforms use ``os.environ``.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import ctypes
import logging
import os
import platform
from typing import Any

from devstrap.core.models import EnvironmentView

logger = logging.getLogger(__name__)

_MACHINE_ENV_KEY: str = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"
_USER_ENV_KEY: str = "Environment"


# ---------------------------------------------------------------------------
# Environment refresh
# ---------------------------------------------------------------------------

def refresh_environment() -> EnvironmentView:
    """Return a snapshot of the environment as a new shell would see it.

    On Windows, ``PATH`` is rebuilt from the machine and user registry
    values, which is where installers record their changes.  Entries
    from the current process PATH that the registry does not list are
    kept after them.  Elsewhere the current ``os.environ`` is returned.
    """
    variables = dict(os.environ)
    if platform.system() != "Windows":
        return EnvironmentView(variables)

    registry_path = _registry_path()
    if registry_path:
        path_key = next((key for key in variables if key.upper() == "PATH"), "PATH")
        variables[path_key] = merge_path(registry_path, variables.get(path_key, ""))
    return EnvironmentView(variables)


def merge_path(preferred: str, current: str, separator: str = os.pathsep) -> str:
    """Join two PATH strings, *preferred* first, dropping duplicates."""
    seen: set[str] = set()
    merged: list[str] = []
    for entry in (*preferred.split(separator), *current.split(separator)):
        normalized = entry.strip().rstrip("\\/").lower()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        merged.append(entry.strip())
    return separator.join(merged)


def _registry_path() -> str:
    """Read machine + user PATH from the registry, expanded."""
    try:
        import winreg
    except ImportError:
        return ""

    parts: list[str] = []
    for hive, key in (
        (winreg.HKEY_LOCAL_MACHINE, _MACHINE_ENV_KEY),
        (winreg.HKEY_CURRENT_USER, _USER_ENV_KEY),
    ):
        value = _read_registry_value(winreg, hive, key, "Path")
        if value:
            parts.append(os.path.expandvars(value))
    return os.pathsep.join(parts)


def _read_registry_value(winreg: Any, hive: Any, key: str, name: str) -> str:
    try:
        with winreg.OpenKey(hive, key) as handle:
            value, _kind = winreg.QueryValueEx(handle, name)
    except OSError as exc:
        logger.debug("Registry read %s\\%s failed: %s", key, name, exc)
        return ""
    return str(value)


# ---------------------------------------------------------------------------
# Privilege
# ---------------------------------------------------------------------------

def is_elevated() -> bool:
    """Return whether the process has Administrator-equivalent rights."""
    if platform.system() == "Windows":
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError):
            return False

    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0
