"""Static catalog: what gets installed, through which manager, and how
the result is verified.

Pure data.  Tiers are installed in the order of :data:`TIERS`;
secondary ecosystems in the order of :data:`ECOSYSTEMS`.
"""

from __future__ import annotations

from devstrap.core.models import (
    LATEST,
    PackageList,
    PackageManagerSpec,
    Tier,
    VerificationEntry,
)


# ---------------------------------------------------------------------------
# System package manager
# ---------------------------------------------------------------------------

CHOCOLATEY_INSTALL_URL: str = "https://community.chocolatey.org/install.ps1"

_CHOCOLATEY_BOOTSTRAP_SCRIPT: str = (
    "Set-ExecutionPolicy Bypass -Scope Process -Force; "
    "[System.Net.ServicePointManager]::SecurityProtocol = "
    "[System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
    "iex ((New-Object System.Net.WebClient).DownloadString("
    f"'{CHOCOLATEY_INSTALL_URL}'))"
)

CHOCOLATEY = PackageManagerSpec(
    name="chocolatey",
    executable="choco",
    install_args=("install",),
    install_flags=("-y", "--no-progress"),
    version_option="--version",
    upgrade_args=("upgrade", "chocolatey", "-y", "--no-progress"),
    bootstrap_command=(
        "powershell",
        "-NoProfile",
        "-ExecutionPolicy",
        "Bypass",
        "-Command",
        _CHOCOLATEY_BOOTSTRAP_SCRIPT,
    ),
)


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

PRIMARY_TIER = Tier.from_mapping(
    "primary",
    {
        "git": LATEST,
        "python": LATEST,
        "nodejs-lts": LATEST,
        "7zip": LATEST,
        "curl": LATEST,
    },
)

SECONDARY_TIER = Tier.from_mapping(
    "secondary",
    {
        "vscode": LATEST,
        "jq": LATEST,
        "gh": LATEST,
        "nmap": LATEST,
        "wireshark": LATEST,
    },
)

TIERS: tuple[Tier, ...] = (PRIMARY_TIER, SECONDARY_TIER)


# ---------------------------------------------------------------------------
# Secondary ecosystems
# ---------------------------------------------------------------------------

NPM = PackageManagerSpec(
    name="npm",
    executable="npm",
    install_args=("install", "-g"),
    install_flags=("--no-fund", "--no-audit", "--loglevel", "error"),
)

PIP = PackageManagerSpec(
    name="pip",
    executable="pip",
    install_args=("install", "--upgrade"),
    install_flags=("--disable-pip-version-check", "--no-input", "--quiet"),
)

NPM_PACKAGES: PackageList = (
    "typescript",
    "yarn",
    "pnpm",
)

PIP_PACKAGES: PackageList = (
    "requests",
    "virtualenv",
    "pipx",
)

ECOSYSTEMS: tuple[tuple[PackageManagerSpec, PackageList], ...] = (
    (NPM, NPM_PACKAGES),
    (PIP, PIP_PACKAGES),
)


# ---------------------------------------------------------------------------
# Verification sweep
# ---------------------------------------------------------------------------

VERIFICATION_ENTRIES: tuple[VerificationEntry, ...] = (
    VerificationEntry("choco"),
    VerificationEntry("git"),
    VerificationEntry("python"),
    VerificationEntry("node"),
    VerificationEntry("npm"),
    VerificationEntry("pip"),
    VerificationEntry("curl"),
    VerificationEntry("code"),
    VerificationEntry("jq"),
    VerificationEntry("gh"),
)
