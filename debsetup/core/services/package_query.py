"""
Installed-set query — is a package already on the system?

Read-only probe of the dpkg database. Answers are never cached: every
call asks dpkg again, so a package installed earlier in the same run
is seen immediately.
"""

from __future__ import annotations

import logging

from debsetup.adapters.base import CommandRunner
from debsetup.core.models.command import EXIT_NOT_FOUND

logger = logging.getLogger(__name__)

INSTALLED_MARKER = "install ok installed"


def is_installed(runner: CommandRunner, package: str) -> bool:
    """Check if a single package is installed.

    Runs ``dpkg-query -W -f=${Status} PKG`` and tests the status field.

    Returns:
        True if installed. Unknown packages, a missing dpkg-query, or any
        other failure all report False.
    """
    result = runner.run(["dpkg-query", "-W", "-f=${Status}", package])
    if result.returncode == EXIT_NOT_FOUND:
        logger.warning("dpkg-query not found while checking %s", package)
    return INSTALLED_MARKER in result.stdout


def check_packages(runner: CommandRunner, packages: list[str]) -> dict[str, list[str]]:
    """Partition packages into installed and missing, order preserved.

    Returns:
        {"missing": ["pkg1", ...], "installed": ["pkg2", ...]}
    """
    missing: list[str] = []
    installed: list[str] = []
    for pkg in packages:
        if is_installed(runner, pkg):
            installed.append(pkg)
        else:
            missing.append(pkg)
    return {"missing": missing, "installed": installed}
