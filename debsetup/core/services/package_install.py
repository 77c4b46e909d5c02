"""
Batch installer — one apt transaction per request list.

Already-installed packages are filtered out first, so re-running setup
on a provisioned host performs no package-manager call at all.
"""

from __future__ import annotations

import logging

from debsetup.core.context import SetupContext
from debsetup.core.errors import PackageInstallError
from debsetup.core.models.packages import dedupe
from debsetup.core.services.package_query import is_installed

logger = logging.getLogger(__name__)

APT_INSTALL = ["apt", "install", "-y"]


def install_packages(ctx: SetupContext, packages: list[str]) -> list[str]:
    """Install every package of ``packages`` that is not installed yet.

    Args:
        ctx: Setup context (runner is used for queries and the install).
        packages: Requested names, in order. Duplicates are ignored.

    Returns:
        The packages passed to apt, or ``[]`` if nothing was needed.

    Raises:
        PackageInstallError: apt exited non-zero. The whole transaction
            is considered failed; nothing is retried.
    """
    to_install: list[str] = []
    for pkg in dedupe(packages):
        if is_installed(ctx.runner, pkg):
            logger.info("%s is already installed.", pkg)
            continue
        to_install.append(pkg)

    if not to_install:
        return []

    cmd = APT_INSTALL + to_install
    logger.debug("Installing %d package(s): %s", len(to_install), " ".join(to_install))
    result = ctx.runner.run(cmd, sudo=True, capture=False)
    if not result.ok:
        raise PackageInstallError(
            f"apt install failed (exit {result.returncode}): {' '.join(to_install)}",
            argv=cmd,
            exit_code=result.returncode,
        )
    return to_install


def apt_update(ctx: SetupContext) -> None:
    """Refresh the local package index."""
    cmd = ["apt", "update"]
    result = ctx.runner.run(cmd, sudo=True, capture=False)
    if not result.ok:
        raise PackageInstallError(
            f"apt update failed (exit {result.returncode})",
            argv=cmd,
            exit_code=result.returncode,
        )
