"""
Installer prerequisites — tools the setup itself relies on.

gum drives the interactive prompts of the collaborator scripts, so it
is ensured before anything else runs.
"""

from __future__ import annotations

import logging

from debsetup.core.context import SetupContext
from debsetup.core.models.step import StepStatus
from debsetup.core.models.variant import Variant
from debsetup.core.services.package_install import apt_update, install_packages
from debsetup.core.services.repositories import add_charm_repository

logger = logging.getLogger(__name__)


def ensure_gum(ctx: SetupContext) -> StepStatus:
    """Install gum unless it is already on PATH.

    PikaOS packages gum natively; every other variant gets the Charm
    repository first.
    """
    if ctx.runner.which("gum"):
        logger.info("gum is already installed")
        return StepStatus.SKIPPED

    logger.info("The installer requires gum. gum will be installed now")
    if ctx.variant != Variant.PIKAOS:
        add_charm_repository(ctx)
        apt_update(ctx)

    install_packages(ctx, ["gum"])
    return StepStatus.OK
