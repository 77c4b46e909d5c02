"""
Repository bootstrap — extra apt sources needed before installing.

Only Ubuntu needs this: the Hyprland PPA and the Charm repository (for
gum). PikaOS ships everything natively. Plain Debian gets a pointer to
the dependency docs, because the right sources depend on the package
and are left to the operator.

Every registration is idempotent: it is skipped when its marker (a
sources entry or the keyring file) already exists.
"""

from __future__ import annotations

import logging
from pathlib import Path

from debsetup.core.context import SetupContext
from debsetup.core.errors import RepositoryError
from debsetup.core.models.command import CommandResult
from debsetup.core.models.variant import Variant
from debsetup.core.services.detection import sources_mention
from debsetup.core.services.package_install import apt_update
from debsetup.core.services.system_files import make_root_dir, write_root_file

logger = logging.getLogger(__name__)

HYPRLAND_PPA = "ppa:cppiber/hyprland"
HYPRLAND_PPA_MARKER = "cppiber/hyprland"

CHARM_KEY_URL = "https://repo.charm.sh/apt/gpg.key"
CHARM_REPO_URL = "https://repo.charm.sh/apt/"
CHARM_KEYRING = "charm.gpg"
CHARM_LIST = "charm.list"

DEPENDENCIES_DOC_URL = "https://mylinuxforwork.github.io/dotfiles/getting-started/dependencies"


def _check(result: CommandResult, what: str) -> CommandResult:
    if not result.ok:
        raise RepositoryError(
            f"{what} failed (exit {result.returncode}): {result.stderr.strip()}",
            argv=result.argv,
            exit_code=result.returncode,
        )
    return result


def add_hyprland_ppa(ctx: SetupContext) -> bool:
    """Register the Hyprland PPA unless a sources entry already has it.

    Returns:
        True if the PPA was added, False if it was already present.
    """
    if sources_mention(Path(ctx.paths.apt_sources_dir), HYPRLAND_PPA_MARKER):
        logger.debug("Hyprland PPA already registered")
        return False

    logger.info("Adding Hyprland PPA...")
    _check(
        ctx.runner.run(["add-apt-repository", "-y", HYPRLAND_PPA], sudo=True, capture=False),
        "add-apt-repository",
    )
    return True


def charm_keyring_path(ctx: SetupContext) -> Path:
    return Path(ctx.paths.keyrings_dir) / CHARM_KEYRING


def add_charm_repository(ctx: SetupContext) -> bool:
    """Register the signed Charm repository and its key.

    Skipped when the keyring file already exists. Does NOT refresh the
    package index; callers run ``apt update`` once afterwards.

    Returns:
        True if the repository was added.
    """
    keyring = charm_keyring_path(ctx)
    if keyring.exists():
        logger.debug("Charm keyring already present at %s", keyring)
        return False

    logger.info("Adding Charm repository for gum...")
    runner = ctx.runner
    _check(make_root_dir(runner, ctx.paths.keyrings_dir), "Creating keyrings directory")

    key = _check(runner.run(["curl", "-fsSL", CHARM_KEY_URL]), "Downloading Charm signing key")
    _check(
        runner.run(["gpg", "--dearmor", "-o", str(keyring)], sudo=True, input=key.stdout),
        "Importing Charm signing key",
    )

    entry = f"deb [signed-by={keyring}] {CHARM_REPO_URL} * *\n"
    list_path = str(Path(ctx.paths.apt_sources_dir) / CHARM_LIST)
    _check(write_root_file(runner, list_path, entry), f"Writing {list_path}")
    return True


def setup_repositories(ctx: SetupContext) -> bool:
    """Register the extra package sources the variant needs.

    Returns:
        True if the variant needed repository setup (and the index was
        refreshed), False for a no-op.

    Raises:
        RepositoryError: a registration command failed.
        PackageInstallError: ``apt update`` failed.
    """
    if ctx.variant == Variant.UBUNTU:
        logger.info("Setting up Ubuntu repositories...")
        add_hyprland_ppa(ctx)
        add_charm_repository(ctx)
        apt_update(ctx)
        return True

    if ctx.variant == Variant.DEBIAN:
        logger.info("Debian detected - you may need to manually add repositories for some packages")
        logger.info("See: %s", DEPENDENCIES_DOC_URL)

    return False
