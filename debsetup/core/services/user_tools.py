"""
User-level tools — everything installed outside the apt categories.

Shell prompt, prebuilt binaries, isolated Python CLI tools and their
browser integration. Missing optional pieces are warnings; only apt
transactions abort the run.
"""

from __future__ import annotations

import logging

from debsetup.core.context import SetupContext
from debsetup.core.models.step import StepStatus
from debsetup.core.models.variant import Variant
from debsetup.core.services.package_install import install_packages
from debsetup.core.services.system_files import copy_root_file

logger = logging.getLogger(__name__)

OH_MY_POSH_INSTALLER = "https://ohmyposh.dev/install.sh"


# ── ~/.local/bin ──────────────────────────────────────────────


def ensure_local_bin(ctx: SetupContext) -> StepStatus:
    """Create the user-local binary directory."""
    local_bin = ctx.paths.local_bin_path
    if local_bin.is_dir():
        return StepStatus.SKIPPED
    result = ctx.runner.run(["mkdir", "-p", str(local_bin)])
    if not result.ok:
        logger.warning("Warning: could not create %s", local_bin)
        return StepStatus.WARNING
    return StepStatus.OK


# ── Oh My Posh ────────────────────────────────────────────────


def install_oh_my_posh(ctx: SetupContext) -> StepStatus:
    """Run the upstream installer into ~/.local/bin.

    Equivalent of ``curl -s URL | bash -s -- -d ~/.local/bin``.
    """
    runner = ctx.runner
    script = runner.run(["curl", "-s", OH_MY_POSH_INSTALLER])
    if not script.ok or not script.stdout.strip():
        logger.warning("Warning: could not download the Oh My Posh installer")
        return StepStatus.WARNING

    result = runner.run(
        ["bash", "-s", "--", "-d", str(ctx.paths.local_bin_path)],
        input=script.stdout,
        capture=False,
    )
    if not result.ok:
        logger.warning("Warning: Oh My Posh installer exited with %d", result.returncode)
        return StepStatus.WARNING
    return StepStatus.OK


# ── eza ───────────────────────────────────────────────────────


def install_eza(ctx: SetupContext) -> StepStatus:
    """eza from apt on PikaOS, otherwise the bundled prebuilt binary."""
    if ctx.runner.which("eza"):
        logger.info("eza is already installed")
        return StepStatus.SKIPPED

    if ctx.variant == Variant.PIKAOS:
        install_packages(ctx, ["eza"])
        return StepStatus.OK

    prebuilt = ctx.paths.setup_path / "packages" / "eza"
    if not prebuilt.is_file():
        logger.warning("Warning: prebuilt eza not found at %s", prebuilt)
        return StepStatus.WARNING

    logger.info("Installing eza from prebuilt...")
    result = copy_root_file(ctx.runner, str(prebuilt), ctx.paths.system_bin)
    if not result.ok:
        logger.warning("Warning: copying eza failed (exit %d)", result.returncode)
        return StepStatus.WARNING
    return StepStatus.OK


# ── pipx tools ────────────────────────────────────────────────


def _pipx_install_or_upgrade(ctx: SetupContext, tool: str) -> bool:
    runner = ctx.runner
    if runner.run(["pipx", "install", tool], capture=False).ok:
        return True
    if runner.run(["pipx", "upgrade", tool], capture=False).ok:
        return True
    logger.warning("Warning: pipx could not install or upgrade %s", tool)
    return False


def run_pywalfox_hook(ctx: SetupContext) -> StepStatus:
    """Register pywalfox with Firefox (native messaging host)."""
    if ctx.runner.which("pywalfox"):
        binary = "pywalfox"
    else:
        local = ctx.paths.local_bin_path / "pywalfox"
        if not local.is_file():
            logger.warning("Warning: pywalfox not found, skipping Firefox integration")
            return StepStatus.WARNING
        binary = str(local)

    result = ctx.runner.run([binary, "install"], capture=False)
    if not result.ok:
        logger.warning("Warning: pywalfox install exited with %d", result.returncode)
        return StepStatus.WARNING
    return StepStatus.OK


def install_pipx_tools(ctx: SetupContext) -> StepStatus:
    """Install Python CLI tools in isolated pipx environments."""
    logger.info("Installing Python tools via pipx")

    if not ctx.runner.which("pipx"):
        install_packages(ctx, ["pipx"])

    if not ctx.runner.run(["pipx", "ensurepath"]).ok:
        logger.warning("Warning: pipx ensurepath failed")

    status = StepStatus.OK
    for tool in ctx.config.pipx_tools:
        if not _pipx_install_or_upgrade(ctx, tool):
            status = StepStatus.WARNING

    # screeninfo is a library, not a CLI tool: system package
    install_packages(ctx, ["python3-screeninfo"])

    if "pywalfox" in ctx.config.pipx_tools and run_pywalfox_hook(ctx) == StepStatus.WARNING:
        status = StepStatus.WARNING
    return status


# ── grimblast ─────────────────────────────────────────────────


def install_grimblast(ctx: SetupContext) -> StepStatus:
    """Copy the bundled grimblast screenshot script to the system bin."""
    script = ctx.paths.setup_path / "scripts" / "grimblast"
    if not script.is_file():
        logger.warning("Warning: grimblast not found at %s", script)
        return StepStatus.WARNING

    result = copy_root_file(ctx.runner, str(script), ctx.paths.system_bin)
    if not result.ok:
        logger.warning("Warning: copying grimblast failed (exit %d)", result.returncode)
        return StepStatus.WARNING
    return StepStatus.OK
