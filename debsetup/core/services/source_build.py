"""
Source-build fallback — tools with no usable apt package.

Each target goes through check → prepare → clone → build → install in
a fresh temporary workspace. A failing stage is reported, the workspace
is removed, and a FAILED result is returned; it never aborts the run.
The workspace is removed on every path (``try/finally``).

Commands get their working directory passed explicitly, so the
process' own working directory is never changed.
"""

from __future__ import annotations

import logging
import re
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path

from debsetup.core.context import SetupContext
from debsetup.core.data.build_targets import BUILD_TARGETS
from debsetup.core.models.build import BuildResult, BuildStatus, BuildTarget
from debsetup.core.services.package_install import install_packages
from debsetup.core.services.system_files import write_root_file

logger = logging.getLogger(__name__)

_STAGE_ERRORS = {
    "workspace": "Could not create a build workspace for {name}",
    "clone": "Failed to clone {name} repository",
    "configure": "Configuration of {name} failed",
    "build": "Build of {name} failed",
    "install": "Installation of {name} failed",
}


# ── hyprwayland-scanner pkg-config shim ────────────────────────

SCANNER = "hyprwayland-scanner"
# Used when the scanner's --version output cannot be parsed. Not
# validated against the installed package.
SCANNER_FALLBACK_VERSION = "0.4.5"

_VERSION_RE = re.compile(r"\d+\.\d+\.\d+")

SCANNER_PC_TEMPLATE = """\
prefix=/usr
bindir=${{prefix}}/bin

Name: hyprwayland-scanner
Description: Hyprland wayland protocol scanner
Version: {version}
"""


def probe_scanner_version(ctx: SetupContext) -> str:
    """Version reported by ``hyprwayland-scanner --version``, or the fallback."""
    result = ctx.runner.run([SCANNER, "--version"])
    match = _VERSION_RE.search(result.stdout) if result.ok else None
    if match:
        return match.group(0)
    logger.warning(
        "Could not read %s version, assuming %s", SCANNER, SCANNER_FALLBACK_VERSION,
    )
    return SCANNER_FALLBACK_VERSION


def ensure_scanner_pkgconfig(ctx: SetupContext) -> bool:
    """Create a minimal ``hyprwayland-scanner.pc`` if pkg-config can't find one.

    Some packagings ship only the CMake config for the scanner, while
    hyprpicker's CMakeLists.txt looks it up through pkg-config.

    Returns:
        True if a descriptor was written.
    """
    if ctx.runner.run(["pkg-config", "--exists", SCANNER]).ok:
        return False

    logger.info("Creating pkg-config file for %s...", SCANNER)
    version = probe_scanner_version(ctx)
    path = str(Path(ctx.paths.pkgconfig_dir) / f"{SCANNER}.pc")
    result = write_root_file(ctx.runner, path, SCANNER_PC_TEMPLATE.format(version=version))
    if not result.ok:
        logger.warning("Could not write %s: %s", path, result.stderr.strip())
        return False
    return True


PREPARE_HOOKS: dict[str, Callable[[SetupContext], bool]] = {
    "hyprwayland-scanner-pc": ensure_scanner_pkgconfig,
}


# ── Build ──────────────────────────────────────────────────────


def _substitute_build_vars(
    command: list[str],
    variables: dict[str, str],
) -> list[str]:
    """Replace ``{var}`` placeholders in a command array."""
    result: list[str] = []
    for token in command:
        for key, value in variables.items():
            token = token.replace(f"{{{key}}}", str(value))
        result.append(token)
    return result


def _fail(target: BuildTarget, stage: str, workspace: str | None, detail: str = "") -> BuildResult:
    message = _STAGE_ERRORS[stage].format(name=target.name)
    logger.error("Error: %s", message)
    if detail:
        logger.debug("%s", detail)
    return BuildResult(
        tool=target.name,
        status=BuildStatus.FAILED,
        stage=stage,
        message=message,
        workspace=workspace,
    )


def _clone_and_build(ctx: SetupContext, target: BuildTarget, workspace: str) -> BuildResult:
    runner = ctx.runner

    clone = runner.run(
        ["git", "clone", "--depth", "1", target.repo_url],
        cwd=workspace,
        capture=False,
    )
    if not clone.ok:
        return _fail(target, "clone", workspace, clone.stderr)

    source_dir = str(Path(workspace) / target.repo_dir)
    variables = {"nproc": str(ctx.jobs), "prefix": ctx.paths.install_prefix}

    for stage in target.stages:
        argv = _substitute_build_vars(stage.argv, variables)
        result = runner.run(argv, sudo=stage.sudo, cwd=source_dir, capture=False)
        if not result.ok:
            return _fail(target, stage.name, workspace, result.stderr)

    logger.info("%s installed successfully", target.name)
    return BuildResult(
        tool=target.name,
        status=BuildStatus.INSTALLED,
        message=f"{target.name} installed to {ctx.paths.install_prefix}",
        workspace=workspace,
    )


def build_from_source(ctx: SetupContext, target: BuildTarget) -> BuildResult:
    """Build and install one target unless its command already exists.

    Raises:
        PackageInstallError: installing the build dependencies failed.
            This is an apt transaction failure and aborts the run.
    """
    if ctx.runner.which(target.name):
        logger.info("%s is already installed", target.name)
        return BuildResult(tool=target.name, status=BuildStatus.SKIPPED)

    logger.info("Building %s from source...", target.name)

    install_packages(ctx, target.build_deps)
    if target.prepare:
        PREPARE_HOOKS[target.prepare](ctx)

    try:
        workspace = tempfile.mkdtemp(
            prefix=f"debsetup-{target.name}-",
            dir=ctx.paths.workspace_dir,
        )
    except OSError as e:
        return _fail(target, "workspace", None, str(e))

    try:
        return _clone_and_build(ctx, target, workspace)
    finally:
        shutil.rmtree(workspace, ignore_errors=True)


def get_target(name: str) -> BuildTarget | None:
    """Look up a registered build target by command name."""
    for target in BUILD_TARGETS:
        if target.name == name:
            return target
    return None


def build_all(ctx: SetupContext) -> list[BuildResult]:
    """Run every registered source build. All are attempted."""
    return [build_from_source(ctx, target) for target in BUILD_TARGETS]
