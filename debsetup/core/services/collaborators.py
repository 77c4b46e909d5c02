"""
Collaborator scripts — external setup scripts run in a fixed order.

Fonts, icons, cursors, Flatpaks, ML4W apps and prebuilt binaries are
installed by shell scripts that live in the setup directory. They are
black boxes: run each one to completion, and abort the whole setup if
one exits non-zero.

When the helper library ``_lib.sh`` exists it is sourced first, the
same way the scripts expect to be sourced from the main setup script.
"""

from __future__ import annotations

import logging
from pathlib import Path

from debsetup.core.context import SetupContext
from debsetup.core.errors import CollaboratorError
from debsetup.core.models.step import StepStatus

logger = logging.getLogger(__name__)

HELPER_LIBRARY = "_lib.sh"

# step name → script, in the order a run executes them
COLLABORATOR_SCRIPTS: dict[str, str] = {
    "prebuilt": "_prebuilt.sh",
    "ml4w-apps": "_ml4w-apps.sh",
    "flatpaks": "_flatpaks.sh",
    "cursors": "_cursors.sh",
    "fonts": "_fonts.sh",
    "icons": "_icons.sh",
}


def collaborator_command(setup_dir: Path, script: Path) -> list[str]:
    """argv that runs ``script`` with the helper library sourced first."""
    library = setup_dir / HELPER_LIBRARY
    if library.is_file():
        return [
            "bash", "-c", 'source "$1"; source "$2"',
            "debsetup", str(library), str(script),
        ]
    return ["bash", str(script)]


def run_collaborator(ctx: SetupContext, step: str) -> StepStatus:
    """Run the collaborator script registered for ``step``.

    Returns:
        OK when the script ran, WARNING when the script file is absent.

    Raises:
        CollaboratorError: the script exited non-zero.
    """
    setup_dir = ctx.paths.setup_path
    script = setup_dir / COLLABORATOR_SCRIPTS[step]

    if not script.is_file():
        logger.warning("Warning: %s not found in %s, skipping", script.name, setup_dir)
        return StepStatus.WARNING

    cmd = collaborator_command(setup_dir, script)
    env = {"DISTRO_VARIANT": ctx.variant.value, "SCRIPT_DIR": str(setup_dir)}
    result = ctx.runner.run(cmd, cwd=str(setup_dir), env=env, capture=False)
    if not result.ok:
        raise CollaboratorError(
            f"{script.name} failed (exit {result.returncode})",
            argv=cmd,
            exit_code=result.returncode,
        )
    return StepStatus.OK
