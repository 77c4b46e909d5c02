"""
Privileged file helpers — writes outside the user's home.

All of these go through the runner with ``sudo=True`` (``tee``,
``install``, ``cp``, ``mkdir``) so they are recorded by MockRunner and
never need the Python process itself to run as root.
"""

from __future__ import annotations

from debsetup.adapters.base import CommandRunner
from debsetup.core.models.command import CommandResult


def write_root_file(runner: CommandRunner, path: str, content: str) -> CommandResult:
    """Write ``content`` to ``path`` as root (``sudo tee``)."""
    return runner.run(["tee", path], sudo=True, input=content)


def make_root_dir(runner: CommandRunner, path: str) -> CommandResult:
    """``sudo mkdir -p path``."""
    return runner.run(["mkdir", "-p", path], sudo=True)


def copy_root_file(runner: CommandRunner, source: str, dest_dir: str) -> CommandResult:
    """``sudo cp source dest_dir``."""
    return runner.run(["cp", source, dest_dir], sudo=True)
