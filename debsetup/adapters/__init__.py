"""Adapters — how the installer talks to the host.

Public re-exports for convenient access.
"""

from debsetup.adapters.base import CommandRunner
from debsetup.adapters.mock import MockRunner
from debsetup.adapters.shell.command import ShellCommandRunner

__all__ = [
    "CommandRunner",
    "MockRunner",
    "ShellCommandRunner",
]
