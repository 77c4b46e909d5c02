"""
Runner base — the contract between the installer and the host.

Every side effect on the host that needs an external program goes
through a CommandRunner. Services never call subprocess directly,
which lets tests substitute MockRunner and assert on invocations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from debsetup.core.models.command import CommandResult


class CommandRunner(ABC):
    """Abstract base class for command runners.

    Runners NEVER raise for a failing or missing command. Failures are
    captured in the CommandResult (127 = not found, 126 = could not run).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Runner identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def run(
        self,
        cmd: Sequence[str],
        *,
        sudo: bool = False,
        cwd: str | None = None,
        input: str | None = None,
        env: Mapping[str, str] | None = None,
        capture: bool = True,
    ) -> CommandResult:
        """Run one command to completion.

        Args:
            cmd: argv list.
            sudo: Run with elevated privileges.
            cwd: Working directory for the command.
            input: Text piped to the command's stdin.
            env: Extra environment variables on top of the current ones.
            capture: Capture stdout/stderr. When False, output streams
                to the terminal and the result carries only the exit code.
        """

    @abstractmethod
    def which(self, name: str) -> str | None:
        """Resolve a command name on PATH, or None."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
