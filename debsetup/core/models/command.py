"""
Command result model — the execution contract with the host.

Every external invocation (apt, dpkg-query, git, cmake, curl, ...) goes
through a CommandRunner and comes back as a CommandResult. Runners
NEVER raise for a failing command — the exit status is captured here
and callers decide whether it is fatal.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

# Conventional shell exit codes for "could not even start the command"
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


class CommandResult(BaseModel):
    """Outcome of one external command."""

    argv: list[str]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    sudo: bool = False

    @property
    def ok(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def failed(self) -> bool:
        return not self.ok

    @property
    def command_line(self) -> str:
        """The argv joined for log output."""
        prefix = "sudo " if self.sudo else ""
        return prefix + " ".join(self.argv)

    @classmethod
    def success(cls, argv: list[str], stdout: str = "", **kwargs: Any) -> CommandResult:
        """Create a success result."""
        return cls(argv=list(argv), returncode=0, stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        argv: list[str],
        returncode: int = 1,
        stderr: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a failure result."""
        if returncode == 0:
            raise ValueError("failure result needs a non-zero return code")
        return cls(argv=list(argv), returncode=returncode, stderr=stderr, **kwargs)
