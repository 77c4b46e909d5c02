"""
Shell command runner — execute real commands on the host.

This is the SINGLE PLACE where ``subprocess.run`` is called. Privilege
elevation, environment handling, logging and error capture are all
centralised here.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from collections.abc import Mapping, Sequence

from debsetup.adapters.base import CommandRunner
from debsetup.core.models.command import (
    EXIT_NOT_EXECUTABLE,
    EXIT_NOT_FOUND,
    CommandResult,
)

logger = logging.getLogger(__name__)


class ShellCommandRunner(CommandRunner):
    """Run commands with ``subprocess.run`` and capture their outcome.

    Privileged commands get a ``sudo`` prefix unless the process already
    runs as root. sudo prompts on the controlling terminal as usual.
    """

    @property
    def name(self) -> str:
        return "shell"

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
        argv = list(cmd)
        full = argv
        # ── Sudo handling ──
        if sudo and os.geteuid() != 0:
            full = ["sudo"] + argv

        # ── Environment ──
        run_env = None
        if env:
            run_env = os.environ.copy()
            run_env.update(env)

        logger.debug("Executing: %s (cwd=%s)", " ".join(full), cwd or os.getcwd())
        start = time.monotonic()

        try:
            result = subprocess.run(
                full,
                cwd=cwd,
                input=input,
                env=run_env,
                capture_output=capture,
                text=True,
            )
        except FileNotFoundError as e:
            return CommandResult.failure(
                argv,
                returncode=EXIT_NOT_FOUND,
                stderr=f"Command not found: {e.filename or full[0]}",
                sudo=sudo,
            )
        except OSError as e:
            return CommandResult.failure(
                argv,
                returncode=EXIT_NOT_EXECUTABLE,
                stderr=f"Command execution error: {e}",
                sudo=sudo,
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = result.stdout or ""
        stderr = result.stderr or ""

        if result.returncode != 0:
            logger.debug(
                "Command failed (exit %d): %s%s",
                result.returncode,
                " ".join(full),
                f" — {stderr.strip()[-500:]}" if stderr.strip() else "",
            )

        return CommandResult(
            argv=argv,
            returncode=result.returncode,
            stdout=stdout,
            stderr=stderr,
            duration_ms=elapsed_ms,
            sudo=sudo,
        )

    def which(self, name: str) -> str | None:
        return shutil.which(name)
