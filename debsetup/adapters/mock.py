"""
Mock runner — test double for every host interaction.

Used by the test-suite and by ``--mock`` mode to walk through a whole
setup run without touching the host. Records every invocation and can
be scripted per argv prefix.

Built-in behaviour so that idempotence is observable:
    - ``dpkg-query -W -f=${Status} PKG`` answers from ``installed``
    - a successful ``apt install ... PKGS`` adds PKGS to ``installed``
    - ``which(name)`` answers from ``available``
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from debsetup.adapters.base import CommandRunner
from debsetup.core.models.command import CommandResult


@dataclass
class MockCall:
    """One recorded invocation."""

    argv: list[str]
    sudo: bool = False
    cwd: str | None = None
    input: str | None = None
    env: dict[str, str] = field(default_factory=dict)


class MockRunner(CommandRunner):
    """Scriptable in-memory runner.

    By default every command succeeds with ``default_stdout``.
    """

    def __init__(
        self,
        available: Iterable[str] = (),
        installed: Iterable[str] = (),
        default_stdout: str = "",
        runner_name: str = "mock",
    ):
        self._name = runner_name
        self.available: set[str] = set(available)
        self.installed: set[str] = set(installed)
        self._default_stdout = default_stdout
        self._responses: list[tuple[list[str], CommandResult]] = []
        self._call_log: list[MockCall] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[MockCall]:
        """All invocations this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[list[str]]:
        """Just the argv of every call, in order."""
        return [c.argv for c in self._call_log]

    def calls_matching(self, *prefix: str) -> list[MockCall]:
        """Calls whose argv starts with ``prefix``."""
        want = list(prefix)
        return [c for c in self._call_log if c.argv[: len(want)] == want]

    def make_available(self, *names: str) -> None:
        """Make commands resolvable through ``which``."""
        self.available.update(names)

    def set_response(self, prefix: Sequence[str], result: CommandResult) -> None:
        """Answer every command starting with ``prefix`` with ``result``.

        Later registrations win over earlier ones.
        """
        self._responses.append((list(prefix), result))

    def set_output(self, prefix: Sequence[str], stdout: str) -> None:
        """Shortcut for a successful response with fixed stdout."""
        self.set_response(prefix, CommandResult.success(list(prefix), stdout=stdout))

    def set_failure(
        self,
        prefix: Sequence[str],
        returncode: int = 1,
        error: str = "Mock failure",
    ) -> None:
        """Configure commands starting with ``prefix`` to fail."""
        self.set_response(
            prefix,
            CommandResult.failure(list(prefix), returncode=returncode, stderr=error),
        )

    def which(self, name: str) -> str | None:
        if name in self.available:
            return f"/usr/bin/{name}"
        return None

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
        self._call_log.append(
            MockCall(argv=argv, sudo=sudo, cwd=cwd, input=input, env=dict(env or {}))
        )

        scripted = self._lookup(argv)
        if scripted is not None:
            result = scripted.model_copy(update={"argv": argv, "sudo": sudo})
        elif argv[:1] == ["dpkg-query"]:
            result = self._dpkg_query(argv)
        else:
            result = CommandResult.success(argv, stdout=self._default_stdout, sudo=sudo)

        if result.ok and argv[:2] == ["apt", "install"]:
            self.installed.update(a for a in argv[2:] if not a.startswith("-"))

        return result

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._call_log.clear()
        self._responses.clear()

    # ── Internals ───────────────────────────────────────────────

    def _lookup(self, argv: list[str]) -> CommandResult | None:
        for prefix, result in reversed(self._responses):
            if argv[: len(prefix)] == prefix:
                return result
        return None

    def _dpkg_query(self, argv: list[str]) -> CommandResult:
        package = argv[-1]
        if package in self.installed:
            return CommandResult.success(argv, stdout="install ok installed")
        return CommandResult.failure(
            argv,
            returncode=1,
            stderr=f"dpkg-query: no packages found matching {package}",
        )
