"""
Setup use case — the full provisioning run, step by step.

Order:
    gum → repositories → general/apps/tools/distro/hyprland packages
    → source builds → ~/.local/bin → oh-my-posh → prebuilt → eza
    → pipx → ml4w-apps → flatpaks → grimblast → cursors → fonts → icons

The variant is detected ONCE and frozen into the SetupContext. A fatal
error (apt, repository registration, collaborator script) stops the run
at that step; the result carries the failing command's exit code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from debsetup.adapters.base import CommandRunner
from debsetup.core.context import SetupContext, detect_jobs
from debsetup.core.data import load_catalog
from debsetup.core.errors import SetupError
from debsetup.core.models.build import BuildResult, BuildStatus
from debsetup.core.models.config import SetupConfig
from debsetup.core.models.packages import CATEGORIES, PackageCatalog, PackageRequestSet
from debsetup.core.models.step import StepOutcome, StepStatus
from debsetup.core.models.variant import Variant
from debsetup.core.services.collaborators import run_collaborator
from debsetup.core.services.detection import detect_variant
from debsetup.core.services.package_install import install_packages
from debsetup.core.services.prerequisites import ensure_gum
from debsetup.core.services.repositories import setup_repositories
from debsetup.core.services.source_build import build_all
from debsetup.core.services.user_tools import (
    ensure_local_bin,
    install_eza,
    install_grimblast,
    install_oh_my_posh,
    install_pipx_tools,
)

logger = logging.getLogger(__name__)

CATEGORY_MESSAGES = {
    "general": "Installing general packages...",
    "apps": "Installing applications...",
    "tools": "Installing tools...",
    "distro": "Installing Debian-specific packages...",
    "hyprland": "Installing Hyprland packages...",
}

@dataclass
class SetupResult:
    """Outcome of a provisioning run."""

    variant: Variant | None = None
    request: PackageRequestSet | None = None
    steps: list[StepOutcome] = field(default_factory=list)
    builds: list[BuildResult] = field(default_factory=list)
    error: str | None = None
    failed_command: list[str] = field(default_factory=list)
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def warnings(self) -> list[StepOutcome]:
        return [s for s in self.steps if s.status == StepStatus.WARNING]

    def step(self, name: str) -> StepOutcome | None:
        """Look up the outcome of one step by name."""
        for outcome in self.steps:
            if outcome.name == name:
                return outcome
        return None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "variant": self.variant.value if self.variant else None,
            "ok": self.ok,
            "exit_code": self.exit_code,
            "steps": [s.model_dump(mode="json") for s in self.steps],
            "builds": [b.model_dump(mode="json", exclude={"workspace"}) for b in self.builds],
        }
        if self.error:
            result["error"] = self.error
            result["failed_command"] = self.failed_command
        return result


def build_context(
    config: SetupConfig,
    runner: CommandRunner,
    jobs: int | None = None,
) -> SetupContext:
    """Detect the variant and freeze the run configuration."""
    variant = detect_variant(config.paths)
    return SetupContext(
        variant=variant,
        runner=runner,
        config=config,
        jobs=jobs or detect_jobs(),
    )


def _category_step(request: PackageRequestSet, category: str) -> Callable[[SetupContext], StepOutcome]:
    def step(ctx: SetupContext) -> StepOutcome:
        logger.info(CATEGORY_MESSAGES[category])
        installed = install_packages(ctx, request.get(category))
        if not installed:
            return StepOutcome(name=category, status=StepStatus.SKIPPED, detail="already installed")
        return StepOutcome(name=category, detail=f"{len(installed)} installed")

    return step


def _simple_step(name: str, fn: Callable[[SetupContext], StepStatus]) -> Callable[[SetupContext], StepOutcome]:
    def step(ctx: SetupContext) -> StepOutcome:
        return StepOutcome(name=name, status=fn(ctx))

    return step


def _builds_step(result: SetupResult) -> Callable[[SetupContext], StepOutcome]:
    def step(ctx: SetupContext) -> StepOutcome:
        builds = build_all(ctx)
        result.builds.extend(builds)
        detail = ", ".join(
            f"{b.tool}: {b.status}" + (f" ({b.stage})" if b.stage else "") for b in builds
        )
        if any(b.status == BuildStatus.FAILED for b in builds):
            status = StepStatus.WARNING
        elif all(b.status == BuildStatus.SKIPPED for b in builds):
            status = StepStatus.SKIPPED
        else:
            status = StepStatus.OK
        return StepOutcome(name="builds", status=status, detail=detail)

    return step


def _repositories_step(ctx: SetupContext) -> StepOutcome:
    changed = setup_repositories(ctx)
    return StepOutcome(
        name="repositories",
        status=StepStatus.OK if changed else StepStatus.SKIPPED,
    )


def _collaborator_step(name: str) -> Callable[[SetupContext], StepOutcome]:
    return _simple_step(name, lambda ctx: run_collaborator(ctx, name))


def plan_steps(
    request: PackageRequestSet,
    result: SetupResult,
) -> list[tuple[str, Callable[[SetupContext], StepOutcome]]]:
    """The ordered step table of a run."""
    steps: list[tuple[str, Callable[[SetupContext], StepOutcome]]] = [
        ("gum", _simple_step("gum", ensure_gum)),
        ("repositories", _repositories_step),
    ]
    steps += [(category, _category_step(request, category)) for category in CATEGORIES]
    steps += [
        ("builds", _builds_step(result)),
        ("local-bin", _simple_step("local-bin", ensure_local_bin)),
        ("oh-my-posh", _simple_step("oh-my-posh", install_oh_my_posh)),
        ("prebuilt", _collaborator_step("prebuilt")),
        ("eza", _simple_step("eza", install_eza)),
        ("pipx", _simple_step("pipx", install_pipx_tools)),
        ("ml4w-apps", _collaborator_step("ml4w-apps")),
        ("flatpaks", _collaborator_step("flatpaks")),
        ("grimblast", _simple_step("grimblast", install_grimblast)),
        ("cursors", _collaborator_step("cursors")),
        ("fonts", _collaborator_step("fonts")),
        ("icons", _collaborator_step("icons")),
    ]
    return steps


def run_setup(
    runner: CommandRunner,
    config: SetupConfig | None = None,
    *,
    catalog: PackageCatalog | None = None,
    skip: Iterable[str] = (),
    jobs: int | None = None,
) -> SetupResult:
    """Provision the host.

    Args:
        runner: Command runner (ShellCommandRunner for real runs).
        config: Loaded setup.yml (defaults when None).
        catalog: Package catalog (the bundled one when None).
        skip: Extra step names to skip, on top of ``config.skip``.
        jobs: Build parallelism (logical core count when None).

    Returns:
        SetupResult — never raises for SetupError; the error is recorded
        and the run stops at the failing step.
    """
    config = config or SetupConfig()
    catalog = catalog or load_catalog()
    skipped = set(config.skip) | set(skip)

    ctx = build_context(config, runner, jobs)
    result = SetupResult(variant=ctx.variant)
    result.request = catalog.resolve(ctx.variant, config.packages)

    logger.info("Debian/Ubuntu (%s)", ctx.variant.value)

    for name, step in plan_steps(result.request, result):
        if name in skipped:
            logger.debug("Skipping step %s (disabled)", name)
            result.steps.append(
                StepOutcome(name=name, status=StepStatus.SKIPPED, detail="disabled"),
            )
            continue
        try:
            result.steps.append(step(ctx))
        except SetupError as e:
            logger.error("Error: %s", e)
            result.steps.append(StepOutcome(name=name, status=StepStatus.FAILED, detail=str(e)))
            result.error = str(e)
            result.failed_command = e.argv
            result.exit_code = e.exit_code
            break

    if result.ok:
        logger.info("Setup complete")
    return result
