"""
debsetup — CLI entrypoint.

Usage:
    debsetup                 # full setup run
    debsetup run --mock      # walk through the run without touching the host
    debsetup detect
    debsetup packages --variant ubuntu
    debsetup build hyprpicker
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from debsetup import __version__
from debsetup.core.data.build_targets import BUILD_TARGETS
from debsetup.core.models.step import STEP_ORDER, StepStatus
from debsetup.core.models.variant import Variant
from debsetup.core.observability.logging_config import resolve_level, setup_logging

_STATUS_STYLE = {
    StepStatus.OK: ("✓", "green"),
    StepStatus.SKIPPED: ("⊘", "white"),
    StepStatus.WARNING: ("⚠️ ", "yellow"),
    StepStatus.FAILED: ("✗", "red"),
}


def _load_config_or_exit(ctx: click.Context):
    from debsetup.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _make_runner(mock: bool):
    if mock:
        from debsetup.adapters.mock import MockRunner

        return MockRunner()
    from debsetup.adapters.shell.command import ShellCommandRunner

    return ShellCommandRunner()


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="debsetup")
@click.option("--verbose", "-v", is_flag=True, help="Timestamped progress output.")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to setup.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """debsetup — Hyprland desktop setup for Debian, Ubuntu and PikaOS."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    level = resolve_level(
        debug=debug,
        verbose=verbose,
        quiet=quiet,
        env_level=os.environ.get("DEBSETUP_LOG_LEVEL"),
    )
    setup_logging(
        level=level,
        log_file=os.environ.get("DEBSETUP_LOG_FILE"),
        log_file_level=os.environ.get("DEBSETUP_LOG_FILE_LEVEL"),
        verbose_format=verbose,
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--mock", is_flag=True, help="Use the mock runner (no real execution).")
@click.option(
    "--skip",
    "skip",
    multiple=True,
    type=click.Choice(STEP_ORDER),
    help="Skip a step (repeatable).",
)
@click.pass_context
def run(ctx: click.Context, as_json: bool, mock: bool, skip: tuple[str, ...]) -> None:
    """Run the full setup.

    Examples:

        debsetup run

        debsetup run --skip flatpaks --skip fonts

        debsetup run --mock
    """
    from debsetup.core.use_cases.setup import run_setup

    config = _load_config_or_exit(ctx)
    result = run_setup(_make_runner(mock), config, skip=skip)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(result.exit_code)
        return

    mode_label = "[mock] " if mock else ""
    variant = result.variant.value if result.variant else "?"
    click.echo()
    click.secho(f"⚡ {mode_label}debsetup — {variant}", fg="cyan", bold=True)
    for step in result.steps:
        icon, color = _STATUS_STYLE[step.status]
        click.secho(f"   {icon} {step.name:<14}", fg=color, nl=False)
        click.echo(f" {step.detail}" if step.detail else "")

    click.echo()
    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red", bold=True)
        sys.exit(result.exit_code)

    if result.warnings:
        click.secho(f"⚠️  Finished with {len(result.warnings)} warning(s)", fg="yellow")
    else:
        click.secho("✅ Setup complete. Please reboot your system.", fg="green", bold=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Show the detected distribution variant."""
    from debsetup.core.services.detection import detect_variant

    config = _load_config_or_exit(ctx)
    variant = detect_variant(config.paths)

    if as_json:
        click.echo(json.dumps({"variant": variant.value, "label": variant.label}))
        return

    click.secho(f"🔍 {variant.label} ({variant.value})", fg="cyan", bold=True)


@cli.command()
@click.option(
    "--variant",
    "variant_name",
    type=click.Choice([v.value for v in Variant]),
    default=None,
    help="Resolve for this variant instead of the detected one.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def packages(ctx: click.Context, variant_name: str | None, as_json: bool) -> None:
    """Show the package lists that a run would install."""
    from debsetup.core.data import CatalogError, load_catalog
    from debsetup.core.services.detection import detect_variant

    config = _load_config_or_exit(ctx)
    variant = Variant(variant_name) if variant_name else detect_variant(config.paths)

    try:
        request = load_catalog().resolve(variant, config.packages)
    except CatalogError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(request.model_dump(mode="json"), indent=2))
        return

    click.secho(f"📦 Packages for {variant.label} ({request.total}):", fg="cyan", bold=True)
    for category, names in request.categories.items():
        click.secho(f"   {category}", fg="white", bold=True)
        for name in names:
            click.echo(f"     • {name}")
    click.echo()


@cli.command()
@click.argument("tool", type=click.Choice([t.name for t in BUILD_TARGETS]))
@click.option("--mock", is_flag=True, help="Use the mock runner (no real execution).")
@click.pass_context
def build(ctx: click.Context, tool: str, mock: bool) -> None:
    """Build one tool from source (skipped if already installed)."""
    from debsetup.core.errors import SetupError
    from debsetup.core.services.source_build import build_from_source, get_target
    from debsetup.core.use_cases.setup import build_context

    target = get_target(tool)
    if target is None:
        raise click.BadParameter(f"unknown build target: {tool}", param_hint="TOOL")

    config = _load_config_or_exit(ctx)
    setup_ctx = build_context(config, _make_runner(mock))

    try:
        result = build_from_source(setup_ctx, target)
    except SetupError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(e.exit_code)

    if result.ok:
        click.secho(f"✅ {result.tool}: {result.status}", fg="green")
    else:
        click.secho(f"❌ {result.tool}: {result.message}", fg="red")
    sys.exit(result.exit_code)


def main() -> None:
    """Entry point for ``python -m debsetup.main``."""
    cli(obj={})


if __name__ == "__main__":
    main()
