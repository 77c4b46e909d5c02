"""
Setup configuration — loaded from setup.yml (optional).

Everything has a sensible default for a real host; the file exists to
point the installer at a different setup directory, relocate paths for
testing, add packages, or skip steps.
"""

from __future__ import annotations

import platform
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from debsetup.core.models.packages import CATEGORIES
from debsetup.core.models.step import STEP_ORDER


def _default_pkgconfig_dir() -> str:
    """Debian multiarch pkg-config directory for this machine."""
    machine = platform.machine() or "x86_64"
    return f"/usr/lib/{machine}-linux-gnu/pkgconfig"


DEFAULT_PIPX_TOOLS = ["hyprshade", "pywalfox", "waypaper", "pywal"]


class PathsConfig(BaseModel):
    """Host paths read or written during setup."""

    os_release: str = "/etc/os-release"
    apt_sources_dir: str = "/etc/apt/sources.list.d"
    keyrings_dir: str = "/etc/apt/keyrings"
    pkgconfig_dir: str = Field(default_factory=_default_pkgconfig_dir)
    install_prefix: str = "/usr/local"
    system_bin: str = "/usr/bin"
    workspace_dir: str | None = None   # None → system temp dir
    setup_dir: str = "."               # collaborator scripts live here
    local_bin: str = "~/.local/bin"

    @property
    def local_bin_path(self) -> Path:
        return Path(self.local_bin).expanduser()

    @property
    def setup_path(self) -> Path:
        return Path(self.setup_dir).expanduser().resolve()


class SetupConfig(BaseModel):
    """Root configuration object."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    packages: dict[str, list[str]] = Field(default_factory=dict)
    skip: list[str] = Field(default_factory=list)
    pipx_tools: list[str] = Field(default_factory=lambda: list(DEFAULT_PIPX_TOOLS))

    @field_validator("packages")
    @classmethod
    def _known_categories(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = sorted(set(value) - set(CATEGORIES))
        if unknown:
            raise ValueError(
                f"unknown package categories: {', '.join(unknown)} "
                f"(expected one of: {', '.join(CATEGORIES)})"
            )
        return value

    @field_validator("skip")
    @classmethod
    def _known_steps(cls, value: list[str]) -> list[str]:
        unknown = [name for name in value if name not in STEP_ORDER]
        if unknown:
            raise ValueError(f"unknown setup steps: {', '.join(unknown)}")
        return value

    def is_skipped(self, step: str) -> bool:
        """Whether the named step was disabled in setup.yml."""
        return step in self.skip
