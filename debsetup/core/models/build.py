"""
Source-build models — targets built from git when apt has no binary.

Lifecycle of one target:

    check    → command already on PATH?  → SKIPPED
    prepare  → build deps via apt, optional prepare hook
    workspace → fresh temp directory under workspace_dir, or FAILED
    clone    → git clone --depth 1 into a fresh temp workspace
    configure/build → native build system, parallel hint {nproc}
    install  → privileged install into the fixed prefix
    cleanup  → workspace removed, ALWAYS

Terminal states: SKIPPED, INSTALLED, FAILED.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field


class BuildStatus(StrEnum):
    """Terminal state of a source build."""

    SKIPPED = "skipped"
    INSTALLED = "installed"
    FAILED = "failed"


StageName = Literal["workspace", "clone", "configure", "build", "install"]


class BuildStage(BaseModel):
    """One native build-system invocation.

    ``argv`` may contain ``{nproc}`` and ``{prefix}`` placeholders which
    are substituted right before the command runs.
    """

    name: StageName
    argv: list[str]
    sudo: bool = False


class BuildTarget(BaseModel):
    """A tool that is built from source instead of installed via apt."""

    name: str                       # command name, also the PATH probe
    repo_url: str
    build_deps: list[str] = Field(default_factory=list)
    prepare: str = ""               # optional prepare hook name
    stages: list[BuildStage] = Field(default_factory=list)

    @property
    def repo_dir(self) -> str:
        """Directory name ``git clone`` creates for this repository."""
        tail = self.repo_url.rstrip("/").rsplit("/", 1)[-1]
        return tail[:-4] if tail.endswith(".git") else tail


class BuildResult(BaseModel):
    """What happened to one build target."""

    tool: str
    status: BuildStatus
    stage: StageName | None = None  # failing stage, if any
    message: str = ""
    workspace: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != BuildStatus.FAILED

    @property
    def exit_code(self) -> int:
        """Shell-style status: 0 for skipped/installed, 1 for failed."""
        return 0 if self.ok else 1
