"""
Setup context — the single value every step receives.

Built ONCE at the start of a run, right after variant detection:

    - CLI:    main.py → use_cases.setup.build_context(...)
    - Tests:  SetupContext(variant=..., config=..., runner=MockRunner())

Steps never look up the variant or config from module state; they read
it from the context they were handed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from debsetup.adapters.base import CommandRunner
from debsetup.core.models.config import SetupConfig
from debsetup.core.models.variant import Variant


def detect_jobs() -> int:
    """Logical core count, used as the build parallelism hint."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class SetupContext:
    """Immutable run configuration."""

    variant: Variant
    runner: CommandRunner
    config: SetupConfig = field(default_factory=SetupConfig)
    jobs: int = field(default_factory=detect_jobs)

    @property
    def paths(self):
        return self.config.paths
