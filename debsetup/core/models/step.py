"""Step outcome model — how one setup step ended, and the step names."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from debsetup.core.models.packages import CATEGORIES

# Every step of a run, in execution order. Also the names accepted by
# ``skip`` in setup.yml and ``--skip`` on the CLI.
STEP_ORDER: tuple[str, ...] = (
    "gum",
    "repositories",
    *CATEGORIES,
    "builds",
    "local-bin",
    "oh-my-posh",
    "prebuilt",
    "eza",
    "pipx",
    "ml4w-apps",
    "flatpaks",
    "grimblast",
    "cursors",
    "fonts",
    "icons",
)


class StepStatus(StrEnum):
    """Outcome of one setup step."""

    OK = "ok"
    SKIPPED = "skipped"     # nothing to do, or disabled in setup.yml
    WARNING = "warning"     # optional part missing or failed, run continues
    FAILED = "failed"


class StepOutcome(BaseModel):
    """One line of the run summary."""

    name: str
    status: StepStatus = StepStatus.OK
    detail: str = ""
