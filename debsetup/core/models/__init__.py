"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from debsetup.core.models import Variant, CommandResult, BuildTarget
"""

from debsetup.core.models.build import BuildResult, BuildStage, BuildStatus, BuildTarget
from debsetup.core.models.command import CommandResult
from debsetup.core.models.config import PathsConfig, SetupConfig
from debsetup.core.models.packages import CATEGORIES, PackageCatalog, PackageRequestSet
from debsetup.core.models.step import STEP_ORDER, StepOutcome, StepStatus
from debsetup.core.models.variant import Variant

__all__ = [
    # build.py
    "BuildResult",
    "BuildStage",
    "BuildStatus",
    "BuildTarget",
    # command.py
    "CommandResult",
    # config.py
    "PathsConfig",
    "SetupConfig",
    # packages.py
    "CATEGORIES",
    "PackageCatalog",
    "PackageRequestSet",
    # step.py
    "STEP_ORDER",
    "StepOutcome",
    "StepStatus",
    # variant.py
    "Variant",
]
