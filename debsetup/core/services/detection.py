"""
Variant detection — which Debian flavour is this host?

Read-only probes of two pieces of static host state, checked in a fixed
priority order:

    1. apt ``*.sources`` entries mention "pika"   → pikaos
    2. os-release mentions "Ubuntu"               → ubuntu
    3. anything else                              → debian

There is no error path. Missing or unreadable files simply count as
"no evidence" and detection falls through to the default.
"""

from __future__ import annotations

import logging
from pathlib import Path

from debsetup.core.models.config import PathsConfig
from debsetup.core.models.variant import Variant

logger = logging.getLogger(__name__)

PIKA_MARKER = "pika"
UBUNTU_MARKER = "Ubuntu"


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def sources_mention(sources_dir: Path, marker: str, pattern: str = "*") -> bool:
    """Whether any apt source entry under ``sources_dir`` contains ``marker``."""
    if not sources_dir.is_dir():
        return False
    for entry in sorted(sources_dir.glob(pattern)):
        if entry.is_file() and marker in _read_text(entry):
            return True
    return False


def detect_variant(paths: PathsConfig | None = None) -> Variant:
    """Classify the running distribution.

    Args:
        paths: Where to find os-release and the apt sources directory
            (defaults to the real system locations).

    Returns:
        Exactly one Variant. Pika sources win over an Ubuntu os-release.
    """
    paths = paths or PathsConfig()

    if sources_mention(Path(paths.apt_sources_dir), PIKA_MARKER, "*.sources"):
        variant = Variant.PIKAOS
    elif UBUNTU_MARKER in _read_text(Path(paths.os_release)):
        variant = Variant.UBUNTU
    else:
        variant = Variant.DEBIAN

    logger.debug("Detected distribution variant: %s", variant)
    return variant
