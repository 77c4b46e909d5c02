"""
Static data — the package catalog and source-build recipes.

The catalog is loaded from ``packages.yml`` next to this module and
validated into a PackageCatalog::

    from debsetup.core.data import load_catalog

    catalog = load_catalog()
    request = catalog.resolve(Variant.UBUNTU)
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from debsetup.core.models.packages import PackageCatalog

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

CATALOG_FILE = _DATA_DIR / "packages.yml"


class CatalogError(Exception):
    """Raised when the package catalog cannot be loaded."""


def load_catalog(path: Path | None = None) -> PackageCatalog:
    """Load and validate the package catalog.

    Args:
        path: Alternate catalog file (default: the bundled packages.yml).

    Raises:
        CatalogError: file unreadable, not YAML, or fails validation.
    """
    path = path or CATALOG_FILE
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CatalogError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        catalog = PackageCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid package catalog {path}: {e}") from e

    logger.debug(
        "Loaded package catalog from %s (%d categories)", path, len(catalog.categories),
    )
    return catalog
