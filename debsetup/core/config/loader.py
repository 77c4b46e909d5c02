"""
Configuration loader — reads setup.yml into a SetupConfig.

The file is optional: without one every setting takes its default,
which targets the real host. It reads YAML, validates against the
Pydantic schema, and returns a typed config object.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from debsetup.core.models.config import SetupConfig

logger = logging.getLogger(__name__)

# Default config filename
SETUP_CONFIG_FILE = "setup.yml"

# Environment override for the config location
CONFIG_ENV_VAR = "DEBSETUP_CONFIG"


class ConfigError(Exception):
    """Raised when setup configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate setup.yml.

    ``$DEBSETUP_CONFIG`` wins when set. Otherwise search from the given
    directory upwards, so commands work from subdirectories of the
    dotfiles checkout.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to setup.yml, or None if not found.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETUP_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> SetupConfig:
    """Load and validate setup configuration.

    Args:
        path: Explicit path to setup.yml. If None, searches for one and
            falls back to defaults when none exists.

    Returns:
        Validated SetupConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", SETUP_CONFIG_FILE)
            return SetupConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading setup config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return SetupConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = SetupConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid setup configuration: {e}") from e

    # Relative setup_dir is relative to the config file, not the cwd
    setup_dir = Path(config.paths.setup_dir).expanduser()
    if not setup_dir.is_absolute():
        config.paths.setup_dir = str((path.parent / setup_dir).resolve())

    logger.debug("Loaded setup config (%d skipped steps)", len(config.skip))
    return config
