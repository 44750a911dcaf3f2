"""Loading print configuration from YAML files.

A config file is a YAML mapping using the keys of PrintConfig::

    justification: left
    padding: 2
    pad_char: "."
    show_headers: true

The file named by the ``WRITABLE_TABLE_CONFIG`` environment variable is
used when no explicit path is given.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ValidationError
from .models import PrintConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WRITABLE_TABLE_CONFIG"
"""Environment variable naming the default config file."""


def resolve_config_path(explicit: str | os.PathLike[str] | None = None) -> Path | None:
    """
    Pick the config file to load.

    Args:
        explicit: Path given by the caller (e.g. a CLI option)

    Returns:
        The explicit path, else the path from WRITABLE_TABLE_CONFIG,
        else None.
    """
    if explicit:
        return Path(explicit)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return None


def load_print_config(
    path: str | os.PathLike[str],
    base: PrintConfig | None = None,
) -> PrintConfig:
    """
    Load a PrintConfig from a YAML file.

    Keys present in the file override ``base`` (defaults when omitted).
    An empty file yields ``base`` unchanged.

    Raises:
        ValidationError: If the file is unreadable, is not a mapping, or
            holds invalid values
    """
    config_path = Path(path)
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ValidationError("config", str(config_path), f"Cannot read file: {e}") from e
    except yaml.YAMLError as e:
        raise ValidationError("config", str(config_path), f"Invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("config", str(config_path), "YAML file must contain a mapping")

    merged: dict[str, Any] = (base or PrintConfig()).to_dict()
    merged.update(data)
    config = PrintConfig.from_dict(merged)
    logger.debug("Loaded print config from %s: %s", config_path, config)
    return config
