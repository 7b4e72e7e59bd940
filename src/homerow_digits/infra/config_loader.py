"""Infrastructure: YAML configuration files.

This module is the **only** place in the codebase that imports ``yaml``.
``OSError`` and ``yaml.YAMLError`` are caught here and re-raised as
:class:`~homerow_digits.exceptions.ConfigFileError`.

Rules
-----
* ``yaml.safe_load`` only.
* A missing file is not an error — defaults apply.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from homerow_digits.config import DigitsConfig, build_config
from homerow_digits.exceptions import ConfigError, ConfigFileError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HOMEROW_DIGITS_CONFIG"


def default_config_path() -> Path:
    """Return the config file location.

    ``$HOMEROW_DIGITS_CONFIG`` wins; otherwise
    ``$XDG_CONFIG_HOME/homerow-digits/config.yaml`` (``~/.config`` when
    unset).
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "homerow-digits" / "config.yaml"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML mapping from *path*.

    Raises
    ------
    ConfigFileError
        When the file cannot be read, is not valid YAML, or its top
        level is not a mapping.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigFileError(f"Cannot read config file {path}: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigFileError(
            f"Config file {path} is not valid YAML.",
            hint=str(exc),
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(
            f"Config file {path} must contain a mapping at the top level.",
        )
    return data


def load_config(path: Path | None = None) -> DigitsConfig:
    """Load a :class:`DigitsConfig` from *path* (default location if ``None``).

    Returns the default configuration when the file does not exist.
    """
    path = path if path is not None else default_config_path()
    if not path.exists():
        logger.debug("No config file at %s; using defaults", path)
        return DigitsConfig()

    data = load_yaml(path)
    try:
        config = build_config(data)
    except ConfigError as exc:
        raise ConfigFileError(f"{path}: {exc}", hint=exc.hint) from exc
    logger.debug("Loaded config from %s", path)
    return config


def dump_config(config: DigitsConfig) -> str:
    """Serialise *config* back to YAML text."""
    return yaml.safe_dump(
        config.model_dump(),
        default_flow_style=None,
        allow_unicode=True,
        sort_keys=False,
    )
