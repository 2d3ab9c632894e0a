"""Configuration loading for identifier defaults.

Precedence, highest first:

1. Environment (``PINREF_DEFAULT_REGISTRY``, ``PINREF_DEFAULT_NAMESPACE``)
2. Config file ``registry`` section (YAML, YML or JSON)
3. Built-in defaults from :class:`Constants`
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from .constants import Constants
from .identifier import IdentifierOptions, new_identifier_options

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a config file exists but cannot be parsed."""


def find_config_file(env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the first existing config file, or None.

    ``PINREF_CONFIG`` wins over the default search locations.
    """
    env = os.environ if env is None else env
    explicit = env.get(Constants.ENV_CONFIG)
    if explicit and explicit.strip():
        return explicit.strip()

    for candidate in Constants.CONFIG_FILES:
        path = os.path.expanduser(candidate)
        if os.path.isfile(path):
            return path
    return None


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load configuration from file.

    Args:
        path: Path to a YAML/JSON config file. When None, the default
            locations are searched.
        env: Environment mapping, defaults to ``os.environ``.

    Returns:
        Configuration dict; empty when no file is found.

    Raises:
        ConfigError: if the file cannot be read or parsed.
    """
    if not path:
        path = find_config_file(env)
        if not path:
            return {}

    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping, got {type(data).__name__}")
    logger.debug("Loaded config from %s", path)
    return data


def identifier_options_from_config(
    config: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> IdentifierOptions:
    """Build IdentifierOptions from environment, config and defaults.

    Args:
        config: Loaded configuration (see :func:`load_config`).
        env: Environment mapping, defaults to ``os.environ``.

    Returns:
        Validated IdentifierOptions.
    """
    env = os.environ if env is None else env
    section = (config or {}).get("registry") or {}
    if not isinstance(section, Mapping):
        raise ConfigError("'registry' config section must be a mapping")

    registry = (
        env.get(Constants.ENV_DEFAULT_REGISTRY)
        or section.get("default_registry")
        or Constants.DEFAULT_REGISTRY
    )
    namespace = (
        env.get(Constants.ENV_DEFAULT_NAMESPACE)
        or section.get("default_namespace")
        or Constants.DEFAULT_NAMESPACE
    )
    return new_identifier_options(str(registry), str(namespace))
