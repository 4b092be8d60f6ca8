"""Configuration loading and search-path selection for the CLI.

Precedence, highest first: command-line flags, environment variables,
configuration file, built-in defaults in ``constants``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Effective settings for one run."""

    search_path: List[str]
    oldest: bool = False
    deps: bool = False
    log_level: Optional[str] = None


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file.

    A missing, unreadable or malformed file is reported and ignored.

    Args:
        path: Path to the file; JSON when it ends in ``.json``, YAML otherwise.

    Returns:
        The top-level mapping, or an empty dict.
    """
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
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", path)
        return {}
    return data


def _path_entries(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.split(Constants.PATH_SEPARATOR)
    if isinstance(value, (list, tuple)):
        return [str(d) for d in value if d]
    logger.warning("Ignoring invalid 'path' setting: %r", value)
    return []


def resolve_search_path(config: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return the ordered search path directories.

    ``LIBRARIAN_PATH`` wins when set and non-empty, then the ``path`` key of
    the configuration, then the built-in default.
    """
    environ = os.environ if environ is None else environ
    env_path = environ.get(Constants.ENV_LIBRARIAN_PATH)
    if env_path:
        return _path_entries(env_path)
    if config.get("path"):
        entries = _path_entries(config["path"])
        if entries:
            return entries
    return _path_entries(Constants.DEFAULT_PATH)


def _config_flag(config: Mapping[str, Any], key: str) -> bool:
    value = config.get(key, False)
    if isinstance(value, bool):
        return value
    logger.warning("Ignoring invalid '%s' setting: %r", key, value)
    return False


def build_settings(args, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Combine parsed arguments, environment and configuration file."""
    environ = os.environ if environ is None else environ
    config_path = getattr(args, "CONFIG", None) or environ.get(Constants.ENV_LIBRARIAN_CONFIG)
    config = load_config(config_path)
    return Settings(
        search_path=resolve_search_path(config, environ),
        oldest=bool(getattr(args, "OLDEST", False)) or _config_flag(config, "oldest"),
        deps=bool(getattr(args, "DEPS", False)) or _config_flag(config, "deps"),
        log_level=(
            getattr(args, "LOG_LEVEL", None)
            or environ.get(Constants.ENV_LOG_LEVEL)
            or config.get("log_level")
        ),
    )
