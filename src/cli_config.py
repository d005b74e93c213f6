"""Runtime configuration for npm-resolve-wesl.

Settings are read from a YAML (or JSON) file and applied onto Constants.
Lookup order for the file:
1. --config argument
2. NPM_RESOLVE_WESL_CONFIG environment variable
3. npm-resolve-wesl.yml / npm-resolve-wesl.yaml in the working directory

Example:

    resolver:
      builtin_namespaces: [constants, test]
      conditions: [node, import]
      extensions: [.js, .json, .node]

An unreadable or malformed file is reported and ignored; configuration never
stops the CLI.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# config key -> Constants attribute
_RESOLVER_KEYS = {
    "builtin_namespaces": "BUILTIN_NAMESPACES",
    "conditions": "RESOLVE_CONDITIONS",
    "extensions": "RESOLVE_EXTENSIONS",
}


def find_config_file(cli_path: Optional[str] = None) -> Optional[str]:
    """Return the configuration file to use, or None."""
    if cli_path:
        return cli_path
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path and env_path.strip():
        return env_path.strip()
    for candidate in Constants.DEFAULT_CONFIG_FILES:
        if os.path.isfile(candidate):
            return candidate
    return None


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML or JSON mapping; {} when absent or invalid."""
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
        logger.error("Failed to load config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", path)
        return {}
    return data


def apply_resolver_config(cfg: Dict[str, Any]) -> None:
    """Apply the ``resolver`` section of a config mapping onto Constants."""
    section = cfg.get("resolver")
    if section is None:
        return
    if not isinstance(section, dict):
        logger.warning("Ignoring 'resolver' config: expected a mapping")
        return
    for key, value in section.items():
        attr = _RESOLVER_KEYS.get(key)
        if attr is None:
            logger.warning("Unknown resolver setting '%s'", key)
            continue
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            logger.warning("Ignoring resolver setting '%s': expected a list of strings", key)
            continue
        setattr(Constants, attr, list(value))
        logger.debug("Config override %s = %s", attr, value)


def apply_config(cli_path: Optional[str] = None) -> Optional[str]:
    """Locate, load and apply configuration. Returns the file used, if any."""
    path = find_config_file(cli_path)
    if path:
        apply_resolver_config(load_config(path))
    return path
