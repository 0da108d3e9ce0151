"""Build configuration — project-level .mcrc.json support.

Loads settings from .mcrc.json (or mc.config.json) found in the current
directory or any parent. Values given on the command line win over the file,
and the file wins over the defaults below.

Example .mcrc.json:
    {
      "source": "src/index.mc",
      "output": "build/index.js",
      "runtime": "node",
      "run": false
    }
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class MCConfig:
    """Where to read, where to write, and what to run."""
    source: str = "index.mc"
    output: str = "index.js"
    # Executable that runs the generated file
    runtime: str = "node"
    run: bool = True
    verbose: bool = False

    def merged(self, **overrides: Any) -> "MCConfig":
        """Copy of this config with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


# Config file names (in priority order)
_CONFIG_FILES = [
    ".mcrc.json",
    "mc.config.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> MCConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, or it cannot be read, returns defaults.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return MCConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("ignoring config file %s: %s", path, e)
        return MCConfig()

    if not isinstance(data, dict):
        logger.warning("ignoring config file %s: top level is not an object", path)
        return MCConfig()

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> MCConfig:
    """Convert a parsed dict to MCConfig, keeping defaults for bad values."""
    config = MCConfig()

    for key in ("source", "output", "runtime"):
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            setattr(config, key, str(value))
        else:
            logger.warning("config key '%s' must be a string, got %r", key, value)

    for key in ("run", "verbose"):
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, bool):
            setattr(config, key, value)
        else:
            logger.warning("config key '%s' must be true or false, got %r", key, value)

    known = {f.name for f in dataclasses.fields(MCConfig)}
    for key in data:
        if key not in known:
            logger.debug("unknown config key '%s'", key)

    return config
