"""Theme for the CLI's rich console output.

A custom theme is a YAML file with a top-level `theme` mapping of style names
to rich style strings. Missing styles fall back to the defaults:

    theme:
      error: bold magenta
      path: underline green
"""

from pathlib import Path
from typing import Optional

import yaml
from loguru import logger

DEFAULT_THEME = {
    "intro": "bold blue",
    "outtro": "bold blue",
    "info": "bold bright_black",
    "success": "bold green",
    "path": "underline cyan",
    "error": "bold red",
}


def _read_theme(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    theme = config.get("theme") if isinstance(config, dict) else None
    if not isinstance(theme, dict):
        raise ValueError("expected a `theme` mapping")
    return theme


def load_theme(config_path: Optional[str] = None) -> dict:
    """Return the default theme overlaid with styles from `config_path`.

    Unreadable or malformed files are logged and ignored.
    """
    if config_path is None:
        return DEFAULT_THEME.copy()
    path = Path(config_path)
    if not path.exists():
        logger.warning(f"Theme file not found at {path}; using defaults.")
        return DEFAULT_THEME.copy()
    try:
        custom = _read_theme(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring theme file {path}: {e}")
        return DEFAULT_THEME.copy()
    return {**DEFAULT_THEME, **custom}
