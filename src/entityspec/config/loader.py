from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("entityspec.config.yaml")

DEFAULT_CONFIG: Dict[str, Dict[str, Any]] = {
    "database": {
        "url": "sqlite:///entityspec.db",
        "echo": False,
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fill missing sections/keys from DEFAULT_CONFIG."""
    merged = deepcopy(config)
    for section, defaults in DEFAULT_CONFIG.items():
        user_section = merged.get(section) or {}
        if not isinstance(user_section, dict):
            raise ValueError(f"Config section '{section}' must be a dictionary")
        merged[section] = {**defaults, **user_section}
    return merged


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load engine configuration from YAML file.

    Args:
        path: Optional path to the config file. Defaults to entityspec.config.yaml

    Returns:
        Dictionary with defaults applied for every missing key

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the document is not a dictionary
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    return _merge_defaults(config)


def default_config() -> Dict[str, Any]:
    return deepcopy(DEFAULT_CONFIG)


def get_database_url(config: Dict[str, Any] | None = None) -> str:
    if config is None:
        config = load_config()
    return config.get("database", {}).get("url") or DEFAULT_CONFIG["database"]["url"]


def apply_logging_config(config: Dict[str, Any]) -> None:
    """Configure package logging from the 'logging' section."""
    from ..utils.logging import configure_logging

    configure_logging(config.get("logging", {}).get("level", "INFO"))
