import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from config import (
    Config,
    apply_dict_to_dataclass,
    migrate_config,
    parse_config_version,
)
from logging_utils import log_event


def get_config_dir() -> Path:
    """Get config directory in the user's home."""
    config_dir = Path.home() / '.mousequake'
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file() -> Path:
    """Get config file path."""
    return get_config_dir() / 'config.json'


def save_config(config: Config, path: Optional[Path] = None) -> bool:
    """Save config to JSON file."""
    try:
        config_file = Path(path) if path is not None else get_config_file()
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(asdict(config), f, indent=2)
        log_event("INFO", "Config", f"Saved to {config_file}")
        return True
    except OSError as e:
        log_event("ERROR", "Config", "Failed to save", error=e)
        return False


def load_config(path: Optional[Path] = None) -> Config:
    """Load config from JSON file, returns default if not found."""
    try:
        config_file = Path(path) if path is not None else get_config_file()
        if not config_file.exists():
            log_event("INFO", "Config", "No saved config found, using defaults")
            return Config()

        with open(config_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log_event("WARNING", "Config", "Failed to load, using defaults", error=e)
        return Config()

    config = Config()
    apply_dict_to_dataclass(config, data)
    loaded_version = data.get('version') if isinstance(data, dict) else None
    migrate_config(config, loaded_version)
    log_event("INFO", "Config", f"Loaded from {config_file}", version=config.version)

    # Older files are upgraded in place; newer ones are left untouched
    if parse_config_version(loaded_version) < config.version:
        save_config(config, config_file)
    return config
