"""
Configuration management for the editor.

Settings are resolved per key in this order:
1. Environment variable (a .env file is loaded by app.py via python-dotenv)
2. config.json next to the executable/project root
3. Built-in default

Keys:
- storage_backend (ORBIT_STORAGE_BACKEND): 'file' or 'http'
- data_path (ORBIT_DATA_PATH): JSON document for the file backend
- api_url (ORBIT_API_URL): site base URL for the http backend
- admin_token (ORBIT_ADMIN_TOKEN): bearer token for the admin API
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from orbit.paths import get_config_path, get_default_graph_path

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "file"

ENV_VARS = {
    "storage_backend": "ORBIT_STORAGE_BACKEND",
    "data_path": "ORBIT_DATA_PATH",
    "api_url": "ORBIT_API_URL",
    "admin_token": "ORBIT_ADMIN_TOKEN",
}


@dataclass
class Settings:
    storage_backend: str = DEFAULT_BACKEND
    data_path: Optional[str] = None
    api_url: Optional[str] = None
    admin_token: Optional[str] = None


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return {}
    return {}


def save_config(config: dict, config_path: Optional[Path] = None) -> None:
    """Save configuration to config.json."""
    config_path = config_path or get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def get_settings(config_path: Optional[Path] = None) -> Settings:
    config = load_config(config_path)

    def resolve(key: str) -> Optional[str]:
        env_value = os.environ.get(ENV_VARS[key])
        if env_value:
            return env_value
        return config.get(key)

    backend = (resolve("storage_backend") or DEFAULT_BACKEND).strip().lower()
    return Settings(
        storage_backend=backend,
        data_path=resolve("data_path") or str(get_default_graph_path()),
        api_url=resolve("api_url"),
        admin_token=resolve("admin_token"),
    )
