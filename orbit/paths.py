"""
Path utilities for the editor.

Handles path resolution for both development mode and frozen (PyInstaller) executables.
- In development: paths are relative to the project root
- When frozen: paths are relative to the executable location
"""

import sys
from pathlib import Path


def get_app_dir() -> Path:
    """
    Get the application directory.

    - In development: the project root (parent of orbit/)
    - When frozen: the directory containing the executable
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent.parent


def get_data_dir() -> Path:
    """Get the directory holding the locally stored graph."""
    return get_app_dir() / "data"


def get_default_graph_path() -> Path:
    return get_data_dir() / "expertise.json"


def get_config_path() -> Path:
    """Get the path to the config file (storage backend, API URL, etc.)."""
    return get_app_dir() / "config.json"
