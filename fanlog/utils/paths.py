"""
Path utilities for fanlog
Provides the project root and the default config file location
"""

import os
from pathlib import Path


def get_project_root() -> Path:
    """
    Get absolute path to project root (auto-detected using __file__)

    File structure:
        fanlog/                 <- project root (returned)
        └── fanlog/             <- package directory
            └── utils/          <- utils directory
                └── paths.py    <- this file (__file__)

    Returns:
        Absolute Path to project root
    """
    return Path(__file__).parent.parent.parent.resolve()


def get_default_config_path() -> Path:
    """
    Get the path of the config file used when none is given explicitly

    The FANLOG_CONFIG environment variable takes precedence over
    {project_root}/config/fanlog.yaml.

    Returns:
        Path to the config file (which may not exist)
    """
    env_path = os.environ.get("FANLOG_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_project_root() / "config" / "fanlog.yaml"
