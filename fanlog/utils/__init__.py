"""Utility modules for fanlog"""

from fanlog.utils.logger import get_logger
from fanlog.utils.file_size import get_file_size, format_size
from fanlog.utils.paths import (
    get_project_root,
    get_default_config_path,
)

__all__ = [
    # Logger utilities
    "get_logger",
    # File size utilities
    "get_file_size",
    "format_size",
    # Path utilities
    "get_project_root",
    "get_default_config_path",
]
