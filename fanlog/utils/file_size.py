"""
File size utility
Report on-disk sizes of log files and database files
"""

from pathlib import Path
from typing import Dict, Union

_UNITS = ("KB", "MB", "GB", "TB")


def get_file_size(path: Union[str, Path]) -> Dict[str, Union[int, bool]]:
    """
    Size of a regular file

    Returns:
        Dictionary with "size_bytes" and "exists"; directories and missing
        paths report 0 bytes and exists=False
    """
    path = Path(path)
    if not path.is_file():
        return {"size_bytes": 0, "exists": False}
    return {"size_bytes": path.stat().st_size, "exists": True}


def format_size(size_bytes: Union[int, float]) -> str:
    """Human-readable size, e.g. "512 B", "2.00 KB" or "10.00 MB" """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = float(size_bytes)
    for unit in _UNITS:
        size /= 1024
        if size < 1024 or unit == _UNITS[-1]:
            break
    return f"{size:.2f} {unit}"
