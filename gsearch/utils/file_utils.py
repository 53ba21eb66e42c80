# gsearch/utils/file_utils.py

"""Formatting helpers for entries."""
from datetime import datetime as dt


def format_size(size_bytes: int) -> str:
    """Formats bytes into a human-readable string (KB, MB, GB)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"


def format_mtime(mtime: int) -> str:
    """ISO 8601 local time for a Unix timestamp, empty if it can't be represented."""
    try:
        return dt.fromtimestamp(mtime).isoformat()
    except (OverflowError, OSError, ValueError):
        return ""
