"""Common utility functions and helpers for the nasmonitor package."""

from nasmonitor.utils.file import ensure_directory_exists

__all__ = [
    "ensure_directory_exists",
]
