"""File utility functions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path, mode: int = 0o777) -> bool:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
        mode: Permission bits for newly created directories

    Returns:
        True if the directory exists afterwards
    """
    if directory.is_dir():
        return True
    try:
        directory.mkdir(mode=mode, parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Could not create directory %s: %s", directory, exc)
        return False
    logger.debug("Created directory: %s", directory)
    return True
