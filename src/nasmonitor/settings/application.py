"""Where the editor finds the config file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

from nasmonitor.constants import (
    CONFIG_DIR_MODE,
    CONFIG_DIR_NAME,
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    FALLBACK_CONFIG_PATH,
)
from nasmonitor.utils.file import ensure_directory_exists

logger: Final = logging.getLogger(__name__)

# Load environment variables from .env file(s)
load_dotenv()


@dataclass
class AppPaths:
    """Application file and directory paths.

    The monitor daemon reads the same file, so the default location must
    match the one it uses: ``$HOME/.config/nas-monitor/config.conf``.
    """

    config_file: Path

    @property
    def config_dir(self) -> Path:
        return self.config_file.parent

    @classmethod
    def from_home(cls, home: Path) -> AppPaths:
        """Create paths under a home directory."""
        return cls(config_file=home / CONFIG_DIR_NAME / CONFIG_FILE_NAME)

    @classmethod
    def default(cls, create_dir: bool = True) -> AppPaths:
        """Resolve the config file location.

        Order of precedence:
        1. ``NAS_MONITOR_CONFIG`` environment variable
        2. ``$HOME/.config/nas-monitor/config.conf``
        3. ``/tmp/nas-monitor-config.conf`` when HOME is unset

        Args:
            create_dir: Create the config directory (mode 0700) if missing

        Returns:
            Resolved AppPaths
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            paths = cls(config_file=Path(env_path).expanduser())
        else:
            home = os.environ.get("HOME")
            if not home:
                logger.debug("HOME is not set, using %s", FALLBACK_CONFIG_PATH)
                return cls(config_file=FALLBACK_CONFIG_PATH)
            paths = cls.from_home(Path(home))

        if create_dir:
            ensure_directory_exists(paths.config_dir, mode=CONFIG_DIR_MODE)
        return paths
