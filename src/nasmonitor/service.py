"""Control of the nas-monitor systemd user service."""

from __future__ import annotations

import logging
import subprocess
from typing import Final

from nasmonitor.constants import SERVICE_NAME

logger: Final = logging.getLogger(__name__)


class ServiceManager:
    """Restarts the monitor so it picks up a saved config."""

    def __init__(self, unit: str = SERVICE_NAME) -> None:
        """Initialize with the unit to control.

        Args:
            unit: systemd user unit name
        """
        self.unit = unit

    @property
    def restart_command(self) -> list[str]:
        return ["systemctl", "--user", "restart", self.unit]

    def restart(self) -> bool:
        """Restart the service.

        Success is decided by the exit status alone; output is discarded.

        Returns:
            True if systemctl exited with status 0
        """
        try:
            result = subprocess.run(
                self.restart_command,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            logger.warning("systemctl not found, cannot restart %s", self.unit)
            return False

        if result.returncode != 0:
            logger.warning("Restart of %s failed with status %d", self.unit, result.returncode)
            return False

        logger.info("Restarted %s", self.unit)
        return True
