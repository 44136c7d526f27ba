"""Core controller for the settings editor."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from nasmonitor.constants import FORM_LIMITS
from nasmonitor.errors import DeviceError, SettingsSaveError, UnknownFieldError
from nasmonitor.service import ServiceManager
from nasmonitor.settings.store import load_settings, save_settings
from nasmonitor.settings.user import MonitorSettings

logger: Final = logging.getLogger(__name__)

STATUS_SAVED = "Configuration saved successfully"
STATUS_RESTARTED = "Service restarted successfully"
STATUS_RESTART_FAILED = "Failed to restart service"

# Fields the form edits directly; nas_devices goes through add/remove
EDITABLE_FIELDS: Final = tuple(
    name for name in MonitorSettings.model_fields if name != "nas_devices"
)


def clamp(name: str, value: int) -> int:
    """Limit an integer setting to the range the settings form allows."""
    low, high = FORM_LIMITS[name]
    clamped = max(low, min(high, value))
    if clamped != value:
        logger.warning("%s=%d out of range, using %d", name, value, clamped)
    return clamped


class SettingsEditor:
    """Owns the settings being edited, their file, and the status line.

    Every front-end action goes through this object:
    - Loading the config file (defaults when absent)
    - Applying field edits and device-list changes in memory
    - Saving the file and restarting the monitor service

    Each action that can fail returns a bool and leaves a user-facing
    message in ``status``.
    """

    def __init__(
        self,
        config_path: Path,
        service: ServiceManager | None = None,
        settings: MonitorSettings | None = None,
    ):
        """Initialize the editor.

        Args:
            config_path: Config file to edit
            service: Optional custom service manager
            settings: Optional settings to start from instead of reading the file
        """
        self.config_path = config_path
        self.service = service or ServiceManager()
        self.status = ""
        self.found = False
        if settings is None:
            self.reload()
        else:
            self.settings = settings

    def reload(self) -> None:
        """Replace the in-memory settings with the file's contents."""
        result = load_settings(self.config_path)
        self.settings = result.settings
        self.found = result.found
        if not result.found:
            logger.info("Using default settings (no config at %s)", self.config_path)

    def update(self, **fields: Any) -> None:
        """Apply form edits to the settings.

        Integer fields are clamped to the form limits. Edits are applied
        together: if any value is rejected nothing changes.

        Raises:
            UnknownFieldError: If a field is not editable
            ValidationError: If a value has the wrong type
        """
        for name in fields:
            if name not in EDITABLE_FIELDS:
                raise UnknownFieldError(name)

        data = self.settings.model_dump()
        data.update(fields)
        updated = MonitorSettings.model_validate(data)
        for name in FORM_LIMITS:
            if name in fields:
                setattr(updated, name, clamp(name, getattr(updated, name)))
        self.settings = updated

    def add_device(self, device: str) -> bool:
        """Append a device; on rejection set status and return False."""
        try:
            self.settings.add_device(device)
        except DeviceError as err:
            self.status = str(err)
            return False
        self.status = f"Added {device}"
        return True

    def remove_device(self, index: int) -> bool:
        """Remove a device by position; on rejection set status and return False."""
        try:
            removed = self.settings.remove_device(index)
        except DeviceError as err:
            self.status = str(err)
            return False
        self.status = f"Removed {removed}"
        return True

    def save(self) -> bool:
        """Write the settings to the config file."""
        try:
            save_settings(self.config_path, self.settings)
        except SettingsSaveError as err:
            self.status = str(err)
            return False
        self.found = True
        self.status = STATUS_SAVED
        return True

    def restart_service(self) -> bool:
        """Restart the monitor service; never raises."""
        ok = self.service.restart()
        self.status = STATUS_RESTARTED if ok else STATUS_RESTART_FAILED
        return ok
