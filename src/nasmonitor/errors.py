"""Exception classes for settings persistence and editing.

Loading never raises for missing or malformed content; these cover the
failures that must reach the user: a config file that cannot be written,
and device-list edits that would break the file's invariants.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SettingsError(Exception):
    """Base class for all settings errors."""


class SettingsSaveError(SettingsError):
    """Raised when the config file cannot be written."""

    def __init__(self, path: Path, original_error: Optional[OSError] = None) -> None:
        """Initialize with the failing path and the OS error.

        Args:
            path: Config file that could not be written
            original_error: The OSError raised by open/write/chmod
        """
        reason = original_error.strerror if original_error else None
        if not reason:
            reason = str(original_error) if original_error else "unknown error"
        super().__init__(f"Failed to save configuration: {reason}")
        self.path = path
        self.original_error = original_error


class DeviceError(SettingsError):
    """Base class for rejected device-list edits."""


class InvalidDeviceError(DeviceError):
    """Raised when a device entry is not a usable ``host/share`` string."""

    def __init__(self, device: str, reason: str) -> None:
        super().__init__(f"Invalid NAS device {device!r}: {reason}")
        self.device = device
        self.reason = reason


class DeviceCapacityError(DeviceError):
    """Raised when adding a device to a full list."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Cannot add more than {capacity} NAS devices")
        self.capacity = capacity


class DeviceIndexError(DeviceError, IndexError):
    """Raised when removing a device that does not exist."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"No NAS device at position {index} (have {count})")
        self.index = index
        self.count = count


class UnknownFieldError(SettingsError, KeyError):
    """Raised when an edit names a field the settings record does not have."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown setting: {self.name}"
