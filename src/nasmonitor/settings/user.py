"""User-configurable settings of the nas-monitor service."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nasmonitor.constants import DEVICE_SEPARATOR, MAX_NAS_DEVICES
from nasmonitor.errors import DeviceCapacityError, DeviceIndexError, InvalidDeviceError

_LINE_BREAKS = ("\n", "\r")


def device_problem(device: str) -> str | None:
    """Return why *device* cannot be stored, or None if it is acceptable.

    An entry must contain the ``host/share`` separator and must read back
    from the config file as the same device line.
    """
    if not device or not device.strip(" \t"):
        return "entry is empty"
    if DEVICE_SEPARATOR not in device:
        return "expected host/share"
    if any(ch in device for ch in _LINE_BREAKS):
        return "entry contains a line break"
    if "=" in device:
        return "entry contains '='"
    if device.startswith("#"):
        return "entry starts with '#'"
    if device.startswith("[") and device.endswith("]"):
        return "entry looks like a section heading"
    return None


class MonitorSettings(BaseModel):
    """Settings record read and written by the nas-monitor service.

    Defaults match a first run with no config file. Interval values are in
    seconds; the monitor picks one of the four depending on whether it is on
    a home network and on AC power.
    """

    model_config = ConfigDict(validate_assignment=True)

    DEVICE_CAPACITY: ClassVar[int] = MAX_NAS_DEVICES

    # Networks
    home_networks: str = Field("", description="Comma-separated home Wi-Fi SSIDs")

    # Shares
    nas_devices: list[str] = Field(
        default_factory=list, description="Network shares as host/share, in mount order"
    )

    # Check intervals
    home_ac_interval: int = Field(15, description="Seconds between checks at home on AC")
    home_battery_interval: int = Field(
        60, description="Seconds between checks at home on battery"
    )
    away_ac_interval: int = Field(180, description="Seconds between checks away on AC")
    away_battery_interval: int = Field(
        600, description="Seconds between checks away on battery"
    )

    # Behavior
    max_failed_attempts: int = Field(3, description="Mount failures before backing off")
    min_battery_level: int = Field(
        10, description="Battery % below which the monitor stops mounting"
    )
    enable_notifications: bool = Field(True, description="Show desktop notifications")

    # ---- validators ----
    @field_validator("home_networks")
    @classmethod
    def validate_networks(cls, v: str) -> str:
        if any(ch in v for ch in _LINE_BREAKS):
            raise ValueError("home_networks must be a single line")
        return v.lstrip(" \t")

    @field_validator("nas_devices")
    @classmethod
    def validate_devices(cls, v: list[str]) -> list[str]:
        if len(v) > cls.DEVICE_CAPACITY:
            raise ValueError(f"at most {cls.DEVICE_CAPACITY} NAS devices are supported")
        for device in v:
            problem = device_problem(device)
            if problem:
                raise ValueError(f"invalid NAS device {device!r}: {problem}")
        return v

    # ---- device list edits ----
    @property
    def device_count(self) -> int:
        return len(self.nas_devices)

    @property
    def devices_full(self) -> bool:
        """Whether the device list has reached its capacity."""
        return self.device_count >= self.DEVICE_CAPACITY

    def add_device(self, device: str) -> None:
        """Append a ``host/share`` entry to the end of the device list.

        Args:
            device: Share to add, stored verbatim

        Raises:
            InvalidDeviceError: If the entry is empty or malformed
            DeviceCapacityError: If the list is already full
        """
        problem = device_problem(device)
        if problem:
            raise InvalidDeviceError(device, problem)
        if self.devices_full:
            raise DeviceCapacityError(self.DEVICE_CAPACITY)
        self.nas_devices.append(device)

    def remove_device(self, index: int) -> str:
        """Remove the device at *index*, shifting later entries down.

        Args:
            index: Zero-based position in the device list

        Returns:
            The removed entry

        Raises:
            DeviceIndexError: If no device exists at that position
        """
        if not 0 <= index < self.device_count:
            raise DeviceIndexError(index, self.device_count)
        return self.nas_devices.pop(index)

    # ---- convenience methods ----
    @property
    def network_names(self) -> list[str]:
        """Home SSIDs as a list, skipping blank entries."""
        return [name.strip() for name in self.home_networks.split(",") if name.strip()]
