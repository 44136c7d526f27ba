"""Reading and writing the nas-monitor config file.

The file is a small line-oriented format shared with the monitor daemon::

    # NAS Monitor Configuration File

    [networks]
    home_networks=Office,Home

    [nas_devices]
    nas1.local/media

    [intervals]
    home_ac_interval=15
    ...

Parsing is tolerant: unknown keys are ignored, malformed integers read as 0,
and a missing or unreadable file yields the defaults.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, NamedTuple

from nasmonitor.common.enums import Section
from nasmonitor.constants import CONFIG_FILE_MODE, DEVICE_SEPARATOR
from nasmonitor.errors import SettingsSaveError
from nasmonitor.settings.user import MonitorSettings, device_problem

logger: Final = logging.getLogger(__name__)

FILE_HEADER = "# NAS Monitor Configuration File"

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")

# Range of a C int; atoi results are stored in one
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_int(value: str) -> int:
    """Read the leading integer of *value*, or 0 if there is none.

    Mirrors C ``atoi``: leading whitespace and a sign are accepted, trailing
    garbage is ignored, and only ASCII digits count. Results outside the C
    int range are clamped to it.
    """
    match = _LEADING_INT.match(value)
    if not match:
        return 0
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(INT_MAX)):
        return INT_MIN if sign == "-" else INT_MAX
    number = -int(digits) if sign == "-" else int(digits)
    return max(INT_MIN, min(INT_MAX, number))


def parse_bool(value: str) -> bool:
    """Only the literal token ``true`` is true."""
    return value == "true"


def format_bool(value: bool) -> str:
    return "true" if value else "false"


class FieldSpec(NamedTuple):
    """How one ``key=value`` setting is read and written."""

    section: Section
    parse: Callable[[str], Any]
    format: Callable[[Any], str]


# Field name -> spec, in file order. Adding a setting is one line here plus
# the field on MonitorSettings.
FIELDS: Final[dict[str, FieldSpec]] = {
    "home_networks": FieldSpec(Section.NETWORKS, str, str),
    "home_ac_interval": FieldSpec(Section.INTERVALS, parse_int, str),
    "home_battery_interval": FieldSpec(Section.INTERVALS, parse_int, str),
    "away_ac_interval": FieldSpec(Section.INTERVALS, parse_int, str),
    "away_battery_interval": FieldSpec(Section.INTERVALS, parse_int, str),
    "max_failed_attempts": FieldSpec(Section.BEHAVIOR, parse_int, str),
    "min_battery_level": FieldSpec(Section.BEHAVIOR, parse_int, str),
    "enable_notifications": FieldSpec(Section.BEHAVIOR, parse_bool, format_bool),
}

# Comment line written under each heading
_SECTION_COMMENTS: Final[dict[Section, str]] = {
    Section.NETWORKS: "# Comma-separated list of home network SSIDs",
    Section.NAS_DEVICES: "# Format: host/share (one per line)",
    Section.INTERVALS: "# Check intervals in seconds",
}


@dataclass
class LoadResult:
    """Outcome of reading the config file.

    ``found`` is False when the file was missing or unreadable and
    ``settings`` holds the defaults.
    """

    settings: MonitorSettings
    found: bool
    unknown_keys: list[str]


def parse_settings(lines: Iterable[str]) -> tuple[MonitorSettings, list[str]]:
    """Build settings from config file lines.

    Args:
        lines: File lines, with or without trailing newlines

    Returns:
        The parsed settings and the unrecognised keys, in file order
    """
    values: dict[str, Any] = {}
    devices: list[str] = []
    unknown: list[str] = []
    section = ""

    for raw in lines:
        line = raw.rstrip("\n")

        # Comments and blank lines
        if not line.strip(" \t") or line.startswith("#"):
            continue

        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1]
            continue

        if "=" in line:
            key, value = line.split("=", 1)
            key = key.lstrip(" \t")
            value = value.lstrip(" \t")
            spec = FIELDS.get(key)
            if spec is None:
                logger.debug("Ignoring unknown key %r", key)
                unknown.append(key)
                continue
            values[key] = spec.parse(value)
            continue

        if section != Section.NAS_DEVICES.value or DEVICE_SEPARATOR not in line:
            continue
        if len(devices) >= MonitorSettings.DEVICE_CAPACITY:
            logger.warning("Dropping NAS device %r: limit of %d reached", line, len(devices))
            continue
        problem = device_problem(line)
        if problem:
            logger.warning("Dropping NAS device %r: %s", line, problem)
            continue
        devices.append(line)

    return MonitorSettings(nas_devices=devices, **values), unknown


def load_settings(path: Path) -> LoadResult:
    """Load settings from *path*, falling back to defaults.

    Args:
        path: Config file to read

    Returns:
        LoadResult with ``found`` False if the file could not be opened
    """
    try:
        with path.open(encoding="utf-8", errors="replace") as fh:
            settings, unknown = parse_settings(fh)
    except FileNotFoundError:
        logger.debug("No config file at %s, using defaults", path)
        return LoadResult(MonitorSettings(), found=False, unknown_keys=[])
    except OSError as exc:
        logger.warning("Unable to read %s (%s), using defaults", path, exc)
        return LoadResult(MonitorSettings(), found=False, unknown_keys=[])

    logger.debug("Loaded %s with %d NAS device(s)", path, settings.device_count)
    return LoadResult(settings, found=True, unknown_keys=unknown)


def render_settings(settings: MonitorSettings) -> str:
    """Serialize settings in the fixed, commented layout of the config file."""
    lines = [FILE_HEADER, ""]
    for section in Section:
        if section is not Section.NETWORKS:
            lines.append("")
        lines.append(section.heading)
        comment = _SECTION_COMMENTS.get(section)
        if comment:
            lines.append(comment)
        if section is Section.NAS_DEVICES:
            lines.extend(settings.nas_devices)
            continue
        for name, spec in FIELDS.items():
            if spec.section is section:
                lines.append(f"{name}={spec.format(getattr(settings, name))}")
    return "\n".join(lines) + "\n"


def save_settings(path: Path, settings: MonitorSettings) -> None:
    """Write *settings* to *path* and restrict it to owner read/write.

    A failure part way through leaves whatever was written on disk.

    Args:
        path: Config file to (over)write
        settings: Settings to persist

    Raises:
        SettingsSaveError: If the file cannot be written or chmod fails
    """
    text = render_settings(settings)
    try:
        with path.open("w", encoding="utf-8") as fh:
            fh.write(text)
        os.chmod(path, CONFIG_FILE_MODE)
    except OSError as exc:
        logger.error("Failed to save configuration to %s: %s", path, exc)
        raise SettingsSaveError(path, exc) from exc

    logger.info("Configuration saved to %s", path)
