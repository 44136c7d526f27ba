"""Settings management.

This package provides:
- MonitorSettings: the settings record and its device-list edits
- load_settings / save_settings: the config file format
- AppPaths: config file location
"""

from nasmonitor.settings.application import AppPaths
from nasmonitor.settings.store import LoadResult, load_settings, render_settings, save_settings
from nasmonitor.settings.user import MonitorSettings

__all__ = [
    "AppPaths",
    "LoadResult",
    "MonitorSettings",
    "load_settings",
    "render_settings",
    "save_settings",
]
