"""Settings editor for the nas-monitor background service."""

__version__ = "1.0.0"
