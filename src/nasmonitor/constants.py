from pathlib import Path

# Config file location, relative to $HOME
CONFIG_DIR_NAME = ".config/nas-monitor"
CONFIG_FILE_NAME = "config.conf"

# Used when $HOME is not set
FALLBACK_CONFIG_PATH = Path("/tmp/nas-monitor-config.conf")

# Environment override for the config file path
CONFIG_ENV_VAR = "NAS_MONITOR_CONFIG"

CONFIG_DIR_MODE = 0o700
CONFIG_FILE_MODE = 0o600

# systemd user unit restarted after edits
SERVICE_NAME = "nas-monitor.service"

# Upper bound on configured network shares
MAX_NAS_DEVICES = 10

DEVICE_SEPARATOR = "/"

# Spin-button limits of the settings form: field -> (minimum, maximum)
FORM_LIMITS: dict[str, tuple[int, int]] = {
    "home_ac_interval": (5, 3600),
    "home_battery_interval": (10, 3600),
    "away_ac_interval": (30, 3600),
    "away_battery_interval": (60, 3600),
    "max_failed_attempts": (1, 10),
    "min_battery_level": (5, 50),
}
