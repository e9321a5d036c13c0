#!/usr/bin/env python3
"""
Daemon settings manager.

Loads the daemon's own settings (sysfs paths, key code map, intervals,
logging) from a YAML file. These are separate from the user settings in
ConfigStore, which the daemon reads and writes at runtime.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .store import default_store_path

# Linux input key codes produced by asus-nb-wmi, mapped to the WMI event ids
DEFAULT_KEYCODE_MAP: Dict[int, int] = {
    148: 56,     # KEY_PROG1: M4 / ROG key
    248: 124,    # KEY_MICMUTE: M3
    470: 174,    # KEY_FN_F5: fan mode
    203: 179,    # KEY_PROG4: Aura
}

DEFAULT_PROFILE_NAMES: Dict[int, str] = {
    0: "balanced",
    1: "quiet",
    2: "performance",
}


class ConfigManager:
    """
    Manages loading and accessing daemon settings from a YAML file.

    Without a file every property returns its built-in default.
    Supports reloading configuration at runtime.
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the configuration manager with an optional config file path."""
        self.config_path = config_path
        self._config: Dict[str, Any] = {}

        if config_path:
            self.reload()

    def reload(self) -> None:
        """Reload configuration from YAML file."""
        if not self.config_path or not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error loading configuration: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Error loading configuration: {self.config_path} is not a mapping")
        self._config = data

    @property
    def store_path(self) -> Path:
        """JSON file holding the user settings."""
        path = self._config.get("store_path")
        return Path(os.path.expanduser(path)) if path else default_store_path()

    @property
    def log_file(self) -> Optional[str]:
        """Log file for daemon output; None logs to stdout only."""
        return self._config.get("log_file")

    @property
    def log_level(self) -> str:
        return self._config.get("log_level", "INFO")

    @property
    def acpi_profile_path(self) -> str:
        """Path to ACPI profile sysfs node."""
        return self._config.get("acpi_profile_path", "/sys/firmware/acpi/platform_profile")

    @property
    def profile_names(self) -> Dict[int, str]:
        """ACPI profile written for each performance mode."""
        names = self._config.get("profile_names") or DEFAULT_PROFILE_NAMES
        return {int(mode): str(name) for mode, name in names.items()}

    @property
    def lighting_mode_path(self) -> Optional[str]:
        """Optional sysfs node receiving the keyboard lighting mode number."""
        return self._config.get("lighting_mode_path")

    @property
    def lighting_modes(self) -> int:
        """How many lighting modes the Aura key cycles through."""
        return int(self._config.get("lighting_modes", 4))

    @property
    def thermal_zone_path(self) -> str:
        """Thermal zone used for the CPU temperature."""
        return self._config.get("thermal_zone_path", "/sys/class/thermal/thermal_zone0/temp")

    @property
    def battery_path(self) -> str:
        return self._config.get("battery_path", "/sys/class/power_supply/BAT0")

    @property
    def ac_path(self) -> str:
        """power_supply node of the AC adapter."""
        return self._config.get("ac_path", "/sys/class/power_supply/AC0")

    @property
    def input_device_name(self) -> str:
        """Name of the input device that reports the hotkeys."""
        return self._config.get("input_device_name", "Asus WMI hotkeys")

    @property
    def keycode_map(self) -> Dict[int, int]:
        """Linux key code → hardware event id."""
        codes = self._config.get("keycode_map") or DEFAULT_KEYCODE_MAP
        return {int(code): int(event_id) for code, event_id in codes.items()}

    @property
    def sensor_interval(self) -> float:
        """How often to log a sensor sample (seconds)."""
        return float(self._config.get("sensor_interval", 30))

    @property
    def power_poll_interval(self) -> float:
        """How often to check the AC adapter state (seconds)."""
        return float(self._config.get("power_poll_interval", 2))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key."""
        return self._config.get(key, default)


def find_config_file(specified_path: Optional[str] = None) -> Optional[str]:
    """
    Find the daemon settings file.

    Searches in order: specified path, the user's config directory, /etc.
    """
    if specified_path:
        return specified_path

    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    search_paths = [
        Path(config_home) / "rogcontrol" / "rogcontrol.yaml",
        Path("/etc/rogcontrol/rogcontrol.yaml"),
    ]

    for path in search_paths:
        if path.exists():
            return str(path)

    return None
