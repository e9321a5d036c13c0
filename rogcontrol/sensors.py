#!/usr/bin/env python3
"""
Sensor reading module.

Reads CPU temperature and battery discharge rate from sysfs. Every read is
best-effort: a missing node or driver leaves that value unknown.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import ConfigManager


@dataclass(frozen=True)
class SensorReading:
    """
    One sample of the two monitored sensors.

    None means "unknown", never zero.
    """
    cpu_temp: Optional[float] = None
    battery_discharge: Optional[float] = None


def _read_number(path: Path) -> int:
    with open(path) as f:
        return int(f.read().strip())


class SensorSampler:
    """
    Samples CPU temperature (°C) and battery discharge rate (W).

    The two reads are independent: a failed temperature read does not stop
    the power read, and neither raises to the caller.
    """

    def __init__(self, config: ConfigManager):
        """Initialize the sampler with the sysfs paths from configuration."""
        self.config = config

    def sample(self) -> SensorReading:
        return SensorReading(
            cpu_temp=self._read_optional(self.read_cpu_temp, "CPU temperature"),
            battery_discharge=self._read_optional(self.read_battery_discharge, "battery discharge"),
        )

    @staticmethod
    def _read_optional(reader, name: str) -> Optional[float]:
        try:
            return reader()
        except (OSError, ValueError) as exc:
            logging.debug("Failed reading %s: %s", name, exc)
            return None

    def read_cpu_temp(self) -> float:
        """Thermal zone temperature, millidegrees → °C."""
        return _read_number(Path(self.config.thermal_zone_path)) / 1000.0

    def read_battery_discharge(self) -> float:
        """
        Battery power draw in watts.

        Uses power_now (µW) when the driver exposes it, otherwise
        current_now (µA) × voltage_now (µV).
        """
        battery = Path(self.config.battery_path)
        power_node = battery / "power_now"
        if power_node.exists():
            return _read_number(power_node) / 1_000_000.0

        current = _read_number(battery / "current_now")
        voltage = _read_number(battery / "voltage_now")
        return current * voltage / 1_000_000_000_000.0
