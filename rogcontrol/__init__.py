"""
ROG Control Package.

A background daemon for ASUS laptop hotkeys (ROG/M4, M3, Fn+F5, Fn+F4),
performance modes and per-mode fan curves.
"""

__version__ = "0.3.0"

# Core components
from .store import ConfigStore, IntValue, StringValue
from .fan_curves import Device, FanCurveCodec, FanCurveError
from .sensors import SensorReading, SensorSampler
from .events import EventBus, HardwareEvent
from .dispatcher import EventDispatcher
from .config import ConfigManager

# Commands
from .commands import (
    ApplyChargeLimitCommand, CycleLightingModeCommand, CyclePerformanceModeCommand, LaunchCommand,
    MediaKey, PressKeyCommand, SetProfileCommand, ToggleVisibilityCommand,
)

__all__ = [
    "ConfigStore", "IntValue", "StringValue",
    "Device", "FanCurveCodec", "FanCurveError",
    "SensorReading", "SensorSampler",
    "EventBus", "HardwareEvent",
    "EventDispatcher",
    "ConfigManager",
    "ApplyChargeLimitCommand", "CycleLightingModeCommand", "CyclePerformanceModeCommand",
    "LaunchCommand", "MediaKey", "PressKeyCommand", "SetProfileCommand", "ToggleVisibilityCommand",
    "__version__"
]
