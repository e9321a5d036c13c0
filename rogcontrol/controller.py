#!/usr/bin/env python3
"""
Performance mode, lighting and window control.

Applies settings from the store to the hardware and keeps the store in sync
with what was applied. Runs on the control thread only.
"""

import logging
from typing import Dict

from .commands import SetProfileCommand
from .config import ConfigManager
from .events import EventBus
from .fan_curves import Device, FanCurveCodec, encode_curve
from .store import ConfigStore

MODE_COUNT = 3
MODE_NAMES = {0: "balanced", 1: "silent", 2: "turbo"}


class RogController:
    """
    Headless implementation of the mode controller.

    Mode changes write the ACPI platform profile and resolve the fan curves
    for the new mode; lighting changes go to an optional sysfs node. A
    windowed front end follows along through the event bus ("mode_changed",
    "fan_curves_applied", "lighting_changed", "visibility_toggled").
    """

    def __init__(self, store: ConfigStore, config: ConfigManager, bus: EventBus):
        """Initialize the controller with dependencies."""
        self.store = store
        self.config = config
        self.bus = bus
        self.curves = FanCurveCodec(store)
        self.visible = False

    def toggle_visibility(self) -> None:
        self.visible = not self.visible
        logging.info("Main window %s", "shown" if self.visible else "hidden")
        self.bus.publish("visibility_toggled", {"visible": self.visible})

    def cycle_performance_mode(self) -> None:
        """Advance silent/balanced/turbo by one and apply it."""
        mode = self.store.get_int("performance_mode")
        self.set_performance_mode((mode + 1) % MODE_COUNT if mode >= 0 else 0)

    def set_performance_mode(self, mode: int) -> None:
        """
        Persist and apply a performance mode.

        The store is updated first so the fan curves resolved below belong
        to the new mode.
        """
        if mode not in MODE_NAMES:
            logging.warning("Unknown performance mode %d, using balanced", mode)
            mode = 0

        self.store.set("performance_mode", mode)
        logging.info("Performance mode → %s", MODE_NAMES[mode])

        profile = self.config.profile_names.get(mode)
        if profile:
            SetProfileCommand(profile, self.config.acpi_profile_path, self.bus).execute()

        self.bus.publish("mode_changed", {"mode": mode, "name": MODE_NAMES[mode]})
        self.apply_fan_curves()

    def apply_fan_curves(self) -> Dict[Device, bytes]:
        """Resolve the active curve for each device and announce it."""
        curves = {device: self.curves.active(device) for device in Device}
        for device, curve in curves.items():
            logging.debug("%s fan curve: %s", device.label, encode_curve(curve))
        self.bus.publish("fan_curves_applied", curves)
        return curves

    def cycle_lighting_mode(self) -> None:
        """Advance the keyboard lighting mode by one."""
        count = max(1, self.config.lighting_modes)
        mode = self.store.get_int("aura_mode")
        mode = (mode + 1) % count if mode >= 0 else 0
        self.store.set("aura_mode", mode)
        logging.info("Lighting mode → %d", mode)

        path = self.config.lighting_mode_path
        if path:
            try:
                with open(path, "w") as f:
                    f.write(str(mode))
            except OSError as exc:
                logging.error("Unable to set lighting mode: %s", exc)

        self.bus.publish("lighting_changed", {"mode": mode})

    def apply_charge_limit(self) -> None:
        """Write the stored battery charge limit, if one is set."""
        limit = self.store.get_int("charge_limit")
        if limit < 0:
            return

        node = f"{self.config.battery_path}/charge_control_end_threshold"
        try:
            with open(node, "w") as f:
                f.write(str(limit))
            logging.info("Battery charge limit → %d%%", limit)
        except OSError as exc:
            logging.error("Unable to set charge limit: %s", exc)

    def apply_stored_settings(self) -> None:
        """Re-apply the stored mode and charge limit, e.g. at startup."""
        mode = self.store.get_int("performance_mode")
        self.set_performance_mode(mode if mode in MODE_NAMES else 0)
        self.apply_charge_limit()
