#!/usr/bin/env python3
"""
Command pattern implementation for hotkey actions.

Each command wraps one side effect on a collaborator. The dispatcher only
builds commands; they are executed later on the control thread.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .events import EventBus
from .ports import KeyEmulator, ModeController, ProcessLauncher

if TYPE_CHECKING:
    from .controller import RogController


class MediaKey(Enum):
    """Media keys a button can emulate, with their Windows virtual key codes."""
    PLAY_PAUSE = 0xB3
    VOLUME_MUTE = 0xAD


class Command(ABC):
    """Base command interface for the Command pattern."""

    @abstractmethod
    def execute(self) -> None:
        """Execute the command."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ToggleVisibilityCommand(Command):
    """Command to show or hide the main window."""

    def __init__(self, controller: ModeController):
        self.controller = controller

    def execute(self) -> None:
        self.controller.toggle_visibility()


class CyclePerformanceModeCommand(Command):
    """Command to switch to the next performance mode."""

    def __init__(self, controller: ModeController):
        self.controller = controller

    def execute(self) -> None:
        self.controller.cycle_performance_mode()


class CycleLightingModeCommand(Command):
    """Command to switch to the next keyboard lighting mode."""

    def __init__(self, controller: ModeController):
        self.controller = controller

    def execute(self) -> None:
        self.controller.cycle_lighting_mode()


class PressKeyCommand(Command):
    """Command to emulate a media key press."""

    def __init__(self, emulator: KeyEmulator, key: MediaKey):
        self.emulator = emulator
        self.key = key

    def execute(self) -> None:
        self.emulator.press(self.key)

    def __repr__(self) -> str:
        return f"PressKeyCommand({self.key.name})"


class LaunchCommand(Command):
    """Command to start a user-configured program."""

    def __init__(self, launcher: ProcessLauncher, command: Optional[str]):
        """
        Initialize the command.

        Args:
            launcher: ProcessLauncher that starts the program
            command: Command line from settings; None or "" does nothing
        """
        self.launcher = launcher
        self.command = command or ""

    def execute(self) -> None:
        self.launcher.launch(self.command)

    def __repr__(self) -> str:
        return f"LaunchCommand({self.command!r})"


class SetProfileCommand(Command):
    """Command to set the ACPI platform profile."""

    def __init__(self, profile: str, profile_path: str, bus: Optional[EventBus] = None):
        """
        Initialize the command.

        Args:
            profile: ACPI profile to set ('quiet', 'balanced' or 'performance')
            profile_path: sysfs node of the platform profile
            bus: EventBus notified after a successful write
        """
        self.profile = profile
        self.profile_path = profile_path
        self.bus = bus

    def execute(self) -> None:
        """Set the ACPI profile by writing to sysfs."""
        try:
            with open(self.profile_path, "w") as f:
                f.write(self.profile)
            logging.debug("ACPI profile → %s", self.profile)
        except OSError as exc:
            logging.error("Unable to set ACPI profile: %s", exc)
            return

        if self.bus:
            self.bus.publish("profile_changed", {"profile": self.profile})

    def __repr__(self) -> str:
        return f"SetProfileCommand({self.profile!r})"


class ApplyChargeLimitCommand(Command):
    """Command to re-apply the stored battery charge limit."""

    def __init__(self, controller: "RogController"):
        self.controller = controller

    def execute(self) -> None:
        self.controller.apply_charge_limit()
