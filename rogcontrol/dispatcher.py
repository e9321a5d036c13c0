#!/usr/bin/env python3
"""
Hardware event dispatcher.

Turns a hardware event id into at most one command, based on the button
mappings in the settings store at the moment the event arrives.
"""

import logging
from typing import Callable, Optional

from .commands import (
    Command, CycleLightingModeCommand, CyclePerformanceModeCommand,
    LaunchCommand, MediaKey, PressKeyCommand, ToggleVisibilityCommand,
)
from .events import HardwareEvent
from .ports import KeyEmulator, ModeController, ProcessLauncher
from .store import ConfigStore

# Values of the "m3" setting
M3_PLAY_PAUSE = 1
M3_LIGHTING = 2
M3_CUSTOM = 3

# Values of the "m4" setting
M4_TOGGLE_UI = 1
M4_CUSTOM = 2


class EventDispatcher:
    """
    Maps hardware events to commands.

    Holds no state between events: every decision is made from the event id
    and a fresh read of the settings store. Resolution happens synchronously
    on whatever thread delivered the event; execution is left to the handoff
    callable (normally ActionQueue.submit), which runs the command on the
    control thread.
    """

    def __init__(self, store: ConfigStore, controller: ModeController,
                 keys: KeyEmulator, launcher: ProcessLauncher,
                 handoff: Optional[Callable[[Command], None]] = None):
        self.store = store
        self.controller = controller
        self.keys = keys
        self.launcher = launcher
        self.handoff = handoff

    def resolve(self, event_id: int) -> Optional[Command]:
        """Command for event_id, or None when the event has no action."""
        if event_id == HardwareEvent.M3:
            mapping = self.store.get_int("m3")
            if mapping == M3_PLAY_PAUSE:
                return PressKeyCommand(self.keys, MediaKey.PLAY_PAUSE)
            if mapping == M3_LIGHTING:
                return CycleLightingModeCommand(self.controller)
            if mapping == M3_CUSTOM:
                return LaunchCommand(self.launcher, self.store.get_string("m3_custom"))
            return PressKeyCommand(self.keys, MediaKey.VOLUME_MUTE)

        if event_id == HardwareEvent.M4:
            mapping = self.store.get_int("m4")
            if mapping == M4_TOGGLE_UI:
                return ToggleVisibilityCommand(self.controller)
            if mapping == M4_CUSTOM:
                return LaunchCommand(self.launcher, self.store.get_string("m4_custom"))
            return CyclePerformanceModeCommand(self.controller)

        if event_id == HardwareEvent.FN_F5:
            return CyclePerformanceModeCommand(self.controller)

        if event_id == HardwareEvent.FN_F4:
            return CycleLightingModeCommand(self.controller)

        # BATTERY and PLUGGED are reserved and currently do nothing,
        # as does any undocumented id.
        return None

    def dispatch(self, event_id: int) -> Optional[Command]:
        """
        Resolve event_id and hand the resulting command off for execution.

        Returns:
            The command that was handed off, or None.
        """
        command = self.resolve(event_id)
        if command is None:
            logging.debug("Event %d ignored", event_id)
            return None

        logging.info("Event %d → %r", event_id, command)
        if self.handoff:
            self.handoff(command)
        return command
