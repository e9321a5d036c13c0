#!/usr/bin/env python3
"""
Hardware event sources.

Both sources run a daemon thread and deliver integer hardware event ids to
a callback on that thread:

- InputDeviceEventSource reads key presses from the ASUS WMI hotkey input
  device and translates Linux key codes to WMI event ids.
- PowerSourceWatcher polls the AC adapter and reports plug/unplug.
"""

import logging
import os
import select
import struct
import threading
from typing import Callable, Dict, Optional

from .events import HardwareEvent

EV_KEY = 1
KEY_PRESS = 1

# struct input_event on 64-bit Linux: timeval, type, code, value
_INPUT_EVENT = struct.Struct("llHHi")


def find_input_device(name: str, devices_file: str = "/proc/bus/input/devices") -> Optional[str]:
    """Return /dev/input/eventN of the input device called name, if any."""
    try:
        with open(devices_file) as f:
            lines = f.read().splitlines()
    except OSError as exc:
        logging.error("Cannot list input devices: %s", exc)
        return None

    current_name = None
    for line in lines:
        if line.startswith("I:"):
            current_name = None
        elif line.startswith("N: Name="):
            current_name = line.split("=", 1)[1].strip().strip('"')
        elif line.startswith("H: Handlers=") and current_name == name:
            handlers = line.split("=", 1)[1].split()
            events = [h for h in handlers if h.startswith("event")]
            if events:
                return f"/dev/input/{events[0]}"

    return None


class InputDeviceEventSource:
    """Delivers hotkey presses from a Linux input device."""

    def __init__(self, device_name: str, keycode_map: Dict[int, int],
                 device_path: Optional[str] = None):
        """
        Initialize the source.

        Args:
            device_name: Name listed in /proc/bus/input/devices
            keycode_map: Linux key code → hardware event id
            device_path: Explicit /dev/input/eventN, skipping the lookup
        """
        self.device_name = device_name
        self.keycode_map = keycode_map
        self.device_path = device_path
        self._callback: Optional[Callable[[int], None]] = None
        self._running = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self, callback: Callable[[int], None]) -> None:
        if self._running.is_set():
            return

        self.device_path = self.device_path or find_input_device(self.device_name)
        if not self.device_path:
            logging.warning("Input device %r not found, hotkeys disabled", self.device_name)
            return

        self._callback = callback
        self._running.set()
        self._thread = threading.Thread(target=self._read_events, name="hotkeys", daemon=True)
        self._thread.start()
        logging.info("Listening for hotkeys on %s", self.device_path)

    def stop(self) -> None:
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2)

    def handle_input_event(self, type_: int, code: int, value: int) -> None:
        """Translate one raw input event and deliver it if it is a mapped key press."""
        if type_ != EV_KEY or value != KEY_PRESS:
            return

        event_id = self.keycode_map.get(code)
        if event_id is None:
            logging.debug("Unmapped key code %d", code)
            return

        if self._callback:
            self._callback(event_id)

    def _read_events(self) -> None:
        fd = None
        try:
            # Unbuffered reads: select() must see every batch the kernel queues.
            fd = os.open(self.device_path, os.O_RDONLY)
            pending = b""
            while self._running.is_set():
                ready, _, _ = select.select([fd], [], [], 1.0)
                if not ready:
                    continue

                data = os.read(fd, _INPUT_EVENT.size * 64)
                if not data:
                    logging.warning("Input device %s closed", self.device_path)
                    break

                pending += data
                whole = len(pending) - len(pending) % _INPUT_EVENT.size
                for offset in range(0, whole, _INPUT_EVENT.size):
                    _sec, _usec, type_, code, value = _INPUT_EVENT.unpack_from(pending, offset)
                    self.handle_input_event(type_, code, value)
                pending = pending[whole:]
        except PermissionError:
            logging.error("Permission denied reading %s - add the user to the input group",
                          self.device_path)
        except OSError as exc:
            logging.error("Error reading key events: %s", exc)
        finally:
            if fd is not None:
                os.close(fd)
            self._running.clear()


class PowerSourceWatcher:
    """Reports AC adapter plug (88) and unplug (87) events."""

    def __init__(self, ac_path: str, interval: float = 2.0):
        self.online_path = os.path.join(ac_path, "online")
        self.interval = interval
        self.last_state: Optional[bool] = None
        self._callback: Optional[Callable[[int], None]] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def read_online(self) -> Optional[bool]:
        """True on AC power, False on battery, None if unknown."""
        try:
            with open(self.online_path) as f:
                return f.read().strip() == "1"
        except OSError:
            return None

    def poll(self) -> Optional[int]:
        """
        Check the adapter once.

        Returns:
            The event id delivered for a state change, otherwise None. The
            first successful read only records the state.
        """
        state = self.read_online()
        if state is None or state == self.last_state:
            return None

        previous, self.last_state = self.last_state, state
        if previous is None:
            return None

        event_id = HardwareEvent.PLUGGED if state else HardwareEvent.BATTERY
        logging.info("Power source → %s", "AC" if state else "battery")
        if self._callback:
            self._callback(int(event_id))
        return int(event_id)

    def start(self, callback: Callable[[int], None]) -> None:
        self._callback = callback
        self.last_state = self.read_online()
        if self.last_state is None:
            logging.warning("AC adapter state unavailable at %s", self.online_path)

        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="power", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=2)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.poll()
