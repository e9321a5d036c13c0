"""Linux implementations of the key emulator and process launcher."""

from __future__ import annotations

import logging
import shlex
import subprocess

from .commands import MediaKey


class PynputKeyEmulator:
    """Presses media keys through pynput.

    The pynput backend is loaded on the first press, so the daemon starts
    without a display. If the backend cannot load, presses are logged and
    dropped while every other action keeps working.
    """

    def __init__(self):
        self._keyboard = None
        self._keys = None
        self._unavailable = False

    def _load_backend(self) -> bool:
        if self._keyboard is not None:
            return True
        if self._unavailable:
            return False

        try:
            from pynput.keyboard import Controller, Key

            self._keyboard = Controller()
        except Exception as exc:
            logging.error("Key emulation unavailable: %s", exc)
            self._unavailable = True
            return False

        self._keys = {
            MediaKey.PLAY_PAUSE: Key.media_play_pause,
            MediaKey.VOLUME_MUTE: Key.media_volume_mute,
        }
        return True

    def press(self, key: MediaKey) -> None:
        if not self._load_backend():
            logging.debug("Dropping %s key press", key.name)
            return

        target = self._keys.get(key)
        if target is None:
            logging.warning("No key mapping for %s", key)
            return
        self._keyboard.press(target)
        self._keyboard.release(target)


class SubprocessLauncher:
    """Starts custom commands detached from the daemon."""

    def launch(self, command: str) -> None:
        if not command or not command.strip():
            logging.debug("No custom command configured")
            return

        try:
            args = shlex.split(command)
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as exc:
            logging.error("Failed to run %s: %s", command, exc)
            return

        logging.info("Started %s", command)
