"""Collaborator interfaces used by the dispatcher and commands.

The dispatcher and commands only talk to hardware, the UI and the OS
through these protocols; concrete Linux implementations live in
controller.py and adapters.py.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class ModeController(Protocol):
    """UI, performance-mode and lighting control."""

    def toggle_visibility(self) -> None:
        """Show the main window if hidden, hide it otherwise."""

    def cycle_performance_mode(self) -> None:
        """Advance to the next performance mode."""

    def cycle_lighting_mode(self) -> None:
        """Advance to the next keyboard lighting mode."""


@runtime_checkable
class KeyEmulator(Protocol):
    """Synthesizes key presses."""

    def press(self, key) -> None:
        """Press and release a key; fire-and-forget."""


@runtime_checkable
class ProcessLauncher(Protocol):
    """Starts user-configured external commands."""

    def launch(self, command: str) -> None:
        """Start command without waiting; must not raise."""


@runtime_checkable
class HardwareEventSource(Protocol):
    """Delivers hardware event ids on its own thread."""

    def start(self, callback: Callable[[int], None]) -> None:
        """Begin delivering events to callback."""

    def stop(self) -> None:
        """Stop delivering events."""
