#!/usr/bin/env python3
"""
Simple event system for communication between components.

Allows components to publish and subscribe to events, and names the
hardware event ids reported by the ASUS WMI interface.
"""

import logging
import threading
from enum import IntEnum
from typing import Dict, List, Callable, Any


class HardwareEvent(IntEnum):
    """Known hardware event ids. Other ids may arrive and are ignored."""
    M4 = 56               # M4 / ROG key
    BATTERY = 87          # switched to battery
    PLUGGED = 88          # AC adapter connected
    M3 = 124
    FN_F5 = 174           # fan / performance mode key
    FN_F4 = 179           # Aura lighting key


class EventBus:
    """
    Simple event bus that allows components to publish and subscribe to events.

    Events are identified by a string name and can carry an arbitrary payload.
    Callbacks run on the publishing thread.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._subscribers: Dict[str, List[Callable[[Any], None]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_name: str, callback: Callable[[Any], None]) -> None:
        """
        Subscribe to an event.

        Args:
            event_name: Name of the event to subscribe to
            callback: Function to call when the event is published
        """
        with self._lock:
            self._subscribers.setdefault(event_name, []).append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[Any], None]) -> None:
        """
        Unsubscribe from an event.

        Args:
            event_name: Name of the event to unsubscribe from
            callback: Function to remove from subscribers
        """
        with self._lock:
            if callback in self._subscribers.get(event_name, []):
                self._subscribers[event_name].remove(callback)

    def publish(self, event_name: str, payload: Any = None) -> None:
        """
        Publish an event with optional payload.

        A failing subscriber is logged and does not stop the others.

        Args:
            event_name: Name of the event to publish
            payload: Data to send with the event
        """
        with self._lock:
            callbacks = list(self._subscribers.get(event_name, []))

        for callback in callbacks:
            try:
                callback(payload)
            except Exception:
                logging.exception("Subscriber of %r failed", event_name)
