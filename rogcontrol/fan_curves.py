#!/usr/bin/env python3
"""
Fan curve storage.

A fan curve is 16 bytes: eight temperature breakpoints (°C) followed by
eight fan duty values. Curves are stored per device and per performance
mode as hyphen-separated hex ("3A-3D-40-...").
"""

import logging
import re
from enum import IntEnum
from typing import Dict, Tuple

from .store import ConfigStore

CURVE_LENGTH = 16

_HEX_BYTE = re.compile(r"[0-9A-Fa-f]{2}\Z")


class Device(IntEnum):
    """Cooling zone a curve applies to."""
    CPU = 0
    GPU = 1

    @property
    def label(self) -> str:
        return "gpu" if self is Device.GPU else "cpu"


def _as_device(device) -> Device:
    """Anything other than the GPU id counts as the CPU zone."""
    return Device.GPU if device == Device.GPU else Device.CPU


class FanCurveError(ValueError):
    """Raised for a curve string or byte sequence that is not a valid curve."""


def encode_curve(curve: bytes) -> str:
    """Render a curve as uppercase hex byte pairs joined by '-'."""
    return "-".join(f"{b:02X}" for b in curve)


def decode_curve(text: str) -> bytes:
    """
    Parse a stored curve string.

    Raises:
        FanCurveError: wrong number of groups or a group that is not a hex byte.
    """
    tokens = text.split("-")
    if len(tokens) != CURVE_LENGTH:
        raise FanCurveError(f"Expected {CURVE_LENGTH} bytes, got {len(tokens)}: {text!r}")

    for token in tokens:
        if not _HEX_BYTE.match(token):
            raise FanCurveError(f"Invalid hex byte {token!r} in {text!r}")

    return bytes(int(token, 16) for token in tokens)


# Factory curves keyed by (performance mode, device); mode 0 is also the fallback.
DEFAULT_CURVES: Dict[Tuple[int, Device], bytes] = {
    (0, Device.CPU): decode_curve("3A-3D-40-44-48-4D-51-62-08-11-16-1A-22-29-30-45"),
    (0, Device.GPU): decode_curve("3A-3D-40-44-48-4D-51-62-0C-16-1D-1F-26-2D-34-4A"),
    (1, Device.CPU): decode_curve("14-3F-44-48-4C-50-54-62-11-1A-22-29-34-43-51-5A"),
    (1, Device.GPU): decode_curve("14-3F-44-48-4C-50-54-62-16-1F-26-2D-39-47-55-5F"),
    (2, Device.CPU): decode_curve("3C-41-42-46-47-4B-4C-62-03-0C-0C-16-16-22-22-29"),
    (2, Device.GPU): decode_curve("3C-41-42-46-47-4B-4C-62-08-11-11-1D-1D-26-26-2D"),
}


class FanCurveCodec:
    """
    Reads and writes fan curves for the active performance mode.

    The mode is never passed in: every call reads "performance_mode" from
    the store, so the active mode always decides which curve is used.
    Callers must settle the mode before calling.
    """

    def __init__(self, store: ConfigStore):
        self.store = store

    def _mode(self) -> int:
        return self.store.get_int("performance_mode")

    def curve_key(self, device: Device) -> str:
        """Store key of the curve for device in the current mode."""
        return f"fan_profile_{_as_device(device).label}_{self._mode()}"

    def load(self, device: Device) -> bytes:
        """
        Stored curve for device in the current mode.

        Returns:
            The 16-byte curve, or b"" when nothing is stored (fall back to
            default()).

        Raises:
            FanCurveError: the stored string is malformed.
        """
        text = self.store.get_string(self.curve_key(device))
        if text is None:
            return b""
        return decode_curve(text)

    def save(self, device: Device, curve: bytes) -> None:
        """Store curve for device in the current mode."""
        curve = bytes(curve)
        if len(curve) != CURVE_LENGTH:
            raise FanCurveError(f"A fan curve has {CURVE_LENGTH} bytes, got {len(curve)}")
        self.store.set(self.curve_key(device), encode_curve(curve))

    def default(self, device: Device) -> bytes:
        """Factory curve for device in the current mode."""
        mode = self._mode()
        if mode not in (1, 2):
            mode = 0
        return DEFAULT_CURVES[(mode, _as_device(device))]

    def active(self, device: Device) -> bytes:
        """Stored curve if there is a usable one, otherwise the factory curve."""
        try:
            curve = self.load(device)
        except FanCurveError as exc:
            logging.warning("Ignoring stored %s curve: %s", _as_device(device).label, exc)
            curve = b""
        return curve or self.default(device)
