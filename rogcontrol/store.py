#!/usr/bin/env python3
"""
Persistent user settings store.

Holds every user-facing setting (performance mode, button mappings, custom
commands, fan curves) in a single JSON object file. The whole map is
rewritten on every mutation.
"""

import json
import logging
import os
import re
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

DEFAULT_STORE: Dict[str, int] = {"performance_mode": 0}

_INT_RE = re.compile(r"\s*[+-]?\d+\s*\Z")


@dataclass(frozen=True)
class IntValue:
    """Integer setting."""
    value: int

    def as_string(self) -> str:
        return str(self.value)

    def to_json(self) -> Any:
        return self.value


@dataclass(frozen=True)
class StringValue:
    """String setting."""
    value: str

    def as_string(self) -> str:
        return self.value

    def to_json(self) -> Any:
        return self.value


@dataclass(frozen=True)
class RawValue:
    """Any other JSON value found on disk, kept verbatim so it round-trips."""
    value: Any

    def as_string(self) -> str:
        return json.dumps(self.value)

    def to_json(self) -> Any:
        return self.value


StoreValue = Union[IntValue, StringValue, RawValue]


def _wrap(value: Any) -> StoreValue:
    """Tag a decoded JSON value."""
    if isinstance(value, bool):
        return RawValue(value)
    if isinstance(value, int):
        return IntValue(value)
    if isinstance(value, str):
        return StringValue(value)
    return RawValue(value)


def default_store_path() -> Path:
    """Per-user location of the settings file."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "rogcontrol" / "config.json"


class ConfigStore:
    """
    Key/value settings store backed by a JSON file.

    Reads never fail: an absent integer reads as -1 and an absent string
    reads as None. A missing or corrupt file is replaced by the default
    map on load. All access goes through one lock so the event thread and
    the control thread never interleave a partial write.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        """
        Load the store, resetting it to defaults if the file is unusable.

        Args:
            path: Location of the JSON file; defaults to the per-user path.
        """
        self._path = Path(path) if path else default_store_path()
        self._lock = threading.RLock()
        self._values: Dict[str, StoreValue] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logging.error("Unable to create settings directory %s: %s", self._path.parent, exc)

        if not self._path.exists():
            logging.info("Settings file %s not found, creating defaults", self._path)
            self._reset()
            return

        try:
            with open(self._path, "r", encoding="utf-8-sig") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value is not an object")
        except (OSError, ValueError) as exc:
            logging.warning("Settings file %s is unreadable (%s), resetting to defaults",
                            self._path, exc)
            self._reset()
            return

        self._values = {str(key): _wrap(value) for key, value in data.items()}
        logging.debug("Loaded %d settings from %s", len(self._values), self._path)

    def _reset(self) -> None:
        self._values = {key: IntValue(value) for key, value in DEFAULT_STORE.items()}
        try:
            self._persist()
        except OSError:
            logging.warning("Keeping default settings in memory only")

    def _persist(self) -> None:
        """Rewrite the whole file atomically."""
        payload = {key: value.to_json() for key, value in self._values.items()}
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=self._path.parent,
                                             delete=False, suffix=".tmp") as tmp_file:
                tmp_path = tmp_file.name
                json.dump(payload, tmp_file, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            logging.error("Unable to write settings to %s: %s", self._path, exc)
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def get_int(self, key: str) -> int:
        """Return the integer stored under key, or -1 if absent or not an integer."""
        with self._lock:
            value = self._values.get(key)
        if value is None:
            return -1
        if isinstance(value, IntValue):
            return value.value

        text = value.as_string()
        if not _INT_RE.match(text):
            return -1
        return int(text)

    def get_string(self, key: str) -> Optional[str]:
        """Return the string form of the value under key, or None if absent."""
        with self._lock:
            value = self._values.get(key)
        return value.as_string() if value is not None else None

    def set(self, key: str, value: Union[int, str]) -> None:
        """
        Store a value and rewrite the backing file.

        Raises:
            TypeError: value is neither int nor str.
            OSError: the file could not be written. The in-memory value is
                kept either way.
        """
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise TypeError(f"Setting {key!r} must be int or str, not {type(value).__name__}")

        with self._lock:
            self._values[key] = IntValue(value) if isinstance(value, int) else StringValue(value)
            self._persist()
        logging.debug("Setting %s -> %r", key, value)

    def snapshot(self) -> Dict[str, Any]:
        """Plain dict copy of the current settings."""
        with self._lock:
            return {key: value.to_json() for key, value in self._values.items()}

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values
