from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

from PyQt6.QtCore import QSettings

from mdsource.domain.interfaces import ISettingsStore
from mdsource.utils.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_CSS,
    DEFAULT_FOREGROUND,
    DEFAULT_HEIGHT,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_WIDTH,
    KEY_BACKGROUND,
    KEY_CSS_TEXT,
    KEY_FOREGROUND,
    KEY_HEIGHT,
    KEY_MARKDOWN_SOURCE,
    KEY_MARKDOWN_TEXT,
    KEY_POLL_INTERVAL,
    KEY_STYLE_SOURCE,
    KEY_WIDTH,
)


def default_values() -> dict[str, Any]:
    """Built-in defaults written into a fresh store."""
    return {
        KEY_MARKDOWN_SOURCE: "text",
        KEY_MARKDOWN_TEXT: "",
        KEY_STYLE_SOURCE: "css",
        KEY_CSS_TEXT: DEFAULT_CSS,
        KEY_BACKGROUND: DEFAULT_BACKGROUND,
        KEY_FOREGROUND: DEFAULT_FOREGROUND,
        KEY_WIDTH: DEFAULT_WIDTH,
        KEY_HEIGHT: DEFAULT_HEIGHT,
        KEY_POLL_INTERVAL: DEFAULT_POLL_INTERVAL_MS,
    }


def seed_defaults(store: ISettingsStore, defaults: Mapping[str, Any]) -> None:
    """Write every default whose key is not present yet."""
    current = store.snapshot()
    missing = {k: v for k, v in defaults.items() if k not in current}
    if missing:
        store.set_many(missing)


class MemorySettingsStore(ISettingsStore):
    """In-process store guarded by a single lock."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._lock = threading.RLock()
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value

    def set_many(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            self._values.update(values)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._values)


class QSettingsStore(ISettingsStore):
    """Persist source settings through QSettings; one lock serializes readers and writers."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._s.value(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._s.setValue(key, value)

    def set_many(self, values: Mapping[str, Any]) -> None:
        with self._lock:
            for key, value in values.items():
                self._s.setValue(key, value)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {key: self._s.value(key) for key in self._s.allKeys()}
