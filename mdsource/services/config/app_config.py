from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Any

from mdsource.domain.interfaces import IConfigService
from mdsource.domain.models import normalize_dimension, normalize_poll_interval
from mdsource.services.config.ini_config_service import IniConfigService
from mdsource.services.settings_service import default_values
from mdsource.utils.constants import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    KEY_CSS_TEXT,
    KEY_HEIGHT,
    KEY_POLL_INTERVAL,
    KEY_WIDTH,
)

DISTRIBUTION = "mdsource"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller bundles expose sys._MEIPASS as the bundle root
      - dev mode walks up from this file (mdsource/services/config/app_config.py)
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)
    return Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class AppConfig:
    """
    Application configuration on top of an INI reader.

    Version precedence:
      1) installed package metadata
      2) ini [app] version
      3) "0.0.0"
    """

    ini: IConfigService
    project_root: Path

    def get_version(self) -> str:
        try:
            return metadata.version(DISTRIBUTION)
        except metadata.PackageNotFoundError:
            pass
        v = (self.ini.app_version() or "").strip().lstrip("vV")
        return v or "0.0.0"

    def log_level(self) -> str:
        level = (self.ini.get("logging", "level", "INFO") or "INFO").strip().upper()
        return level if level in _LOG_LEVELS else "INFO"

    def source_defaults(self) -> dict[str, Any]:
        """Store defaults, with [source] overrides from the INI file applied."""
        defaults = default_values()
        defaults[KEY_WIDTH] = normalize_dimension(
            self.ini.get_int("source", "width", DEFAULT_WIDTH), DEFAULT_WIDTH
        )
        defaults[KEY_HEIGHT] = normalize_dimension(
            self.ini.get_int("source", "height", DEFAULT_HEIGHT), DEFAULT_HEIGHT
        )
        defaults[KEY_POLL_INTERVAL] = normalize_poll_interval(
            self.ini.get_int("source", "poll_interval_ms", None)
        )
        css = self.ini.get("source", "css", None)
        if css:
            defaults[KEY_CSS_TEXT] = css
        return defaults

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
