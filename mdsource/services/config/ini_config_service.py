# mdsource/services/config/ini_config_service.py
from __future__ import annotations

import configparser
import logging
from pathlib import Path

from platformdirs import user_config_dir

from mdsource.domain.interfaces import IConfigService

logger = logging.getLogger(__name__)


class IniConfigService(IConfigService):
    r"""
    INI-backed configuration reader.

    Load order (first hit wins):
      1. Explicit path provided at construction
      2. User config dir (e.g. ~/.config/MarkdownSource/config.ini or %APPDATA%\MarkdownSource\config.ini)
      3. Project default at <repo>/config/config.ini  (optional)

    Recognised sections:
      [app]      version
      [logging]  level
      [source]   width, height, poll_interval_ms, css
    """

    DEFAULT_APP_DIR = "MarkdownSource"
    DEFAULT_FILE = "config.ini"

    def __init__(self, explicit_path: Path | None = None, project_root: Path | None = None):
        # no interpolation: CSS values may legitimately contain '%'
        self._parser = configparser.ConfigParser(interpolation=None)
        self._loaded_from: Path | None = None

        for path in self._candidates(explicit_path, project_root):
            try:
                if path.exists():
                    with path.open("r", encoding="utf-8") as fh:
                        self._parser.read_file(fh)
                    self._loaded_from = path
                    logger.debug("Loaded configuration from %s", path)
                    break
            except (OSError, configparser.Error) as exc:
                # malformed or unreadable config: keep going with defaults
                logger.warning("Ignoring config file %s: %s", path, exc)
                continue

        if "app" not in self._parser:
            self._parser["app"] = {}
        self._parser["app"].setdefault("version", "0.0.0")

    def _candidates(self, explicit_path: Path | None, project_root: Path | None) -> list[Path]:
        candidates: list[Path] = []
        if explicit_path:
            candidates.append(explicit_path)

        candidates.append(Path(user_config_dir(self.DEFAULT_APP_DIR)) / self.DEFAULT_FILE)

        if project_root:
            candidates.append(project_root / "config" / self.DEFAULT_FILE)
        return candidates

    # ----- IConfigService -----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        if section not in self._parser:
            return default
        return self._parser[section].get(key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        val = self.get(section, key, None)
        if val is None:
            return default
        try:
            return int(val.strip())
        except ValueError:
            return default

    def app_version(self) -> str:
        return self.get("app", "version", "0.0.0") or "0.0.0"

    @property
    def loaded_from(self) -> Path | None:
        """For diagnostics."""
        return self._loaded_from
