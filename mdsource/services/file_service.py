from __future__ import annotations

from pathlib import Path

from mdsource.domain.interfaces import IFileService


class FileService(IFileService):
    """Stat and UTF-8 reads for watched files."""

    def modified_time(self, path: Path) -> int | None:
        try:
            return path.stat().st_mtime_ns
        except OSError:
            return None

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")
