from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from mdsource.domain.models import RenderedDocument, StyleSource, SurfacePayload


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to an HTML fragment (no <html>/<body> wrapper)."""

    def to_fragment(self, markdown_text: str) -> str: ...


class IStyleResolver(Protocol):
    def resolve(self, source: StyleSource) -> str: ...


class IDocumentAssembler(Protocol):
    def assemble(self, html_fragment: str, css: str) -> RenderedDocument: ...


class IFileService(Protocol):
    """Stat and read watched text files."""

    def modified_time(self, path: Path) -> int | None: ...
    def read_text(self, path: Path) -> str: ...


class ISettingsStore(Protocol):
    """Key/value settings shared by the UI and the watcher. Must serialize access."""

    def get(self, key: str, default: Any = None) -> Any: ...
    def set(self, key: str, value: Any) -> None: ...
    def set_many(self, values: Mapping[str, Any]) -> None: ...
    def snapshot(self) -> dict[str, Any]: ...


class IScriptBridge(Protocol):
    """Programmatic path into the loaded page."""

    def call(self, event_name: str, json_string: str) -> bool: ...


class IRenderSurface(Protocol):
    """Embeddable web-content renderer that displays the preview."""

    def size(self) -> tuple[int, int]: ...
    def resize(self, width: int, height: int) -> None: ...
    def bridge(self) -> IScriptBridge | None: ...
    def load(self, payload: SurfacePayload) -> None: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def app_version(self) -> str: ...

    @property
    def loaded_from(self) -> Path | None: ...