from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from mdsource.utils.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_CSS,
    DEFAULT_FOREGROUND,
    DEFAULT_HEIGHT,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_WIDTH,
    KEY_BACKGROUND,
    KEY_CSS_FILE_TEXT,
    KEY_CSS_PATH,
    KEY_CSS_TEXT,
    KEY_FONT_FACE,
    KEY_FONT_SIZE,
    KEY_FONT_STYLE,
    KEY_FOREGROUND,
    KEY_HEIGHT,
    KEY_MARKDOWN_FILE_TEXT,
    KEY_MARKDOWN_PATH,
    KEY_MARKDOWN_SOURCE,
    KEY_MARKDOWN_TEXT,
    KEY_POLL_INTERVAL,
    KEY_STYLE_SOURCE,
    KEY_WIDTH,
)


class MarkdownMode(Enum):
    INLINE_TEXT = "text"
    FILE_PATH = "file"


class StyleMode(Enum):
    INLINE_CSS = "css"
    CSS_FILE_PATH = "file"
    GENERATED_FROM_COLORS = "colors"


class WatchKind(Enum):
    MARKDOWN = "markdown"
    CSS = "css"


# ---------- value coercion (store values may come back as strings) ----------


def _as_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _as_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        raw = value.strip()
        for base in (10, 0):
            try:
                return int(raw, base)
            except ValueError:
                continue
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_mode(enum_cls: type[Enum], value: Any, default: Enum) -> Any:
    try:
        return enum_cls(_as_str(value).strip().lower())
    except ValueError:
        return default


def normalize_poll_interval(value: Any) -> int:
    """Zero, negative or unparsable intervals fall back to the default."""
    ms = _as_int(value, DEFAULT_POLL_INTERVAL_MS)
    return ms if ms > 0 else DEFAULT_POLL_INTERVAL_MS


def normalize_dimension(value: Any, default: int) -> int:
    n = _as_int(value, default)
    return n if n > 0 else default


# ---------- tagged source variants ----------


@dataclass(frozen=True)
class FontDescriptor:
    face: str
    style: str = ""
    size: int = 0


@dataclass(frozen=True)
class InlineMarkdown:
    text: str


@dataclass(frozen=True)
class MarkdownFile:
    path: str
    content: str


MarkdownSpec = Union[InlineMarkdown, MarkdownFile]


@dataclass(frozen=True)
class InlineCss:
    css: str


@dataclass(frozen=True)
class CssFile:
    path: str
    content: str


@dataclass(frozen=True)
class GeneratedCss:
    background: int
    foreground: int
    font: FontDescriptor | None = None


StyleSource = Union[InlineCss, CssFile, GeneratedCss]


# ---------- settings snapshot ----------


@dataclass(frozen=True)
class RenderSettings:
    """Immutable copy of the settings the render path needs."""

    markdown_mode: MarkdownMode = MarkdownMode.INLINE_TEXT
    markdown_text: str = ""
    markdown_file_path: str = ""
    markdown_file_text: str = ""
    style_mode: StyleMode = StyleMode.INLINE_CSS
    css_text: str = DEFAULT_CSS
    css_file_path: str = ""
    css_file_text: str = ""
    background_color: int = DEFAULT_BACKGROUND
    foreground_color: int = DEFAULT_FOREGROUND
    font_descriptor: FontDescriptor | None = None
    surface_width: int = DEFAULT_WIDTH
    surface_height: int = DEFAULT_HEIGHT
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> RenderSettings:
        face = _as_str(values.get(KEY_FONT_FACE)).strip()
        font = (
            FontDescriptor(
                face=face,
                style=_as_str(values.get(KEY_FONT_STYLE)),
                size=max(0, _as_int(values.get(KEY_FONT_SIZE), 0)),
            )
            if face
            else None
        )
        return cls(
            markdown_mode=_as_mode(
                MarkdownMode, values.get(KEY_MARKDOWN_SOURCE), MarkdownMode.INLINE_TEXT
            ),
            markdown_text=_as_str(values.get(KEY_MARKDOWN_TEXT)),
            markdown_file_path=_as_str(values.get(KEY_MARKDOWN_PATH)),
            markdown_file_text=_as_str(values.get(KEY_MARKDOWN_FILE_TEXT)),
            style_mode=_as_mode(StyleMode, values.get(KEY_STYLE_SOURCE), StyleMode.INLINE_CSS),
            css_text=_as_str(values.get(KEY_CSS_TEXT), DEFAULT_CSS),
            css_file_path=_as_str(values.get(KEY_CSS_PATH)),
            css_file_text=_as_str(values.get(KEY_CSS_FILE_TEXT)),
            background_color=_as_int(values.get(KEY_BACKGROUND), DEFAULT_BACKGROUND) & 0xFFFFFFFF,
            foreground_color=_as_int(values.get(KEY_FOREGROUND), DEFAULT_FOREGROUND) & 0xFFFFFFFF,
            font_descriptor=font,
            surface_width=normalize_dimension(values.get(KEY_WIDTH), DEFAULT_WIDTH),
            surface_height=normalize_dimension(values.get(KEY_HEIGHT), DEFAULT_HEIGHT),
            poll_interval_ms=normalize_poll_interval(values.get(KEY_POLL_INTERVAL)),
        )

    @classmethod
    def from_store(cls, store: Any) -> RenderSettings:
        return cls.from_mapping(store.snapshot())

    def markdown_source(self) -> MarkdownSpec:
        if self.markdown_mode is MarkdownMode.FILE_PATH:
            return MarkdownFile(path=self.markdown_file_path, content=self.markdown_file_text)
        return InlineMarkdown(text=self.markdown_text)

    def style_source(self) -> StyleSource:
        if self.style_mode is StyleMode.CSS_FILE_PATH:
            return CssFile(path=self.css_file_path, content=self.css_file_text)
        if self.style_mode is StyleMode.GENERATED_FROM_COLORS:
            return GeneratedCss(
                background=self.background_color,
                foreground=self.foreground_color,
                font=self.font_descriptor,
            )
        return InlineCss(css=self.css_text)

    def watch_targets(self) -> list[WatchTarget]:
        targets: list[WatchTarget] = []
        if self.markdown_mode is MarkdownMode.FILE_PATH and self.markdown_file_path:
            targets.append(
                WatchTarget(WatchKind.MARKDOWN, self.markdown_file_path, self.markdown_file_text)
            )
        if self.style_mode is StyleMode.CSS_FILE_PATH and self.css_file_path:
            targets.append(WatchTarget(WatchKind.CSS, self.css_file_path, self.css_file_text))
        return targets


# ---------- rendering outputs ----------


@dataclass(frozen=True)
class RenderedDocument:
    html_fragment: str
    resolved_css: str
    full_document_html: str
    data_uri: str


@dataclass(frozen=True)
class SurfacePayload:
    """Creation/reload payload for a rendering surface."""

    url: str | None
    css: str
    width: int
    height: int


@dataclass(frozen=True)
class Patched:
    """Surface was updated in place through the scripting bridge."""

    html_fragment: str
    resolved_css: str


@dataclass(frozen=True)
class Reloaded:
    """Surface was sent a freshly assembled document."""

    document: RenderedDocument
    reason: str


UpdateResult = Union[Patched, Reloaded]


# ---------- file watching ----------


@dataclass(frozen=True)
class WatchTarget:
    kind: WatchKind
    path: str
    known_content: str


@dataclass
class WatchState:
    path: str
    last_modified_time: int | None = None
    last_seen_content: str | None = None


@dataclass(frozen=True)
class ContentChanged:
    kind: WatchKind
    path: str
    content: str
