"""Concrete services: render pipeline, update dispatch, file watching and settings."""

from .document_assembler import DocumentAssembler
from .file_service import FileService
from .file_watcher import FileWatcher
from .markdown_renderer import MarkdownRenderer
from .settings_service import MemorySettingsStore, QSettingsStore
from .source import MarkdownSource
from .style_resolver import StyleResolver
from .update_dispatcher import UpdateDispatcher

__all__ = [
    "DocumentAssembler",
    "FileService",
    "FileWatcher",
    "MarkdownRenderer",
    "MarkdownSource",
    "MemorySettingsStore",
    "QSettingsStore",
    "StyleResolver",
    "UpdateDispatcher",
]
