"""Domain layer: interfaces and simple models (dataclasses)."""

from .interfaces import (
    IDocumentAssembler,
    IFileService,
    IMarkdownRenderer,
    IRenderSurface,
    IScriptBridge,
    ISettingsStore,
    IStyleResolver,
)
from .models import (
    ContentChanged,
    MarkdownMode,
    Patched,
    Reloaded,
    RenderedDocument,
    RenderSettings,
    StyleMode,
    SurfacePayload,
    UpdateResult,
)

__all__ = [
    "IMarkdownRenderer",
    "IStyleResolver",
    "IDocumentAssembler",
    "IFileService",
    "ISettingsStore",
    "IScriptBridge",
    "IRenderSurface",
    "ContentChanged",
    "MarkdownMode",
    "StyleMode",
    "RenderSettings",
    "RenderedDocument",
    "SurfacePayload",
    "Patched",
    "Reloaded",
    "UpdateResult",
]
