from __future__ import annotations

import json
import logging

from mdsource.domain.interfaces import (
    IDocumentAssembler,
    IMarkdownRenderer,
    IRenderSurface,
    IStyleResolver,
)
from mdsource.domain.models import (
    InlineMarkdown,
    MarkdownFile,
    MarkdownSpec,
    Patched,
    Reloaded,
    RenderedDocument,
    RenderSettings,
    SurfacePayload,
    UpdateResult,
)
from mdsource.utils.constants import EVENT_SET_CSS, EVENT_SET_HTML

logger = logging.getLogger(__name__)


def markdown_text(source: MarkdownSpec) -> str:
    if isinstance(source, InlineMarkdown):
        return source.text
    if isinstance(source, MarkdownFile):
        return source.content
    raise TypeError(f"Unsupported markdown source: {type(source).__name__}")


class UpdateDispatcher:
    """
    Push a settings snapshot to a rendering surface.

    Geometry is applied to the surface first. Content is then delivered as two
    bridge events; when the bridge is missing or either event is refused the
    surface is reloaded from a freshly assembled data URI instead.
    """

    def __init__(
        self,
        renderer: IMarkdownRenderer,
        styles: IStyleResolver,
        assembler: IDocumentAssembler,
    ) -> None:
        self.renderer = renderer
        self.styles = styles
        self.assembler = assembler

    def render_parts(self, settings: RenderSettings) -> tuple[str, str]:
        fragment = self.renderer.to_fragment(markdown_text(settings.markdown_source()))
        css = self.styles.resolve(settings.style_source())
        return fragment, css

    def render(self, settings: RenderSettings) -> RenderedDocument:
        fragment, css = self.render_parts(settings)
        return self.assembler.assemble(fragment, css)

    def dispatch(self, settings: RenderSettings, surface: IRenderSurface) -> UpdateResult:
        self._apply_geometry(settings, surface)
        fragment, css = self.render_parts(settings)

        bridge = surface.bridge()
        if bridge is None:
            return self._reload(surface, settings, fragment, css, reason="no bridge")

        # both events are always attempted; each one reports on its own
        html_ok = bridge.call(EVENT_SET_HTML, json.dumps({"html": fragment}))
        css_ok = bridge.call(EVENT_SET_CSS, json.dumps({"css": css}))
        if not (html_ok and css_ok):
            failed = [
                name
                for name, ok in ((EVENT_SET_HTML, html_ok), (EVENT_SET_CSS, css_ok))
                if not ok
            ]
            return self._reload(
                surface, settings, fragment, css, reason=f"bridge refused {', '.join(failed)}"
            )

        logger.debug("Patched surface in place (%d bytes html)", len(fragment))
        return Patched(html_fragment=fragment, resolved_css=css)

    # -------------------- helpers --------------------

    def _apply_geometry(self, settings: RenderSettings, surface: IRenderSurface) -> None:
        wanted = (settings.surface_width, settings.surface_height)
        if surface.size() != wanted:
            logger.debug("Resizing surface %s -> %s", surface.size(), wanted)
            surface.resize(*wanted)

    def _reload(
        self,
        surface: IRenderSurface,
        settings: RenderSettings,
        fragment: str,
        css: str,
        *,
        reason: str,
    ) -> Reloaded:
        document = self.assembler.assemble(fragment, css)
        logger.debug("Full reload (%s), %d byte data URI", reason, len(document.data_uri))
        surface.load(
            SurfacePayload(
                url=document.data_uri,
                css=css,
                width=settings.surface_width,
                height=settings.surface_height,
            )
        )
        return Reloaded(document=document, reason=reason)
