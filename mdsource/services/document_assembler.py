from __future__ import annotations

from mdsource.domain.interfaces import IDocumentAssembler
from mdsource.domain.models import RenderedDocument
from mdsource.services import base64_encoder
from mdsource.utils.constants import BOOTSTRAP_SCRIPT, DATA_URI_MIME, HTML_TEMPLATE


class DocumentAssembler(IDocumentAssembler):
    """
    Wraps a fragment into the preview page and packages it as a data URI.

    The page carries the bootstrap script that answers the two update events,
    so a surface loaded from this document can later be patched in place.
    CSS is not embedded; it travels next to the URL in the surface payload.
    """

    def build_html(self, html_fragment: str) -> str:
        return HTML_TEMPLATE.format(script=BOOTSTRAP_SCRIPT, body=html_fragment)

    def assemble(self, html_fragment: str, css: str) -> RenderedDocument:
        full = self.build_html(html_fragment)
        return RenderedDocument(
            html_fragment=html_fragment,
            resolved_css=css,
            full_document_html=full,
            data_uri=base64_encoder.to_data_uri(full.encode("utf-8"), DATA_URI_MIME),
        )
