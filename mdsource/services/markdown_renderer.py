# mdsource/services/markdown_renderer.py
from __future__ import annotations

import markdown

from mdsource.domain.interfaces import IMarkdownRenderer


class MarkdownRenderer(IMarkdownRenderer):
    """
    Converts Markdown to an HTML fragment.

    Tables, ``~~strikethrough~~`` (pymdownx.tilde) and ``- [x]`` task lists
    (pymdownx.tasklist) are enabled on top of the core syntax. Output is not
    sanitized; it is only ever embedded in the preview document.
    """

    EXTENSIONS = (
        "tables",
        "fenced_code",
        "sane_lists",
        "pymdownx.tilde",
        "pymdownx.tasklist",
    )

    EXTENSION_CONFIGS = {
        # only strikethrough; ~subscript~ is not part of the supported syntax
        "pymdownx.tilde": {"subscript": False},
        "pymdownx.tasklist": {"custom_checkbox": False, "clickable_checkbox": False},
    }

    def to_fragment(self, markdown_text: str) -> str:
        # markdown.markdown builds a fresh Markdown instance, so nothing is
        # carried over between calls (and calls from different threads are safe).
        return markdown.markdown(
            markdown_text or "",
            extensions=list(self.EXTENSIONS),
            extension_configs=self.EXTENSION_CONFIGS,
            output_format="html",
        )
