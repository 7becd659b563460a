from __future__ import annotations

from mdsource.domain.interfaces import IStyleResolver
from mdsource.domain.models import CssFile, FontDescriptor, GeneratedCss, InlineCss, StyleSource


def unpack_rgba(color: int) -> tuple[int, int, int, int]:
    """Packed colour -> (r, g, b, a); byte 0 is red, byte 3 is alpha."""
    return (
        color & 0xFF,
        (color >> 8) & 0xFF,
        (color >> 16) & 0xFF,
        (color >> 24) & 0xFF,
    )


def css_rgba(color: int) -> str:
    r, g, b, a = unpack_rgba(color)
    return f"rgba({r}, {g}, {b}, {a})"


class StyleResolver(IStyleResolver):
    """Produce the preview CSS for one of the three style sources."""

    def resolve(self, source: StyleSource) -> str:
        if isinstance(source, InlineCss):
            return source.css
        if isinstance(source, CssFile):
            # file content is read by the watcher; never touch the disk here
            return source.content
        if isinstance(source, GeneratedCss):
            return self.generate(source.background, source.foreground, source.font)
        raise TypeError(f"Unsupported style source: {type(source).__name__}")

    @staticmethod
    def generate(background: int, foreground: int, font: FontDescriptor | None = None) -> str:
        lines = [
            "body {",
            f"  background-color: {css_rgba(background)};",
            f"  color: {css_rgba(foreground)};",
        ]
        if font is not None:
            lines.append(f'  font-family: "{font.face}";')
            # empty style and non-positive size mean "inherit"
            if font.style:
                lines.append(f'  font-style: "{font.style}";')
            if font.size > 0:
                lines.append(f"  font-size: {font.size}px;")
        lines += [
            "  margin: 0px 0px;",
            "  overflow: hidden;",
            "}",
        ]
        return "\n".join(lines) + "\n"
