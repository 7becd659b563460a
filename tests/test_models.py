import pytest

from mdsource.domain.models import (
    CssFile,
    FontDescriptor,
    GeneratedCss,
    InlineCss,
    InlineMarkdown,
    MarkdownFile,
    MarkdownMode,
    RenderSettings,
    StyleMode,
    WatchKind,
    normalize_poll_interval,
)


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1000), (0, 1000), (-5, 1000), ("abc", 1000), ("250", 250), (50, 50)],
)
def test_poll_interval_normalization(raw, expected):
    assert normalize_poll_interval(raw) == expected


def test_from_mapping_coerces_string_values():
    s = RenderSettings.from_mapping(
        {
            "markdown/source": "FILE",
            "markdown/path": "/tmp/a.md",
            "style/source": "colors",
            "style/background": "0xFF0000FF",
            "style/foreground": "4294967295",
            "surface/width": "1024",
            "surface/height": "0",
            "watch/interval_ms": "0",
            "font/face": "Arial",
            "font/size": "18",
        }
    )
    assert s.markdown_mode is MarkdownMode.FILE_PATH
    assert s.style_mode is StyleMode.GENERATED_FROM_COLORS
    assert s.background_color == 0xFF0000FF
    assert s.foreground_color == 0xFFFFFFFF
    assert (s.surface_width, s.surface_height) == (1024, 600)
    assert s.poll_interval_ms == 1000
    assert s.font_descriptor == FontDescriptor(face="Arial", style="", size=18)


def test_unknown_modes_fall_back():
    s = RenderSettings.from_mapping({"markdown/source": "svg", "style/source": 7})
    assert s.markdown_mode is MarkdownMode.INLINE_TEXT
    assert s.style_mode is StyleMode.INLINE_CSS


def test_blank_font_face_means_no_font():
    s = RenderSettings.from_mapping({"font/face": "   ", "font/size": 12})
    assert s.font_descriptor is None


def test_tagged_sources():
    s = RenderSettings(markdown_text="t", css_text="c")
    assert s.markdown_source() == InlineMarkdown("t")
    assert s.style_source() == InlineCss("c")

    s = RenderSettings(
        markdown_mode=MarkdownMode.FILE_PATH,
        markdown_file_path="/a.md",
        markdown_file_text="A",
        style_mode=StyleMode.CSS_FILE_PATH,
        css_file_path="/a.css",
        css_file_text="C",
    )
    assert s.markdown_source() == MarkdownFile("/a.md", "A")
    assert s.style_source() == CssFile("/a.css", "C")

    s = RenderSettings(style_mode=StyleMode.GENERATED_FROM_COLORS, background_color=5)
    assert isinstance(s.style_source(), GeneratedCss)
    assert s.style_source().background == 5


def test_watch_targets_follow_modes_and_paths():
    assert RenderSettings().watch_targets() == []
    # file mode without a path watches nothing
    assert RenderSettings(markdown_mode=MarkdownMode.FILE_PATH).watch_targets() == []

    s = RenderSettings(
        markdown_mode=MarkdownMode.FILE_PATH,
        markdown_file_path="/a.md",
        markdown_file_text="A",
        style_mode=StyleMode.CSS_FILE_PATH,
        css_file_path="/a.css",
    )
    kinds = [(t.kind, t.path, t.known_content) for t in s.watch_targets()]
    assert kinds == [(WatchKind.MARKDOWN, "/a.md", "A"), (WatchKind.CSS, "/a.css", "")]
