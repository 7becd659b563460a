from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from PyQt6.QtWidgets import QApplication

from mdsource.di.container import Container
from mdsource.services.config.app_config import build_app_config
from mdsource.utils.constants import (
    APP_NAME,
    APP_ORG,
    KEY_BACKGROUND,
    KEY_CSS_PATH,
    KEY_CSS_TEXT,
    KEY_FONT_FACE,
    KEY_FONT_SIZE,
    KEY_FONT_STYLE,
    KEY_FOREGROUND,
    KEY_HEIGHT,
    KEY_MARKDOWN_PATH,
    KEY_MARKDOWN_SOURCE,
    KEY_MARKDOWN_TEXT,
    KEY_POLL_INTERVAL,
    KEY_STYLE_SOURCE,
    KEY_WIDTH,
)

logger = logging.getLogger(__name__)


def _color(value: str) -> int:
    """Accept decimal or 0x-prefixed packed colours (byte 0 = red)."""
    return int(value, 0) & 0xFFFFFFFF


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mdsource", description="Live Markdown preview source.")
    p.add_argument("markdown_file", nargs="?", type=Path, help="Markdown file to watch")
    p.add_argument("--text", help="inline Markdown text (ignored when a file is given)")
    p.add_argument("--css", help="inline CSS")
    p.add_argument("--css-file", type=Path, help="CSS file to watch")
    p.add_argument("--background", type=_color, help="generate CSS from colours (packed RGBA)")
    p.add_argument("--foreground", type=_color, help="text colour for generated CSS")
    p.add_argument("--font-face")
    p.add_argument("--font-style")
    p.add_argument("--font-size", type=int, help="font size in px")
    p.add_argument("--width", type=int)
    p.add_argument("--height", type=int)
    p.add_argument("--poll-ms", type=int, help="file polling interval in milliseconds")
    p.add_argument("--config", type=Path, help="explicit config.ini")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return p


def settings_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Translate CLI options into settings store writes."""
    changes: dict[str, Any] = {}

    if args.markdown_file is not None:
        changes[KEY_MARKDOWN_SOURCE] = "file"
        changes[KEY_MARKDOWN_PATH] = str(args.markdown_file.expanduser().resolve())
    elif args.text is not None:
        changes[KEY_MARKDOWN_SOURCE] = "text"
        changes[KEY_MARKDOWN_TEXT] = args.text

    if args.css_file is not None:
        changes[KEY_STYLE_SOURCE] = "file"
        changes[KEY_CSS_PATH] = str(args.css_file.expanduser().resolve())
    elif args.background is not None or args.foreground is not None or args.font_face:
        changes[KEY_STYLE_SOURCE] = "colors"
        if args.background is not None:
            changes[KEY_BACKGROUND] = args.background
        if args.foreground is not None:
            changes[KEY_FOREGROUND] = args.foreground
        if args.font_face:
            changes[KEY_FONT_FACE] = args.font_face
            if args.font_style is not None:
                changes[KEY_FONT_STYLE] = args.font_style
            if args.font_size is not None:
                changes[KEY_FONT_SIZE] = args.font_size
    elif args.css is not None:
        changes[KEY_STYLE_SOURCE] = "css"
        changes[KEY_CSS_TEXT] = args.css

    if args.width is not None:
        changes[KEY_WIDTH] = args.width
    if args.height is not None:
        changes[KEY_HEIGHT] = args.height
    if args.poll_ms is not None:
        changes[KEY_POLL_INTERVAL] = args.poll_ms
    return changes


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the source via the DI container,
    and shows the preview window.
    """
    # unknown options are left for Qt (e.g. -platform)
    args, _qt_args = build_parser().parse_known_args(list(argv[1:]))
    config = build_app_config(explicit_ini=args.config)
    configure_logging(args.log_level or config.log_level())
    logger.info("%s %s starting", APP_NAME, config.get_version())
    logger.info("Configuration loaded from %s", config.loaded_from or "built-in defaults")

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication(list(argv))

    container = Container.default(config=config)
    window, source = container.build_preview_window(app_title=APP_NAME)

    source.create(settings_from_args(args))

    window.show()
    return app.exec()
