from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QUrl, pyqtSignal

from mdsource.domain.interfaces import IScriptBridge
from mdsource.domain.models import SurfacePayload
from mdsource.utils.constants import EVENT_SET_CSS

if TYPE_CHECKING:  # pragma: no cover
    from PyQt6.QtWebEngineWidgets import QWebEngineView

logger = logging.getLogger(__name__)


def event_script(event_name: str, json_string: str) -> str:
    """JS that dispatches ``event_name`` on ``window`` with the parsed JSON as detail."""
    return (
        f"window.dispatchEvent(new CustomEvent({json.dumps(event_name)}, "
        f"{{detail: JSON.parse({json.dumps(json_string)})}}));"
    )


class QtWebSurface(QObject):
    """
    Rendering surface backed by a QWebEngineView.

    The scripting bridge is only offered after the page reported a successful
    load; until then every update falls back to a full reload. The payload CSS
    is delivered through the bridge as soon as the page is ready.
    Must be used from the GUI thread.
    """

    removed = pyqtSignal()

    def __init__(self, view: QWebEngineView, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._view: QWebEngineView | None = view
        self._size = (0, 0)
        self._loaded = False
        self._pending_css: str | None = None

        view.loadFinished.connect(self._on_load_finished)
        view.destroyed.connect(self._on_view_destroyed)

    # ---------- IRenderSurface ----------

    def size(self) -> tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)
        if self._view is not None:
            self._view.setFixedSize(width, height)

    def bridge(self) -> IScriptBridge | None:
        return _PageBridge(self) if self._loaded and self._view is not None else None

    def load(self, payload: SurfacePayload) -> None:
        if self._view is None:
            return
        if self._size != (payload.width, payload.height):
            self.resize(payload.width, payload.height)
        if not payload.url:
            # nothing to navigate to; loadFinished would never reopen the bridge
            return
        self._loaded = False
        self._pending_css = payload.css
        self._view.setUrl(QUrl(payload.url))

    # ---------- bridge ----------

    def run_event(self, event_name: str, json_string: str) -> bool:
        if not self._loaded or self._view is None:
            return False
        self._view.page().runJavaScript(event_script(event_name, json_string))
        return True

    # ---------- view signals ----------

    def _on_load_finished(self, ok: bool) -> None:
        if not ok:
            logger.warning("Preview page failed to load; next update reloads it")
            self._loaded = False
            return
        self._loaded = True
        if self._pending_css is not None:
            css, self._pending_css = self._pending_css, None
            self.run_event(EVENT_SET_CSS, json.dumps({"css": css}))

    def _on_view_destroyed(self, *_args: object) -> None:
        self._view = None
        self._loaded = False
        self.removed.emit()


class _PageBridge(IScriptBridge):
    def __init__(self, surface: QtWebSurface) -> None:
        self._surface = surface

    def call(self, event_name: str, json_string: str) -> bool:
        return self._surface.run_event(event_name, json_string)
