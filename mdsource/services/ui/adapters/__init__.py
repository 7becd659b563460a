"""Qt-backed adapters for the rendering surface and thread hand-off."""

from .qt_invoker import QtMainThreadInvoker
from .web_surface import QtWebSurface, event_script

__all__ = ["QtMainThreadInvoker", "QtWebSurface", "event_script"]
