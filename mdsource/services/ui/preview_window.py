from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtWidgets import QMainWindow

from mdsource.services.ui.adapters.web_surface import QtWebSurface


class PreviewWindow(QMainWindow):
    """Thin window hosting the web view the markdown source renders into."""

    closing = pyqtSignal()

    def __init__(self, *, app_title: str = "Markdown Source") -> None:
        super().__init__()
        self.setWindowTitle(app_title)

        self.view = QWebEngineView(self)
        self.setCentralWidget(self.view)

        self.surface = QtWebSurface(self.view, parent=self)

    def closeEvent(self, event):
        self.closing.emit()
        super().closeEvent(event)
