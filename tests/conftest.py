from __future__ import annotations

import os
from pathlib import Path

import pytest

# Qt widgets need a platform plugin even in headless CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from mdsource.domain.models import SurfacePayload  # noqa: E402
from mdsource.services.document_assembler import DocumentAssembler  # noqa: E402
from mdsource.services.file_service import FileService  # noqa: E402
from mdsource.services.markdown_renderer import MarkdownRenderer  # noqa: E402
from mdsource.services.settings_service import MemorySettingsStore, QSettingsStore  # noqa: E402
from mdsource.services.source import MarkdownSource  # noqa: E402
from mdsource.services.style_resolver import StyleResolver  # noqa: E402
from mdsource.services.update_dispatcher import UpdateDispatcher  # noqa: E402


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


# --- Fake rendering surface ---


class FakeBridge:
    def __init__(self, results: dict[str, bool] | None = None, default: bool = True) -> None:
        self.results = results or {}
        self.default = default
        self.calls: list[tuple[str, str]] = []

    def call(self, event_name: str, json_string: str) -> bool:
        self.calls.append((event_name, json_string))
        return self.results.get(event_name, self.default)


class FakeSurface:
    """Records what the dispatcher does to it."""

    def __init__(self, bridge: FakeBridge | None = None, size: tuple[int, int] = (0, 0)) -> None:
        self._bridge = bridge
        self._size = size
        self.loads: list[SurfacePayload] = []
        self.resizes: list[tuple[int, int]] = []

    def size(self) -> tuple[int, int]:
        return self._size

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)
        self.resizes.append((width, height))

    def bridge(self) -> FakeBridge | None:
        return self._bridge

    def load(self, payload: SurfacePayload) -> None:
        self.loads.append(payload)


class CountingDispatcher(UpdateDispatcher):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.results = []

    def dispatch(self, settings, surface):
        result = super().dispatch(settings, surface)
        self.results.append(result)
        return result


# --- Other common fixtures ---


@pytest.fixture()
def qsettings(tmp_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def qsettings_store(qsettings: QSettings) -> QSettingsStore:
    return QSettingsStore(qsettings)


@pytest.fixture()
def store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture()
def assembler() -> DocumentAssembler:
    return DocumentAssembler()


@pytest.fixture()
def dispatcher(renderer: MarkdownRenderer, assembler: DocumentAssembler) -> CountingDispatcher:
    return CountingDispatcher(renderer, StyleResolver(), assembler)


@pytest.fixture()
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest.fixture()
def surface(bridge: FakeBridge) -> FakeSurface:
    return FakeSurface(bridge)


@pytest.fixture()
def source(store, surface, dispatcher):
    src = MarkdownSource(store, surface, dispatcher=dispatcher, files=FileService())
    yield src
    src.destroy()
