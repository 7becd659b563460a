from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QSettings

from mdsource.domain.interfaces import (
    IDocumentAssembler,
    IFileService,
    IMarkdownRenderer,
    IRenderSurface,
    ISettingsStore,
    IStyleResolver,
)
from mdsource.services.config.app_config import AppConfig, build_app_config
from mdsource.services.document_assembler import DocumentAssembler
from mdsource.services.file_service import FileService
from mdsource.services.markdown_renderer import MarkdownRenderer
from mdsource.services.settings_service import QSettingsStore
from mdsource.services.source import Invoker, MarkdownSource
from mdsource.services.style_resolver import StyleResolver
from mdsource.services.update_dispatcher import UpdateDispatcher
from mdsource.utils.constants import APP_NAME, APP_ORG

if TYPE_CHECKING:  # pragma: no cover
    from mdsource.services.ui.preview_window import PreviewWindow


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Builds markdown sources around any rendering surface
      - Builds the Qt preview window (WebEngine imported lazily)
    """

    def __init__(
        self,
        renderer: IMarkdownRenderer | None = None,
        styles: IStyleResolver | None = None,
        assembler: IDocumentAssembler | None = None,
        files: IFileService | None = None,
        store: ISettingsStore | None = None,
        qsettings: QSettings | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer()
        self.styles: IStyleResolver = styles or StyleResolver()
        self.assembler: IDocumentAssembler = assembler or DocumentAssembler()
        self.file_service: IFileService = files or FileService()
        self.store: ISettingsStore = store or QSettingsStore(qsettings or QSettings())
        self.config: AppConfig = config or build_app_config()

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        config: AppConfig | None = None,
        organization: str = APP_ORG,
        application: str = APP_ORG,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        return Container(qsettings=qsettings, config=config)

    # ---------- factories ----------

    def build_dispatcher(self) -> UpdateDispatcher:
        return UpdateDispatcher(self.renderer, self.styles, self.assembler)

    def build_source(
        self, surface: IRenderSurface | None, *, invoke: Invoker | None = None
    ) -> MarkdownSource:
        return MarkdownSource(
            self.store,
            surface,
            dispatcher=self.build_dispatcher(),
            files=self.file_service,
            defaults=self.config.source_defaults(),
            invoke=invoke,
        )

    def build_preview_window(
        self, *, app_title: str = APP_NAME
    ) -> tuple[PreviewWindow, MarkdownSource]:
        """
        Create the preview window and a source bound to its web surface.

        Watcher wake-ups are marshalled to the GUI thread, the source is
        destroyed when the window closes, and a destroyed view detaches the
        surface from the source.
        """
        from mdsource.services.ui.adapters.qt_invoker import QtMainThreadInvoker
        from mdsource.services.ui.preview_window import PreviewWindow

        window = PreviewWindow(app_title=app_title)
        invoker = QtMainThreadInvoker(window)
        source = self.build_source(window.surface, invoke=invoker)
        window.surface.removed.connect(source.on_surface_removed)
        window.closing.connect(source.destroy)
        return window, source
