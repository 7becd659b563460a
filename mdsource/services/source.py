from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from mdsource.domain.interfaces import IFileService, IRenderSurface, ISettingsStore
from mdsource.domain.models import (
    ContentChanged,
    RenderSettings,
    UpdateResult,
    WatchKind,
    WatchTarget,
)
from mdsource.services.file_watcher import FileWatcher
from mdsource.services.settings_service import default_values, seed_defaults
from mdsource.services.update_dispatcher import UpdateDispatcher
from mdsource.utils.constants import (
    KEY_CSS_FILE_TEXT,
    KEY_CSS_PATH,
    KEY_MARKDOWN_FILE_TEXT,
    KEY_MARKDOWN_PATH,
)

logger = logging.getLogger(__name__)

Invoker = Callable[[Callable[[], Any]], None]

# path key -> cached file content key, per watched kind
_FILE_KEYS: dict[WatchKind, tuple[str, str]] = {
    WatchKind.MARKDOWN: (KEY_MARKDOWN_PATH, KEY_MARKDOWN_FILE_TEXT),
    WatchKind.CSS: (KEY_CSS_PATH, KEY_CSS_FILE_TEXT),
}


def _call_now(fn: Callable[[], Any]) -> None:
    fn()


class MarkdownSource:
    """
    One preview source: settings, a rendering surface and a file watcher.

    ``update()`` is the only place that renders. UI edits call it directly;
    the watcher posts ``ContentChanged`` batches to a channel which
    ``process_pending()`` drains into the store before running one update.
    ``invoke`` decides on which thread that drain runs (immediately by
    default, the GUI thread in the Qt app).
    """

    def __init__(
        self,
        store: ISettingsStore,
        surface: IRenderSurface | None,
        *,
        dispatcher: UpdateDispatcher,
        files: IFileService,
        defaults: Mapping[str, Any] | None = None,
        invoke: Invoker | None = None,
    ) -> None:
        self._store = store
        self._surface = surface
        self._dispatcher = dispatcher
        self._defaults = dict(defaults) if defaults is not None else default_values()
        self._invoke = invoke or _call_now

        self._channel: queue.SimpleQueue[ContentChanged] = queue.SimpleQueue()
        self._update_lock = threading.RLock()
        self.last_result: UpdateResult | None = None

        self.watcher = FileWatcher(
            files,
            targets=self._watch_targets,
            sink=self.post,
            interval_ms=lambda: self.settings().poll_interval_ms,
        )

    # ---------- host lifecycle ----------

    def create(
        self, changes: Mapping[str, Any] | None = None, *, start_watcher: bool = True
    ) -> UpdateResult | None:
        seed_defaults(self._store, self._defaults)
        result = self.update(changes)
        if start_watcher:
            self.watcher.start()
        logger.info("Markdown source created")
        return result

    def destroy(self) -> None:
        # the watcher reads the store; it must be gone before anything is released
        self.watcher.stop()
        self.watcher.join()
        self._surface = None
        logger.info("Markdown source destroyed")

    def enum_sources(self, callback: Callable[[IRenderSurface], None]) -> None:
        if self._surface is not None:
            callback(self._surface)

    def on_surface_removed(self, *_args: object) -> None:
        logger.info("Rendering surface removed")
        self._surface = None

    @property
    def surface(self) -> IRenderSurface | None:
        return self._surface

    # ---------- settings ----------

    def settings(self) -> RenderSettings:
        return RenderSettings.from_store(self._store)

    def update(self, changes: Mapping[str, Any] | None = None) -> UpdateResult | None:
        """Apply ``changes`` (if any) and push the resulting snapshot to the surface."""
        with self._update_lock:
            if changes:
                self._store.set_many(self._with_path_resets(changes))
            surface = self._surface
            if surface is None:
                logger.debug("No rendering surface attached, settings stored only")
                return None
            result = self._dispatcher.dispatch(self.settings(), surface)
            self.last_result = result
            return result

    def _with_path_resets(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        # a new path invalidates the content cached from the previous file
        out = dict(changes)
        for path_key, text_key in _FILE_KEYS.values():
            if path_key in out and text_key not in out:
                if str(out[path_key] or "") != str(self._store.get(path_key, "") or ""):
                    out[text_key] = ""
        return out

    # ---------- watcher channel ----------

    def _watch_targets(self) -> list[WatchTarget]:
        return self.settings().watch_targets()

    def post(self, changes: Sequence[ContentChanged]) -> None:
        """Watcher entry point: enqueue a batch and schedule one drain."""
        for change in changes:
            self._channel.put(change)
        self._invoke(self.process_pending)

    def process_pending(self) -> UpdateResult | None:
        with self._update_lock:
            updates: dict[str, Any] = {}
            while True:
                try:
                    change = self._channel.get_nowait()
                except queue.Empty:
                    break
                updates.update(self._apply(change))

            if not updates:
                return None
            self._store.set_many(updates)
            return self.update()

    def _apply(self, change: ContentChanged) -> dict[str, str]:
        """Translate one message into store writes, dropping stale ones."""
        current = {t.kind: t for t in self._watch_targets()}
        target = current.get(change.kind)
        if target is None or target.path != change.path:
            logger.debug("Dropping stale %s change for %s", change.kind.value, change.path)
            return {}
        if target.known_content == change.content:
            return {}
        _, text_key = _FILE_KEYS[change.kind]
        return {text_key: change.content}
