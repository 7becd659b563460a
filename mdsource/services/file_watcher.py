from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from pathlib import Path

from mdsource.domain.interfaces import IFileService
from mdsource.domain.models import (
    ContentChanged,
    WatchKind,
    WatchState,
    WatchTarget,
    normalize_poll_interval,
)

logger = logging.getLogger(__name__)

ChangeSink = Callable[[Sequence[ContentChanged]], None]


class FileWatcher:
    """
    Polls the watched Markdown/CSS files on a background thread.

    Each cycle asks ``targets`` which files are currently configured, stats
    them, and re-reads a file only when its mtime moved. A message is emitted
    only when the content really differs from what was last seen; all messages
    of one cycle reach ``sink`` as a single batch.

    The watcher never writes settings. ``WatchState`` entries belong to the
    polling thread alone.
    """

    def __init__(
        self,
        files: IFileService,
        targets: Callable[[], Sequence[WatchTarget]],
        sink: ChangeSink,
        *,
        interval_ms: Callable[[], int] | int = 0,
    ) -> None:
        self._files = files
        self._targets = targets
        self._sink = sink
        self._interval_ms = interval_ms
        self._states: dict[WatchKind, WatchState] = {}
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # -------------------- lifecycle --------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="mdsource-watcher", daemon=True)
        self._thread.start()
        logger.info("File watcher started")

    def stop(self) -> None:
        self._stop.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
            if not self._thread.is_alive():
                self._thread = None
                logger.info("File watcher stopped")

    def interval_seconds(self) -> float:
        raw = self._interval_ms() if callable(self._interval_ms) else self._interval_ms
        return normalize_poll_interval(raw) / 1000.0

    def state(self, kind: WatchKind) -> WatchState | None:
        return self._states.get(kind)

    # -------------------- polling --------------------

    def _run(self) -> None:
        # Event.wait returns True once stop() was called
        while not self._stop.wait(self.interval_seconds()):
            try:
                self.poll_once()
            except Exception:
                logger.exception("File watcher cycle failed")

    def poll_once(self) -> list[ContentChanged]:
        """Run one polling cycle synchronously and return the emitted messages."""
        targets = list(self._targets())
        self._sync_states(targets)
        if not targets:
            return []

        changes: list[ContentChanged] = []
        for target in targets:
            change = self._check(target.kind, self._states[target.kind])
            if change is not None:
                changes.append(change)

        if changes:
            self._sink(changes)
        return changes

    def _sync_states(self, targets: Sequence[WatchTarget]) -> None:
        wanted = {t.kind: t for t in targets}
        for kind in list(self._states):
            if kind not in wanted:
                logger.debug("Stopped watching %s file", kind.value)
                del self._states[kind]
        for kind, target in wanted.items():
            current = self._states.get(kind)
            if current is None or current.path != target.path:
                logger.debug("Watching %s file %s", kind.value, target.path)
                self._states[kind] = WatchState(
                    path=target.path, last_seen_content=target.known_content
                )

    def _check(self, kind: WatchKind, state: WatchState) -> ContentChanged | None:
        path = Path(state.path)
        mtime = self._files.modified_time(path)
        if mtime is None:
            logger.debug("Cannot stat %s, skipping", path)
            return None
        if mtime == state.last_modified_time:
            return None

        try:
            content = self._files.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot read %s (%s), retrying next poll", path, exc)
            return None

        # mtime advances on every successful read, even if the bytes are the same
        state.last_modified_time = mtime
        if content == state.last_seen_content:
            return None

        state.last_seen_content = content
        logger.debug("%s file changed: %s", kind.value, path)
        return ContentChanged(kind=kind, path=state.path, content=content)
