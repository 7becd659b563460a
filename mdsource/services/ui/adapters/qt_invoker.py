from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot


class QtMainThreadInvoker(QObject):
    """
    Run callables on the thread that owns this object (the GUI thread).

    Emitting from a worker thread turns into a queued call; emitting from the
    owning thread calls straight through.
    """

    _requested = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._requested.connect(self._run)

    def __call__(self, fn: Callable[[], Any]) -> None:
        self._requested.emit(fn)

    @pyqtSlot(object)
    def _run(self, fn: Callable[[], Any]) -> None:
        fn()
