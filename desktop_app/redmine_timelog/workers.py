"""Hintergrund-Ausführung von API-Aufrufen für die Desktop-Anwendung."""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

logger = logging.getLogger(__name__)


class ApiTaskSignals(QObject):
    """Liefert `(task, result)` zurück in den GUI-Thread."""

    finished = Signal(object, object)


class ApiTask(QRunnable):
    """Führt einen Client-Aufruf im Thread-Pool aus.

    Der Aufruf muss ein `Success`/`Failure` Ergebnis liefern und darf
    keinen Formularzustand verändern; das übernimmt der Empfänger von
    `signals.finished`.
    """

    def __init__(self, call: Callable[[], Any], context: Any = None) -> None:
        super().__init__()
        self.call = call
        self.context = context
        self.signals = ApiTaskSignals()

    def run(self) -> None:
        result = self.call()
        logger.debug("Hintergrundaufruf beendet: ok=%s", getattr(result, "ok", None))
        self.signals.finished.emit(self, result)


def start_task(task: ApiTask, pool: QThreadPool | None = None) -> None:
    (pool or QThreadPool.globalInstance()).start(task)


__all__ = ["ApiTask", "ApiTaskSignals", "start_task"]
