from __future__ import annotations

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from redmine_timelog.api_client import Success  # noqa: E402
from redmine_timelog.workers import ApiTask  # noqa: E402


def test_task_emits_itself_and_result() -> None:
    received: list[tuple] = []
    task = ApiTask(lambda: Success([1, 2]), context="loader")
    task.setAutoDelete(False)
    task.signals.finished.connect(lambda done, result: received.append((done, result)),
                                  QtCore.Qt.DirectConnection)

    task.run()

    assert len(received) == 1
    done, result = received[0]
    assert done is task
    assert done.context == "loader"
    assert result == Success([1, 2])


def test_task_runs_call_once() -> None:
    calls: list[int] = []
    task = ApiTask(lambda: calls.append(1) or Success(None))
    task.setAutoDelete(False)

    task.run()

    assert calls == [1]
