"""Einstiegspunkt für die Desktop-Anwendung."""

from __future__ import annotations

import sys
from typing import Any, Callable, Optional

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (QApplication, QMainWindow, QMessageBox,
                               QStackedWidget, QWidget)

from .api_client import ApiClient
from .config import AppConfig, configure_logging, load_config
from .models import AuthState, Notification, NotificationStyle, TimeEntryDraft
from .session import ProjectLoader, TimeEntryForm, TimeLogSession
from .storage import CredentialStore, LocalStorage
from .widgets.auth import AuthPage
from .widgets.entry_form import TimeEntryPage
from .workers import ApiTask, start_task

STATUS_MESSAGE_TIMEOUT_MS = 5000


class TimeLogWindow(QMainWindow):
    """Hauptfenster: Anmeldung oder Zeiteintrag."""

    def __init__(self, config: AppConfig, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Redmine Time Entry")
        self.resize(520, 380)

        self.auth_page = AuthPage()
        self.auth_page.key_submitted.connect(self._handle_key_submitted)
        self.entry_page: Optional[TimeEntryPage] = None
        self._tasks: dict[ApiTask, Callable[[Any, Any], None]] = {}

        self.stack = QStackedWidget()
        self.stack.addWidget(self.auth_page)
        self.setCentralWidget(self.stack)

        store = CredentialStore(LocalStorage(config.storage_path))
        self.session = TimeLogSession(
            store,
            lambda key: ApiClient(key, timeout=config.request_timeout),
            render=self.render,
            notify=self.show_notification,
        )

    # ------------------------------------------------------------------
    def start(self) -> None:
        if self.session.start() is AuthState.AUTHENTICATED:
            self._load_projects()

    def render(self) -> None:
        state = self.session.state
        form = self.session.form
        if state is not AuthState.AUTHENTICATED or form is None:
            self._drop_entry_page()
            self.auth_page.render(state)
            self.stack.setCurrentWidget(self.auth_page)
            return

        if self.entry_page is None or self.entry_page.form is not form:
            self._replace_entry_page(form)
        self.entry_page.render()
        self.stack.setCurrentWidget(self.entry_page)

    def show_notification(self, notification: Notification) -> None:
        text = f"{notification.title}: {notification.message}" if notification.message else notification.title
        self.statusBar().showMessage(text, STATUS_MESSAGE_TIMEOUT_MS)
        if notification.style is NotificationStyle.FAILURE:
            QMessageBox.warning(self, notification.title, notification.message)

    # ------------------------------------------------------------------
    # Netzwerkaufrufe laufen im Thread-Pool, Ergebnisse kommen per Signal
    # in den GUI-Thread zurück.
    # ------------------------------------------------------------------
    def _load_projects(self) -> None:
        loader = self.session.loader
        if loader is None or not loader.begin():
            return
        self._run(loader.client.list_projects, loader, self._handle_projects_loaded)

    def _submit_draft(self, draft: TimeEntryDraft) -> None:
        form = self.session.form
        if form is None or not form.prepare(draft):
            return
        self._run(lambda: form.client.create_time_entry(draft), form, self._handle_submitted)

    def _run(self, call: Callable[[], Any], context: Any, receiver: Callable[[Any, Any], None]) -> None:
        task = ApiTask(call, context)
        task.setAutoDelete(False)
        task.signals.finished.connect(self._handle_task_finished)
        self._tasks[task] = receiver
        start_task(task)

    @Slot(object, object)
    def _handle_task_finished(self, task: ApiTask, result: Any) -> None:
        receiver = self._tasks.pop(task, None)
        if receiver is not None:
            receiver(task.context, result)

    def _handle_projects_loaded(self, loader: ProjectLoader, result: Any) -> None:
        # Nach einem Widerruf gehört das Ergebnis zu keinem Formular mehr.
        if loader is not self.session.loader:
            return
        loader.finish(result)

    def _handle_submitted(self, form: TimeEntryForm, result: Any) -> None:
        if form is not self.session.form:
            return
        if form.complete(result) and self.entry_page is not None:
            self.entry_page.clear_inputs()

    # ------------------------------------------------------------------
    def _handle_key_submitted(self, key: str) -> None:
        if self.session.authenticate(key) is AuthState.AUTHENTICATED:
            self._load_projects()

    def _replace_entry_page(self, form: TimeEntryForm) -> None:
        self._drop_entry_page()
        self.entry_page = TimeEntryPage(form, on_submit=self._submit_draft, on_revoke=self.session.revoke)
        self.stack.addWidget(self.entry_page)

    def _drop_entry_page(self) -> None:
        if self.entry_page is None:
            return
        self.stack.removeWidget(self.entry_page)
        self.entry_page.deleteLater()
        self.entry_page = None


def main() -> None:
    """Startet die Qt-Anwendung."""

    config = load_config()
    configure_logging(config.log_level)

    app = QApplication(sys.argv)
    app.setApplicationName("Redmine Time Entry")

    window = TimeLogWindow(config)
    window.show()
    window.start()

    sys.exit(app.exec())


__all__ = ["TimeLogWindow", "main"]


if __name__ == "__main__":
    main()
