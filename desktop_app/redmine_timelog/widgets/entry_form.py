"""Formular für einen Redmine Zeiteintrag."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QDate, QEvent, QObject, Qt
from PySide6.QtGui import QFocusEvent
from PySide6.QtWidgets import (QComboBox, QDateEdit, QFormLayout, QHBoxLayout,
                               QLabel, QLineEdit, QPushButton, QVBoxLayout,
                               QWidget)

from ..activities import ACTIVITIES, DEFAULT_ACTIVITY_ID
from ..models import TimeEntryDraft
from ..session import TimeEntryForm


class _BlurFilter(QObject):
    """Meldet den Fokusverlust eines Eingabefelds."""

    def __init__(self, field_id: str, callback: Callable[[str], None], parent: QObject) -> None:
        super().__init__(parent)
        self.field_id = field_id
        self.callback = callback

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() != QEvent.FocusOut:
            return False
        # Das Aufklappen einer Auswahlliste ist kein Verlassen des Felds.
        if isinstance(event, QFocusEvent) and event.reason() == Qt.PopupFocusReason:
            return False
        self.callback(self.field_id)
        return False


class TimeEntryPage(QWidget):
    """Eingabemaske für Projekt, Datum, Aktivität, Stunden und Kommentar."""

    def __init__(self, form: TimeEntryForm, *, on_submit: Callable[[TimeEntryDraft], None],
                 on_revoke: Callable[[], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.form = form
        self.on_submit = on_submit
        self.on_revoke = on_revoke
        self._project_ids: list[int] = []

        self.loading_label = QLabel("Loading…")

        self.project_input = QComboBox()
        self.project_input.setPlaceholderText("Select project")

        self.date_input = QDateEdit(QDate.currentDate())
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("yyyy-MM-dd")

        self.activity_input = QComboBox()
        for activity in ACTIVITIES:
            self.activity_input.addItem(activity.label, activity.value)
        self.activity_input.setCurrentIndex(self.activity_input.findData(DEFAULT_ACTIVITY_ID))

        self.hours_input = QLineEdit()
        self.comments_input = QLineEdit()

        self.error_labels: dict[str, QLabel] = {}
        for field_id in ("project_id", "spent_on", "activity_id", "hours"):
            label = QLabel()
            label.setStyleSheet("color: #db4437;")
            label.hide()
            self.error_labels[field_id] = label

        self.submit_button = QPushButton("Submit")
        self.revoke_button = QPushButton("Revoke API Key")
        self.submit_button.clicked.connect(self._handle_submit)
        self.revoke_button.clicked.connect(self._handle_revoke)

        self._connect_field("project_id", self.project_input)
        self._connect_field("spent_on", self.date_input)
        self._connect_field("activity_id", self.activity_input)
        self._connect_field("hours", self.hours_input)
        self.project_input.currentIndexChanged.connect(lambda _: self._handle_change("project_id"))
        self.date_input.dateChanged.connect(lambda _: self._handle_change("spent_on"))
        self.activity_input.currentIndexChanged.connect(lambda _: self._handle_change("activity_id"))
        self.hours_input.textChanged.connect(lambda _: self._handle_change("hours"))

        self._build_ui()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        form = QFormLayout()
        form.addRow("Project", self.project_input)
        form.addRow("", self.error_labels["project_id"])
        form.addRow("Date", self.date_input)
        form.addRow("", self.error_labels["spent_on"])
        form.addRow("Activity", self.activity_input)
        form.addRow("", self.error_labels["activity_id"])
        form.addRow("Hours", self.hours_input)
        form.addRow("", self.error_labels["hours"])
        form.addRow("Comments", self.comments_input)

        button_row = QHBoxLayout()
        button_row.addWidget(self.revoke_button)
        button_row.addStretch(1)
        button_row.addWidget(self.submit_button)

        layout = QVBoxLayout(self)
        layout.addWidget(self.loading_label)
        layout.addLayout(form)
        layout.addLayout(button_row)
        layout.addStretch(1)

    def _connect_field(self, field_id: str, widget: QWidget) -> None:
        widget.installEventFilter(_BlurFilter(field_id, self._handle_blur, self))

    # ------------------------------------------------------------------
    def render(self) -> None:
        state = self.form.state
        self.loading_label.setVisible(state.is_loading)
        self.submit_button.setEnabled(not state.busy)

        project_ids = [project.id for project in state.projects]
        if project_ids != self._project_ids:
            self._fill_projects()

        for field_id, label in self.error_labels.items():
            message = state.error(field_id)
            label.setText(message or "")
            label.setVisible(bool(message))

    def _fill_projects(self) -> None:
        selected = self.project_input.currentData()
        self.project_input.blockSignals(True)
        self.project_input.clear()
        for project in self.form.state.projects:
            self.project_input.addItem(project.name, str(project.id))
        self.project_input.setCurrentIndex(self.project_input.findData(selected) if selected else -1)
        self.project_input.blockSignals(False)
        self._project_ids = [project.id for project in self.form.state.projects]

    # ------------------------------------------------------------------
    def field_value(self, field_id: str):
        if field_id == "project_id":
            return self.project_input.currentData() or ""
        if field_id == "spent_on":
            return self.date_input.date().toPython()
        if field_id == "activity_id":
            return self.activity_input.currentData() or ""
        if field_id == "hours":
            return self.hours_input.text()
        if field_id == "comments":
            return self.comments_input.text()
        raise KeyError(field_id)

    def draft(self) -> TimeEntryDraft:
        return TimeEntryDraft(
            project_id=self.field_value("project_id"),
            spent_on=self.field_value("spent_on"),
            hours=self.field_value("hours"),
            comments=self.field_value("comments"),
            activity_id=self.field_value("activity_id"),
        )

    # ------------------------------------------------------------------
    def _handle_blur(self, field_id: str) -> None:
        self.form.on_blur(field_id, self.field_value(field_id))

    def _handle_change(self, field_id: str) -> None:
        self.form.on_change(field_id, self.field_value(field_id))

    def clear_inputs(self) -> None:
        self.hours_input.clear()
        self.comments_input.clear()

    def _handle_submit(self) -> None:
        self.on_submit(self.draft())

    def _handle_revoke(self) -> None:
        self.on_revoke()


__all__ = ["TimeEntryPage"]
