"""Anmeldeseite zur Eingabe des Redmine API-Keys."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (QFormLayout, QHBoxLayout, QLabel, QLineEdit,
                               QPushButton, QVBoxLayout, QWidget)

from ..models import AuthState


class AuthPage(QWidget):
    """Formular für den API-Key."""

    key_submitted = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.description_label = QLabel("To use this action you need to enter your Redmine API key")
        self.description_label.setWordWrap(True)
        self.loading_label = QLabel("Loading…")

        self.key_input = QLineEdit()
        self.key_input.setEchoMode(QLineEdit.Password)
        self.key_input.setPlaceholderText("Enter API key")
        self.key_input.returnPressed.connect(self._handle_submit)

        self.submit_button = QPushButton("Submit")
        self.submit_button.clicked.connect(self._handle_submit)

        form = QFormLayout()
        form.addRow("API Key", self.key_input)

        button_row = QHBoxLayout()
        button_row.addStretch(1)
        button_row.addWidget(self.submit_button)

        layout = QVBoxLayout(self)
        layout.addWidget(self.loading_label)
        layout.addWidget(self.description_label)
        layout.addLayout(form)
        layout.addLayout(button_row)
        layout.addStretch(1)

    # ------------------------------------------------------------------
    def render(self, state: AuthState) -> None:
        undetermined = state is AuthState.UNDETERMINED
        self.loading_label.setVisible(undetermined)
        self.key_input.setEnabled(not undetermined)
        self.submit_button.setEnabled(not undetermined)
        if state is AuthState.UNAUTHENTICATED:
            self.key_input.setFocus()

    def _handle_submit(self) -> None:
        key = self.key_input.text()
        self.key_input.clear()
        self.key_submitted.emit(key)


__all__ = ["AuthPage"]
