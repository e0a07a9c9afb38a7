"""Zustand und Ablauf: Anmeldung, Projektliste und Zeiteintrag.

Die Klassen hier kennen keine Oberfläche. Jede Zustandsänderung ruft den
`render` Callback auf, Rückmeldungen für den Benutzer laufen über `notify`.
Die Qt-Oberfläche und die Kommandozeile hängen sich beide an diese
Schnittstelle.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .api_client import ApiClient, Failure, Result, Success
from .models import (AuthState, Notification, NotificationStyle, Project,
                     TimeEntryDraft)
from .storage import CredentialStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("project_id", "spent_on", "hours", "activity_id")
REQUIRED_MESSAGE = "This field is required"
NUMBER_MESSAGE = "This field must be a number"

RenderCallback = Callable[[], None]
NotifyCallback = Callable[[Notification], None]
ClientFactory = Callable[[str], ApiClient]


def _noop_render() -> None:
    return None


def _noop_notify(notification: Notification) -> None:
    return None


def is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_number(value: str) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number)


def active_projects(projects: list[Project]) -> list[Project]:
    return [project for project in projects if project.is_active]


# ----------------------------------------------------------------------
# Anmeldung
# ----------------------------------------------------------------------
class AuthGate:
    """Entscheidet, ob ein API-Key vorliegt."""

    def __init__(self, store: CredentialStore, render: RenderCallback = _noop_render) -> None:
        self.store = store
        self.render = render
        self.state = AuthState.UNDETERMINED
        self.api_key: Optional[str] = None

    def resolve(self) -> AuthState:
        self.api_key = self.store.get()
        self.state = AuthState.AUTHENTICATED if self.api_key else AuthState.UNAUTHENTICATED
        self.render()
        return self.state

    def submit(self, key: str) -> AuthState:
        """Speichert den Key; ein leerer Key führt wie beim Start zurück zur Eingabe."""

        self.store.set(key)
        self.api_key = key or None
        self.state = AuthState.AUTHENTICATED if key else AuthState.UNAUTHENTICATED
        self.render()
        return self.state

    def revoke(self) -> None:
        self.store.remove()
        self.api_key = None
        self.state = AuthState.UNAUTHENTICATED
        self.render()


# ----------------------------------------------------------------------
# Formular
# ----------------------------------------------------------------------
@dataclass(slots=True)
class FormState:
    """Sichtbarer Zustand des Zeiteintrag-Formulars."""

    projects: list[Project] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    loading: bool = False
    busy: bool = False

    @property
    def is_loading(self) -> bool:
        return self.loading or self.busy

    def error(self, field_id: str) -> Optional[str]:
        return self.errors.get(field_id)


class ProjectLoader:
    """Lädt die aktiven Projekte einmalig und reicht sie an das Formular weiter."""

    def __init__(self, client: ApiClient, form: TimeEntryForm) -> None:
        self.client = client
        self.form = form

    def load(self) -> Optional[Result[list[Project]]]:
        """Lädt die Projekte, sofern noch keine vorhanden sind."""

        if not self.begin():
            return None
        result = self.client.list_projects()
        self.finish(result)
        return result

    def begin(self) -> bool:
        if self.form.state.projects:
            return False
        self.form.set_loading(True)
        return True

    def finish(self, result: Result[list[Project]]) -> None:
        if isinstance(result, Success):
            self.form.publish_projects(active_projects(result.value))
        else:
            logger.error("Projekte konnten nicht geladen werden: %s", result.error)
            self.form.publish_projects([])
            self.form.notify(Notification(
                NotificationStyle.FAILURE,
                "Failed to load projects",
                "Failed to load projects from Redmine",
            ))
        self.form.set_loading(False)


class TimeEntryForm:
    """Validierung und Versand eines Zeiteintrags."""

    def __init__(self, client: ApiClient, projects: Optional[list[Project]] = None, *,
                 render: RenderCallback = _noop_render, notify: NotifyCallback = _noop_notify) -> None:
        self.client = client
        self.render = render
        self.notify = notify
        self.state = FormState(projects=list(projects or []))

    # ------------------------------------------------------------------
    def set_loading(self, loading: bool) -> None:
        self.state.loading = loading
        self.render()

    def publish_projects(self, projects: list[Project]) -> None:
        self.state.projects = list(projects)
        self.render()

    # ------------------------------------------------------------------
    def on_blur(self, field_id: str, value: object) -> None:
        if field_id in REQUIRED_FIELDS and is_empty(value):
            self.state.errors[field_id] = REQUIRED_MESSAGE
            self.render()

    def on_change(self, field_id: str, value: object) -> None:
        if field_id in REQUIRED_FIELDS and not is_empty(value) and field_id in self.state.errors:
            del self.state.errors[field_id]
            self.render()

    def validate(self, draft: TimeEntryDraft) -> dict[str, str]:
        errors: dict[str, str] = {}
        for field_id, value in draft.values().items():
            if field_id in REQUIRED_FIELDS and is_empty(value):
                errors[field_id] = REQUIRED_MESSAGE
        if not is_empty(draft.hours) and not is_number(draft.hours):
            errors["hours"] = NUMBER_MESSAGE
        return errors

    def submit(self, draft: TimeEntryDraft) -> bool:
        """Prüft den Entwurf und legt den Zeiteintrag an.

        Liefert `True`, wenn Redmine den Eintrag angenommen hat.
        """

        if not self.prepare(draft):
            return False
        try:
            result = self.client.create_time_entry(draft)
        except Exception:
            self.state.busy = False
            raise
        return self.complete(result)

    def prepare(self, draft: TimeEntryDraft) -> bool:
        """Validiert den Entwurf und markiert das Formular als beschäftigt.

        Bei `True` muss der Aufrufer den Versand ausführen und `complete`
        mit dem Ergebnis aufrufen.
        """

        self.state.errors = self.validate(draft)
        if self.state.errors:
            self.render()
            return False
        if self.state.busy:
            logger.debug("Versand läuft bereits, Aufruf ignoriert")
            return False

        self.state.busy = True
        self.render()
        return True

    def complete(self, result: Result[Any]) -> bool:
        self.state.busy = False
        if isinstance(result, Failure):
            logger.error("Zeiteintrag konnte nicht angelegt werden: %s", result.error)
            self.notify(Notification(NotificationStyle.FAILURE, "Failure", str(result.error)))
        else:
            self.notify(Notification(
                NotificationStyle.SUCCESS, "Success", "Time entry was successfully created"))
        self.render()
        return result.ok


# ----------------------------------------------------------------------
# Gesamtablauf
# ----------------------------------------------------------------------
class TimeLogSession:
    """Verbindet Anmeldung, Projektliste und Formular."""

    def __init__(self, store: CredentialStore, client_factory: ClientFactory = ApiClient, *,
                 render: RenderCallback = _noop_render, notify: NotifyCallback = _noop_notify) -> None:
        self.client_factory = client_factory
        self.render = render
        self.notify = notify
        self.gate = AuthGate(store, render=render)
        self.form: Optional[TimeEntryForm] = None
        self.loader: Optional[ProjectLoader] = None

    @property
    def state(self) -> AuthState:
        return self.gate.state

    def start(self) -> AuthState:
        state = self.gate.resolve()
        if state is AuthState.AUTHENTICATED:
            self._open_form()
        return state

    def authenticate(self, key: str) -> AuthState:
        self.form = None
        self.loader = None
        state = self.gate.submit(key)
        if state is AuthState.AUTHENTICATED:
            self._open_form()
        return state

    def load_projects(self) -> Optional[Result[list[Project]]]:
        if self.loader is None:
            return None
        return self.loader.load()

    def revoke(self) -> None:
        self.form = None
        self.loader = None
        self.gate.revoke()

    def _open_form(self) -> None:
        client = self.client_factory(self.gate.api_key or "")
        self.form = TimeEntryForm(client, render=self.render, notify=self.notify)
        self.form.state.loading = True
        self.loader = ProjectLoader(client, self.form)
        self.render()


__all__ = [
    "AuthGate",
    "FormState",
    "NUMBER_MESSAGE",
    "ProjectLoader",
    "REQUIRED_FIELDS",
    "REQUIRED_MESSAGE",
    "TimeEntryForm",
    "TimeLogSession",
    "active_projects",
    "is_empty",
    "is_number",
]
