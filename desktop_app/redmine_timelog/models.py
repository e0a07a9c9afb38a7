"""Datamodelle für den Redmine Zeiterfassungs-Client."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

ACTIVE_PROJECT_STATUS = 1
DEFAULT_ACTIVITY_ID = "16"


class Project(BaseModel):
    """Projekt wie es von `/projects.json` geliefert wird."""

    model_config = ConfigDict(extra="ignore")
    id: int
    name: str
    identifier: str
    description: str = ""
    status: int
    created_on: dt.datetime
    updated_on: dt.datetime

    @field_validator("description", mode="before")
    @classmethod
    def description_none_as_empty(cls, value: Optional[str]) -> str:
        # Redmine liefert null für Projekte ohne Beschreibung.
        return "" if value is None else value

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_PROJECT_STATUS


@dataclass(slots=True)
class TimeEntryDraft:
    """Vom Benutzer erfasster, noch nicht gesendeter Zeiteintrag."""

    project_id: str = ""
    spent_on: Optional[dt.date] = None
    hours: str = ""
    comments: str = ""
    activity_id: str = DEFAULT_ACTIVITY_ID

    def values(self) -> dict[str, object]:
        return {
            "project_id": self.project_id,
            "spent_on": self.spent_on,
            "hours": self.hours,
            "comments": self.comments,
            "activity_id": self.activity_id,
        }

    def to_params(self) -> dict[str, str]:
        """Query-Parameter für `POST /time_entries.json`."""

        spent_on = self.spent_on
        if isinstance(spent_on, dt.datetime):
            spent_on = spent_on.date()
        return {
            "time_entry[project_id]": self.project_id,
            "time_entry[spent_on]": spent_on.isoformat() if spent_on else "",
            "time_entry[hours]": self.hours.strip(),
            "time_entry[comments]": self.comments,
            "time_entry[activity_id]": self.activity_id,
        }


@dataclass(frozen=True, slots=True)
class Activity:
    """Eintrag im Aktivitätenkatalog."""

    id: int
    label: str

    @property
    def value(self) -> str:
        return str(self.id)


class AuthState(str, Enum):
    UNDETERMINED = "undetermined"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class NotificationStyle(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True, slots=True)
class Notification:
    """Rückmeldung an die Oberfläche (Toast, Messagebox, Konsole)."""

    style: NotificationStyle
    title: str
    message: str = ""


__all__ = [
    "ACTIVE_PROJECT_STATUS",
    "Activity",
    "AuthState",
    "DEFAULT_ACTIVITY_ID",
    "Notification",
    "NotificationStyle",
    "Project",
    "TimeEntryDraft",
]
