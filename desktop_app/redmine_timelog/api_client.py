"""HTTP-Client für die Redmine REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union
from urllib.parse import urljoin

import requests
from pydantic import ValidationError

from .models import Project, TimeEntryDraft

logger = logging.getLogger(__name__)

REDMINE_BASE_URL = "https://red.mobilunity.org"
API_KEY_HEADER = "X-Redmine-API-Key"
PROJECT_PAGE_LIMIT = 100

T = TypeVar("T")


class ApiError(RuntimeError):
    """Fehler beim Zugriff auf die API."""

    def __init__(self, message: str, *, response: Optional[requests.Response] = None) -> None:
        super().__init__(message)
        self.response = response


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    error: ApiError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]


class ApiClient:
    """Kapselt HTTP-Aufrufe zur Redmine API.

    Öffentliche Methoden werfen keine Netzwerkfehler, sondern liefern
    `Success` oder `Failure`; der Aufrufer muss beide Fälle behandeln.
    """

    def __init__(self, api_key: str, base_url: str = REDMINE_BASE_URL, timeout: int = 15) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.api_key = api_key
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Hilfsfunktionen
    # ------------------------------------------------------------------
    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json", API_KEY_HEADER: self.api_key}

    def _request(self, method: str, path: str, **kwargs):
        url = urljoin(self.base_url, path.lstrip("/"))
        kwargs.setdefault("timeout", self.timeout)
        headers = kwargs.setdefault("headers", {})
        headers.update(self._headers())
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(str(exc)) from exc

        if response.status_code >= 400:
            raise ApiError(f"API Fehler {response.status_code}: {response.text}", response=response)

        if response.headers.get("Content-Type", "").startswith("application/json"):
            try:
                return response.json()
            except ValueError as exc:
                raise ApiError(f"Ungültige JSON-Antwort: {exc}", response=response) from exc
        return response.content

    # ------------------------------------------------------------------
    # Projekte
    # ------------------------------------------------------------------
    def list_projects(self) -> Result[list[Project]]:
        try:
            data = self._request("GET", "/projects.json", params={"limit": PROJECT_PAGE_LIMIT})
            if not isinstance(data, dict):
                raise ApiError("Antwort enthält keine Projektliste")
            projects = [Project.model_validate(item) for item in data.get("projects", [])]
            total_count = data.get("total_count")
            if isinstance(total_count, int) and total_count > len(projects):
                logger.debug("Projektliste gekürzt: %s von %s Projekten geladen", len(projects), total_count)
        except ValidationError as exc:
            return Failure(ApiError(f"Ungültiges Projekt in Antwort: {exc}"))
        except ApiError as exc:
            return Failure(exc)
        return Success(projects)

    # ------------------------------------------------------------------
    # Zeiteinträge
    # ------------------------------------------------------------------
    def create_time_entry(self, draft: TimeEntryDraft) -> Result[Any]:
        try:
            data = self._request("POST", "/time_entries.json", params=draft.to_params())
        except ApiError as exc:
            return Failure(exc)
        return Success(data)


__all__ = ["ApiClient", "ApiError", "Failure", "Result", "Success"]
