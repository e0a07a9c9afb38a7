from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pytest

from redmine_timelog import api_client
from redmine_timelog.api_client import ApiClient
from redmine_timelog.models import Notification
from redmine_timelog.storage import CredentialStore, LocalStorage


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, *,
                 content_type: str = "application/json; charset=utf-8") -> None:
        self.status_code = status_code
        self._payload = payload
        self.headers = {"Content-Type": content_type}
        self.text = "" if payload is None else str(payload)
        self.content = self.text.encode()

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@dataclass
class RecordedCall:
    method: str
    url: str
    kwargs: dict[str, Any]


@dataclass
class FakeHttp:
    calls: list[RecordedCall] = field(default_factory=list)
    responses: list[Any] = field(default_factory=list)

    def queue(self, *items: Any) -> None:
        self.responses.extend(items)

    def __call__(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append(RecordedCall(method, url, kwargs))
        item = self.responses.pop(0) if self.responses else FakeResponse(200, {})
        if isinstance(item, Exception):
            raise item
        return item


def project_payload(project_id: int, status: int = 1, name: Optional[str] = None) -> dict[str, Any]:
    return {
        "id": project_id,
        "name": name or f"Project {project_id}",
        "identifier": f"project-{project_id}",
        "description": "",
        "status": status,
        "is_public": True,
        "created_on": "2023-05-02T09:15:00Z",
        "updated_on": "2024-01-10T16:40:00Z",
    }


@pytest.fixture()
def http(monkeypatch) -> FakeHttp:
    fake = FakeHttp()
    monkeypatch.setattr(api_client.requests, "request", fake)
    return fake


@pytest.fixture()
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "storage.json"


@pytest.fixture()
def store(storage_path: Path) -> CredentialStore:
    return CredentialStore(LocalStorage(storage_path))


@pytest.fixture()
def client() -> ApiClient:
    return ApiClient("secret-key", base_url="https://redmine.test")


@pytest.fixture()
def notifications() -> list[Notification]:
    return []


@pytest.fixture()
def sample_day() -> dt.date:
    return dt.date(2024, 1, 15)
