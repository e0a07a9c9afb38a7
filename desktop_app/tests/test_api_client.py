from __future__ import annotations

import datetime as dt
import logging

import requests

from conftest import FakeResponse, project_payload
from redmine_timelog.api_client import ApiClient, ApiError, Failure, Success
from redmine_timelog.models import TimeEntryDraft


def test_list_projects_sends_api_key(http, client: ApiClient) -> None:
    http.queue(FakeResponse(200, {"projects": [project_payload(1), project_payload(2, status=5)]}))

    result = client.list_projects()

    assert isinstance(result, Success)
    assert [project.id for project in result.value] == [1, 2]
    assert result.value[0].created_on == dt.datetime(2023, 5, 2, 9, 15, tzinfo=dt.timezone.utc)
    call = http.calls[0]
    assert call.method == "GET"
    assert call.url == "https://redmine.test/projects.json"
    assert call.kwargs["headers"]["X-Redmine-API-Key"] == "secret-key"
    assert call.kwargs["timeout"] == 15


def test_list_projects_without_projects_key_is_empty(http, client: ApiClient) -> None:
    http.queue(FakeResponse(200, {"total_count": 0}))
    result = client.list_projects()
    assert result.ok
    assert result.value == []


def test_list_projects_http_error_is_failure(http, client: ApiClient) -> None:
    http.queue(FakeResponse(401, {"errors": ["Unauthorized"]}))

    result = client.list_projects()

    assert isinstance(result, Failure)
    assert not result.ok
    assert isinstance(result.error, ApiError)
    assert result.error.response.status_code == 401


def test_list_projects_network_error_is_failure(http, client: ApiClient) -> None:
    http.queue(requests.ConnectionError("connection refused"))

    result = client.list_projects()

    assert isinstance(result, Failure)
    assert "connection refused" in str(result.error)
    assert result.error.response is None


def test_list_projects_malformed_project_is_failure(http, client: ApiClient) -> None:
    http.queue(FakeResponse(200, {"projects": [{"id": "not-a-number"}]}))
    assert isinstance(client.list_projects(), Failure)


def test_list_projects_non_json_body_is_failure(http, client: ApiClient) -> None:
    http.queue(FakeResponse(200, "<html></html>", content_type="text/html"))
    assert isinstance(client.list_projects(), Failure)


def test_create_time_entry_uses_query_parameters(http, client: ApiClient) -> None:
    http.queue(FakeResponse(201, {"time_entry": {"id": 99}}))
    draft = TimeEntryDraft(
        project_id="3",
        spent_on=dt.date(2024, 1, 15),
        hours="2.5",
        comments="x",
        activity_id="16",
    )

    result = client.create_time_entry(draft)

    assert isinstance(result, Success)
    assert result.value == {"time_entry": {"id": 99}}
    call = http.calls[0]
    assert call.method == "POST"
    assert call.url == "https://redmine.test/time_entries.json"
    assert call.kwargs["params"] == {
        "time_entry[project_id]": "3",
        "time_entry[spent_on]": "2024-01-15",
        "time_entry[hours]": "2.5",
        "time_entry[comments]": "x",
        "time_entry[activity_id]": "16",
    }
    assert "json" not in call.kwargs
    assert "data" not in call.kwargs
    assert call.kwargs["headers"]["X-Redmine-API-Key"] == "secret-key"


def test_create_time_entry_server_error_is_failure(http, client: ApiClient) -> None:
    http.queue(FakeResponse(422, {"errors": ["Activity cannot be blank"]}))
    result = client.create_time_entry(TimeEntryDraft(project_id="3", spent_on=dt.date(2024, 1, 15), hours="1"))
    assert isinstance(result, Failure)
    assert "422" in str(result.error)


def test_default_base_url_is_fixed() -> None:
    assert ApiClient("k").base_url == "https://red.mobilunity.org/"


def test_list_projects_accepts_null_description(http, client: ApiClient) -> None:
    without_description = project_payload(2)
    without_description["description"] = None
    http.queue(FakeResponse(200, {"projects": [project_payload(1), without_description, project_payload(3)]}))

    result = client.list_projects()

    assert isinstance(result, Success)
    assert [project.id for project in result.value] == [1, 2, 3]
    assert result.value[1].description == ""


def test_list_projects_logs_truncated_list(http, client: ApiClient, caplog) -> None:
    http.queue(FakeResponse(200, {"projects": [project_payload(1)], "total_count": 140, "limit": 100}))

    with caplog.at_level(logging.DEBUG, logger="redmine_timelog.api_client"):
        result = client.list_projects()

    assert result.ok
    assert http.calls[0].kwargs["params"] == {"limit": 100}
    assert "1 von 140" in caplog.text


def test_list_projects_complete_list_is_not_reported(http, client: ApiClient, caplog) -> None:
    http.queue(FakeResponse(200, {"projects": [project_payload(1)], "total_count": 1}))

    with caplog.at_level(logging.DEBUG, logger="redmine_timelog.api_client"):
        client.list_projects()

    assert "gekürzt" not in caplog.text
