"""
Tests for the REST API.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from coursefiles.api import CourseFilesRestAPI, caller_user_id
from coursefiles.core.exceptions import PersistenceError
from coursefiles.main import CourseFilesPlatform


@pytest.fixture
def platform(tmp_path):
    platform = CourseFilesPlatform({
        'database_config': {'database_path': str(tmp_path / "api.db")},
        'wwwroot': "https://school.test",
    })
    platform.create_sample_data()
    return platform


@pytest.fixture
def client(platform):
    return TestClient(CourseFilesRestAPI(platform).app)


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Course Files Browser API"

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_browse_course_lists_areas(client):
    response = client.get("/browse/2", headers={"X-User-Id": "2"})

    assert response.status_code == 200
    data = response.json()
    assert data["visible_name"] == "Introduction to Computer Science"
    assert data["is_directory"] is True
    assert data["params"] == {"contextid": 2, "component": None, "filearea": None,
                              "itemid": None, "filepath": None, "filename": None}
    assert data["parent"] is None
    assert [c["visible_name"] for c in data["children"]] == [
        "Course intro",
        "Course section summaries",
        "Section backups",
        "Course backup",
        "Legacy course files",
    ]


def test_browse_file_node(client):
    response = client.get("/browse/2", headers={"X-User-Id": "2"}, params={
        "component": "course", "filearea": "legacy", "itemid": 0,
        "filepath": "/docs/", "filename": "readme.txt",
    })

    assert response.status_code == 200
    data = response.json()
    assert data["is_directory"] is False
    assert data["url"] == "https://school.test/file.php/2/docs/readme.txt"
    assert data["filesize"] == 120
    assert data["mimetype"] == "text/plain"
    assert data["children"] == []
    assert data["parent"]["filepath"] == "/docs/"
    assert data["parent"]["filename"] == "."


def test_browse_section_list(client):
    response = client.get("/browse/2", headers={"X-User-Id": "2"},
                          params={"component": "course", "filearea": "section"})

    assert response.status_code == 200
    assert [c["params"]["itemid"] for c in response.json()["children"]] == [10, 11]


@pytest.mark.parametrize("headers", [{}, {"X-User-Id": "0"}])
def test_browse_without_caller_is_not_found(client, headers):
    assert client.get("/browse/2", headers=headers).status_code == 404


def test_browse_unknown_context_is_not_found(client):
    assert client.get("/browse/404", headers={"X-User-Id": "1"}).status_code == 404


def test_browse_denied_area_is_not_found(client):
    response = client.get("/browse/2", headers={"X-User-Id": "3"},
                          params={"component": "course", "filearea": "legacy", "itemid": 0})
    assert response.status_code == 404


def test_storage_failure_is_internal_error(client, platform):
    with patch.object(platform, "browse", side_effect=PersistenceError("disk gone", error_code="db_error")):
        response = client.get("/browse/2", headers={"X-User-Id": "2"})

    assert response.status_code == 500
    assert "disk gone" in response.json()["detail"]


def test_identity_dependency_can_be_replaced(platform):
    api = CourseFilesRestAPI(platform)
    api.app.dependency_overrides[caller_user_id] = lambda: 3
    client = TestClient(api.app)

    response = client.get("/browse/2", headers={"X-User-Id": "1"})

    assert response.status_code == 200
    assert response.json()["children"] == []
