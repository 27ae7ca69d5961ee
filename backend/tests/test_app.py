from fastapi.testclient import TestClient

from coursehub.core.errors import StoreError, StoreErrorKind
from coursehub.main import app
from coursehub.services.course_service import course_service


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the CourseHub REST API!"}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_unknown_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"message": "Route Not Found"}


def test_method_not_allowed_uses_message_body(client):
    response = client.patch("/api/courses")
    assert response.status_code == 405
    assert "message" in response.json()


def test_invalid_json_body_is_400(client):
    response = client.post(
        "/api/users",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "errors" in response.json()


def test_unexpected_error_returns_500(client, monkeypatch):
    def boom(db):
        raise RuntimeError("database went away")

    monkeypatch.setattr(course_service, "list_courses", boom)
    safe_client = TestClient(app, raise_server_exceptions=False)

    response = safe_client.get("/api/courses")

    assert response.status_code == 500
    assert response.json() == {"message": "An unexpected error occurred"}


def test_non_validation_store_error_is_not_a_400(client, owner, auth, monkeypatch):
    def fail(db, course):
        raise StoreError(StoreErrorKind.DATABASE, ["disk I/O error"])

    monkeypatch.setattr(type(course_service), "_save", staticmethod(fail))
    safe_client = TestClient(app, raise_server_exceptions=False)

    response = safe_client.post(
        "/api/courses",
        json={"title": "t", "description": "d"},
        headers=auth("joe@smith.com"),
    )

    assert response.status_code == 500


def test_cors_allows_client_origin(client):
    response = client.options(
        "/api/courses",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"
