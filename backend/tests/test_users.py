import pytest

from coursehub.core.security import verify_password
from coursehub.models import User

VALID_REGISTRATION = {
    "firstName": "Joe",
    "lastName": "Smith",
    "emailAddress": "joe@smith.com",
    "password": "password",
    "passwordConfirm": "password",
}

MISSING_FIELD_MESSAGES = {
    "firstName": 'Please provide a "firstName"',
    "lastName": 'Please provide a "lastName"',
    "emailAddress": 'Please provide an "emailAddress"',
    "password": "Please provide a password",
    "passwordConfirm": "Please confirm your password",
}


def test_register_user(client, db):
    response = client.post("/api/users", json=VALID_REGISTRATION)

    assert response.status_code == 201
    assert response.headers["location"] == "/"
    assert response.content == b""

    user = db.query(User).filter(User.email_address == "joe@smith.com").one()
    assert user.first_name == "Joe"
    assert user.last_name == "Smith"


def test_registered_password_is_hashed(client, db):
    client.post("/api/users", json=VALID_REGISTRATION)

    user = db.query(User).one()
    assert user.hashed_password != "password"
    assert verify_password("password", user.hashed_password)


@pytest.mark.parametrize("field", list(MISSING_FIELD_MESSAGES))
def test_register_missing_field(client, db, field):
    payload = {k: v for k, v in VALID_REGISTRATION.items() if k != field}
    response = client.post("/api/users", json=payload)

    assert response.status_code == 400
    assert response.json() == {"errors": [MISSING_FIELD_MESSAGES[field]]}
    assert db.query(User).count() == 0


def test_register_empty_body_reports_every_field(client):
    response = client.post("/api/users", json={})

    assert response.status_code == 400
    assert response.json()["errors"] == list(MISSING_FIELD_MESSAGES.values())


def test_register_empty_strings_count_as_missing(client):
    payload = dict(VALID_REGISTRATION, firstName="", lastName="")
    response = client.post("/api/users", json=payload)

    assert response.status_code == 400
    assert response.json()["errors"] == [
        'Please provide a "firstName"',
        'Please provide a "lastName"',
    ]


def test_register_password_mismatch(client, db):
    payload = dict(VALID_REGISTRATION, password="a", passwordConfirm="b")
    response = client.post("/api/users", json=payload)

    assert response.status_code == 400
    assert "Password don't match" in response.json()["errors"]
    assert db.query(User).count() == 0


def test_register_duplicate_email(client, db):
    assert client.post("/api/users", json=VALID_REGISTRATION).status_code == 201

    response = client.post("/api/users", json=VALID_REGISTRATION)

    assert response.status_code == 400
    assert response.json() == {"errors": ["Please use a unique email address"]}
    assert db.query(User).count() == 1


def test_uniqueness_error_is_ordered_before_password_errors(client, owner):
    payload = {"firstName": "Joe", "lastName": "Smith", "emailAddress": "joe@smith.com"}
    response = client.post("/api/users", json=payload)

    assert response.json()["errors"] == [
        "Please use a unique email address",
        "Please provide a password",
        "Please confirm your password",
    ]


def test_register_race_on_email_maps_to_400(client, owner, monkeypatch):
    # Simulate another request committing the same email after our check
    from coursehub.services.user_service import user_service
    monkeypatch.setattr(user_service, "email_taken", lambda db, email: False)

    response = client.post("/api/users", json=dict(VALID_REGISTRATION, emailAddress="joe@smith.com"))

    assert response.status_code == 400
    assert response.json() == {"errors": ["Please use a unique email address"]}


def test_register_wrong_field_type_is_400(client):
    response = client.post("/api/users", json=dict(VALID_REGISTRATION, firstName=123))

    assert response.status_code == 400
    assert len(response.json()["errors"]) == 1


def test_get_authenticated_user(client, owner, auth):
    response = client.get("/api/users", headers=auth("joe@smith.com"))

    assert response.status_code == 200
    assert response.json() == {
        "id": owner.id,
        "firstName": "Joe",
        "lastName": "Smith",
        "emailAddress": "joe@smith.com",
    }


def test_get_user_returns_the_caller_not_another_user(client, owner, other_user, auth):
    response = client.get("/api/users", headers=auth("sally@jones.com"))

    assert response.json()["id"] == other_user.id


def test_get_user_requires_auth(client):
    response = client.get("/api/users")
    assert response.status_code == 401
    assert response.json() == {"message": "Access Denied"}


def test_non_ascii_password_can_log_in(client, auth):
    payload = dict(VALID_REGISTRATION, password="pässwörd", passwordConfirm="pässwörd")
    assert client.post("/api/users", json=payload).status_code == 201

    response = client.get("/api/users", headers=auth("joe@smith.com", "pässwörd"))

    assert response.status_code == 200
    assert response.json()["emailAddress"] == "joe@smith.com"
