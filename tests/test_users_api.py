"""HTTP handler tests with UserService replaced by a mock."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from user_management_api.app.api.deps import get_user_service
from user_management_api.app.core.exceptions import DuplicateFieldError, UserField, UserNotFoundError
from user_management_api.app.main import app
from user_management_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from user_management_api.app.services.user_service import UserService


@pytest.fixture
def service():
    return MagicMock(spec=UserService)


@pytest.fixture
def api(service):
    app.dependency_overrides[get_user_service] = lambda: service
    # Not entered as a context manager: startup (and the database) is not needed.
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_user():
    return UserRead(id=1, username="testuser", email="test@example.com", full_name="Test User", active=True)


def test_list_users(api, service, test_user):
    user2 = UserRead(id=2, username="user2", email="user2@example.com", full_name="User Two", active=True)
    service.list_users.return_value = [test_user, user2]

    response = api.get("/api/users")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 2
    assert body[0]["username"] == "testuser"
    assert body[1]["username"] == "user2"
    service.list_users.assert_awaited_once()


def test_list_active_users(api, service, test_user):
    service.list_active_users.return_value = [test_user]

    response = api.get("/api/users/active")

    assert response.status_code == 200
    assert [u["active"] for u in response.json()] == [True]
    service.list_active_users.assert_awaited_once()
    service.get_user_by_id.assert_not_called()


def test_get_user_by_id(api, service, test_user):
    service.get_user_by_id.return_value = test_user

    response = api.get("/api/users/1")

    assert response.status_code == 200
    assert response.json() == {
        "id": 1,
        "username": "testuser",
        "email": "test@example.com",
        "fullName": "Test User",
        "active": True,
    }
    service.get_user_by_id.assert_awaited_once_with(1)


def test_get_user_by_id_not_found(api, service):
    service.get_user_by_id.return_value = None

    response = api.get("/api/users/999")

    assert response.status_code == 404
    service.get_user_by_id.assert_awaited_once_with(999)


def test_get_user_with_non_numeric_id_is_bad_request(api, service):
    response = api.get("/api/users/abc")

    assert response.status_code == 400
    service.get_user_by_id.assert_not_called()


def test_get_user_by_username(api, service, test_user):
    service.get_user_by_username.return_value = test_user

    response = api.get("/api/users/username/testuser")

    assert response.status_code == 200
    assert response.json()["id"] == 1
    service.get_user_by_username.assert_awaited_once_with("testuser")


def test_get_user_by_username_not_found(api, service):
    service.get_user_by_username.return_value = None

    assert api.get("/api/users/username/ghost").status_code == 404


def test_create_user(api, service):
    service.create_user.return_value = UserRead(
        id=3, username="newuser", email="new@example.com", full_name="New User", active=True
    )

    response = api.post(
        "/api/users",
        json={"id": 42, "username": "newuser", "email": "new@example.com", "fullName": "New User"},
    )

    assert response.status_code == 201
    assert response.json()["id"] == 3
    assert response.json()["username"] == "newuser"
    (candidate,) = service.create_user.await_args.args
    assert isinstance(candidate, UserCreate)
    assert candidate.full_name == "New User"
    assert candidate.active is True


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "", "email": "invalid-email"},
        {"username": "   ", "email": "ok@example.com"},
        {"username": "someone", "email": "invalid-email"},
        {"username": "someone"},
        {"email": "ok@example.com"},
    ],
)
def test_create_user_invalid_payload(api, service, payload):
    response = api.post("/api/users", json=payload)

    assert response.status_code == 400
    assert isinstance(response.json()["detail"], list)
    service.create_user.assert_not_called()


def test_create_user_duplicate(api, service):
    service.create_user.side_effect = DuplicateFieldError(UserField.USERNAME)

    response = api.post("/api/users", json={"username": "dup", "email": "dup@example.com"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Username already exists"}


def test_update_user(api, service):
    updated = UserRead(id=1, username="updated", email="updated@example.com", full_name="Updated User", active=False)
    service.update_user.return_value = updated

    response = api.put(
        "/api/users/1",
        json={"id": 1, "username": "updated", "email": "updated@example.com", "fullName": "Updated User", "active": False},
    )

    assert response.status_code == 200
    assert response.json()["username"] == "updated"
    assert response.json()["active"] is False
    user_id, replacement = service.update_user.await_args.args
    assert user_id == 1
    assert isinstance(replacement, UserUpdate)
    assert replacement.active is False


def test_update_user_not_found(api, service):
    service.update_user.side_effect = UserNotFoundError(999)

    response = api.put("/api/users/999", json={"username": "x", "email": "x@example.com"})

    assert response.status_code == 404
    assert response.json() == {"detail": "User not found with id: 999"}


def test_update_user_duplicate_email(api, service):
    service.update_user.side_effect = DuplicateFieldError(UserField.EMAIL)

    response = api.put("/api/users/1", json={"username": "x", "email": "taken@example.com"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Email already exists"}


def test_update_user_invalid_payload(api, service):
    response = api.put("/api/users/1", json={"username": "", "email": "x@example.com"})

    assert response.status_code == 400
    service.update_user.assert_not_called()


def test_delete_user(api, service):
    service.delete_user.return_value = None

    response = api.delete("/api/users/1")

    assert response.status_code == 204
    assert response.content == b""
    service.delete_user.assert_awaited_once_with(1)


def test_delete_user_not_found(api, service):
    service.delete_user.side_effect = UserNotFoundError(999)

    response = api.delete("/api/users/999")

    assert response.status_code == 404
    service.delete_user.assert_awaited_once_with(999)


def test_info(api, service):
    service.count_users.return_value = {"total": 5, "active": 4}

    response = api.get("/api/info")

    assert response.status_code == 200
    body = response.json()
    assert body["users"] == {"total": 5, "active": 4}
    assert body["name"]
    assert body["version"]
