"""
Registration, API key authentication and user management
"""
import uuid

import pytest

from app.models.saved_movie import SavedMovie
from app.models.user import User
from app.services.user_service import UserService
from app.utils.security import hash_api_key


# ============================================
# POST /register
# ============================================

def test_register_returns_user_id_and_key(client, db_session):
    response = client.post("/register", json={"name": "A", "date_of_birth": "2000-01-01"})

    assert response.status_code == 201
    body = response.json()
    assert set(body.keys()) == {"user_id", "api_key"}
    uuid.UUID(body["user_id"])
    uuid.UUID(body["api_key"])


def test_register_stores_only_the_key_hash(client, db_session):
    body = client.post("/register", json={"name": "A", "date_of_birth": "2000-01-01"}).json()

    db_session.expire_all()
    user = db_session.get(User, uuid.UUID(body["user_id"]))
    assert user.api_key_hash != body["api_key"]
    assert user.api_key_hash == hash_api_key(body["api_key"])


@pytest.mark.parametrize("payload", [
    {"name": "A"},
    {"date_of_birth": "2000-01-01"},
    {"name": "", "date_of_birth": "2000-01-01"},
    {"name": "   ", "date_of_birth": "2000-01-01"},
    {},
])
def test_register_missing_fields(client, db_session, payload):
    response = client.post("/register", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "MISSING_FIELDS"


def test_register_strips_markup_from_name(client, db_session):
    body = client.post("/register", json={"name": "<b>Ann</b>", "date_of_birth": "1999-05-05"}).json()

    db_session.expire_all()
    assert db_session.get(User, uuid.UUID(body["user_id"])).name == "Ann"


# ============================================
# API key authentication
# ============================================

class TestAuthentication:

    def test_missing_key(self, client, registered_user):
        response = client.get(f"/users/{registered_user['user_id']}/movies", params={"country": "US"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_unknown_key(self, client, registered_user):
        response = client.get(
            f"/users/{registered_user['user_id']}/movies",
            params={"country": "US"},
            headers={"X-API-Key": str(uuid.uuid4())},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    def test_bearer_header(self, client, registered_user):
        response = client.get(
            f"/users/{registered_user['user_id']}/movies",
            params={"country": "US"},
            headers={"Authorization": f"Bearer {registered_user['api_key']}"},
        )

        assert response.status_code == 200
        assert response.json()["total"] == 0

    def test_hash_is_not_accepted_as_key(self, client, registered_user):
        response = client.get(
            f"/users/{registered_user['user_id']}",
            headers={"X-API-Key": hash_api_key(registered_user["api_key"])},
        )
        assert response.status_code == 401

    def test_missing_country_after_auth(self, client, registered_user, auth_headers):
        response = client.get(f"/users/{registered_user['user_id']}/movies", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_COUNTRY"

    def test_other_users_resources_are_forbidden(self, client, registered_user, auth_headers):
        other = client.post("/register", json={"name": "B", "date_of_birth": "1990-01-01"}).json()

        response = client.get(f"/users/{other['user_id']}/movies", params={"country": "US"}, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"


# ============================================
# /users/{user_id}
# ============================================

class TestUserManagement:

    def test_get_profile(self, client, registered_user, auth_headers):
        response = client.get(f"/users/{registered_user['user_id']}", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == registered_user["user_id"]
        assert body["name"] == "A"
        assert body["date_of_birth"] == "2000-01-01"
        assert "api_key_hash" not in body

    def test_update_profile(self, client, registered_user, auth_headers):
        url = f"/users/{registered_user['user_id']}"
        response = client.patch(url, json={"name": "Alice"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Alice"
        assert response.json()["date_of_birth"] == "2000-01-01"

        empty = client.patch(url, json={}, headers=auth_headers)
        assert empty.status_code == 400
        assert empty.json()["error"]["code"] == "MISSING_FIELDS"

    def test_rotate_api_key(self, client, registered_user, auth_headers):
        url = f"/users/{registered_user['user_id']}"
        response = client.post(f"{url}/api-key", headers=auth_headers)

        assert response.status_code == 200
        new_key = response.json()["api_key"]
        assert new_key != registered_user["api_key"]

        assert client.get(url, headers=auth_headers).status_code == 401
        assert client.get(url, headers={"X-API-Key": new_key}).status_code == 200

    def test_delete_user_removes_saved_movies(self, client, db_session, catalog, registered_user, auth_headers):
        user_id = registered_user["user_id"]
        saved = client.post(
            f"/users/{user_id}/movies",
            params={"country": "US"},
            json={"movie_id": str(catalog["movies"]["comedy"].id)},
            headers=auth_headers,
        )
        assert saved.status_code == 200

        response = client.delete(f"/users/{user_id}", headers=auth_headers)
        assert response.status_code == 204

        db_session.expire_all()
        assert db_session.get(User, uuid.UUID(user_id)) is None
        assert db_session.query(SavedMovie).count() == 0
        assert client.get(f"/users/{user_id}", headers=auth_headers).status_code == 401


def test_find_user_by_api_key(db_session):
    user, api_key = UserService.register_user(db_session, "C", "1980-12-31")

    assert UserService.find_user_by_api_key(db_session, api_key).id == user.id
    assert UserService.find_user_by_api_key(db_session, "wrong") is None


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"
