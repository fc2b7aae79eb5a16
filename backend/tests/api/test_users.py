"""
Tests for the user management and current-user endpoints.
"""

from shared.models import RoleName

from tests.conftest import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    USER_PASSWORD,
    auth_header,
    login,
)


def headers_for(client, email: str, password: str = USER_PASSWORD) -> dict[str, str]:
    return auth_header(login(client, email, password)["access_token"])


class TestUserAdministration:

    def test_create_user(self, client, admin_headers, roles):
        response = client.post("/api/users", headers=admin_headers, json={
            "email": "Ada@Floe.io",
            "password": "Lovelace1",
            "first_name": "Ada",
            "role_id": roles[RoleName.EDITOR],
        })
        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "ada@floe.io"
        assert data["role"]["name"] == "editor"
        assert "password_hash" not in data

        login(client, "ada@floe.io", "Lovelace1")

    def test_create_user_with_taken_email(self, client, admin_headers, roles):
        response = client.post("/api/users", headers=admin_headers, json={
            "email": ADMIN_EMAIL,
            "password": "Lovelace1",
            "role_id": roles[RoleName.VIEWER],
        })
        assert response.status_code == 409
        assert response.json()["error"] == "EMAIL_TAKEN"

    def test_create_user_with_weak_password(self, client, admin_headers, roles):
        response = client.post("/api/users", headers=admin_headers, json={
            "email": "ada@floe.io",
            "password": "short",
            "role_id": roles[RoleName.VIEWER],
        })
        assert response.status_code == 400
        assert response.json()["error"] == "WEAK_PASSWORD"

    def test_create_user_with_invalid_email(self, client, admin_headers, roles):
        response = client.post("/api/users", headers=admin_headers, json={
            "email": "not-an-email",
            "password": "Lovelace1",
            "role_id": roles[RoleName.VIEWER],
        })
        assert response.status_code == 422

    def test_list_users_paginates(self, client, admin_headers, make_user):
        for i in range(3):
            make_user(f"user{i}@floe.io")

        response = client.get("/api/users?limit=2&offset=1", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert data["limit"] == 2
        assert data["offset"] == 1
        assert [u["email"] for u in data["users"]] == ["user0@floe.io", "user1@floe.io"]

    def test_list_users_rejects_large_pages(self, client, admin_headers):
        response = client.get("/api/users?limit=101", headers=admin_headers)
        assert response.status_code == 422

    def test_get_missing_user(self, client, admin_headers):
        response = client.get("/api/users/999", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "USER_NOT_FOUND"

    def test_update_user_role(self, client, admin_headers, make_user, roles):
        user = make_user("ada@floe.io")
        response = client.put(
            f"/api/users/{user.id}",
            headers=admin_headers,
            json={"role_id": roles[RoleName.EDITOR]},
        )
        assert response.status_code == 200
        assert response.json()["role"]["name"] == "editor"

    def test_delete_user(self, client, admin_headers, make_user):
        user = make_user("ada@floe.io")

        response = client.delete(f"/api/users/{user.id}", headers=admin_headers)

        assert response.status_code == 204
        assert client.get(f"/api/users/{user.id}", headers=admin_headers).status_code == 404

    def test_cannot_delete_last_admin(self, client, admin_headers, store):
        admin = store.users.get_by_email(ADMIN_EMAIL)
        response = client.delete(f"/api/users/{admin.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "LAST_ADMIN"

    def test_non_admins_are_forbidden(self, client, make_user):
        make_user("ed@floe.io", role=RoleName.EDITOR)
        headers = headers_for(client, "ed@floe.io")

        response = client.get("/api/users", headers=headers)

        assert response.status_code == 403
        assert response.json()["error"] == "INSUFFICIENT_PERMISSIONS"
        assert response.json()["details"] == {"required_role": "admin", "user_role": "editor"}

    def test_demoted_admin_keeps_role_until_token_expires(
        self, client, admin_headers, make_user, roles
    ):
        second = make_user("second@floe.io", role=RoleName.ADMIN)
        second_headers = headers_for(client, "second@floe.io")

        client.put(
            f"/api/users/{second.id}",
            headers=admin_headers,
            json={"role_id": roles[RoleName.VIEWER]},
        )

        assert client.get("/api/users", headers=second_headers).status_code == 200
        fresh = headers_for(client, "second@floe.io")
        assert client.get("/api/users", headers=fresh).status_code == 403


class TestCurrentUser:

    def test_get_me_lists_workspaces(self, client, admin_headers):
        response = client.get("/api/me", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["email"] == ADMIN_EMAIL
        assert [w["slug"] for w in data["workspaces"]] == ["default"]

    def test_update_me(self, client, make_user):
        make_user("ada@floe.io")
        headers = headers_for(client, "ada@floe.io")

        response = client.put("/api/me", headers=headers, json={"first_name": "Ada"})

        assert response.status_code == 200
        assert response.json()["first_name"] == "Ada"

    def test_change_password(self, client, make_user):
        make_user("ada@floe.io")
        headers = headers_for(client, "ada@floe.io")

        response = client.put("/api/me/password", headers=headers, json={
            "old_password": USER_PASSWORD,
            "new_password": "Lovelace1",
        })

        assert response.status_code == 204
        login(client, "ada@floe.io", "Lovelace1")

    def test_change_password_with_wrong_old_password(self, client, admin_headers, store):
        before = store.users.get_by_email(ADMIN_EMAIL).password_hash

        response = client.put("/api/me/password", headers=admin_headers, json={
            "old_password": "wrong",
            "new_password": "Lovelace1",
        })

        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_PASSWORD"
        assert store.users.get_by_email(ADMIN_EMAIL).password_hash == before
        login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
