"""End-to-end tests for /api/users: listing, fetching and self-or-admin update/delete."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from acquisitions.main import app
from tests.support import insert_user, login_as, reset_database


class UsersApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()
        self.client = TestClient(app)
        self.ann_id = insert_user(name="Ann", email="ann@x.com")
        self.bob_id = insert_user(name="Bob", email="bob@x.com")
        self.admin_id = insert_user(name="Root", email="root@x.com", role="admin")

    def tearDown(self) -> None:
        self.client.close()


class TestReadUsers(UsersApiTestCase):
    def test_list_users(self) -> None:
        resp = self.client.get("/api/users")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["message"], "Users fetched successfully")
        self.assertEqual(body["count"], 3)
        self.assertEqual(len(body["users"]), 3)
        for user in body["users"]:
            self.assertNotIn("password", user)
            self.assertIn("createdAt", user)

    def test_get_user(self) -> None:
        resp = self.client.get(f"/api/users/{self.ann_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["email"], "ann@x.com")
        self.assertEqual(resp.json()["message"], "User fetched successfully")

    def test_get_missing_user_404(self) -> None:
        resp = self.client.get("/api/users/9999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "User not found")

    def test_invalid_id_400(self) -> None:
        for bad in ("abc", "0", "-1"):
            resp = self.client.get(f"/api/users/{bad}")
            self.assertEqual(resp.status_code, 400, bad)
            self.assertEqual(resp.json()["details"][0]["field"], "id")

    def test_out_of_range_id_400(self) -> None:
        resp = self.client.get("/api/users/999999999999999999999999999999")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["details"][0]["field"], "id")


class TestUpdateUser(UsersApiTestCase):
    def test_requires_authentication(self) -> None:
        resp = self.client.put(f"/api/users/{self.ann_id}", json={"name": "Annie"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Authentication required")

    def test_invalid_session_treated_as_anonymous(self) -> None:
        self.client.cookies.set("token", "garbage")
        resp = self.client.put(f"/api/users/{self.ann_id}", json={"name": "Annie"})
        self.assertEqual(resp.status_code, 401)

    def test_owner_updates_self(self) -> None:
        login_as(self.client, self.ann_id)
        resp = self.client.put(
            f"/api/users/{self.ann_id}", json={"name": "Annie", "email": "ANNIE@x.com"}
        )
        self.assertEqual(resp.status_code, 200)
        user = resp.json()["user"]
        self.assertEqual(resp.json()["message"], "User updated successfully")
        self.assertEqual(user["name"], "Annie")
        self.assertEqual(user["email"], "annie@x.com")
        self.assertEqual(user["role"], "user")

    def test_owner_cannot_change_role(self) -> None:
        login_as(self.client, self.ann_id)
        resp = self.client.put(f"/api/users/{self.ann_id}", json={"role": "admin"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Only admin users can change roles")
        self.assertEqual(self.client.get(f"/api/users/{self.ann_id}").json()["user"]["role"], "user")

    def test_non_owner_forbidden(self) -> None:
        login_as(self.client, self.bob_id)
        resp = self.client.put(f"/api/users/{self.ann_id}", json={"name": "Hacked"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "You can only update your own account")

    def test_non_owner_role_change_forbidden(self) -> None:
        login_as(self.client, 7, role="user")
        resp = self.client.put("/api/users/5", json={"role": "admin"})
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "Only admin users can change roles")

    def test_admin_updates_anyone_including_role(self) -> None:
        login_as(self.client, self.admin_id, role="admin")
        resp = self.client.put(f"/api/users/{self.ann_id}", json={"role": "admin"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["role"], "admin")

    def test_empty_body_returns_current_state(self) -> None:
        login_as(self.client, self.ann_id)
        resp = self.client.put(f"/api/users/{self.ann_id}", json={})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["name"], "Ann")

    def test_missing_user_404(self) -> None:
        login_as(self.client, self.admin_id, role="admin")
        resp = self.client.put("/api/users/9999", json={"name": "Nobody"})
        self.assertEqual(resp.status_code, 404)

    def test_email_taken_409(self) -> None:
        login_as(self.client, self.ann_id)
        resp = self.client.put(f"/api/users/{self.ann_id}", json={"email": "bob@x.com"})
        self.assertEqual(resp.status_code, 409)

    def test_invalid_body_400_before_auth(self) -> None:
        resp = self.client.put(f"/api/users/{self.ann_id}", json={"email": "nope"})
        self.assertEqual(resp.status_code, 400)

    def test_invalid_id_400(self) -> None:
        login_as(self.client, self.admin_id, role="admin")
        resp = self.client.put("/api/users/abc", json={"name": "Annie"})
        self.assertEqual(resp.status_code, 400)


class TestDeleteUser(UsersApiTestCase):
    def test_requires_authentication(self) -> None:
        resp = self.client.delete(f"/api/users/{self.ann_id}")
        self.assertEqual(resp.status_code, 401)

    def test_owner_deletes_self(self) -> None:
        login_as(self.client, self.ann_id)
        resp = self.client.delete(f"/api/users/{self.ann_id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "User deleted successfully")
        self.assertEqual(self.client.get(f"/api/users/{self.ann_id}").status_code, 404)

    def test_non_owner_forbidden(self) -> None:
        login_as(self.client, self.bob_id)
        resp = self.client.delete(f"/api/users/{self.ann_id}")
        self.assertEqual(resp.status_code, 403)
        self.assertEqual(resp.json()["message"], "You can only delete your own account")

    def test_admin_deletes_anyone(self) -> None:
        login_as(self.client, self.admin_id, role="admin")
        resp = self.client.delete(f"/api/users/{self.bob_id}")
        self.assertEqual(resp.status_code, 200)

    def test_missing_user_404(self) -> None:
        login_as(self.client, self.admin_id, role="admin")
        resp = self.client.delete("/api/users/9999")
        self.assertEqual(resp.status_code, 404)


class TestUnexpectedErrors(UsersApiTestCase):
    def test_unhandled_exception_returns_generic_500(self) -> None:
        client = TestClient(app, raise_server_exceptions=False)
        with patch("acquisitions.api.users.get_all_users", side_effect=RuntimeError("db exploded")):
            resp = client.get("/api/users")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Internal Server Error", "message": "Something went wrong"})
        self.assertNotIn("exploded", resp.text)


if __name__ == "__main__":
    unittest.main()
