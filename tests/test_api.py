"""HTTP tests: identity middleware, role gates and the register/login/profile flow."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from podcast_api.auth.authorization import FORBIDDEN_DETAIL
from podcast_api.core.config import Settings, settings
from podcast_api.core.security import verify_password
from podcast_api.core.tokens import (
    TokenClaims,
    TokenVerificationFailure,
    issue_token,
    verify_token,
)
from podcast_api.main import create_app
from podcast_api.models import Base, User
from podcast_api.services import users as users_service

PREFIX = settings.API_V1_PREFIX


def _session_factory() -> sessionmaker:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.session_factory = _session_factory()
        self.client = TestClient(create_app(session_factory=self.session_factory))
        self.addCleanup(self.client.close)

    def register(self, email: str, password: str, role: str) -> None:
        res = self.client.post(
            f"{PREFIX}/users", json={"email": email, "password": password, "role": role}
        )
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["ok"], res.json())

    def token_for(self, email: str, password: str) -> str:
        res = self.client.post(
            f"{PREFIX}/users/login", json={"email": email, "password": password}
        )
        body = res.json()
        self.assertTrue(body["ok"], body)
        return body["token"]

    def stored_user(self, email: str) -> User:
        db = self.session_factory()
        try:
            return db.query(User).filter(User.email == email).one()
        finally:
            db.close()


class TestLoginAndProfileFlow(ApiTestCase):
    def test_register_login_and_me(self) -> None:
        self.register("a@test.com", "pw", "Host")

        res = self.client.post(
            f"{PREFIX}/users/login", json={"email": "a@test.com", "password": "pw"}
        )
        login = res.json()
        self.assertTrue(login["ok"])
        self.assertIsNone(login["error"])
        token = login["token"]

        res = self.client.post(
            f"{PREFIX}/users/login", json={"email": "a@test.com", "password": "wrong"}
        )
        self.assertEqual(res.json(), {"ok": False, "error": "Wrong password!", "token": None})

        res = self.client.get(f"{PREFIX}/users/me", headers={"X-JWT": token})
        self.assertEqual(res.status_code, 200)
        me = res.json()
        self.assertEqual(me["email"], "a@test.com")
        self.assertEqual(me["role"], "Host")
        self.assertNotIn("password_hash", me)

        res = self.client.get(f"{PREFIX}/users/me")
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.json()["detail"], FORBIDDEN_DETAIL)

    def test_duplicate_registration(self) -> None:
        self.register("a@test.com", "pw", "Host")
        res = self.client.post(
            f"{PREFIX}/users",
            json={"email": "a@test.com", "password": "pw", "role": "Host"},
        )
        self.assertEqual(res.json(), {"ok": False, "error": "Email already exists!"})

    def test_login_unknown_account(self) -> None:
        res = self.client.post(
            f"{PREFIX}/users/login", json={"email": "ghost@test.com", "password": "pw"}
        )
        self.assertEqual(res.json()["error"], "User doesn't exist!")

    def test_see_profile_is_public(self) -> None:
        self.register("a@test.com", "pw", "Listener")
        user_id = self.stored_user("a@test.com").id
        res = self.client.get(f"{PREFIX}/users/{user_id}")
        self.assertTrue(res.json()["ok"])
        self.assertEqual(res.json()["user"]["id"], user_id)
        res = self.client.get(f"{PREFIX}/users/666")
        self.assertFalse(res.json()["ok"])

    def test_edit_profile_password_rules(self) -> None:
        self.register("a@test.com", "pw", "Listener")
        token = self.token_for("a@test.com", "pw")
        headers = {"X-JWT": token}
        old_hash = self.stored_user("a@test.com").password_hash

        res = self.client.patch(
            f"{PREFIX}/users/me", json={"email": "new@test.com"}, headers=headers
        )
        self.assertTrue(res.json()["ok"])
        self.assertEqual(self.stored_user("new@test.com").password_hash, old_hash)

        res = self.client.patch(
            f"{PREFIX}/users/me", json={"password": "new-pw"}, headers=headers
        )
        self.assertTrue(res.json()["ok"])
        new_hash = self.stored_user("new@test.com").password_hash
        self.assertNotEqual(new_hash, old_hash)
        self.assertFalse(verify_password("pw", new_hash))
        self.assertTrue(verify_password("new-pw", new_hash))

    def test_edit_profile_requires_login(self) -> None:
        res = self.client.patch(f"{PREFIX}/users/me", json={"email": "x@test.com"})
        self.assertEqual(res.status_code, 403)


class TestIdentityMiddleware(ApiTestCase):
    def test_public_operation_without_header(self) -> None:
        res = self.client.get(f"{PREFIX}/podcasts")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"ok": True, "error": None, "podcasts": []})

    def test_invalid_token_is_anonymous_not_rejected(self) -> None:
        res = self.client.get(f"{PREFIX}/podcasts", headers={"X-JWT": "garbage"})
        self.assertEqual(res.status_code, 200)
        res = self.client.get(f"{PREFIX}/users/me", headers={"X-JWT": "garbage"})
        self.assertEqual(res.status_code, 403)

    def test_token_for_deleted_user_is_anonymous(self) -> None:
        self.register("a@test.com", "pw", "Host")
        token = self.token_for("a@test.com", "pw")
        db = self.session_factory()
        try:
            db.query(User).delete()
            db.commit()
        finally:
            db.close()
        headers = {"X-JWT": token}
        self.assertEqual(self.client.get(f"{PREFIX}/podcasts", headers=headers).status_code, 200)
        self.assertEqual(self.client.get(f"{PREFIX}/users/me", headers=headers).status_code, 403)

    def test_one_lookup_per_valid_token(self) -> None:
        self.register("a@test.com", "pw", "Host")
        token = self.token_for("a@test.com", "pw")
        with patch(
            "podcast_api.auth.identity.lookup_user", wraps=users_service.lookup_user
        ) as lookup:
            self.client.get(f"{PREFIX}/podcasts")
            self.client.get(f"{PREFIX}/podcasts", headers={"X-JWT": "garbage"})
            self.assertEqual(lookup.call_count, 0)
            self.client.get(f"{PREFIX}/podcasts", headers={"X-JWT": token})
            self.assertEqual(lookup.call_count, 1)

    def test_unknown_user_id_in_valid_token(self) -> None:
        res = self.client.get(f"{PREFIX}/users/me", headers={"X-JWT": issue_token(12345)})
        self.assertEqual(res.status_code, 403)


class TestRoleGates(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register("host@test.com", "pw", "Host")
        self.register("listener@test.com", "pw", "Listener")
        self.host = {"X-JWT": self.token_for("host@test.com", "pw")}
        self.listener = {"X-JWT": self.token_for("listener@test.com", "pw")}

    def create_podcast(self, title: str = "testPodcast") -> int:
        res = self.client.post(
            f"{PREFIX}/podcasts",
            json={"title": title, "category": "Comedy"},
            headers=self.host,
        )
        self.assertTrue(res.json()["ok"], res.json())
        return res.json()["id"]

    def test_me_allows_any_role(self) -> None:
        for headers in (self.host, self.listener):
            self.assertEqual(self.client.get(f"{PREFIX}/users/me", headers=headers).status_code, 200)

    def test_host_only_operations(self) -> None:
        body = {"title": "testPodcast", "category": "Comedy"}
        for headers in ({}, self.listener):
            res = self.client.post(f"{PREFIX}/podcasts", json=body, headers=headers)
            self.assertEqual(res.status_code, 403)
        podcast_id = self.create_podcast()

        res = self.client.patch(
            f"{PREFIX}/podcasts/{podcast_id}", json={"rating": 4}, headers=self.listener
        )
        self.assertEqual(res.status_code, 403)
        res = self.client.patch(
            f"{PREFIX}/podcasts/{podcast_id}", json={"rating": 4}, headers=self.host
        )
        self.assertTrue(res.json()["ok"])

        res = self.client.post(
            f"{PREFIX}/podcasts/{podcast_id}/episodes",
            json={"title": "Pilot", "category": "Comedy"},
            headers=self.host,
        )
        episode_id = res.json()["id"]
        res = self.client.get(f"{PREFIX}/podcasts/{podcast_id}/episodes/{episode_id}")
        self.assertEqual(res.json()["episode"]["title"], "Pilot")

        res = self.client.delete(
            f"{PREFIX}/podcasts/{podcast_id}/episodes/{episode_id}", headers=self.listener
        )
        self.assertEqual(res.status_code, 403)
        res = self.client.delete(f"{PREFIX}/podcasts/{podcast_id}", headers=self.host)
        self.assertTrue(res.json()["ok"])

    def test_listener_only_operations(self) -> None:
        podcast_id = self.create_podcast()

        res = self.client.post(
            f"{PREFIX}/podcasts/{podcast_id}/subscriptions", headers=self.host
        )
        self.assertEqual(res.status_code, 403)
        res = self.client.post(
            f"{PREFIX}/podcasts/{podcast_id}/subscriptions", headers=self.listener
        )
        self.assertTrue(res.json()["ok"])

        res = self.client.post(
            f"{PREFIX}/podcasts/{podcast_id}/reviews",
            json={"content": "Great show"},
            headers=self.listener,
        )
        self.assertTrue(res.json()["ok"])

        self.assertEqual(self.client.get(f"{PREFIX}/subscriptions").status_code, 403)
        res = self.client.get(f"{PREFIX}/subscriptions", headers=self.listener)
        subscriptions = res.json()["subscriptions"]
        self.assertEqual([s["podcast"]["id"] for s in subscriptions], [podcast_id])

    def test_search_is_public(self) -> None:
        self.create_podcast("Morning News")
        res = self.client.get(f"{PREFIX}/podcasts/search", params={"query": "News"})
        self.assertEqual([p["title"] for p in res.json()["podcasts"]], ["Morning News"])
        res = self.client.get(f"{PREFIX}/podcasts/search", params={"query": "Nothing"})
        self.assertEqual(res.json()["error"], "Podcasts not found")


class TestHealth(ApiTestCase):
    def test_health_reports_database_and_header(self) -> None:
        res = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["auth_header"], settings.AUTH_HEADER_NAME)


class TestHashingFailure(ApiTestCase):
    def test_hashing_error_is_internal_error(self) -> None:
        self.register("a@test.com", "pw", "Host")
        with patch("podcast_api.core.security.bcrypt.checkpw", side_effect=RuntimeError("boom")):
            res = self.client.post(
                f"{PREFIX}/users/login", json={"email": "a@test.com", "password": "pw"}
            )
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json(), {"detail": "Internal server error"})


class TestPasswordLength(ApiTestCase):
    def test_password_over_72_bytes_is_rejected(self) -> None:
        too_long = "x" * 72 + "owner"
        res = self.client.post(
            f"{PREFIX}/users",
            json={"email": "a@test.com", "password": too_long, "role": "Host"},
        )
        self.assertEqual(res.status_code, 422)
        res = self.client.post(
            f"{PREFIX}/users",
            json={"email": "a@test.com", "password": "é" * 37, "role": "Host"},
        )
        self.assertEqual(res.status_code, 422)

    def test_shared_prefix_cannot_log_in(self) -> None:
        self.register("a@test.com", "x" * 72, "Host")
        res = self.client.post(
            f"{PREFIX}/users/login",
            json={"email": "a@test.com", "password": "x" * 72 + "attacker"},
        )
        self.assertEqual(res.status_code, 422)
        res = self.client.post(
            f"{PREFIX}/users/login", json={"email": "a@test.com", "password": "x" * 71}
        )
        self.assertEqual(res.json()["error"], "Wrong password!")

    def test_edit_profile_rejects_long_password(self) -> None:
        self.register("a@test.com", "pw", "Listener")
        headers = {"X-JWT": self.token_for("a@test.com", "pw")}
        res = self.client.patch(
            f"{PREFIX}/users/me", json={"password": "x" * 73}, headers=headers
        )
        self.assertEqual(res.status_code, 422)
        self.token_for("a@test.com", "pw")


class TestAppSettings(unittest.TestCase):
    """An app built with its own settings signs, reads and reports with them."""

    def setUp(self) -> None:
        self.app_settings = Settings(
            JWT_SECRET=SecretStr("a-deployment-specific-secret-value-xx"),
            AUTH_HEADER_NAME="X-Podcast-Token",
            BCRYPT_ROUNDS=4,
        )
        self.session_factory = _session_factory()
        self.client = TestClient(
            create_app(session_factory=self.session_factory, settings=self.app_settings)
        )
        self.addCleanup(self.client.close)

    def test_login_token_works_on_same_app(self) -> None:
        res = self.client.post(
            f"{PREFIX}/users",
            json={"email": "a@test.com", "password": "pw", "role": "Host"},
        )
        self.assertTrue(res.json()["ok"])
        res = self.client.post(
            f"{PREFIX}/users/login", json={"email": "a@test.com", "password": "pw"}
        )
        token = res.json()["token"]
        self.assertIsInstance(verify_token(token, self.app_settings), TokenClaims)
        self.assertIsInstance(verify_token(token, settings), TokenVerificationFailure)

        res = self.client.get(f"{PREFIX}/users/me", headers={"X-Podcast-Token": token})
        self.assertEqual(res.status_code, 200, res.json())
        self.assertEqual(res.json()["email"], "a@test.com")

        db = self.session_factory()
        try:
            stored = db.query(User).filter(User.email == "a@test.com").one()
        finally:
            db.close()
        self.assertTrue(stored.password_hash.startswith("$2b$04$"))

    def test_default_secret_token_is_anonymous(self) -> None:
        self.client.post(
            f"{PREFIX}/users",
            json={"email": "a@test.com", "password": "pw", "role": "Host"},
        )
        res = self.client.get(
            f"{PREFIX}/users/me", headers={"X-Podcast-Token": issue_token(1)}
        )
        self.assertEqual(res.status_code, 403)

    def test_health_reports_app_header(self) -> None:
        res = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(res.json()["auth_header"], "x-podcast-token")


class TestIdentityLookupErrors(ApiTestCase):
    def test_unreadable_user_row_is_anonymous(self) -> None:
        self.register("a@test.com", "pw", "Host")
        headers = {"X-JWT": self.token_for("a@test.com", "pw")}
        with patch(
            "podcast_api.auth.identity.lookup_user",
            side_effect=LookupError("'Admin' is not among the defined enum values"),
        ):
            res = self.client.get(f"{PREFIX}/podcasts", headers=headers)
            self.assertEqual(res.status_code, 200)
            res = self.client.get(f"{PREFIX}/users/me", headers=headers)
            self.assertEqual(res.status_code, 403)
            self.assertEqual(res.json()["detail"], FORBIDDEN_DETAIL)


if __name__ == "__main__":
    unittest.main()
