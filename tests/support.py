"""Shared helpers for HTTP-level tests against the real app and an in-memory database."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from taskboard.core.database import SessionLocal, engine
from taskboard.main import app
from taskboard.models import Base

API = "/api"
PASSWORD = "12345678"


class ApiTestCase(unittest.TestCase):
    """Fresh schema per test; self.client keeps cookies between calls like a browser."""

    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        # Cleanups run last-in first-out, so sessions and clients close before the drop.
        self.addCleanup(Base.metadata.drop_all, bind=engine)
        self.client = TestClient(app)
        self.addCleanup(self.client.close)

    def session(self) -> Session:
        db = SessionLocal()
        self.addCleanup(db.close)
        return db

    def new_client(self, cookies: dict[str, str] | None = None) -> TestClient:
        """A client with its own cookie jar."""
        client = TestClient(app, cookies=cookies)
        self.addCleanup(client.close)
        return client

    def register(self, email: str = "alice@mail.com", password: str = PASSWORD, role: str = "USER"):
        return self.client.post(
            f"{API}/registration",
            json={"email": email, "password": password, "role": role},
        )

    def register_ok(self, email: str = "alice@mail.com", role: str = "USER") -> dict:
        resp = self.register(email=email, role=role)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def assert_error(self, resp, status: int, error_code: str | None = None) -> dict:
        self.assertEqual(resp.status_code, status, resp.text)
        body = resp.json()
        self.assertEqual(set(body), {"status", "message", "timestamp", "errorCode"})
        self.assertEqual(body["status"], status)
        if error_code is not None:
            self.assertEqual(body["errorCode"], error_code)
        return body
