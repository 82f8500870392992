"""Shared helpers for API tests: fresh schema per test and small request helpers."""

import base64
import shutil
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.core.database import SessionLocal, engine
from app.main import app
from app.models import Base

PASSWORD = "password123"

# 1x1 PNG.
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/w8AAn8BHThEX7wAAAAASUVORK5CYII="
)
PDF_BYTES = (
    b"%PDF-1.1\n1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n"
    b"trailer\n<< /Root 1 0 R /Size 2 >>\n%%EOF"
)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    """Creates all tables before each test and drops them (and stored uploads) after."""

    def setUp(self) -> None:
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        self.client = TestClient(app)
        self.upload_root = Path(get_settings().UPLOAD_DIR)

    def tearDown(self) -> None:
        self.client.close()
        Base.metadata.drop_all(bind=engine)
        for child in self.upload_root.iterdir():
            if child.is_dir():
                shutil.rmtree(child)
                child.mkdir()

    def db(self):
        return SessionLocal()

    def register(self, username: str, email: str, password: str = PASSWORD, **extra: str):
        body = {
            "firstName": "Test",
            "lastName": "User",
            "username": username,
            "email": email,
            "password": password,
        }
        body.update(extra)
        return self.client.post("/api/auth/register", json=body)

    def login(self, identifier: str, password: str = PASSWORD) -> str:
        res = self.client.post(
            "/api/auth/login", json={"username": identifier, "password": password}
        )
        self.assertEqual(res.status_code, 200, res.text)
        return res.json()["token"]

    def register_and_login(self, username: str, email: str) -> tuple[int, str]:
        res = self.register(username, email)
        self.assertEqual(res.status_code, 201, res.text)
        return res.json()["user"]["id"], self.login(username)

    def upload_path(self, url: str) -> Path:
        return self.upload_root / url.removeprefix("/uploads/")

    def create_book(self, token: str, title: str = "Test Book", **overrides):
        data = {
            "title": title,
            "author": "Author Name",
            "description": "A short description",
            "price": "9.99",
        }
        files = {
            "cover": ("cover.png", PNG_BYTES, "image/png"),
            "pdf": ("book.pdf", PDF_BYTES, "application/pdf"),
        }
        for key, value in overrides.items():
            if key in files:
                if value is None:
                    files.pop(key)
                else:
                    files[key] = value
            else:
                data[key] = value
        return self.client.post(
            "/api/admin/books", headers=bearer(token), data=data, files=files
        )
