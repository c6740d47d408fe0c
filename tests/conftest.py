"""
Pytest configuration for the API tests.

MongoDB is replaced by an in-memory mongomock database per test and the
Cloudinary upload call is patched, so nothing leaves the process.
"""
import io

import cloudinary.uploader
import mongomock
import pytest

from app import create_app
from config import TestConfig
from utils.db import ensure_indexes, mongo


@pytest.fixture
def app(monkeypatch):
    app = create_app(TestConfig)
    monkeypatch.setattr(mongo, "db", mongomock.MongoClient()["MentorMatchTest"])
    with app.app_context():
        ensure_indexes()
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def uploads(monkeypatch):
    """Records every Cloudinary upload and answers with a fake secure URL."""
    calls = []

    def fake_upload(file, **options):
        calls.append({"file": file, "options": options})
        return {"secure_url": f"https://res.cloudinary.com/test/image/upload/photo{len(calls)}.png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls


def photo_file(mimetype="image/png", filename="me.png"):
    return (io.BytesIO(b"\x89PNG fake image bytes"), filename, mimetype)


@pytest.fixture
def register(client):
    """POST /register with sensible defaults; keyword args override form fields."""

    def _register(**overrides):
        photo = overrides.pop("photo", photo_file())
        form = {
            "type": "mentor",
            "name": "A",
            "email": "a@x.com",
            "mobile": "1234567890",
            "password": "p",
            "skills": "go",
            "experience": "5 years",
            "availability": "Weekends",
        }
        form.update(overrides)
        form = {k: v for k, v in form.items() if v is not None}
        if photo is not None:
            form["photo"] = photo
        return client.post("/register", data=form, content_type="multipart/form-data")

    return _register
