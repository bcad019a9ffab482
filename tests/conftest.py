"""
Shared test fixtures for the users API tests.
"""
import json
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from app import create_app
from app.config import Config
from app.storage.user_store import UserStore


@pytest.fixture
def users_file(tmp_path: Path) -> Path:
    """Location of the users JSON file for one test (not created yet)."""
    return tmp_path / "data" / "data.json"


@pytest.fixture
def app(users_file: Path) -> Flask:
    """Create a Flask application bound to a temporary users file."""

    class TestConfig(Config):
        TESTING = True
        USERS_FILE = users_file

    app = create_app(TestConfig)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def user_store(users_file: Path) -> UserStore:
    """A standalone UserStore on the temporary file."""
    return UserStore(users_file)


@pytest.fixture
def seed_users(users_file: Path):
    """Write the given records straight to disk, bypassing the API."""

    def _seed(records):
        users_file.parent.mkdir(parents=True, exist_ok=True)
        users_file.write_text(json.dumps(records, indent=4, ensure_ascii=False) + "\n", encoding="utf-8")
        return records

    return _seed


@pytest.fixture
def users_on_disk(users_file: Path):
    """Read back what is currently persisted."""

    def _read():
        return json.loads(users_file.read_text(encoding="utf-8"))

    return _read
