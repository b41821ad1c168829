"""Pytest configuration and shared fixtures for testing."""
import os

import pytest

from message_customize.app import create_app
from message_customize.config import BASE_DIR, Config
from message_customize.init_db import init_db
from message_customize.models.custom_message_setting import CustomMessageSetting
from message_customize.models.user import User
from werkzeug.security import generate_password_hash

LOCALES_DIR = os.path.join(BASE_DIR, "locales")


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Create an app backed by a fresh database and the bundled locales."""
    monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
    database = str(tmp_path / "test.db")
    init_db(database)

    class TestConfig(Config):
        TESTING = True
        WTF_CSRF_ENABLED = False
        DATABASE = database
        LOCALE_PATHS = [LOCALES_DIR]

    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password):
    return client.post("/login", data={
        "username": username,
        "password": password,
    }, follow_redirects=True)


@pytest.fixture
def admin_client(client):
    """Test client signed in as the seeded administrator."""
    login(client, "admin", "admin")
    return client


@pytest.fixture
def user_client(app, client):
    """Test client signed in as a user without administrator rights."""
    with app.app_context():
        User.create("analyst", generate_password_hash("password123"), language="fr")
    login(client, "analyst", "password123")
    return client


@pytest.fixture
def setting(app):
    """Custom message setting loaded inside an application context."""
    with app.app_context():
        yield CustomMessageSetting.find_or_default()


@pytest.fixture
def locale_dir(tmp_path):
    """A small catalog of two languages on disk."""
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "en.yml").write_text(
        "en:\n"
        "  label_issue: Issue\n"
        "  date:\n"
        "    formats:\n"
        "      default: '%Y-%m-%d'\n",
        encoding="utf-8",
    )
    (directory / "fr.yml").write_text(
        "fr:\n"
        "  label_issue: Demande\n",
        encoding="utf-8",
    )
    return directory
