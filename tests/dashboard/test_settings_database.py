"""Tests for the sqlite settings store."""

import pytest

from nautilus.dashboard.database import APP_SETTINGS_KEY, SettingsDatabase
from nautilus.storage import TextStore


@pytest.fixture
def db(tmp_path):
    """Settings database in a temp directory."""
    return SettingsDatabase(tmp_path / "settings.db")


class TestSettingsDatabase:
    """Tests for key/value access."""

    def test_is_text_store(self, db):
        """Test the database can back theme storage."""
        assert isinstance(db, TextStore)

    def test_set_get(self, db):
        """Test storing and reading a value."""
        db.set("key", '"value"')
        assert db.get("key") == '"value"'
        assert db.get("missing") is None

    def test_upsert(self, db):
        """Test setting an existing key replaces it."""
        db.set("key", "1")
        db.set("key", "2")
        assert db.get("key") == "2"
        assert db.keys() == ["key"]

    def test_delete_and_clear(self, db):
        """Test removing keys."""
        db.set("a", "1")
        db.set("b", "2")
        db.delete("a")
        assert db.keys() == ["b"]
        db.clear()
        assert db.keys() == []

    def test_persistence(self, tmp_path):
        """Test values survive reopening the database."""
        SettingsDatabase(tmp_path / "settings.db").set("key", "1")
        assert SettingsDatabase(tmp_path / "settings.db").get("key") == "1"


class TestAppSettings:
    """Tests for application settings helpers."""

    def test_defaults(self, db):
        """Test defaults when nothing is stored."""
        settings = db.get_app_settings()
        assert settings["product_name"] == "Nautilus"
        assert settings["logo_url"] is None

    def test_malformed(self, db):
        """Test malformed settings fall back to defaults."""
        db.set(APP_SETTINGS_KEY, "{oops")
        assert db.get_app_settings()["product_name"] == "Nautilus"

    def test_deeply_nested(self, db):
        """Test settings nested past the parser limit fall back to defaults."""
        db.set(APP_SETTINGS_KEY, "[" * 100000)
        assert db.get_app_settings()["product_name"] == "Nautilus"

    def test_empty_values_keep_defaults(self, db):
        """Test empty stored colors keep the defaults."""
        db.set(APP_SETTINGS_KEY, '{"primary_color": "", "logo_url": "https://example.com/logo.png"}')
        settings = db.get_app_settings()
        assert settings["primary_color"] == "#0ea5e9"
        assert settings["logo_url"] == "https://example.com/logo.png"

    def test_save_ignores_unknown_fields(self, db):
        """Test only known fields are stored."""
        saved = db.save_app_settings({"product_name": "Kraken", "password": "x"})
        assert saved["product_name"] == "Kraken"
        assert "password" not in saved
