"""Tests for persistent theme storage.

Tests cover:
1. MemoryStore - get, set, delete
2. JsonFileStore - persistence, corrupted files
3. PersistentStore - typed reads, defaults on failure, dropped writes
"""

import json
from unittest.mock import Mock

import pytest

from nautilus.presets import DEFAULT_PALETTE, Palette
from nautilus.storage import (
    CUSTOM_THEME_KEY,
    PRESET_KEY,
    JsonFileStore,
    MemoryStore,
    PersistentStore,
    TextStore,
)


class TestMemoryStore:
    """Tests for MemoryStore backend."""

    def test_get_missing(self):
        """Test missing keys return None."""
        assert MemoryStore().get("missing") is None

    def test_set_and_get(self):
        """Test storing text."""
        store = MemoryStore()
        store.set("key", '"value"')
        assert store.get("key") == '"value"'

    def test_delete(self):
        """Test deleting keys, including absent ones."""
        store = MemoryStore({"key": "1"})
        store.delete("key")
        store.delete("key")
        assert store.get("key") is None

    def test_is_text_store(self):
        """Test MemoryStore implements TextStore."""
        assert isinstance(MemoryStore(), TextStore)


class TestJsonFileStore:
    """Tests for JsonFileStore backend."""

    def test_persists_across_instances(self, tmp_path):
        """Test values survive a new store on the same file."""
        path = tmp_path / "theme.json"
        JsonFileStore(path).set(PRESET_KEY, '"forest"')
        assert JsonFileStore(path).get(PRESET_KEY) == '"forest"'

    def test_creates_parent_directory(self, tmp_path):
        """Test the parent directory is created on write."""
        path = tmp_path / "nested" / "dir" / "theme.json"
        JsonFileStore(path).set("key", "1")
        assert path.exists()

    def test_missing_file(self, tmp_path):
        """Test a missing file reads as empty."""
        assert JsonFileStore(tmp_path / "none.json").get("key") is None

    def test_corrupted_file_reads_empty(self, tmp_path):
        """Test an unparseable file is ignored."""
        path = tmp_path / "theme.json"
        path.write_text("{not json")
        store = JsonFileStore(path)
        assert store.get("key") is None

        store.set("key", "1")
        assert json.loads(path.read_text()) == {"key": "1"}

    def test_deeply_nested_file(self, tmp_path):
        """Test a file nested past the parser limit reads as empty."""
        path = tmp_path / "theme.json"
        path.write_text("[" * 100000)
        assert JsonFileStore(path).get("key") is None

    def test_non_object_file(self, tmp_path):
        """Test a JSON file that is not an object is ignored."""
        path = tmp_path / "theme.json"
        path.write_text("[1, 2]")
        assert JsonFileStore(path).get("key") is None

    def test_delete(self, tmp_path):
        """Test deleting a key rewrites the file."""
        path = tmp_path / "theme.json"
        store = JsonFileStore(path)
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")
        assert json.loads(path.read_text()) == {"b": "2"}


class TestPersistentStore:
    """Tests for PersistentStore typed access."""

    def test_read_default_when_missing(self):
        """Test the default is returned for missing keys."""
        store = PersistentStore(MemoryStore())
        assert store.read(PRESET_KEY, "default") == "default"

    def test_write_then_read(self):
        """Test values are JSON encoded and decoded."""
        backend = MemoryStore()
        store = PersistentStore(backend)
        assert store.write(PRESET_KEY, "ocean") is True
        assert backend.get(PRESET_KEY) == '"ocean"'
        assert store.read(PRESET_KEY, "default") == "ocean"

    def test_palette_round_trip(self):
        """Test a palette survives encoding exactly."""
        store = PersistentStore(MemoryStore())
        store.write(CUSTOM_THEME_KEY, DEFAULT_PALETTE.to_dict())
        assert store.read(CUSTOM_THEME_KEY, None, decode=Palette.from_dict) == DEFAULT_PALETTE

    def test_malformed_json_returns_default(self, caplog):
        """Test invalid JSON is logged and replaced by the default."""
        store = PersistentStore(MemoryStore({CUSTOM_THEME_KEY: "{broken"}))
        with caplog.at_level("WARNING", logger="nautilus.storage"):
            assert store.read(CUSTOM_THEME_KEY, None) is None
        assert "malformed" in caplog.text

    def test_deeply_nested_json_returns_default(self):
        """Test nesting past the parser limit is handled like malformed JSON."""
        store = PersistentStore(MemoryStore({CUSTOM_THEME_KEY: "[" * 100000}))
        assert store.read(CUSTOM_THEME_KEY, None) is None

    def test_decoder_rejection_returns_default(self):
        """Test a decoder error marks the value as malformed."""
        store = PersistentStore(MemoryStore({CUSTOM_THEME_KEY: '{"primary": "#000"}'}))
        assert store.read(CUSTOM_THEME_KEY, None, decode=Palette.from_dict) is None

    def test_backend_read_failure_returns_default(self):
        """Test backend exceptions never reach the caller."""
        backend = Mock(spec=TextStore)
        backend.get.side_effect = OSError("storage unavailable")
        store = PersistentStore(backend)
        assert store.read(PRESET_KEY, "default") == "default"

    def test_backend_write_failure_is_dropped(self, caplog):
        """Test write failures are logged, not raised."""
        backend = Mock(spec=TextStore)
        backend.set.side_effect = OSError("quota exceeded")
        store = PersistentStore(backend)
        with caplog.at_level("WARNING", logger="nautilus.storage"):
            assert store.write(PRESET_KEY, "ocean") is False
        assert "quota exceeded" in caplog.text

