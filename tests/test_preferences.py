"""Tests für SettingsStore (Defaults, Persistenz, atomare Updates)."""

import json
import threading
from unittest.mock import patch

import pytest

from context.errors import PersistenceError
from utils.preferences import SettingsStore, default_settings


class TestDefaults:
    def test_missing_file_gives_defaults(self, settings):
        assert settings.read() == default_settings()

    def test_default_models(self):
        assert default_settings()["cloud_stt_models"] == {
            "openai": "whisper-1",
            "gemini": "gemini-2.0-flash",
        }

    def test_corrupt_file_gives_defaults(self, settings_path, settings):
        settings_path.write_text("{not json")
        assert settings.read() == default_settings()
        # Kaputte Datei bleibt bis zum nächsten Schreiben liegen
        assert settings_path.read_text() == "{not json"

    def test_wrong_types_are_replaced(self, settings_path, settings):
        settings_path.write_text(json.dumps({"cloud_stt_enabled": True, "context_mappings": "x"}))
        data = settings.read()
        assert data["cloud_stt_enabled"] is True
        assert data["context_mappings"] == []

    def test_default_path_from_config(self, isolated_home):
        assert SettingsStore().path == isolated_home / "settings.json"


class TestUpdate:
    def test_update_persists(self, settings_path, settings):
        settings.update(lambda data: data.__setitem__("cloud_stt_enabled", True))
        assert json.loads(settings_path.read_text())["cloud_stt_enabled"] is True

    def test_update_returns_mutator_result(self, settings):
        assert settings.update(lambda data: 42) == 42

    def test_read_returns_copy(self, settings):
        data = settings.read()
        data["context_mappings"].append({"app_id": "x", "context_style": "y"})
        assert settings.get("context_mappings") == []

    def test_failing_mutator_leaves_state(self, settings_path, settings):
        def mutate(data):
            data["cloud_stt_enabled"] = True
            raise ValueError("boom")

        with pytest.raises(ValueError):
            settings.update(mutate)
        assert settings.get("cloud_stt_enabled") is False
        assert not settings_path.exists()

    def test_write_failure_leaves_state(self, settings):
        """Persistenzfehler: In-Memory-Stand bleibt der alte."""
        with patch("utils.preferences._atomic_write", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceError):
                settings.update(lambda data: data.__setitem__("cloud_stt_enabled", True))
        assert settings.get("cloud_stt_enabled") is False

    def test_no_tmp_file_left(self, settings_path, settings):
        settings.update(lambda data: None)
        assert not settings_path.with_suffix(".tmp").exists()

    def test_concurrent_updates_are_serialized(self, settings):
        """Parallele Read-Modify-Writes verlieren keine Einträge."""

        def add(index):
            settings.update(
                lambda data: data["context_mappings"].append(
                    {"app_id": f"app{index}", "context_style": "chat"}
                )
            )

        threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(settings.get("context_mappings")) == 20

    def test_reload_reads_file(self, settings_path, settings):
        settings.read()
        settings_path.write_text(json.dumps({"cloud_stt_provider": "gemini"}))
        assert settings.get("cloud_stt_provider") is None
        settings.reload()
        assert settings.get("cloud_stt_provider") == "gemini"
