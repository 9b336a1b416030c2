"""
Gemeinsame Test-Fixtures für contextbridge.

Diese Fixtures isolieren Tests von externen Abhängigkeiten:
- Dateisystem (settings.json, Logs, .env)
- Umgebungsvariablen (CONTEXTBRIDGE_*)

Shared Fixtures für häufig genutzte Objekte:
- settings: SettingsStore auf tmp_path
- router: ContextRouter auf diesem Store
"""

import sys
from pathlib import Path

import pytest

# Projekt-Root zum Python-Path hinzufügen
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Environment & Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Leitet settings.json und Logs in ein temporäres Verzeichnis um.

    Verhindert, dass Tests echte Einstellungen unter ~/.contextbridge lesen
    oder überschreiben.
    """
    import config

    home = tmp_path / "home"
    monkeypatch.setattr(config, "USER_CONFIG_DIR", home)
    monkeypatch.setattr(config, "LOG_DIR", home / "logs")
    monkeypatch.setattr(config, "LOG_FILE", home / "logs" / "contextbridge.log")
    monkeypatch.setattr(config, "SETTINGS_FILE", home / "settings.json")
    return home


@pytest.fixture
def clean_env(monkeypatch):
    """Entfernt alle CONTEXTBRIDGE_* Umgebungsvariablen für saubere Tests.

    Mockt auch load_environment() um zu verhindern, dass .env-Dateien
    während der Tests geladen werden (was sonst ENV-Pollution verursacht).
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("CONTEXTBRIDGE_"):
            monkeypatch.delenv(key, raising=False)

    import contextbridge

    monkeypatch.setattr(contextbridge, "load_environment", lambda: None)


# =============================================================================
# Shared Store-Fixtures
# =============================================================================


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"


@pytest.fixture
def settings(settings_path):
    from utils.preferences import SettingsStore

    return SettingsStore(settings_path)


@pytest.fixture
def style_store(settings):
    from context.styles import StylePromptStore

    return StylePromptStore(settings)


@pytest.fixture
def mapping_table(settings, style_store):
    from context.mappings import ContextMappingTable

    return ContextMappingTable(settings, style_store)


@pytest.fixture
def router(settings):
    from routing import ContextRouter

    return ContextRouter(settings)
