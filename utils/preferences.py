"""Persistente Einstellungen für ContextBridge.

Speichert das Einstellungs-Singleton in ~/.contextbridge/settings.json:
Kontext-Mappings, Stil-Prompts und Cloud-STT-Konfiguration.

Alle Änderungen laufen als Read-Modify-Write unter einem Lock:

    store = SettingsStore()
    store.update(lambda data: data["context_mappings"].append(...))

Der Mutator arbeitet auf einer Kopie. Erst wenn die Datei atomar ersetzt
wurde, wird die Kopie zum neuen In-Memory-Stand. Wirft der Mutator oder
schlägt das Schreiben fehl, bleibt der alte Stand sichtbar.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, TypeVar

from context.errors import PersistenceError

logger = logging.getLogger("contextbridge.settings")

T = TypeVar("T")


def default_settings() -> dict:
    """Werkseinstellungen (ohne Stil-Prompts, die ergänzt context.styles)."""
    # Lazy import: config-Defaults sollen hier nicht dupliziert werden
    from config import DEFAULT_GEMINI_STT_MODEL, DEFAULT_OPENAI_STT_MODEL

    return {
        "context_mappings": [],
        "context_style_prompts": [],
        "cloud_stt_enabled": False,
        "cloud_stt_provider": None,
        "cloud_stt_api_keys": {},
        "cloud_stt_models": {
            "openai": DEFAULT_OPENAI_STT_MODEL,
            "gemini": DEFAULT_GEMINI_STT_MODEL,
        },
    }


def _atomic_write(path: Path, data: dict) -> None:
    """Write JSON atomically using tmp-file-then-rename pattern.

    A reader (or a crash mid-write) must never see a half-written settings file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp_path.replace(path)


def _read_settings(path: Path) -> dict:
    """Liest Einstellungen und füllt fehlende Keys mit Defaults auf."""
    data = default_settings()
    if not path.exists():
        return data
    try:
        stored = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Einstellungs-Datei fehlerhaft, verwende Defaults: {e}")
        return data
    if not isinstance(stored, dict):
        logger.warning("Einstellungs-Datei ist kein JSON-Objekt, verwende Defaults")
        return data

    for key, default in data.items():
        value = stored.get(key, default)
        # Typ-Check gegen Default verhindert, dass kaputte Werte weiterwandern
        if default is not None and not isinstance(value, type(default)):
            logger.warning(f"Ungültiger Wert für {key!r}, verwende Default")
            value = default
        data[key] = value
    return data


class SettingsStore:
    """Thread-sicherer Zugriff auf das persistierte Einstellungs-Dokument."""

    def __init__(self, path: Path | None = None) -> None:
        if path is None:
            from config import SETTINGS_FILE

            path = SETTINGS_FILE
        self.path = path
        self._lock = threading.RLock()
        self._data: dict | None = None

    def _current(self) -> dict:
        if self._data is None:
            self._data = _read_settings(self.path)
        return self._data

    def read(self) -> dict:
        """Gibt eine tiefe Kopie des aktuellen Stands zurück."""
        with self._lock:
            return copy.deepcopy(self._current())

    def get(self, key: str) -> Any:
        with self._lock:
            return copy.deepcopy(self._current()[key])

    def update(self, mutator: Callable[[dict], T]) -> T:
        """Read-Modify-Write: mutiert eine Kopie, persistiert, übernimmt.

        Returns:
            Rückgabewert des Mutators

        Raises:
            ContextBridgeError: Vom Mutator geworfen (nichts wurde geschrieben)
            PersistenceError: Schreiben fehlgeschlagen (In-Memory-Stand unverändert)
        """
        with self._lock:
            draft = copy.deepcopy(self._current())
            result = mutator(draft)
            try:
                _atomic_write(self.path, draft)
            except OSError as e:
                logger.warning(f"Einstellungen nicht schreibbar: {e}")
                raise PersistenceError(f"Failed to write settings: {e}") from e
            self._data = draft
            return result

    def reload(self) -> None:
        """Verwirft den Cache, nächster Zugriff liest die Datei neu."""
        with self._lock:
            self._data = None


__all__ = ["SettingsStore", "default_settings"]
