"""Zentrale Konfiguration für ContextBridge.

Gemeinsame Konstanten für Bridge, Kontext-Auflösung und Cloud-STT.
Vermeidet Duplikation zwischen Modulen.
"""

import os
from pathlib import Path

# =============================================================================
# Browser-Bridge
# =============================================================================

# Nur Loopback – die Extension ist nicht authentifiziert, Vertrauensgrenze ist localhost
BRIDGE_HOST = "127.0.0.1"
DEFAULT_BRIDGE_PORT = 9876
DEFAULT_RECONNECT_INTERVAL = 5.0  # Sekunden zwischen Reconnect-Versuchen
BRIDGE_CONNECT_TIMEOUT = 3.0  # Socket-Level Connect-Timeout des Clients
BRIDGE_CLOSE_TIMEOUT = 0.5  # Schneller WebSocket-Shutdown

# =============================================================================
# Kontext-Auflösung
# =============================================================================

FALLBACK_STYLE = "correction"
FALLBACK_APP_ID = "unknown"
FALLBACK_APP_NAME = "Unknown"
PROMPT_PLACEHOLDER = "${output}"

# Confidence pro Erkennungsweg
CONFIDENCE_NATIVE = 1.0
CONFIDENCE_BROWSER_EXTENSION = 0.98
CONFIDENCE_BROWSER_TITLE = 0.7
CONFIDENCE_FALLBACK = 0.5

# =============================================================================
# Cloud-STT
# =============================================================================

CONNECTION_TEST_TIMEOUT = 10.0  # Sekunden
DEFAULT_OPENAI_STT_MODEL = "whisper-1"
DEFAULT_GEMINI_STT_MODEL = "gemini-2.0-flash"

# =============================================================================
# Lokale Pfade
# =============================================================================

# User-Verzeichnis für Einstellungen und Logs (CONTEXTBRIDGE_HOME überschreibt)
USER_CONFIG_DIR = Path(
    os.getenv("CONTEXTBRIDGE_HOME") or Path.home() / ".contextbridge"
).expanduser()

LOG_DIR = USER_CONFIG_DIR / "logs"
LOG_FILE = LOG_DIR / "contextbridge.log"

SETTINGS_FILE = USER_CONFIG_DIR / "settings.json"


def get_bridge_port() -> int:
    """Bridge-Port: CONTEXTBRIDGE_PORT > Default."""
    # Lazy import: utils.env importiert config für USER_CONFIG_DIR
    from utils.env import get_env_int

    port = get_env_int("CONTEXTBRIDGE_PORT")
    if port is None or not (0 < port < 65536):
        return DEFAULT_BRIDGE_PORT
    return port


def get_reconnect_interval() -> float:
    """Reconnect-Intervall: CONTEXTBRIDGE_RECONNECT_INTERVAL > Default."""
    from utils.env import get_env_float

    interval = get_env_float("CONTEXTBRIDGE_RECONNECT_INTERVAL")
    if interval is None or interval <= 0:
        return DEFAULT_RECONNECT_INTERVAL
    return interval


__all__ = [
    # Bridge
    "BRIDGE_HOST",
    "DEFAULT_BRIDGE_PORT",
    "DEFAULT_RECONNECT_INTERVAL",
    "BRIDGE_CONNECT_TIMEOUT",
    "BRIDGE_CLOSE_TIMEOUT",
    "get_bridge_port",
    "get_reconnect_interval",
    # Context
    "FALLBACK_STYLE",
    "FALLBACK_APP_ID",
    "FALLBACK_APP_NAME",
    "PROMPT_PLACEHOLDER",
    "CONFIDENCE_NATIVE",
    "CONFIDENCE_BROWSER_EXTENSION",
    "CONFIDENCE_BROWSER_TITLE",
    "CONFIDENCE_FALLBACK",
    # Cloud-STT
    "CONNECTION_TEST_TIMEOUT",
    "DEFAULT_OPENAI_STT_MODEL",
    "DEFAULT_GEMINI_STT_MODEL",
    # Paths
    "USER_CONFIG_DIR",
    "LOG_DIR",
    "LOG_FILE",
    "SETTINGS_FILE",
]
