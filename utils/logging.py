"""Logging-Setup für ContextBridge.

Ein Root-Logger ``contextbridge``; Subsysteme loggen über Child-Logger
(``contextbridge.bridge``, ``contextbridge.cloud_stt`` ...), die hierher
propagieren. Ausgabe landet in einer rotierenden Logdatei, im Debug-Modus
zusätzlich auf stderr.
"""

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

logger = logging.getLogger("contextbridge")

# Kurz-ID pro Prozess, damit sich CLI-Aufrufe im Log auseinanderhalten lassen
_session_id: str = ""

_LINE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DEBUG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_FALLBACK_LOG = Path("/tmp/contextbridge.log")


def get_session_id() -> str:
    global _session_id
    if not _session_id:
        _session_id = uuid.uuid4().hex[:8]
    return _session_id


def get_logger() -> logging.Logger:
    return logger


def _stream_handler(level: int, fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, "%H:%M:%S"))
    return handler


def _open_log_file(candidates: tuple[Path, ...]) -> logging.Handler | None:
    """Erster beschreibbarer Pfad gewinnt (Home kann in Sandboxes read-only sein)."""
    for path in candidates:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
            )
        except OSError:
            continue
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_LINE_FORMAT, "%H:%M:%S"))
        return handler
    return None


def setup_logging(debug: bool = False) -> None:
    """Richtet den contextbridge-Logger ein.

    Mehrfache Aufrufe passen nur das Level an und hängen keine weiteren
    Handler an.

    Args:
        debug: DEBUG-Level und zusätzliche Ausgabe auf stderr
    """
    # Erst zur Laufzeit: Tests patchen config.LOG_FILE
    from config import LOG_FILE

    get_session_id()
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    if logger.handlers:
        return

    file_handler = _open_log_file((LOG_FILE, _FALLBACK_LOG))
    if file_handler is not None:
        logger.addHandler(file_handler)
    else:
        logger.addHandler(_stream_handler(level, _LINE_FORMAT))

    if debug:
        logger.addHandler(_stream_handler(logging.DEBUG, _DEBUG_FORMAT))


def log(message: str) -> None:
    """Statusmeldung auf stderr; stdout bleibt für JSON/Tabellen frei."""
    print(message, file=sys.stderr)


def error(message: str) -> None:
    print(f"Fehler: {message}", file=sys.stderr)
