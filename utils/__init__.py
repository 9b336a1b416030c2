"""Gemeinsame Helfer: Logging, Zeitmessung, ENV, Settings-Datei, Events.

Usage:
    from utils import setup_logging, timed_operation

    setup_logging(debug=True)
    with timed_operation("Verbindungstest"):
        client.models.list()
"""

# config.py importiert utils.env lazy und führt dabei diese Datei aus.
# Hier nichts importieren, das config auf Modulebene braucht.

from .logging import error, get_logger, get_session_id, log, setup_logging
from .timing import format_duration, timed_operation

__all__ = [
    "error",
    "format_duration",
    "get_logger",
    "get_session_id",
    "log",
    "setup_logging",
    "timed_operation",
]
