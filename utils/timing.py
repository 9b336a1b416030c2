"""Zeitmessung für Netzwerk-Roundtrips (Verbindungstests)."""

import time
from contextlib import contextmanager

from .logging import get_logger, get_session_id


def format_duration(milliseconds: float) -> str:
    """850 → "850ms", 1234 → "1.23s"."""
    if milliseconds < 1000:
        return f"{milliseconds:.0f}ms"
    return f"{milliseconds / 1000:.2f}s"


@contextmanager
def timed_operation(name: str, *, logger=None, include_session: bool = True):
    """Loggt die Dauer eines Blocks, bei Exceptions mit Vermerk.

    Die Exception selbst wird nicht abgefangen.

    Usage:
        with timed_operation("Gemini-Verbindungstest", logger=provider_logger):
            client.models.generate_content(...)
    """
    target = logger or get_logger()
    label = f"[{get_session_id()}] {name}" if include_session else name
    started = time.perf_counter()
    failed = False
    try:
        yield
    except BaseException:
        failed = True
        raise
    finally:
        took = format_duration((time.perf_counter() - started) * 1000)
        if failed:
            target.info(f"{label}: abgebrochen nach {took}")
        else:
            target.info(f"{label}: {took}")
