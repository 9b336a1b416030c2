"""ENV-Zugriff für ContextBridge.

`.env`-Dateien werden per python-dotenv gelesen; gesetzte Prozess-Variablen
haben immer Vorrang. Reihenfolge (höchste zuerst):

    1. os.environ
    2. ~/.contextbridge/.env
    3. ./.env

Alle Getter liefern None für "nicht gesetzt", ungültige Werte werden mit
Warnung verworfen, damit config.py auf Defaults zurückfallen kann.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, TypeVar

from dotenv import dotenv_values

logger = logging.getLogger("contextbridge.env")

T = TypeVar("T")

_BOOL_WORDS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def parse_bool(value: str | None) -> bool | None:
    """"yes"/"off"/"1"... → bool, alles andere → None."""
    if value is None:
        return None
    return _BOOL_WORDS.get(value.strip().lower())


def _read(name: str, convert: Callable[[str], T | None]) -> T | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    try:
        value = convert(raw.strip())
    except ValueError:
        value = None
    if value is None:
        logger.warning(f"{name}={raw!r} ist ungültig und wird ignoriert")
    return value


def get_env_bool(name: str) -> bool | None:
    return _read(name, parse_bool)


def get_env_bool_default(name: str, default: bool) -> bool:
    value = get_env_bool(name)
    return default if value is None else value


def get_env_int(name: str) -> int | None:
    return _read(name, int)


def get_env_float(name: str) -> float | None:
    return _read(name, float)


def load_environment() -> None:
    """Übernimmt Werte aus den `.env`-Dateien in os.environ.

    Bereits gesetzte Variablen bleiben unangetastet; die User-.env schlägt
    die lokale.
    """
    from config import USER_CONFIG_DIR

    candidates = (USER_CONFIG_DIR / ".env", Path(".env"))
    for env_path in candidates:
        if not env_path.is_file():
            continue
        for key, value in dotenv_values(env_path).items():
            if value is not None:
                os.environ.setdefault(key, value)
        logger.debug(f".env geladen: {env_path}")


__all__ = [
    "get_env_bool",
    "get_env_bool_default",
    "get_env_float",
    "get_env_int",
    "load_environment",
    "parse_bool",
]
