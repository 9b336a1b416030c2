"""Datentypen für Kontext-Erkennung und Stil-Auswahl."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from config import (
    CONFIDENCE_FALLBACK,
    FALLBACK_APP_ID,
    FALLBACK_APP_NAME,
    FALLBACK_STYLE,
)


class ContextSource(str, Enum):
    """Woher ein erkannter Kontext stammt."""

    native = "native"  # Vordergrund-Fenster des Betriebssystems
    browser = "browser"  # Browser-Extension über die Bridge
    fallback = "fallback"  # Nichts erkannt


@dataclass(frozen=True)
class DetectedContext:
    """Transienter Kontext der aktiven Session (wird nicht persistiert)."""

    source: ContextSource
    app_id: str
    app_name: str
    context_style: str
    confidence: float

    @classmethod
    def fallback(cls) -> DetectedContext:
        return cls(
            source=ContextSource.fallback,
            app_id=FALLBACK_APP_ID,
            app_name=FALLBACK_APP_NAME,
            context_style=FALLBACK_STYLE,
            confidence=CONFIDENCE_FALLBACK,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["source"] = self.source.value
        return data


@dataclass(frozen=True)
class ContextMapping:
    """User-Override: app_id → Stil-ID."""

    app_id: str
    context_style: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ContextMapping:
        return cls(app_id=str(data["app_id"]), context_style=str(data["context_style"]))


@dataclass(frozen=True)
class ContextStylePrompt:
    """Stil-Definition für die Nachbearbeitung.

    Builtin-Einträge haben unveränderliche Werkswerte (siehe context.prompts),
    ihr aktueller Inhalt ist aber editierbar und zurücksetzbar.
    """

    id: str
    name: str
    description: str
    prompt: str
    is_builtin: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ContextStylePrompt:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            prompt=str(data.get("prompt", "")),
            is_builtin=bool(data.get("is_builtin", False)),
        )


__all__ = [
    "ContextSource",
    "DetectedContext",
    "ContextMapping",
    "ContextStylePrompt",
]
