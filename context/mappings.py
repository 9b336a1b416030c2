"""Kontext-Mapping-Tabelle: app_id → Stil-ID (User-Overrides).

Fehlt ein Mapping, greift der Default-Stil der App bzw. der Fallback
(siehe context.resolver). Pro app_id existiert höchstens ein Mapping.
"""

from __future__ import annotations

import logging

from utils.preferences import SettingsStore

from .errors import UnknownStyleError
from .models import ContextMapping

logger = logging.getLogger("contextbridge.mappings")

_KEY = "context_mappings"


def _parse(raw: list) -> list[ContextMapping]:
    """Parst gespeicherte Mappings; Duplikate: erster Eintrag gewinnt."""
    seen: set[str] = set()
    result = []
    for entry in raw:
        try:
            mapping = ContextMapping.from_dict(entry)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ungültiges Mapping ignoriert: {e}")
            continue
        if mapping.app_id in seen:
            continue
        seen.add(mapping.app_id)
        result.append(mapping)
    return result


class ContextMappingTable:
    def __init__(self, settings: SettingsStore, style_store=None) -> None:
        self._settings = settings
        # Optional: validiert Stil-Referenzen beim Anlegen
        self._styles = style_store

    def list(self) -> list[ContextMapping]:
        return _parse(self._settings.get(_KEY))

    def as_dict(self) -> dict[str, str]:
        return {m.app_id: m.context_style for m in self.list()}

    def get(self, app_id: str) -> ContextMapping | None:
        for mapping in self.list():
            if mapping.app_id == app_id:
                return mapping
        return None

    def update(self, app_id: str, context_style: str) -> ContextMapping:
        """Legt ein Mapping an oder ändert es in-place (Reihenfolge bleibt)."""
        new_mapping = ContextMapping(app_id=app_id, context_style=context_style)

        def mutate(data: dict) -> None:
            # Prüfung unter demselben Lock wie ein paralleles Stil-Löschen
            if self._styles is not None and context_style not in self._styles.ids_in(data):
                raise UnknownStyleError(context_style)
            mappings = _parse(data[_KEY])
            for index, mapping in enumerate(mappings):
                if mapping.app_id == app_id:
                    mappings[index] = new_mapping
                    break
            else:
                mappings.append(new_mapping)
            data[_KEY] = [m.to_dict() for m in mappings]

        self._settings.update(mutate)
        logger.info(f"Mapping {app_id!r} → {context_style!r}")
        return new_mapping

    def delete(self, app_id: str) -> None:
        """Entfernt das Mapping; die App fällt auf ihren Default-Stil zurück."""

        def mutate(data: dict) -> None:
            data[_KEY] = [m.to_dict() for m in _parse(data[_KEY]) if m.app_id != app_id]

        self._settings.update(mutate)
        logger.info(f"Mapping {app_id!r} entfernt")


__all__ = ["ContextMappingTable"]
