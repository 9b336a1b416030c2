"""Style-Prompt-Store für ContextBridge.

Hält Builtin- und Custom-Stile im Einstellungs-Dokument
(``context_style_prompts``). Builtins werden beim Laden immer aus dem
Werkskatalog ergänzt, ihr ``is_builtin``-Flag kommt ausschließlich aus dem
Katalog und kann daher nicht kippen.

Update und Reset laufen als atomare Read-Modify-Writes über
``SettingsStore.update`` – ein Reset kann ein paralleles Update nie halb
überschreiben (last writer wins).
"""

from __future__ import annotations

import logging
from dataclasses import replace

from utils.preferences import SettingsStore

from .errors import (
    BuiltinPromptError,
    DuplicatePromptError,
    NotBuiltinError,
    PromptNotFoundError,
)
from .models import ContextStylePrompt
from .prompts import BUILTIN_PROMPTS, get_builtin_prompts, get_factory_prompt

logger = logging.getLogger("contextbridge.styles")

_KEY = "context_style_prompts"


def _normalize(raw: list) -> list[ContextStylePrompt]:
    """Führt gespeicherte Einträge mit dem Werkskatalog zusammen.

    Reihenfolge: Builtins in Katalog-Reihenfolge, danach Custom-Stile in
    Anlage-Reihenfolge.
    """
    stored: dict[str, ContextStylePrompt] = {}
    for entry in raw:
        try:
            prompt = ContextStylePrompt.from_dict(entry)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ungültiger Stil-Eintrag ignoriert: {e}")
            continue
        stored.setdefault(prompt.id, prompt)

    result = []
    for factory in get_builtin_prompts():
        current = stored.get(factory.id, factory)
        result.append(replace(current, is_builtin=True))
    result.extend(
        replace(p, is_builtin=False) for p in stored.values() if p.id not in BUILTIN_PROMPTS
    )
    return result


def _serialize(prompts: list[ContextStylePrompt]) -> list[dict]:
    return [p.to_dict() for p in prompts]


def _index_of(prompts: list[ContextStylePrompt], prompt_id: str) -> int:
    for index, prompt in enumerate(prompts):
        if prompt.id == prompt_id:
            return index
    raise PromptNotFoundError(prompt_id)


class StylePromptStore:
    """CRUD + Reset auf Stil-Prompts."""

    def __init__(self, settings: SettingsStore) -> None:
        self._settings = settings

    def list(self) -> list[ContextStylePrompt]:
        return _normalize(self._settings.get(_KEY))

    def ids(self) -> set[str]:
        return {p.id for p in self.list()}

    @staticmethod
    def ids_in(data: dict) -> set[str]:
        """Stil-IDs eines Settings-Entwurfs (für Prüfungen innerhalb von update())."""
        return {p.id for p in _normalize(data[_KEY])}

    def get(self, prompt_id: str) -> ContextStylePrompt:
        prompts = self.list()
        return prompts[_index_of(prompts, prompt_id)]

    def update(
        self,
        prompt_id: str,
        name: str | None = None,
        description: str | None = None,
        prompt: str | None = None,
    ) -> ContextStylePrompt:
        """Ändert beliebige Teilmenge der Felder; None = unverändert lassen."""
        changes = {
            key: value
            for key, value in (("name", name), ("description", description), ("prompt", prompt))
            if value is not None
        }

        def mutate(data: dict) -> ContextStylePrompt:
            prompts = _normalize(data[_KEY])
            index = _index_of(prompts, prompt_id)
            prompts[index] = replace(prompts[index], **changes)
            data[_KEY] = _serialize(prompts)
            return prompts[index]

        updated = self._settings.update(mutate)
        logger.info(f"Stil {prompt_id!r} aktualisiert: {sorted(changes)}")
        return updated

    def reset(self, prompt_id: str) -> ContextStylePrompt:
        """Setzt einen Builtin-Stil auf Werkswerte zurück.

        Raises:
            PromptNotFoundError: Unbekannte ID
            NotBuiltinError: Custom-Stil (keine Werkswerte vorhanden)
        """

        def mutate(data: dict) -> ContextStylePrompt:
            prompts = _normalize(data[_KEY])
            index = _index_of(prompts, prompt_id)
            factory = get_factory_prompt(prompt_id)
            if factory is None:
                raise NotBuiltinError(prompt_id)
            prompts[index] = factory
            data[_KEY] = _serialize(prompts)
            return factory

        restored = self._settings.update(mutate)
        logger.info(f"Stil {prompt_id!r} auf Werkswerte zurückgesetzt")
        return restored

    def add(self, prompt_id: str, name: str, description: str, prompt: str) -> ContextStylePrompt:
        created = ContextStylePrompt(
            id=prompt_id, name=name, description=description, prompt=prompt, is_builtin=False
        )

        def mutate(data: dict) -> None:
            prompts = _normalize(data[_KEY])
            if any(p.id == prompt_id for p in prompts):
                raise DuplicatePromptError(prompt_id)
            prompts.append(created)
            data[_KEY] = _serialize(prompts)

        self._settings.update(mutate)
        logger.info(f"Custom-Stil {prompt_id!r} angelegt")
        return created

    def delete(self, prompt_id: str) -> None:
        """Löscht einen Custom-Stil. Unbekannte IDs sind ein No-op.

        Mappings, die auf den Stil zeigen, bleiben stehen und fallen bei der
        Auflösung auf den Fallback-Stil zurück.
        """
        if prompt_id in BUILTIN_PROMPTS:
            raise BuiltinPromptError(prompt_id)

        def mutate(data: dict) -> None:
            prompts = _normalize(data[_KEY])
            data[_KEY] = _serialize([p for p in prompts if p.id != prompt_id])

        self._settings.update(mutate)
        logger.info(f"Custom-Stil {prompt_id!r} gelöscht")


__all__ = ["StylePromptStore"]
