"""Edit-Session für Stil-Prompts.

Lokaler Entwurf, der feldweise gegen den zuletzt geladenen Server-Stand
verglichen wird. Nur ein geänderter, nicht leerer Entwurf darf gespeichert
werden; nach jedem Speichern/Reset wird der komplette Store neu geladen,
damit der Entwurf z.B. wiederhergestellte Werkswerte zeigt.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import ContextStylePrompt
from .styles import StylePromptStore

_FIELDS = ("name", "description", "prompt")


@dataclass
class PromptDraft:
    store: StylePromptStore
    prompt_id: str
    name: str = ""
    description: str = ""
    prompt: str = ""
    loaded: ContextStylePrompt | None = field(default=None, init=False)

    @classmethod
    def open(cls, store: StylePromptStore, prompt_id: str) -> PromptDraft:
        draft = cls(store=store, prompt_id=prompt_id)
        draft.reload()
        return draft

    def reload(self) -> None:
        """Lädt den Store neu und verwirft lokale Änderungen."""
        self.loaded = self.store.get(self.prompt_id)
        self.name = self.loaded.name
        self.description = self.loaded.description
        self.prompt = self.loaded.prompt

    def changed_fields(self) -> dict[str, str]:
        if self.loaded is None:
            return {}
        return {
            name: getattr(self, name)
            for name in _FIELDS
            if getattr(self, name) != getattr(self.loaded, name)
        }

    @property
    def is_dirty(self) -> bool:
        return bool(self.changed_fields())

    @property
    def can_save(self) -> bool:
        return self.is_dirty and bool(self.name.strip()) and bool(self.prompt.strip())

    def save(self) -> bool:
        """Speichert geänderte Felder. Gibt False zurück, wenn nichts zu tun war."""
        if not self.can_save:
            return False
        self.store.update(self.prompt_id, **self.changed_fields())
        self.reload()
        return True

    def reset(self) -> None:
        """Setzt einen Builtin auf Werkswerte zurück (NotBuiltinError bei Custom)."""
        self.store.reset(self.prompt_id)
        self.reload()


__all__ = ["PromptDraft"]
