"""Typisierte Fehler für Stores und Command-Surface.

Alle Fehler sind lokal zu einer Operation: Stores werfen sie,
``commands`` wandelt sie in Error-Payloads um.
"""


class ContextBridgeError(Exception):
    """Basisklasse aller erwarteten ContextBridge-Fehler."""


class PromptNotFoundError(ContextBridgeError):
    def __init__(self, prompt_id: str) -> None:
        super().__init__(f"Prompt not found: {prompt_id}")
        self.prompt_id = prompt_id


class NotBuiltinError(ContextBridgeError):
    """Reset auf einen Custom-Prompt (hat keine Werkswerte)."""

    def __init__(self, prompt_id: str) -> None:
        super().__init__(f"No default prompt found for this ID: {prompt_id}")
        self.prompt_id = prompt_id


class DuplicatePromptError(ContextBridgeError):
    def __init__(self, prompt_id: str) -> None:
        super().__init__(f"A prompt with this ID already exists: {prompt_id}")
        self.prompt_id = prompt_id


class BuiltinPromptError(ContextBridgeError):
    """Builtin-Prompts können nicht gelöscht werden."""

    def __init__(self, prompt_id: str) -> None:
        super().__init__(f"Cannot delete built-in prompt: {prompt_id}")
        self.prompt_id = prompt_id


class UnknownStyleError(ContextBridgeError):
    def __init__(self, style_id: str) -> None:
        super().__init__(f"Unknown context style: {style_id}")
        self.style_id = style_id


class UnknownProviderError(ContextBridgeError):
    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Unknown provider: {provider_id}")
        self.provider_id = provider_id


class UnknownModelError(ContextBridgeError):
    def __init__(self, provider_id: str, model_id: str) -> None:
        super().__init__(f"Unknown model for {provider_id}: {model_id}")
        self.provider_id = provider_id
        self.model_id = model_id


class PersistenceError(ContextBridgeError):
    """Einstellungen konnten nicht geschrieben werden (In-Memory-Stand unverändert)."""


__all__ = [
    "ContextBridgeError",
    "PromptNotFoundError",
    "NotBuiltinError",
    "DuplicatePromptError",
    "BuiltinPromptError",
    "UnknownStyleError",
    "UnknownProviderError",
    "UnknownModelError",
    "PersistenceError",
]
