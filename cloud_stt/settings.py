"""Cloud-STT Konfiguration (persistiertes Singleton).

Alle Setter sind schlüsselbasiert: Key oder Modell eines Providers zu
setzen lässt die Einträge aller anderen Provider unangetastet.
Ein Verbindungstest (``cloud_stt.test_connection``) schreibt hier nie etwas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from context.errors import UnknownModelError, UnknownProviderError
from utils.preferences import SettingsStore

from . import get_provider

logger = logging.getLogger("contextbridge.cloud_stt")


@dataclass(frozen=True)
class CloudSTTConfig:
    enabled: bool = False
    active_provider: str | None = None
    api_keys: dict[str, str] = field(default_factory=dict)
    selected_models: dict[str, str] = field(default_factory=dict)

    def effective_model(self, provider_id: str) -> str:
        """Gewähltes Modell, sofern im Katalog – sonst Default-Modell des Providers."""
        provider = get_provider(provider_id)
        selected = self.selected_models.get(provider_id)
        if selected and provider.has_model(selected):
            return selected
        return provider.default_model

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "active_provider": self.active_provider,
            "api_keys": dict(self.api_keys),
            "selected_models": dict(self.selected_models),
        }


class CloudSTTConfigStore:
    def __init__(self, settings: SettingsStore) -> None:
        self._settings = settings

    def get(self) -> CloudSTTConfig:
        data = self._settings.read()
        active = data["cloud_stt_provider"]
        if active is not None:
            try:
                get_provider(active)
            except UnknownProviderError:
                active = None
        return CloudSTTConfig(
            enabled=data["cloud_stt_enabled"],
            active_provider=active,
            api_keys=dict(data["cloud_stt_api_keys"]),
            selected_models=dict(data["cloud_stt_models"]),
        )

    def set_enabled(self, enabled: bool) -> None:
        def mutate(data: dict) -> None:
            data["cloud_stt_enabled"] = bool(enabled)

        self._settings.update(mutate)
        logger.info(f"Cloud-STT {'aktiviert' if enabled else 'deaktiviert'}")

    def set_provider(self, provider_id: str) -> None:
        """Raises UnknownProviderError, wenn der Provider nicht im Katalog ist."""
        get_provider(provider_id)

        def mutate(data: dict) -> None:
            data["cloud_stt_provider"] = provider_id

        self._settings.update(mutate)
        logger.info(f"Cloud-STT Provider: {provider_id}")

    def set_api_key(self, provider_id: str, api_key: str) -> None:
        """Speichert den Key eines Providers; leerer Key entfernt den Eintrag."""
        get_provider(provider_id)
        key = api_key.strip()

        def mutate(data: dict) -> None:
            if key:
                data["cloud_stt_api_keys"][provider_id] = key
            else:
                data["cloud_stt_api_keys"].pop(provider_id, None)

        self._settings.update(mutate)
        # Key selbst nie loggen
        logger.info(f"API-Key für {provider_id} {'gespeichert' if key else 'entfernt'}")

    def set_model(self, provider_id: str, model_id: str) -> None:
        """Raises UnknownModelError, wenn das Modell nicht zum Provider gehört."""
        if not get_provider(provider_id).has_model(model_id):
            raise UnknownModelError(provider_id, model_id)

        def mutate(data: dict) -> None:
            data["cloud_stt_models"][provider_id] = model_id

        self._settings.update(mutate)
        logger.info(f"Modell für {provider_id}: {model_id}")


__all__ = ["CloudSTTConfig", "CloudSTTConfigStore"]
