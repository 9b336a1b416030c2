"""Cloud-STT Provider-Registry für ContextBridge.

Read-only Katalog der Cloud-Provider mit ihren Modellen plus
Verbindungstest. Die eigentliche Transkription liegt beim Host.

Usage:
    from cloud_stt import get_available_providers, test_connection

    providers = get_available_providers()
    ok = test_connection("gemini", "AIza...")

Unterstützte Provider:
    - gemini: Google Gemini (gemini-2.0-flash)
    - openai: OpenAI Whisper API (whisper-1)
"""

from __future__ import annotations

import logging

from context.errors import UnknownProviderError

from . import gemini, openai
from .models import CloudSTTModel, CloudSTTProvider

logger = logging.getLogger("contextbridge.cloud_stt")

# Reihenfolge = Anzeige-Reihenfolge
_PROVIDERS = (gemini, openai)


def get_available_providers() -> list[CloudSTTProvider]:
    return [module.PROVIDER for module in _PROVIDERS]


def _provider_module(provider_id: str):
    for module in _PROVIDERS:
        if module.PROVIDER.id == provider_id:
            return module
    raise UnknownProviderError(provider_id)


def get_provider(provider_id: str) -> CloudSTTProvider:
    """Katalog-Eintrag für eine Provider-ID.

    Raises:
        UnknownProviderError: Bei unbekanntem Provider
    """
    return _provider_module(provider_id).PROVIDER


def test_connection(provider_id: str, api_key: str) -> bool:
    """Testet Provider + Key per Netzwerk-Roundtrip.

    Verändert keine Konfiguration. Netzwerk- und SDK-Fehler werden zu False
    zusammengefasst; nur ein unbekannter Provider wirft.

    Raises:
        UnknownProviderError: Bei unbekanntem Provider
    """
    module = _provider_module(provider_id)
    if not api_key or not api_key.strip():
        logger.debug(f"Verbindungstest {provider_id}: leerer Key")
        return False
    try:
        return module.test_connection(api_key.strip())
    except Exception:
        # Unerwartete Fehler (z.B. SDK-Inkompatibilität) sind für den Aufrufer ein "nein"
        logger.exception(f"Verbindungstest {provider_id} fehlgeschlagen (unerwartet)")
        return False


__all__ = [
    "CloudSTTModel",
    "CloudSTTProvider",
    "get_available_providers",
    "get_provider",
    "test_connection",
]
