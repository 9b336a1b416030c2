"""Command-Surface für den Host (Settings-UI, Overlay, Pipeline).

Jeder Aufruf liefert ein ``CommandResult``: entweder Payload oder Fehler,
nie beides und nie keins von beiden. Erwartete Fehler der Stores
(``ContextBridgeError``) werden zu Fehler-Payloads, nichts wird nach oben
geworfen.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any

import cloud_stt
from context.errors import ContextBridgeError
from routing import ContextRouter

logger = logging.getLogger("contextbridge.commands")


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    payload: Any = None
    error: str | None = None

    @classmethod
    def success(cls, payload: Any = True) -> CommandResult:
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, error: str) -> CommandResult:
        return cls(ok=False, error=error)

    def to_dict(self) -> dict:
        if self.ok:
            return {"ok": True, "payload": self.payload}
        return {"ok": False, "error": self.error}


def _command(func):
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> CommandResult:
        try:
            payload = func(self, *args, **kwargs)
        except ContextBridgeError as e:
            logger.info(f"{func.__name__}: {e}")
            return CommandResult.failure(str(e))
        except Exception as e:
            logger.exception(f"{func.__name__} fehlgeschlagen")
            return CommandResult.failure(f"Internal error: {e}")
        return CommandResult.success(True if payload is None else payload)

    return wrapper


class Commands:
    def __init__(self, router: ContextRouter | None = None) -> None:
        self.router = router or ContextRouter()

    # --- Mappings ---

    @_command
    def get_context_mappings(self) -> list[dict]:
        return [m.to_dict() for m in self.router.mappings.list()]

    @_command
    def update_context_mapping(self, app_id: str, context_style: str) -> None:
        self.router.mappings.update(app_id, context_style)

    @_command
    def delete_context_mapping(self, app_id: str) -> None:
        self.router.mappings.delete(app_id)

    # --- Stil-Prompts ---

    @_command
    def get_context_style_prompts(self) -> list[dict]:
        return [p.to_dict() for p in self.router.styles.list()]

    @_command
    def update_context_style_prompt(
        self,
        prompt_id: str,
        name: str | None = None,
        description: str | None = None,
        prompt: str | None = None,
    ) -> None:
        self.router.styles.update(prompt_id, name=name, description=description, prompt=prompt)

    @_command
    def reset_context_style_prompt(self, prompt_id: str) -> None:
        self.router.styles.reset(prompt_id)

    @_command
    def add_context_style_prompt(
        self, prompt_id: str, name: str, description: str, prompt: str
    ) -> None:
        self.router.styles.add(prompt_id, name, description, prompt)

    @_command
    def delete_context_style_prompt(self, prompt_id: str) -> None:
        self.router.styles.delete(prompt_id)

    # --- Kontext ---

    @_command
    def get_current_context(self) -> dict:
        return self.router.detect_context().to_dict()

    @_command
    def get_browser_bridge_status(self) -> bool:
        return self.router.bridge_status()

    # --- Cloud-STT ---

    @_command
    def get_cloud_stt_providers(self) -> list[dict]:
        return [p.to_dict() for p in cloud_stt.get_available_providers()]

    @_command
    def get_cloud_stt_config(self) -> dict:
        return self.router.cloud.get().to_dict()

    @_command
    def set_cloud_stt_provider(self, provider_id: str) -> None:
        self.router.cloud.set_provider(provider_id)

    @_command
    def set_cloud_stt_api_key(self, provider_id: str, api_key: str) -> None:
        self.router.cloud.set_api_key(provider_id, api_key)

    @_command
    def set_cloud_stt_model(self, provider_id: str, model_id: str) -> None:
        self.router.cloud.set_model(provider_id, model_id)

    @_command
    def set_cloud_stt_enabled(self, enabled: bool) -> None:
        self.router.cloud.set_enabled(enabled)

    @_command
    def test_cloud_stt_connection(self, provider_id: str, api_key: str) -> bool:
        """Testet den übergebenen Key; speichert nichts."""
        return cloud_stt.test_connection(provider_id, api_key)


__all__ = ["CommandResult", "Commands"]
