"""Katalog-Typen für Cloud-STT Provider (read-only, vom Host geliefert)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CloudSTTModel:
    id: str
    name: str
    description: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "description": self.description}


@dataclass(frozen=True)
class CloudSTTProvider:
    id: str
    label: str
    description: str
    base_url: str
    api_key_url: str
    default_model: str
    models: tuple[CloudSTTModel, ...]

    def model_ids(self) -> list[str]:
        return [m.id for m in self.models]

    def has_model(self, model_id: str) -> bool:
        return any(m.id == model_id for m in self.models)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "base_url": self.base_url,
            "api_key_url": self.api_key_url,
            "default_model": self.default_model,
            "models": [m.to_dict() for m in self.models],
        }


__all__ = ["CloudSTTModel", "CloudSTTProvider"]
