"""Wire-Format der Browser-Bridge.

Eine Nachricht = ein JSON-Objekt = vollständiger Ersatz des aktuellen
Browser-Kontexts (keine Deltas, kein Ack):

    {"browser": "chrome", "url": "...", "domain": "mail.google.com",
     "page_title": "Inbox", "detected_app": "gmail"}

``detected_app`` wird client-seitig aus der Domain-Tabelle bestimmt
oder ist ``null``.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from urllib.parse import urlsplit

from context.apps import detect_app_from_domain

_FIELDS = ("browser", "url", "domain", "page_title")


@dataclass(frozen=True)
class BrowserContext:
    browser: str
    url: str
    domain: str
    page_title: str
    detected_app: str | None = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str | bytes) -> BrowserContext:
        """Parst eine Bridge-Nachricht.

        Raises:
            ValueError: Kein JSON-Objekt oder Pflichtfelder fehlen/falscher Typ
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Bridge message must be a JSON object")
        for name in _FIELDS:
            if not isinstance(data.get(name), str):
                raise ValueError(f"Bridge message field {name!r} missing or not a string")
        detected_app = data.get("detected_app")
        if detected_app is not None and not isinstance(detected_app, str):
            raise ValueError("Bridge message field 'detected_app' must be a string or null")
        return cls(
            browser=data["browser"],
            url=data["url"],
            domain=data["domain"],
            page_title=data["page_title"],
            detected_app=detected_app or None,
        )


@dataclass(frozen=True)
class Tab:
    """Minimale Sicht auf einen Browser-Tab."""

    url: str | None
    title: str = ""
    active: bool = True


def build_context_message(tab: Tab | None, browser: str = "chrome") -> BrowserContext | None:
    """Baut den Push für den aktiven Tab; None wenn der Tab keine URL hat.

    Raises:
        ValueError: URL ohne Hostname (z.B. "about:blank")
    """
    if tab is None or not tab.url:
        return None
    domain = urlsplit(tab.url).hostname
    if not domain:
        raise ValueError(f"URL has no hostname: {tab.url!r}")
    return BrowserContext(
        browser=browser,
        url=tab.url,
        domain=domain,
        page_title=tab.title or "",
        detected_app=detect_app_from_domain(domain),
    )


__all__ = ["BrowserContext", "Tab", "build_context_message"]
