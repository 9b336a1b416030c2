"""Kontext-Auflösung für ContextBridge.

Zwei Ebenen:

``resolve_style()`` ist eine reine Funktion von
(app_id, Mapping-Tabelle, Default-Tabelle, Stil-IDs) → Stil-ID:

    1. User-Mapping für app_id
    2. Default-Stil der App (statische Tabelle)
    3. Generischer Fallback "correction"

    Zeigt das Ergebnis auf einen nicht (mehr) existierenden Stil,
    greift ebenfalls der Fallback.

``ContextResolver`` kombiniert natives Vordergrund-Fenster und den
letzten Browser-Kontext der Bridge zu einem ``DetectedContext``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Collection, Mapping

from config import (
    CONFIDENCE_BROWSER_EXTENSION,
    CONFIDENCE_BROWSER_TITLE,
    CONFIDENCE_NATIVE,
    FALLBACK_STYLE,
)

from .apps import (
    DEFAULT_APP_STYLES,
    get_app_display_name,
    identify_app,
    identify_from_domain,
    is_browser,
)
from .models import ContextSource, DetectedContext

if TYPE_CHECKING:
    from bridge.protocol import BrowserContext

logger = logging.getLogger("contextbridge.context")

# (process_name, window_title) des Vordergrund-Fensters oder None
WindowInfoProvider = Callable[[], "tuple[str, str] | None"]
BrowserContextProvider = Callable[[], "BrowserContext | None"]


def resolve_style(
    app_id: str,
    mappings: Mapping[str, str],
    style_ids: Collection[str],
    defaults: Mapping[str, str] = DEFAULT_APP_STYLES,
) -> str:
    """Ermittelt die effektive Stil-ID für eine App.

    Args:
        app_id: Erkannte App
        mappings: User-Overrides app_id → Stil-ID
        style_ids: Existierende Stil-IDs im Style-Store
        defaults: Statische Default-Stile pro App

    Returns:
        Stil-ID, garantiert in style_ids oder FALLBACK_STYLE
    """
    style = mappings.get(app_id) or defaults.get(app_id) or FALLBACK_STYLE
    if style not in style_ids:
        if style != FALLBACK_STYLE:
            logger.debug(f"Stil {style!r} für {app_id!r} existiert nicht, Fallback")
        return FALLBACK_STYLE
    return style


def is_custom_mapping(
    app_id: str,
    mappings: Mapping[str, str],
    style_ids: Collection[str],
    defaults: Mapping[str, str] = DEFAULT_APP_STYLES,
) -> bool:
    """Abgeleitet, nicht gespeichert: effektiver Stil ≠ Default-Stil der App.

    Apps ohne Eintrag in der Default-Tabelle haben den Fallback-Stil als Default.
    """
    default = defaults.get(app_id, FALLBACK_STYLE)
    return resolve_style(app_id, mappings, style_ids, defaults) != default


class ContextResolver:
    """Kombiniert Erkennungsquellen zu einem DetectedContext.

    Priorität:
        1. Natives Fenster (kein Browser) mit bekannter App → confidence 1.0
        2. Browser + Bridge-Kontext mit bekannter App → confidence 0.98
        3. Browser + Fenstertitel-Heuristik → confidence 0.7
        4. Fallback-Kontext

    Die Quellen sind injiziert: ``window_info`` liefert die Host-OS-Integration,
    ``browser_context`` typischerweise ``BridgeServer.get_current_context``.
    """

    def __init__(
        self,
        mapping_table,
        style_store,
        *,
        window_info: WindowInfoProvider | None = None,
        browser_context: BrowserContextProvider | None = None,
    ) -> None:
        self._mappings = mapping_table
        self._styles = style_store
        self._window_info = window_info
        self._browser_context = browser_context

    def style_for(self, app_id: str) -> str:
        return resolve_style(app_id, self._mappings.as_dict(), self._styles.ids())

    def is_custom(self, app_id: str) -> bool:
        return is_custom_mapping(app_id, self._mappings.as_dict(), self._styles.ids())

    def _build(self, source: ContextSource, app_id: str, confidence: float) -> DetectedContext:
        return DetectedContext(
            source=source,
            app_id=app_id,
            app_name=get_app_display_name(app_id),
            context_style=self.style_for(app_id),
            confidence=confidence,
        )

    def from_browser_context(self, browser_ctx: BrowserContext) -> DetectedContext | None:
        """Löst einen Bridge-Push auf (detected_app, sonst Server-Domain-Tabelle)."""
        app_id = browser_ctx.detected_app or identify_from_domain(browser_ctx.domain)
        if not app_id:
            return None
        return self._build(ContextSource.browser, app_id, CONFIDENCE_BROWSER_EXTENSION)

    def resolve(self) -> DetectedContext:
        window = self._window_info() if self._window_info else None
        if window is None:
            logger.debug("Kein Vordergrund-Fenster, verwende Fallback")
            return DetectedContext.fallback()

        process, title = window
        logger.debug(f"Fenster erkannt: process={process!r}, title={title!r}")

        if not is_browser(process):
            app_id = identify_app(process, title)
            if app_id:
                return self._build(ContextSource.native, app_id, CONFIDENCE_NATIVE)
            return DetectedContext.fallback()

        if self._browser_context is not None:
            browser_ctx = self._browser_context()
            if browser_ctx is not None:
                detected = self.from_browser_context(browser_ctx)
                if detected is not None:
                    return detected

        app_id = identify_app(process, title)
        if app_id:
            return self._build(ContextSource.native, app_id, CONFIDENCE_BROWSER_TITLE)

        logger.debug("Kein Kontext erkannt, verwende Fallback")
        return DetectedContext.fallback()


__all__ = [
    "resolve_style",
    "is_custom_mapping",
    "ContextResolver",
    "WindowInfoProvider",
    "BrowserContextProvider",
]
