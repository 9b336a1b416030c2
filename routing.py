"""Routing-Fassade: Welcher Stil, welcher Provider für die aktuelle Session?

Die Diktier-Pipeline (Host) fragt hier einmal pro Session nach einer
``RoutingDecision``. Das Overlay hängt am ``Notifier`` und bekommt
``context-detected`` / ``session-show`` / ``session-hide``.

Usage:
    router = ContextRouter(window_info=host.foreground_window, bridge=server)
    decision = router.begin_session()
    prompt = decision.render_prompt(transcript)
    router.end_session()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bridge.protocol import BrowserContext
from bridge.server import BridgeServer
from cloud_stt.settings import CloudSTTConfigStore
from context.editor import PromptDraft
from context.mappings import ContextMappingTable
from context.models import ContextStylePrompt, DetectedContext
from context.prompts import render_prompt
from context.resolver import ContextResolver, WindowInfoProvider
from context.styles import StylePromptStore
from utils.preferences import SettingsStore
from utils.state import EventType, Notifier

logger = logging.getLogger("contextbridge.routing")

ROUTE_LOCAL = "local"
ROUTE_CLOUD = "cloud"


@dataclass(frozen=True)
class TranscriptionRoute:
    mode: str = ROUTE_LOCAL
    provider_id: str | None = None
    model: str | None = None
    api_key: str | None = field(default=None, repr=False)

    @property
    def is_cloud(self) -> bool:
        return self.mode == ROUTE_CLOUD

    def to_dict(self) -> dict:
        # API-Key bleibt draußen (Ausgabe/Logs)
        return {"mode": self.mode, "provider_id": self.provider_id, "model": self.model}


@dataclass(frozen=True)
class RoutingDecision:
    context: DetectedContext
    style: ContextStylePrompt
    route: TranscriptionRoute

    def render_prompt(self, transcript: str) -> str:
        return render_prompt(self.style.prompt, transcript)

    def to_dict(self) -> dict:
        return {
            "context": self.context.to_dict(),
            "style": self.style.to_dict(),
            "route": self.route.to_dict(),
        }


class ContextRouter:
    """Komponiert Stores, Resolver, Bridge und Notifier.

    Alle Stores teilen sich einen ``SettingsStore``; Mutationen laufen dort
    serialisiert unter einem Lock.
    """

    def __init__(
        self,
        settings: SettingsStore | None = None,
        *,
        bridge: BridgeServer | None = None,
        window_info: WindowInfoProvider | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.settings = settings or SettingsStore()
        self.styles = StylePromptStore(self.settings)
        self.mappings = ContextMappingTable(self.settings, self.styles)
        self.cloud = CloudSTTConfigStore(self.settings)
        self.notifier = notifier or Notifier()
        self.bridge = bridge
        self._window_info = window_info
        self.resolver = ContextResolver(
            self.mappings,
            self.styles,
            window_info=window_info,
            browser_context=bridge.get_current_context if bridge else None,
        )
        self._current: DetectedContext | None = None
        if bridge is not None and bridge.on_context is None:
            bridge.on_context = self.handle_browser_context

    @property
    def current_context(self) -> DetectedContext | None:
        """Zuletzt erkannter Kontext (None vor der ersten Erkennung)."""
        return self._current

    def _remember(self, context: DetectedContext) -> DetectedContext:
        self._current = context
        self.notifier.emit(EventType.CONTEXT_DETECTED, context)
        return context

    def detect_context(self) -> DetectedContext:
        """Erkennt den Kontext neu und benachrichtigt das Overlay."""
        if self._window_info is None and self.bridge is not None:
            # Ohne native Fenstererkennung ist der Bridge-Kontext die einzige Quelle
            browser_ctx = self.bridge.get_current_context()
            if browser_ctx is not None:
                detected = self.resolver.from_browser_context(browser_ctx)
                if detected is not None:
                    return self._remember(detected)
        return self._remember(self.resolver.resolve())

    def handle_browser_context(self, browser_ctx: BrowserContext) -> DetectedContext | None:
        """Callback für ``BridgeServer.on_context``."""
        detected = self.resolver.from_browser_context(browser_ctx)
        if detected is None:
            logger.debug(f"Domain {browser_ctx.domain} keiner App zugeordnet")
            return None
        logger.info(f"Kontext: {detected.app_name} → {detected.context_style}")
        return self._remember(detected)

    def transcription_route(self) -> TranscriptionRoute:
        """Cloud nur wenn aktiviert und der aktive Provider einen Key hat."""
        config = self.cloud.get()
        provider_id = config.active_provider
        if not config.enabled or provider_id is None:
            return TranscriptionRoute()
        api_key = config.api_keys.get(provider_id, "")
        if not api_key:
            logger.debug(f"Cloud-STT aktiv, aber kein Key für {provider_id}: lokal")
            return TranscriptionRoute()
        return TranscriptionRoute(
            mode=ROUTE_CLOUD,
            provider_id=provider_id,
            model=config.effective_model(provider_id),
            api_key=api_key,
        )

    def current_decision(self) -> RoutingDecision:
        context = self.detect_context()
        decision = RoutingDecision(
            context=context,
            style=self.styles.get(context.context_style),
            route=self.transcription_route(),
        )
        logger.debug(
            f"Routing: app={context.app_id} style={context.context_style} "
            f"route={decision.route.mode}"
        )
        return decision

    def begin_session(self) -> RoutingDecision:
        decision = self.current_decision()
        self.notifier.emit(EventType.SESSION_SHOW, decision.context)
        return decision

    def end_session(self) -> None:
        self.notifier.emit(EventType.SESSION_HIDE)

    def render_prompt(self, transcript: str) -> str:
        """Setzt das Transkript in den Prompt des aktuellen Stils ein."""
        context = self._current or self.detect_context()
        # Stil neu auflösen: er kann seit der Erkennung gelöscht worden sein
        style = self.styles.get(self.resolver.style_for(context.app_id))
        return render_prompt(style.prompt, transcript)

    def bridge_status(self) -> bool:
        """True, sobald die Extension mindestens einen Kontext geschickt hat."""
        return self.bridge is not None and self.bridge.has_context

    def open_prompt_draft(self, prompt_id: str) -> PromptDraft:
        return PromptDraft.open(self.styles, prompt_id)


__all__ = [
    "ContextRouter",
    "RoutingDecision",
    "TranscriptionRoute",
    "ROUTE_CLOUD",
    "ROUTE_LOCAL",
]
