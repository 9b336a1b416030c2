import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger("contextbridge.notify")


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class EventType(Enum):
    CONTEXT_DETECTED = "context-detected"
    SESSION_SHOW = "session-show"  # Overlay einblenden, Payload: aktueller Kontext
    SESSION_HIDE = "session-hide"


@dataclass
class ContextEvent:
    type: EventType
    payload: Any = None


class Notifier:
    """Benachrichtigungskanal zum Overlay (ein Abonnent).

    Fehler im Abonnenten werden geloggt und nicht an den Sender
    weitergereicht: Benachrichtigung ist best-effort.
    """

    def __init__(self) -> None:
        self._subscriber: Callable[[ContextEvent], None] | None = None

    def subscribe(self, callback: Callable[[ContextEvent], None] | None) -> None:
        self._subscriber = callback

    def emit(self, event_type: EventType, payload: Any = None) -> None:
        callback = self._subscriber
        if callback is None:
            return
        try:
            callback(ContextEvent(event_type, payload))
        except Exception:
            logger.exception(f"Abonnent für {event_type.value} fehlgeschlagen")
