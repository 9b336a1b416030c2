"""Lokale WebSocket-Bridge zwischen Browser-Extension und Desktop-App."""

from .client import BridgeClient
from .protocol import BrowserContext, Tab, build_context_message
from .server import BridgeServer

__all__ = ["BridgeClient", "BridgeServer", "BrowserContext", "Tab", "build_context_message"]
