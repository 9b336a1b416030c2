"""Desktop-Seite der Browser-Bridge.

Lokaler WebSocket-Server (nur Loopback), der Kontext-Pushes der
Browser-Extension annimmt. Der Server antwortet nie; jede gültige
Nachricht ersetzt den "aktuellen Browser-Kontext" vollständig.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
from typing import Callable

import websockets
from websockets.exceptions import ConnectionClosedError

from config import BRIDGE_CLOSE_TIMEOUT, BRIDGE_HOST, get_bridge_port

from .protocol import BrowserContext

logger = logging.getLogger("contextbridge.bridge")

# WebSocket Close-Code "Policy Violation"
CLOSE_POLICY_VIOLATION = 1008


def is_loopback(host: str | None) -> bool:
    if not host:
        return False
    if host == "localhost":
        return True
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    # IPv4-mapped IPv6 (::ffff:127.0.0.1) von Dual-Stack-Sockets
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped
    return address.is_loopback


class BridgeServer:
    """Nimmt Browser-Kontexte entgegen (most-recent-wins, kein Ack).

    ``on_context`` wird für jede gültige Nachricht aufgerufen. Fehler im
    Callback werden geloggt und beenden die Verbindung nicht.
    """

    def __init__(
        self,
        host: str = BRIDGE_HOST,
        port: int | None = None,
        on_context: Callable[[BrowserContext], None] | None = None,
    ) -> None:
        if not is_loopback(host):
            raise ValueError(f"Bridge server must bind to loopback, got {host!r}")
        self.host = host
        self.port = get_bridge_port() if port is None else port
        self.on_context = on_context
        self._server = None
        self._latest: BrowserContext | None = None
        self._connections = 0

    @property
    def is_running(self) -> bool:
        return self._server is not None

    @property
    def connection_count(self) -> int:
        return self._connections

    @property
    def has_context(self) -> bool:
        return self._latest is not None

    def get_current_context(self) -> BrowserContext | None:
        return self._latest

    async def start(self) -> None:
        if self._server is not None:
            return
        self._server = await websockets.serve(
            self._handle_connection,
            self.host,
            self.port,
            close_timeout=BRIDGE_CLOSE_TIMEOUT,
        )
        # Port 0 → vom OS vergebenen Port übernehmen
        sockets = list(self._server.sockets)
        if sockets:
            self.port = sockets[0].getsockname()[1]
        logger.info(f"Browser-Bridge lauscht auf ws://{self.host}:{self.port}")

    async def stop(self) -> None:
        server, self._server = self._server, None
        if server is None:
            return
        server.close()
        await server.wait_closed()
        logger.info("Browser-Bridge gestoppt")

    async def serve_forever(self) -> None:
        """Startet den Server und läuft bis zur Task-Cancellation."""
        await self.start()
        try:
            await asyncio.Future()
        finally:
            await self.stop()

    def handle_message(self, raw: str | bytes) -> BrowserContext | None:
        """Verarbeitet eine Push-Nachricht; ungültige werden ignoriert."""
        try:
            context = BrowserContext.from_json(raw)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError ist ein ValueError; tief verschachteltes JSON sprengt den Decoder
            logger.debug(f"Ungültige Bridge-Nachricht ignoriert: {e}")
            return None

        self._latest = context
        logger.debug(
            f"Browser-Kontext: {context.domain} "
            f"(app={context.detected_app or '-'}, browser={context.browser})"
        )

        callback = self.on_context
        if callback is not None:
            try:
                callback(context)
            except Exception:
                logger.exception("on_context Callback fehlgeschlagen")
        return context

    async def _handle_connection(self, websocket) -> None:
        peer = websocket.remote_address
        peer_host = peer[0] if peer else None
        if not is_loopback(peer_host):
            logger.warning(f"Nicht-lokale Verbindung abgelehnt: {peer_host}")
            await websocket.close(code=CLOSE_POLICY_VIOLATION, reason="loopback only")
            return

        self._connections += 1
        logger.info("Browser-Extension verbunden")
        try:
            async for raw in websocket:
                self.handle_message(raw)
        except ConnectionClosedError as e:
            logger.debug(f"Bridge-Verbindung abgebrochen: {e}")
        finally:
            self._connections -= 1
            logger.info("Browser-Extension getrennt")


__all__ = ["BridgeServer", "CLOSE_POLICY_VIOLATION", "is_loopback"]
