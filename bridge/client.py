"""Extension-Seite der Browser-Bridge.

Der Client hält eine Verbindung zum BridgeServer und schickt bei jedem
Verbindungsaufbau (Resync) sowie bei Tab-Wechsel/Tab-Load den Kontext
des aktiven Tabs.

Socket-Callbacks (open/close/error) und Tab-Events landen als Events in
einer Queue und werden von genau einer Step-Funktion verarbeitet:

    DISCONNECTED → CONNECTING → CONNECTED
          ↑____________|____________|   (Fehler/Close → Reconnect-Timer)

Es ist höchstens ein Reconnect-Timer aktiv. ``stop()`` bricht Timer und
Verbindung ab.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Awaitable, Callable

import websockets
from websockets.exceptions import ConnectionClosed, InvalidHandshake, WebSocketException

from config import (
    BRIDGE_CLOSE_TIMEOUT,
    BRIDGE_CONNECT_TIMEOUT,
    BRIDGE_HOST,
    get_bridge_port,
    get_reconnect_interval,
)
from utils.state import ConnectionState

from .protocol import BrowserContext, Tab, build_context_message

logger = logging.getLogger("contextbridge.bridge.client")

# Transport: uri → offene Verbindung mit send(), close(), wait_closed()
Transport = Callable[[str], Awaitable[Any]]
TabSource = Callable[[], "Tab | None"]

_CONNECT_ERRORS = (OSError, asyncio.TimeoutError, WebSocketException)


async def websocket_transport(uri: str):
    return await websockets.connect(
        uri,
        open_timeout=BRIDGE_CONNECT_TIMEOUT,
        close_timeout=BRIDGE_CLOSE_TIMEOUT,
    )


class _Kind(Enum):
    CONNECT = auto()
    OPENED = auto()
    FAILED = auto()
    CLOSED = auto()
    TAB_ACTIVATED = auto()
    TAB_UPDATED = auto()
    STOP = auto()


@dataclass
class _Event:
    kind: _Kind
    data: Any = None


class BridgeClient:
    def __init__(
        self,
        tab_source: TabSource,
        *,
        uri: str | None = None,
        port: int | None = None,
        browser: str = "chrome",
        transport: Transport | None = None,
        reconnect_interval: float | None = None,
    ) -> None:
        if uri is None:
            uri = f"ws://{BRIDGE_HOST}:{port or get_bridge_port()}"
        self.uri = uri
        self.browser = browser
        self.reconnect_interval = (
            get_reconnect_interval() if reconnect_interval is None else reconnect_interval
        )
        self._tab_source = tab_source
        self._transport = transport or websocket_transport

        self._state = ConnectionState.DISCONNECTED
        self._connection = None
        self._queue: asyncio.Queue[_Event] | None = None
        self._runner: asyncio.Task | None = None
        self._connect_task: asyncio.Task | None = None
        self._watch_task: asyncio.Task | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._connected = asyncio.Event()
        self._stopped = True
        self.last_sent: BrowserContext | None = None

    # --- Öffentliche API ---

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def reconnect_pending(self) -> bool:
        return self._timer is not None

    async def start(self) -> None:
        if self._runner is not None:
            return
        self._stopped = False
        # Queue und Event gehören zum Loop, in dem start() läuft
        self._queue = asyncio.Queue()
        self._connected = asyncio.Event()
        self._runner = asyncio.create_task(self._run())
        logger.info(f"Bridge-Client gestartet ({self.uri})")
        self._post(_Kind.CONNECT)

    async def stop(self) -> None:
        runner = self._runner
        if runner is None:
            return
        self._stopped = True
        self._cancel_timer()
        self._post(_Kind.STOP)
        await runner
        self._runner = None
        # Tab-Events nach stop() laufen ins Leere
        self._queue = None
        logger.info("Bridge-Client gestoppt")

    async def wait_connected(self, timeout: float | None = None) -> bool:
        try:
            await asyncio.wait_for(self._connected.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    def on_tab_activated(self) -> None:
        self._post(_Kind.TAB_ACTIVATED)

    def on_tab_updated(self, status: str, active: bool) -> None:
        """Tab-Update aus dem Browser; nur fertig geladene aktive Tabs pushen."""
        self._post(_Kind.TAB_UPDATED, (status, active))

    # --- Event-Loop ---

    def _post(self, kind: _Kind, data: Any = None) -> None:
        if self._queue is not None:
            self._queue.put_nowait(_Event(kind, data))

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                if not await self._step(event):
                    break
            except Exception:
                logger.exception(f"Bridge-Client: Fehler bei {event.kind.name}")

    async def _step(self, event: _Event) -> bool:
        kind = event.kind

        if kind is _Kind.STOP:
            await self._teardown()
            return False

        if kind is _Kind.CONNECT:
            if self._stopped or self._state is not ConnectionState.DISCONNECTED:
                return True
            self._set_state(ConnectionState.CONNECTING)
            self._connect_task = asyncio.create_task(self._connect())

        elif kind is _Kind.OPENED:
            self._connect_task = None
            connection = event.data
            self._connection = connection
            self._set_state(ConnectionState.CONNECTED)
            self._connected.set()
            self._watch_task = asyncio.create_task(self._watch(connection))
            # Resync: Server hält nach Neustart keinen veralteten Kontext
            await self._push_active_tab()

        elif kind is _Kind.FAILED:
            self._connect_task = None
            self._set_state(ConnectionState.DISCONNECTED)
            self._schedule_reconnect()

        elif kind is _Kind.CLOSED:
            if event.data is not self._connection:
                return True
            self._connection = None
            self._watch_task = None
            self._connected.clear()
            self._set_state(ConnectionState.DISCONNECTED)
            self._schedule_reconnect()

        elif kind is _Kind.TAB_ACTIVATED:
            await self._push_active_tab()

        elif kind is _Kind.TAB_UPDATED:
            status, active = event.data
            if status == "complete" and active:
                await self._push_active_tab()

        return True

    async def _connect(self) -> None:
        try:
            connection = await self._transport(self.uri)
        except InvalidHandshake as e:
            logger.warning(f"Bridge-Handshake fehlgeschlagen: {e}")
            self._post(_Kind.FAILED, e)
        except _CONNECT_ERRORS as e:
            logger.debug(f"Bridge nicht erreichbar: {e!r}")
            self._post(_Kind.FAILED, e)
        else:
            self._post(_Kind.OPENED, connection)

    async def _watch(self, connection) -> None:
        await connection.wait_closed()
        self._post(_Kind.CLOSED, connection)

    async def _push_active_tab(self) -> None:
        connection = self._connection
        if connection is None or self._state is not ConnectionState.CONNECTED:
            return
        try:
            message = build_context_message(self._tab_source(), self.browser)
        except ValueError as e:
            logger.debug(f"Tab ohne Hostname übersprungen: {e}")
            return
        if message is None:
            return
        try:
            await connection.send(message.to_json())
        except (ConnectionClosed, OSError) as e:
            # Close-Event folgt über _watch
            logger.debug(f"Push fehlgeschlagen: {e!r}")
            return
        self.last_sent = message
        logger.debug(f"Kontext gesendet: {message.domain}")

    # --- Reconnect-Timer ---

    def _schedule_reconnect(self) -> None:
        if self._stopped or self._timer is not None:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.reconnect_interval, self._on_reconnect_timer)
        logger.debug(f"Reconnect in {self.reconnect_interval:.1f}s")

    def _on_reconnect_timer(self) -> None:
        self._timer = None
        self._post(_Kind.CONNECT)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def _teardown(self) -> None:
        self._cancel_timer()
        for task in (self._connect_task, self._watch_task):
            if task is not None and not task.done():
                task.cancel()
        self._connect_task = None
        self._watch_task = None
        connections = [self._connection]
        self._connection = None
        # Verbindungen, die nach STOP noch aufgegangen sind
        while not self._queue.empty():
            pending = self._queue.get_nowait()
            if pending.kind is _Kind.OPENED:
                connections.append(pending.data)
        for connection in connections:
            if connection is None:
                continue
            try:
                await connection.close()
            except (ConnectionClosed, OSError) as e:
                logger.debug(f"Close fehlgeschlagen: {e!r}")
        self._connected.clear()
        self._set_state(ConnectionState.DISCONNECTED)

    def _set_state(self, state: ConnectionState) -> None:
        if state is not self._state:
            logger.debug(f"Bridge-Client: {self._state.value} → {state.value}")
            self._state = state


__all__ = ["BridgeClient", "Transport", "TabSource", "websocket_transport"]
