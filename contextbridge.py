#!/usr/bin/env python3
"""
CLI-Einstiegspunkt für ContextBridge.

Startet die Browser-Bridge, simuliert Pushes der Extension und verwaltet
Kontext-Mappings, Stil-Prompts und die Cloud-STT-Konfiguration.

Ergebnisse werden auf stdout ausgegeben, Status und Fehler auf stderr.

Usage:
    python contextbridge.py serve
    python contextbridge.py push https://mail.google.com/mail/u/0 --title Inbox
    python contextbridge.py mappings set gmail chat
    python contextbridge.py cloud test gemini AIza...
"""

import asyncio
import json
import logging
from typing import Annotated

import typer

from bridge.client import BridgeClient
from bridge.protocol import Tab, build_context_message
from bridge.server import BridgeServer
from cli.types import Browser, OutputFormat, ProviderId
from commands import CommandResult, Commands
from config import BRIDGE_CONNECT_TIMEOUT
from routing import ContextRouter
from utils.env import get_env_bool_default, load_environment
from utils.logging import error, get_session_id, log, setup_logging
from utils.state import ContextEvent, EventType

logger = logging.getLogger("contextbridge")

app = typer.Typer(
    help="Kontext-Bridge und Stil-Routing für Diktier-Apps",
    add_completion=False,
    no_args_is_help=True,
)
mappings_app = typer.Typer(help="Kontext-Mappings (App → Stil)", no_args_is_help=True)
styles_app = typer.Typer(help="Stil-Prompts", no_args_is_help=True)
cloud_app = typer.Typer(help="Cloud-STT Provider und Konfiguration", no_args_is_help=True)
app.add_typer(mappings_app, name="mappings")
app.add_typer(styles_app, name="styles")
app.add_typer(cloud_app, name="cloud")


# =============================================================================
# Helfer
# =============================================================================


def _commands() -> Commands:
    return Commands(ContextRouter())


def _unwrap(result: CommandResult):
    """Payload oder Fehlermeldung + Exit-Code 1."""
    if not result.ok:
        error(result.error or "Unbekannter Fehler")
        raise typer.Exit(1)
    return result.payload


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


@app.callback()
def main(
    debug: Annotated[
        bool,
        typer.Option(help="Debug-Logging aktivieren"),
    ] = False,
) -> None:
    """Kontext-Bridge und Stil-Routing für Diktier-Apps."""
    load_environment()
    setup_logging(debug=debug or get_env_bool_default("CONTEXTBRIDGE_DEBUG", False))
    logger.debug(f"[{get_session_id()}] CLI gestartet")


# =============================================================================
# Bridge
# =============================================================================


@app.command()
def serve(
    port: Annotated[
        int | None,
        typer.Option(help="Bridge-Port (default: CONTEXTBRIDGE_PORT bzw. 9876)"),
    ] = None,
) -> None:
    """Browser-Bridge starten und erkannte Kontexte ausgeben (Ctrl+C beendet)."""
    server = BridgeServer(port=port)
    router = ContextRouter(bridge=server)

    def on_event(event: ContextEvent) -> None:
        if event.type is EventType.CONTEXT_DETECTED:
            ctx = event.payload
            print(f"{ctx.app_id}\t{ctx.context_style}\t{ctx.app_name}", flush=True)

    router.notifier.subscribe(on_event)

    async def run() -> None:
        await server.start()
        log(f"Bridge läuft auf ws://{server.host}:{server.port}")
        await server.serve_forever()

    try:
        asyncio.run(run())
    except OSError as e:
        error(f"Bridge konnte nicht starten: {e}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        log("Bridge beendet")


@app.command()
def push(
    url: Annotated[str, typer.Argument(help="URL des aktiven Tabs")],
    title: Annotated[str, typer.Option(help="Seitentitel")] = "",
    browser: Annotated[Browser, typer.Option(help="Browser-Kennung")] = Browser.chrome,
    port: Annotated[int | None, typer.Option(help="Bridge-Port")] = None,
    timeout: Annotated[
        float,
        typer.Option(help="Verbindungs-Timeout in Sekunden"),
    ] = BRIDGE_CONNECT_TIMEOUT,
) -> None:
    """Einmaliger Push wie die Browser-Extension (verbinden, senden, trennen)."""
    tab = Tab(url=url, title=title)
    try:
        message = build_context_message(tab, browser.value)
    except ValueError as e:
        error(str(e))
        raise typer.Exit(1)
    if message is None:
        error("Leere URL")
        raise typer.Exit(1)

    async def run() -> bool:
        client = BridgeClient(lambda: tab, port=port, browser=browser.value)
        await client.start()
        try:
            connected = await client.wait_connected(timeout)
        finally:
            await client.stop()
        return connected and client.last_sent is not None

    if not asyncio.run(run()):
        error("Bridge nicht erreichbar")
        raise typer.Exit(1)
    log(f"Gesendet: {message.domain} (app={message.detected_app or '-'})")


@app.command()
def resolve(
    app_id: Annotated[str, typer.Argument(help="App-ID, z.B. gmail")],
) -> None:
    """Effektiven Stil einer App ausgeben."""
    router = ContextRouter()
    style = router.resolver.style_for(app_id)
    kind = "custom" if router.resolver.is_custom(app_id) else "default"
    print(f"{app_id}\t{style}\t{kind}")


# =============================================================================
# Mappings
# =============================================================================


@mappings_app.command("list")
def mappings_list(
    output: Annotated[OutputFormat, typer.Option("--format")] = OutputFormat.text,
) -> None:
    """Alle Mappings ausgeben."""
    mappings = _unwrap(_commands().get_context_mappings())
    if output is OutputFormat.json:
        _print_json(mappings)
        return
    for mapping in mappings:
        print(f"{mapping['app_id']}\t{mapping['context_style']}")


@mappings_app.command("set")
def mappings_set(app_id: str, style: str) -> None:
    """Mapping anlegen oder ändern."""
    _unwrap(_commands().update_context_mapping(app_id, style))
    log(f"{app_id} → {style}")


@mappings_app.command("delete")
def mappings_delete(app_id: str) -> None:
    """Mapping entfernen (App nutzt wieder ihren Default-Stil)."""
    _unwrap(_commands().delete_context_mapping(app_id))


# =============================================================================
# Stil-Prompts
# =============================================================================


@styles_app.command("list")
def styles_list(
    output: Annotated[OutputFormat, typer.Option("--format")] = OutputFormat.text,
) -> None:
    """Alle Stile ausgeben (Builtins zuerst)."""
    prompts = _unwrap(_commands().get_context_style_prompts())
    if output is OutputFormat.json:
        _print_json(prompts)
        return
    for prompt in prompts:
        marker = "builtin" if prompt["is_builtin"] else "custom"
        print(f"{prompt['id']}\t{prompt['name']}\t{marker}")


@styles_app.command("show")
def styles_show(prompt_id: str) -> None:
    """Einen Stil vollständig ausgeben."""
    prompts = _unwrap(_commands().get_context_style_prompts())
    for prompt in prompts:
        if prompt["id"] == prompt_id:
            _print_json(prompt)
            return
    error(f"Stil nicht gefunden: {prompt_id}")
    raise typer.Exit(1)


@styles_app.command("update")
def styles_update(
    prompt_id: str,
    name: Annotated[str | None, typer.Option()] = None,
    description: Annotated[str | None, typer.Option()] = None,
    prompt: Annotated[str | None, typer.Option()] = None,
) -> None:
    """Felder eines Stils ändern."""
    if name is None and description is None and prompt is None:
        raise typer.BadParameter("Mindestens --name, --description oder --prompt angeben")
    _unwrap(
        _commands().update_context_style_prompt(
            prompt_id, name=name, description=description, prompt=prompt
        )
    )


@styles_app.command("reset")
def styles_reset(prompt_id: str) -> None:
    """Builtin-Stil auf Werkswerte zurücksetzen."""
    _unwrap(_commands().reset_context_style_prompt(prompt_id))
    log(f"{prompt_id} zurückgesetzt")


@styles_app.command("add")
def styles_add(
    prompt_id: str,
    name: str,
    prompt: Annotated[str, typer.Option(help="Prompt mit ${output} Platzhalter")],
    description: Annotated[str, typer.Option()] = "",
) -> None:
    """Custom-Stil anlegen."""
    _unwrap(_commands().add_context_style_prompt(prompt_id, name, description, prompt))


@styles_app.command("delete")
def styles_delete(prompt_id: str) -> None:
    """Custom-Stil löschen."""
    _unwrap(_commands().delete_context_style_prompt(prompt_id))


# =============================================================================
# Cloud-STT
# =============================================================================


@cloud_app.command("providers")
def cloud_providers(
    output: Annotated[OutputFormat, typer.Option("--format")] = OutputFormat.text,
) -> None:
    """Provider-Katalog ausgeben."""
    providers = _unwrap(_commands().get_cloud_stt_providers())
    if output is OutputFormat.json:
        _print_json(providers)
        return
    for provider in providers:
        models = ", ".join(m["id"] for m in provider["models"])
        print(f"{provider['id']}\t{provider['label']}\t{models}")


@cloud_app.command("config")
def cloud_config() -> None:
    """Aktuelle Konfiguration ausgeben (Keys maskiert)."""
    config = _unwrap(_commands().get_cloud_stt_config())
    config["api_keys"] = {
        provider_id: f"{key[:4]}…" if len(key) > 4 else "…"
        for provider_id, key in config["api_keys"].items()
    }
    _print_json(config)


@cloud_app.command("provider")
def cloud_provider(provider_id: ProviderId) -> None:
    """Aktiven Provider setzen."""
    _unwrap(_commands().set_cloud_stt_provider(provider_id.value))


@cloud_app.command("key")
def cloud_key(provider_id: ProviderId, api_key: str) -> None:
    """API-Key eines Providers speichern (leerer Key entfernt ihn)."""
    _unwrap(_commands().set_cloud_stt_api_key(provider_id.value, api_key))


@cloud_app.command("model")
def cloud_model(provider_id: ProviderId, model_id: str) -> None:
    """Modell eines Providers wählen."""
    _unwrap(_commands().set_cloud_stt_model(provider_id.value, model_id))


@cloud_app.command("enable")
def cloud_enable() -> None:
    """Cloud-STT aktivieren."""
    _unwrap(_commands().set_cloud_stt_enabled(True))


@cloud_app.command("disable")
def cloud_disable() -> None:
    """Cloud-STT deaktivieren."""
    _unwrap(_commands().set_cloud_stt_enabled(False))


@cloud_app.command("test")
def cloud_test(provider_id: ProviderId, api_key: str) -> None:
    """Verbindung mit einem Key testen (speichert nichts)."""
    if _unwrap(_commands().test_cloud_stt_connection(provider_id.value, api_key)):
        print("ok")
        return
    error(f"Verbindung zu {provider_id.value} fehlgeschlagen")
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
