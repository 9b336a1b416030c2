"""Statische App-Tabellen für die Kontext-Erkennung.

Alle Tabellen werden einmal beim Import gebaut und sind unveränderlich
(MappingProxyType / frozenset). Sie bilden die Fallback-Kette des
Resolvers ab und sind einzeln testbar:

- Domain → app_id (Browser-Extension und Server-Fallback)
- Prozessname → app_id (native Fenster)
- app_id → Default-Stil
- app_id → Anzeigename
"""

from __future__ import annotations

from types import MappingProxyType


def _expand(groups: dict[str, tuple[str, ...]]) -> MappingProxyType:
    """Baut aus {Wert: (Schlüssel, ...)} eine flache, unveränderliche Map."""
    return MappingProxyType({key: value for value, keys in groups.items() for key in keys})


# =============================================================================
# Domain → app_id
# =============================================================================

# Tabelle der Browser-Extension (client-seitig aufgelöst → detected_app)
EXTENSION_DOMAIN_APPS = _expand(
    {
        "gmail": ("mail.google.com",),
        "outlook_web": (
            "outlook.office.com",
            "outlook.live.com",
            "outlook.office365.com",
        ),
        "slack_web": ("app.slack.com",),
        "discord_web": ("discord.com",),
        "whatsapp_web": ("web.whatsapp.com",),
        "telegram_web": ("web.telegram.org",),
        "chatgpt": ("chat.openai.com", "chatgpt.com"),
        "claude": ("claude.ai",),
        "notion_web": ("notion.so", "www.notion.so"),
        "linkedin": ("www.linkedin.com", "linkedin.com"),
        "twitter": ("twitter.com", "x.com"),
        "github": ("github.com", "www.github.com"),
        "linear_web": ("linear.app",),
        "teams_web": ("teams.microsoft.com",),
    }
)

# Server-seitiger Fallback, wenn ein Push detected_app=null trägt
SERVER_DOMAIN_APPS = MappingProxyType({**EXTENSION_DOMAIN_APPS, "slack.com": "slack_web"})

# =============================================================================
# Native Prozesse
# =============================================================================

PROCESS_APPS = _expand(
    {
        "vscode": ("code", "code.exe", "code - insiders"),
        "cursor": ("cursor", "cursor.exe"),
        "slack": ("slack", "slack.exe"),
        "discord": ("discord", "discord.exe"),
        "notion": ("notion", "notion.exe"),
        "obsidian": ("obsidian", "obsidian.exe"),
        "outlook": ("outlook", "outlook.exe", "microsoft outlook"),
        "apple_mail": ("mail",),
        "imessage": ("messages",),
        "whatsapp": ("whatsapp", "whatsapp.exe"),
        "telegram": ("telegram", "telegram.exe"),
        "linear": ("linear", "linear.exe"),
        "teams": ("teams", "teams.exe", "microsoft teams"),
    }
)

BROWSER_PROCESSES = frozenset(
    {
        "chrome",
        "chrome.exe",
        "google chrome",
        "msedge",
        "msedge.exe",
        "microsoft edge",
        "firefox",
        "firefox.exe",
        "safari",
        "arc",
        "brave",
        "brave.exe",
        "opera",
        "opera.exe",
        "vivaldi",
        "vivaldi.exe",
    }
)

# Fenstertitel-Heuristik für Browser ohne Extension (Reihenfolge zählt).
# Jede Gruppe muss mit mindestens einem Suchbegriff treffen.
_TITLE_RULES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("gmail", (("gmail", "inbox - "),)),
    ("outlook_web", (("outlook",), ("mail", "inbox"))),
    ("slack_web", (("slack",),)),
    ("discord_web", (("discord",),)),
    ("chatgpt", (("chatgpt", "chat.openai"),)),
    ("claude", (("claude",),)),
    ("notion_web", (("notion",),)),
    ("linkedin", (("linkedin",),)),
    ("twitter", (("twitter", " x ", "x.com", "/ x"),)),
    ("github", (("github",),)),
    ("linear_web", (("linear",),)),
    ("whatsapp_web", (("whatsapp",),)),
    ("telegram_web", (("telegram",),)),
    ("teams_web", (("teams",),)),
)

# =============================================================================
# app_id → Default-Stil / Anzeigename
# =============================================================================

DEFAULT_APP_STYLES = _expand(
    {
        "email_pro": ("gmail", "outlook", "outlook_web", "apple_mail"),
        "chat": (
            "slack",
            "slack_web",
            "discord",
            "discord_web",
            "whatsapp",
            "whatsapp_web",
            "telegram",
            "telegram_web",
            "imessage",
            "teams",
            "teams_web",
        ),
        "code": ("vscode", "cursor", "jetbrains"),
        "notes": ("notion", "notion_web", "obsidian"),
        "ai_assistant": ("chatgpt", "claude"),
        "social_pro": ("linkedin",),
        "social_casual": ("twitter",),
        "dev_tools": ("github", "linear", "linear_web"),
    }
)

APP_DISPLAY_NAMES = _expand(
    {
        "Gmail": ("gmail",),
        "Outlook": ("outlook", "outlook_web"),
        "Apple Mail": ("apple_mail",),
        "Slack": ("slack", "slack_web"),
        "Discord": ("discord", "discord_web"),
        "VS Code": ("vscode",),
        "Cursor": ("cursor",),
        "ChatGPT": ("chatgpt",),
        "Claude": ("claude",),
        "Notion": ("notion", "notion_web"),
        "Obsidian": ("obsidian",),
        "LinkedIn": ("linkedin",),
        "Twitter/X": ("twitter",),
        "WhatsApp": ("whatsapp", "whatsapp_web"),
        "Telegram": ("telegram", "telegram_web"),
        "GitHub": ("github",),
        "Linear": ("linear", "linear_web"),
        "Microsoft Teams": ("teams", "teams_web"),
        "iMessage": ("imessage",),
    }
)


# =============================================================================
# Lookups
# =============================================================================


def detect_app_from_domain(domain: str) -> str | None:
    """Client-Tabelle der Extension: exakter Hostname → app_id."""
    return EXTENSION_DOMAIN_APPS.get(domain)


def identify_from_domain(domain: str) -> str | None:
    """Server-Tabelle (Superset der Extension-Tabelle)."""
    return SERVER_DOMAIN_APPS.get(domain)


def is_browser(process_name: str) -> bool:
    return process_name.lower() in BROWSER_PROCESSES


def identify_from_browser_title(window_title: str) -> str | None:
    """Rät die Web-App aus dem Fenstertitel eines Browsers."""
    title = window_title.lower()
    for app_id, groups in _TITLE_RULES:
        if all(any(needle in title for needle in group) for group in groups):
            return app_id
    return None


def identify_app(process_name: str, window_title: str) -> str | None:
    """Mappt ein natives Fenster auf eine app_id.

    Browser werden über den Fenstertitel aufgelöst, alle anderen Prozesse
    über ihren Namen.
    """
    process = process_name.lower()
    app_id = PROCESS_APPS.get(process)
    if app_id:
        return app_id
    if is_browser(process):
        return identify_from_browser_title(window_title)
    return None


def get_default_style(app_id: str) -> str | None:
    return DEFAULT_APP_STYLES.get(app_id)


def get_app_display_name(app_id: str) -> str:
    return APP_DISPLAY_NAMES.get(app_id, app_id)


__all__ = [
    "EXTENSION_DOMAIN_APPS",
    "SERVER_DOMAIN_APPS",
    "PROCESS_APPS",
    "BROWSER_PROCESSES",
    "DEFAULT_APP_STYLES",
    "APP_DISPLAY_NAMES",
    "detect_app_from_domain",
    "identify_from_domain",
    "is_browser",
    "identify_from_browser_title",
    "identify_app",
    "get_default_style",
    "get_app_display_name",
]
