"""Shared CLI type definitions for ContextBridge.

Enums used by contextbridge.py.
"""

from enum import Enum


class ProviderId(str, Enum):
    """Cloud-STT Provider."""

    gemini = "gemini"
    openai = "openai"


class OutputFormat(str, Enum):
    """Ausgabeformate der Listen-Befehle."""

    text = "text"
    json = "json"


class Browser(str, Enum):
    """Browser-Kennung im Bridge-Push."""

    chrome = "chrome"
    firefox = "firefox"
    edge = "edge"
    brave = "brave"
    arc = "arc"
    safari = "safari"
