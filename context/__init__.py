"""Kontext-Erkennung und Stil-Auswahl für ContextBridge.

Usage:
    from context import ContextResolver, resolve_style

    style = resolve_style("gmail", mappings={}, style_ids={"email_pro", "correction"})
"""

# Stores (styles, mappings, editor) importieren utils.preferences, das wiederum
# context.errors braucht – hier daher nur die import-freien Module re-exportieren.
from .apps import get_app_display_name, get_default_style, identify_app
from .errors import ContextBridgeError
from .models import ContextMapping, ContextSource, ContextStylePrompt, DetectedContext
from .resolver import ContextResolver, is_custom_mapping, resolve_style

__all__ = [
    "ContextBridgeError",
    "ContextMapping",
    "ContextResolver",
    "ContextSource",
    "ContextStylePrompt",
    "DetectedContext",
    "get_app_display_name",
    "get_default_style",
    "identify_app",
    "is_custom_mapping",
    "resolve_style",
]
