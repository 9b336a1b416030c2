"""CLI module for ContextBridge."""

from .types import Browser, OutputFormat, ProviderId

__all__ = ["Browser", "OutputFormat", "ProviderId"]
