"""Govee Control - resolve lighting intents against device capability schemas."""

__version__ = "0.1.0"
