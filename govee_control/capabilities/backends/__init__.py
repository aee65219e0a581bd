"""
Device API clients for the capability system.

Clients handle the actual communication with the vendor API.
"""

from .base import DeviceClient
from .platform import GoveePlatformClient

__all__ = ["DeviceClient", "GoveePlatformClient"]
