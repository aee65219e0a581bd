"""
Base protocol for device API clients.
"""

from typing import Any, Protocol, runtime_checkable

from ..protocols import ControlResult
from ..schema import Capability, Device


@runtime_checkable
class DeviceClient(Protocol):
    """
    Protocol for device API clients.

    Clients own the transport (HTTP, timeouts, authentication). The
    resolution layer only reads what they return and hands back one
    resolved value per invocation.
    """

    async def fetch_device(self, device_id: str) -> Device:
        """Fetch the descriptor of a single device by its id."""
        ...

    async def fetch_scene_capabilities(self, device: Device) -> list[Capability]:
        """Fetch the dynamic scene capabilities of a device."""
        ...

    async def fetch_diy_scene_capabilities(self, device: Device) -> list[Capability]:
        """Fetch the user-defined (DIY) scene capabilities of a device."""
        ...

    async def submit_control(
        self,
        device: Device,
        capability: Capability,
        value: Any,
    ) -> ControlResult:
        """
        Submit a control value for one capability.

        Args:
            device: Target device
            capability: Capability being controlled; its type and instance
                are echoed back in the request
            value: Control value matching the capability's schema

        Returns:
            The API's response
        """
        ...
