"""
Control dispatch for resolved capability values.

Each intent method runs lookup -> resolution -> at most one control call.
"""

import logging
from typing import Any, Optional

from . import resolver
from .backends.base import DeviceClient
from .lookup import get_device_scenes, require_capability
from .protocols import ControlResult
from .resolver import ColorInput
from .schema import Capability, Device

logger = logging.getLogger("govee.capabilities.actions")


class ControlDispatcher:
    """
    Dispatches resolved control values to a device client.

    dispatch() is the single point where a control request leaves the
    process; the intent methods below all go through it.
    """

    def __init__(self, client: DeviceClient):
        self.client = client

    async def dispatch(
        self,
        device: Device,
        capability: Capability,
        value: Any,
    ) -> ControlResult:
        """
        Submit a resolved value and return the client's result unmodified.

        Errors from the client propagate; nothing is retried.
        """
        logger.info(
            "Dispatching %s.%s(%r)",
            device.device_id,
            capability.instance,
            value,
        )
        try:
            result = await self.client.submit_control(device, capability, value)
        except Exception:
            logger.error("Control %s on %s failed", capability.instance, device.device_id)
            raise
        logger.info("Control result: %s", result)
        return result

    async def turn_on(self, device: Device) -> ControlResult:
        return await self._power(device, True)

    async def turn_off(self, device: Device) -> ControlResult:
        return await self._power(device, False)

    async def _power(self, device: Device, on: bool) -> ControlResult:
        cap = require_capability(device, resolver.POWER_INSTANCE)
        value = resolver.resolve_power(cap, on)
        return await self.dispatch(device, cap, value)

    async def set_brightness(self, device: Device, percent: int) -> ControlResult:
        cap = require_capability(device, resolver.BRIGHTNESS_INSTANCE)
        value = resolver.resolve_brightness(cap, percent)
        return await self.dispatch(device, cap, value)

    async def set_temperature(self, device: Device, kelvin: int) -> ControlResult:
        cap = require_capability(device, resolver.TEMPERATURE_INSTANCE)
        value = resolver.resolve_temperature(cap, kelvin)
        return await self.dispatch(device, cap, value)

    async def set_color(self, device: Device, color: ColorInput) -> ControlResult:
        cap = require_capability(device, resolver.COLOR_INSTANCE)
        value = resolver.resolve_color(cap, color)
        return await self.dispatch(device, cap, value)

    async def list_scenes(self, device: Device) -> list[str]:
        """Names of every scene on the device. Issues no control call."""
        scenes = await get_device_scenes(self.client, device)
        return resolver.list_scene_names(scenes)

    async def activate_scene(self, device: Device, scene: str) -> ControlResult:
        scenes = await get_device_scenes(self.client, device)
        cap, value = resolver.find_scene(scenes, scene)
        return await self.dispatch(device, cap, value)

    async def list_music_modes(self, device: Device) -> list[str]:
        cap = require_capability(device, resolver.MUSIC_MODE_INSTANCE)
        return resolver.list_music_modes(cap)

    async def activate_music_mode(
        self,
        device: Device,
        mode: str,
        sensitivity: int = 100,
        auto_color: bool = False,
        color: Optional[ColorInput] = None,
    ) -> ControlResult:
        cap = require_capability(device, resolver.MUSIC_MODE_INSTANCE)
        value = resolver.resolve_music_mode(
            cap,
            mode,
            sensitivity=sensitivity,
            auto_color=auto_color,
            color=color,
        )
        return await self.dispatch(device, cap, value)
