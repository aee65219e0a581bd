"""
Capability lookup on a device snapshot.
"""

import logging
from typing import Optional

from .backends.base import DeviceClient
from .exceptions import CapabilityNotFoundError
from .schema import Capability, Device

logger = logging.getLogger("govee.capabilities.lookup")


def capability_by_instance(device: Device, instance: str) -> Optional[Capability]:
    """Linear search by exact instance name. Absence is not an error here."""
    return device.capability_by_instance(instance)


def require_capability(device: Device, instance: str) -> Capability:
    """Like capability_by_instance, but raise when the device lacks it."""
    cap = device.capability_by_instance(instance)
    if cap is None:
        logger.warning(
            "Device %s (%s) has no %s capability (has: %s)",
            device.device_id,
            device.sku,
            instance,
            [c.instance for c in device.capabilities],
        )
        raise CapabilityNotFoundError(instance)
    return cap


async def get_device_scenes(client: DeviceClient, device: Device) -> list[Capability]:
    """
    Collect every scene capability of a device.

    Scenes are not part of the device descriptor; they are fetched from the
    scene endpoints and may be split across several capabilities. Dynamic
    scenes come first, then DIY scenes.
    """
    scenes = list(await client.fetch_scene_capabilities(device))
    scenes.extend(await client.fetch_diy_scene_capabilities(device))
    logger.debug(
        "Device %s has %d scene capabilities: %s",
        device.device_id,
        len(scenes),
        [c.instance for c in scenes],
    )
    return scenes
