"""
Capability resolution for Govee devices.

This module provides:
- Schema models for device capabilities and their parameters
- Lookup of capabilities on a device
- Resolvers that turn intents into validated control values
- A dispatcher that submits resolved values through a device client
"""

from .actions import ControlDispatcher
from .exceptions import (
    CapabilityNotFoundError,
    ControlError,
    DeviceNotFoundError,
    SchemaMismatchError,
    TransportError,
    ValueNotFoundError,
)
from .lookup import capability_by_instance, get_device_scenes, require_capability
from .protocols import ControlResult
from .schema import (
    Capability,
    Device,
    EnumOption,
    EnumParameters,
    IntegerParameters,
    IntegerRange,
    ParameterSchema,
    StructField,
    StructParameters,
    UnsupportedParameters,
)

__all__ = [
    # Schema
    "Capability",
    "Device",
    "EnumOption",
    "EnumParameters",
    "IntegerParameters",
    "IntegerRange",
    "ParameterSchema",
    "StructField",
    "StructParameters",
    "UnsupportedParameters",
    # Lookup
    "capability_by_instance",
    "get_device_scenes",
    "require_capability",
    # Dispatch
    "ControlDispatcher",
    "ControlResult",
    # Errors
    "ControlError",
    "CapabilityNotFoundError",
    "DeviceNotFoundError",
    "SchemaMismatchError",
    "TransportError",
    "ValueNotFoundError",
]
