"""
Custom exceptions for capability resolution and device control.

Every failure is terminal for a single invocation; nothing here is retried.
"""

from typing import Any, Optional


class ControlError(Exception):
    """Base exception for all device control errors."""

    pass


class CapabilityNotFoundError(ControlError):
    """Raised when a device does not expose the requested capability."""

    def __init__(self, instance: str):
        self.instance = instance
        super().__init__(f"device has no {instance}")


class DeviceNotFoundError(ControlError):
    """Raised when the account has no device with the requested id."""

    def __init__(self, device_id: str):
        self.device_id = device_id
        super().__init__(f"device {device_id} was not found")


class SchemaMismatchError(ControlError):
    """Raised when a capability's parameters are not the expected variant."""

    def __init__(self, instance: str, expected: str, found: Any = None):
        self.instance = instance
        self.expected = expected
        self.found = found
        if found is None:
            found_name = "no parameters"
        else:
            found_name = getattr(found, "data_type", None) or type(found).__name__
            reason = getattr(found, "reason", "")
            if reason:
                found_name = f"{found_name} ({reason})"
        super().__init__(
            f"unexpected parameter type for {instance}: "
            f"expected {expected}, found {found_name}"
        )


class ValueNotFoundError(ControlError):
    """Raised when a named option, scene or mode is absent from a schema."""

    def __init__(self, kind: str, name: str, message: Optional[str] = None):
        self.kind = kind
        self.name = name
        super().__init__(message or f"{kind} '{name}' was not found")


class TransportError(ControlError):
    """Raised when a call to the device API fails."""

    def __init__(self, operation: str, cause: Any):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")
