"""
Shared result types for the device control layer.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ControlResult:
    """Response to a single control request, displayed as-is."""
    request_id: str
    code: int
    message: str
    capability: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, body: dict[str, Any], request_id: Optional[str] = None) -> "ControlResult":
        return cls(
            request_id=body.get("requestId") or request_id or "",
            code=int(body.get("code", 0)),
            message=body.get("msg") or body.get("message") or "",
            capability=body.get("capability") or {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "code": self.code,
            "message": self.message,
            "capability": self.capability,
        }
