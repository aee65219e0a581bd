"""
Govee Platform API backend.

Fetches device descriptors and scene capabilities, and submits control
requests over the public REST API.
"""

import logging
import uuid
from typing import Any, Optional

import httpx

from ..exceptions import DeviceNotFoundError, TransportError
from ..protocols import ControlResult
from ..schema import Capability, Device

logger = logging.getLogger("govee.backends.platform")

DEFAULT_BASE_URL = "https://openapi.api.govee.com/router/api/v1"


class GoveePlatformClient:
    """
    Govee Platform API client.

    Usage:
        async with GoveePlatformClient(api_key) as client:
            device = await client.fetch_device("AA:BB:CC:DD:EE:FF:00:11")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Open the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Govee-API-Key": self.api_key,
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            transport=self._transport,
        )
        logger.debug("Govee client opened for %s", self.base_url)

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.debug("Govee client closed")

    async def __aenter__(self) -> "GoveePlatformClient":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.disconnect()

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        if not self._client:
            raise RuntimeError("Govee client not connected")

        try:
            resp = await self._client.request(method, path, json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "%s: HTTP %d from %s: %s",
                operation,
                e.response.status_code,
                path,
                e.response.text,
            )
            raise TransportError(
                operation, f"HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("%s: request to %s failed: %s", operation, path, e)
            raise TransportError(operation, e) from e
        except ValueError as e:
            logger.error("%s: invalid JSON from %s", operation, path)
            raise TransportError(operation, f"invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            logger.error("%s: unexpected response body from %s: %r", operation, path, data)
            raise TransportError(operation, f"unexpected response body: {type(data).__name__}")

        code = data.get("code")
        if code is not None:
            try:
                ok = int(code) == 200
            except (TypeError, ValueError):
                ok = False
            if not ok:
                message = data.get("msg") or data.get("message") or "unknown error"
                logger.error("%s: API code %s: %s", operation, code, message)
                raise TransportError(operation, f"code {code}: {message}")
        return data

    async def list_devices(self) -> list[Device]:
        """List every device on the account."""
        data = await self._request("GET", "/user/devices", "list devices")
        devices = [Device.model_validate(d) for d in data.get("data") or []]
        logger.info("Fetched %d devices", len(devices))
        return devices

    async def fetch_device(self, device_id: str) -> Device:
        for device in await self.list_devices():
            if device.device_id == device_id:
                return device
        raise DeviceNotFoundError(device_id)

    async def _fetch_scenes(self, path: str, device: Device, operation: str) -> list[Capability]:
        body = {
            "requestId": str(uuid.uuid4()),
            "payload": {"sku": device.sku, "device": device.device_id},
        }
        data = await self._request("POST", path, operation, body)
        payload = data.get("payload") or {}
        return [Capability.model_validate(c) for c in payload.get("capabilities") or []]

    async def fetch_scene_capabilities(self, device: Device) -> list[Capability]:
        return await self._fetch_scenes("/device/scenes", device, "fetch scenes")

    async def fetch_diy_scene_capabilities(self, device: Device) -> list[Capability]:
        return await self._fetch_scenes("/device/diy-scenes", device, "fetch DIY scenes")

    async def submit_control(
        self,
        device: Device,
        capability: Capability,
        value: Any,
    ) -> ControlResult:
        request_id = str(uuid.uuid4())
        body = {
            "requestId": request_id,
            "payload": {
                "sku": device.sku,
                "device": device.device_id,
                "capability": {
                    "type": capability.type,
                    "instance": capability.instance,
                    "value": value,
                },
            },
        }
        data = await self._request("POST", "/device/control", f"control {capability.instance}", body)
        logger.info("Control %s on %s: %s", capability.instance, device.device_id, value)
        return ControlResult.from_response(data, request_id)
