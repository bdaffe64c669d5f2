# clients/firewalla.py
import logging
from typing import Any, Dict, List, Optional

from dynaconf import Dynaconf

from .base import MasterPlatform
from device import Device
from errors import ApiError, FetchError
from utils import ApiClient

logger = logging.getLogger(__name__)

class FirewallaClient(MasterPlatform):
    """Implementation of MasterPlatform for the Firewalla MSP API."""

    def __init__(self, config: Dynaconf, timeout: int = 30, api: Optional[ApiClient] = None):
        self.host = config.get("host")
        self.box_id = config.get("box_id") or None
        self.api = api or ApiClient(
            "Firewalla",
            f"{self.host.rstrip('/')}/v2",
            headers={"Authorization": f"Token {config.get('api_token')}"},
            timeout=timeout,
        )

    def fetch_devices(self) -> List[Device]:
        """Retrieves all devices, scoped to the configured box if there is one."""
        logger.info("Fetching devices from Firewalla...")
        params = {"box": self.box_id} if self.box_id else None
        try:
            payload = self.api.request("/devices", params=params)
        except ApiError as e:
            raise FetchError(f"Failed to fetch devices from Firewalla: {e}") from e

        # Some API versions wrap the list in {"results": [...]}
        if isinstance(payload, dict):
            payload = payload.get("results", [])
        if not isinstance(payload, list):
            raise FetchError(f"Unexpected Firewalla device payload: {type(payload).__name__}")

        devices = [self._parse_device(item) for item in payload]
        logger.info(f"Fetched {len(devices)} devices from Firewalla")
        return devices

    def get_device(self, mac: str) -> Device:
        """Retrieves a single device by its MAC address."""
        logger.debug(f"Fetching device details for {mac}")
        try:
            return self._parse_device(self.api.request(f"/devices/{mac}"))
        except ApiError as e:
            raise FetchError(f"Failed to fetch Firewalla device {mac}: {e}") from e

    def _parse_device(self, data: Dict[str, Any]) -> Device:
        """Maps a Firewalla device object onto Device.

        Firewalla keys devices by MAC, so 'mac' falls back to 'id'.
        """
        device_id = str(data.get("id") or data.get("mac") or "")
        known = {"id", "mac", "name", "ip", "lastActiveTimestamp"}
        return Device(
            id=device_id,
            mac=data.get("mac") or device_id,
            name=data.get("name") or None,
            ip=data.get("ip"),
            connected_at=data.get("lastActiveTimestamp"),
            extra={k: v for k, v in data.items() if k not in known},
        )
