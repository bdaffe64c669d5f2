# clients/unifi.py
import logging
from typing import Any, Dict, List, Optional

from dynaconf import Dynaconf

from .base import FollowerPlatform
from device import FollowerDevice
from errors import ApiError, FetchError, UpdateError
from utils import ApiClient

logger = logging.getLogger(__name__)

class UniFiClient(FollowerPlatform):
    """Implementation of FollowerPlatform for the UniFi Network integration API."""

    def __init__(self, config: Dynaconf, timeout: int = 30, api: Optional[ApiClient] = None):
        self.host = config.get("host")
        self.site_id = config.get("site_id")
        self.page_size = int(config.get("page_size", 100))
        self.api = api or ApiClient(
            "UniFi",
            f"{self.host.rstrip('/')}/v1",
            headers={"X-API-KEY": config.get("api_key")},
            timeout=timeout,
        )

    def fetch_devices(self) -> List[FollowerDevice]:
        """Retrieves all clients of the site, following pagination."""
        logger.info("Fetching clients from UniFi Network...")
        devices: List[FollowerDevice] = []
        offset = 0

        while True:
            try:
                page = self.api.request(
                    f"/sites/{self.site_id}/clients",
                    params={"offset": offset, "limit": self.page_size},
                )
            except ApiError as e:
                raise FetchError(f"Failed to fetch clients from UniFi: {e}") from e

            if not isinstance(page, dict):
                raise FetchError(f"Unexpected UniFi client payload: {type(page).__name__}")
            data = page.get("data", [])
            devices.extend(self._parse_device(item) for item in data)
            offset += page.get("count", len(data))
            total = page.get("totalCount", 0)
            logger.debug(f"Fetched {len(data)} clients, total so far: {len(devices)}/{total}")

            # An empty page guards against a controller that misreports totalCount
            if not data or offset >= total:
                break

        logger.info(f"Fetched {len(devices)} clients from UniFi Network")
        return devices

    def get_device(self, device_id: str) -> FollowerDevice:
        """Retrieves a single client by its UniFi id."""
        logger.debug(f"Fetching client details for {device_id}")
        try:
            return self._parse_device(self.api.request(f"/sites/{self.site_id}/clients/{device_id}"))
        except ApiError as e:
            raise FetchError(f"Failed to fetch UniFi client {device_id}: {e}") from e

    def update_device(self, device_id: str, fields: Dict[str, str]) -> FollowerDevice:
        """Sends a PATCH with only the given fields."""
        logger.debug(f"Updating client {device_id}: {fields}")
        try:
            data = self.api.request(f"/sites/{self.site_id}/clients/{device_id}", "PATCH", body=fields)
        except ApiError as e:
            logger.warning("The UniFi API may not support direct client name updates. "
                           "Consider fixed client assignments or DHCP reservations instead.")
            raise UpdateError(str(e)) from e
        return self._parse_device(data or {"id": device_id, **fields})

    def _parse_device(self, data: Dict[str, Any]) -> FollowerDevice:
        """Maps a UniFi client object onto FollowerDevice."""
        known = {"id", "name", "macAddress", "ipAddress", "connectedAt", "type", "uplinkDeviceId"}
        return FollowerDevice(
            id=str(data.get("id", "")),
            mac=data.get("macAddress", ""),
            name=data.get("name") or None,
            ip=data.get("ipAddress"),
            connected_at=data.get("connectedAt"),
            type=data.get("type", "WIRED"),
            uplink_device_id=data.get("uplinkDeviceId"),
            extra={k: v for k, v in data.items() if k not in known},
        )
