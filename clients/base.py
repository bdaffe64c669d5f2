# clients/base.py
from abc import ABC, abstractmethod
from typing import Dict, List

from device import Device, FollowerDevice

class MasterPlatform(ABC):
    """Abstract base class for the platform whose device names are authoritative."""

    @abstractmethod
    def fetch_devices(self) -> List[Device]:
        """Retrieves the full device inventory.

        Raises:
            FetchError: if the inventory cannot be retrieved. A partial
                inventory is never returned.
        """
        pass

class FollowerPlatform(ABC):
    """Abstract base class for the platform that receives corrected names."""

    @abstractmethod
    def fetch_devices(self) -> List[FollowerDevice]:
        """Retrieves the full device inventory. Raises FetchError on failure."""
        pass

    @abstractmethod
    def update_device(self, device_id: str, fields: Dict[str, str]) -> FollowerDevice:
        """Applies a partial update to one device and returns the updated record.

        Raises:
            UpdateError: if the platform rejects or fails the update.
        """
        pass
