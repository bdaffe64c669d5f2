# clients/__init__.py
from dynaconf import Dynaconf

from .base import MasterPlatform, FollowerPlatform
from .firewalla import FirewallaClient  # Import all concrete implementations
from .unifi import UniFiClient

def get_master_client(config: Dynaconf) -> MasterPlatform:
    """Master factory: returns a client for the authoritative platform."""

    master_type = config.get("general.master_type", "firewalla")
    timeout = config.get("general.request_timeout", 30)

    if master_type == "firewalla":
        return FirewallaClient(config.firewalla, timeout=timeout)
    else:
        raise ValueError(f"Unsupported master platform: {master_type}")

def get_follower_client(config: Dynaconf) -> FollowerPlatform:
    """Follower factory: returns a client for the platform being corrected."""

    follower_type = config.get("general.follower_type", "unifi")
    timeout = config.get("general.request_timeout", 30)

    if follower_type == "unifi":
        return UniFiClient(config.unifi, timeout=timeout)
    else:
        raise ValueError(f"Unsupported follower platform: {follower_type}")
