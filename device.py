# device.py
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

@dataclass
class Device:
    id: str
    mac: str  # As reported by the platform, not normalized
    name: Optional[str] = None
    ip: Optional[str] = None
    connected_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

@dataclass
class FollowerDevice(Device):
    type: str = "WIRED"  # WIRED, WIRELESS or VPN
    uplink_device_id: Optional[str] = None
