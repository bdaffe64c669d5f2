"""Pytest configuration and shared fixtures."""

from typing import List

import pytest

from device import Device, FollowerDevice


@pytest.fixture
def master_devices() -> List[Device]:
    return [
        Device(id="aa:bb:cc:dd:ee:ff", mac="aa:bb:cc:dd:ee:ff", name="Living Room TV", ip="192.168.1.100"),
        Device(id="11:22:33:44:55:66", mac="11:22:33:44:55:66", name="Kitchen Speaker", ip="192.168.1.101"),
    ]


@pytest.fixture
def follower_devices() -> List[FollowerDevice]:
    return [
        FollowerDevice(id="u1", mac="AA:BB:CC:DD:EE:FF", name="Old TV Name", type="WIRED", ip="192.168.1.100"),
        FollowerDevice(id="u2", mac="99:88:77:66:55:44", name="Unknown", type="WIRELESS"),
    ]


@pytest.fixture
def sample_follower() -> FollowerDevice:
    return FollowerDevice(id="unifi1", mac="aa:bb:cc:dd:ee:ff", name="Old Name", type="WIRED")


@pytest.fixture
def valid_settings_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(
        '[general]\n'
        'sync_interval_minutes = 30\n'
        'dry_run = true\n'
        'log_level = "DEBUG"\n'
        '\n'
        '[firewalla]\n'
        'host = "https://firewalla.example.com"\n'
        'api_token = "test-token"\n'
        'box_id = "box-1"\n'
        '\n'
        '[unifi]\n'
        'host = "https://unifi.example.com"\n'
        'api_key = "test-api-key"\n'
        'site_id = "550e8400-e29b-41d4-a716-446655440000"\n'
    )
    return path
