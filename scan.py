# scan.py
import argparse
from typing import Optional

from mac_vendor_lookup import MacLookup, VendorNotFoundError

from clients import get_master_client, get_follower_client
from settings import load_config, validate_config
from sync import match_devices
from utils import format_mac

def get_vendor(mac_lookup: Optional[MacLookup], mac: str) -> str:
    if mac_lookup is None:
        return ""
    try:
        return mac_lookup.lookup(format_mac(mac))
    except (VendorNotFoundError, ValueError, KeyError):
        return "Unknown vendor"

def main():
    """Simple diagnostic script to fetch and display both inventories."""
    parser = argparse.ArgumentParser(description="List devices on both platforms and how they match")
    parser.add_argument("--vendors", action="store_true", help="Look up the vendor of each MAC address")
    parser.add_argument("--update-mac-db", action="store_true", help="Force update of the MAC vendor database")
    args = parser.parse_args()

    config = load_config()
    validate_config(config)

    mac_lookup = None
    if args.vendors or args.update_mac_db:
        mac_lookup = MacLookup()
        if args.update_mac_db:
            mac_lookup.update_vendors()

    master_devices = get_master_client(config).fetch_devices()
    follower_devices = get_follower_client(config).fetch_devices()
    matches = match_devices(master_devices, follower_devices)

    print(f"Master devices: {len(master_devices)}")
    for device in master_devices:
        print(f"  {format_mac(device.mac)}  {device.ip or '-':15}  {device.name or '(none)'}  {get_vendor(mac_lookup, device.mac)}")

    print(f"Follower devices: {len(follower_devices)} ({len(matches)} matched)")
    for device in follower_devices:
        pair = matches.get(format_mac(device.mac))
        status = f"-> {pair.master.name or '(none)'}" if pair else "skipped"
        print(f"  {format_mac(device.mac)}  {device.ip or '-':15}  {device.name or '(none)'}  {status}  {get_vendor(mac_lookup, device.mac)}")

if __name__ == "__main__":
    main()
