# sync.py
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple

from clients.base import MasterPlatform, FollowerPlatform
from device import Device, FollowerDevice
from errors import InvalidValue, PolicyViolation, SyncCancelled
from utils import format_mac

logger = logging.getLogger(__name__)

ALLOWED_FIELDS = {"name"}

@dataclass
class MatchedPair:
    master: Device
    follower: FollowerDevice

@dataclass
class PlannedUpdate:
    follower: FollowerDevice
    new_name: str

@dataclass
class UpdateOutcome:
    success: bool
    device_id: str
    mac_address: str
    old_name: Optional[str]
    new_name: str
    error: Optional[str] = None

@dataclass(frozen=True)
class RunSummary:
    total_devices: int
    matched_devices: int
    updated_devices: int
    failed_updates: int
    skipped_devices: int
    errors: Tuple[str, ...] = field(default_factory=tuple)

def match_devices(master_devices: List[Device], follower_devices: List[FollowerDevice]) -> Dict[str, MatchedPair]:
    """Pairs follower devices with master devices by normalized MAC.

    Duplicate MACs in the master inventory resolve to the last one seen.
    Followers without a master are left out; they count as skipped.
    Records without a MAC address never match.
    """
    master_by_mac = {}
    for device in master_devices:
        mac = format_mac(device.mac or "")
        if mac:
            master_by_mac[mac] = device

    matches: Dict[str, MatchedPair] = {}
    for follower in follower_devices:
        mac = format_mac(follower.mac or "")
        if not mac:
            logger.debug(f"Skipping follower device {follower.id}: no MAC address")
            continue
        master = master_by_mac.get(mac)
        if master:
            matches[mac] = MatchedPair(master=master, follower=follower)
    return matches

def find_devices_to_update(matches: Dict[str, MatchedPair]) -> List[PlannedUpdate]:
    """Returns the follower devices whose name differs from a non-empty master name."""
    to_update = []
    for mac, pair in matches.items():
        if pair.master.name and pair.master.name != pair.follower.name:
            logger.debug(f"Device {mac}: follower name \"{pair.follower.name or '(none)'}\" "
                         f"-> master name \"{pair.master.name}\"")
            to_update.append(PlannedUpdate(follower=pair.follower, new_name=pair.master.name))
    return to_update

def verify_changes(original: FollowerDevice, updates: Dict[str, Any]) -> None:
    """Ensures a proposed change only touches the name field.

    Raises:
        PolicyViolation: if any key other than 'name' is present.
        InvalidValue: if 'name' is present but not a string.
    """
    disallowed = [key for key in updates if key not in ALLOWED_FIELDS]
    if disallowed:
        raise PolicyViolation(
            f"Attempted to modify disallowed fields on {original.mac}: {', '.join(disallowed)}. "
            "Only \"name\" field is allowed for safety."
        )

    if "name" in updates and not isinstance(updates["name"], str):
        raise InvalidValue("Name must be a string")

def create_sync_summary(total_devices: int, matches: Dict[str, MatchedPair],
                        outcomes: List[UpdateOutcome]) -> RunSummary:
    """Aggregates a run's outcomes. Pure."""
    failed = [outcome for outcome in outcomes if not outcome.success]
    return RunSummary(
        total_devices=total_devices,
        matched_devices=len(matches),
        updated_devices=len(outcomes) - len(failed),
        failed_updates=len(failed),
        skipped_devices=total_devices - len(matches),
        errors=tuple(outcome.error or "Unknown error" for outcome in failed),
    )

def log_sync_summary(summary: RunSummary, reporter: logging.Logger = logger) -> None:
    reporter.info("=== Sync Summary ===")
    reporter.info(f"Total follower devices: {summary.total_devices}")
    reporter.info(f"Matched with master: {summary.matched_devices}")
    reporter.info(f"Successfully updated: {summary.updated_devices}")
    reporter.info(f"Failed updates: {summary.failed_updates}")
    reporter.info(f"Skipped (no match): {summary.skipped_devices}")

    if summary.errors:
        reporter.warning("Errors encountered:")
        for error in summary.errors:
            reporter.warning(f"  - {error}")

def _check_cancelled(stop_event: Optional[threading.Event], stage: str):
    if stop_event is not None and stop_event.is_set():
        raise SyncCancelled(f"Sync cancelled before {stage}")

def _fetch_inventories(master: MasterPlatform,
                       follower: FollowerPlatform) -> Tuple[List[Device], List[FollowerDevice]]:
    """Fetches both inventories concurrently. Either failure fails the whole fetch."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        master_future = executor.submit(master.fetch_devices)
        follower_future = executor.submit(follower.fetch_devices)
        return master_future.result(), follower_future.result()

def _apply_update(follower: FollowerPlatform, planned: PlannedUpdate, dry_run: bool,
                  reporter: logging.Logger) -> UpdateOutcome:
    device = planned.follower
    outcome = UpdateOutcome(
        success=False,
        device_id=device.id,
        mac_address=device.mac,
        old_name=device.name,
        new_name=planned.new_name,
    )
    try:
        updates = {"name": planned.new_name}
        verify_changes(device, updates)

        if dry_run:
            reporter.info(f"[DRY RUN] Would update device {device.mac}: "
                          f"\"{device.name or '(none)'}\" -> \"{planned.new_name}\"")
        else:
            reporter.info(f"Updating device {device.mac}: "
                          f"\"{device.name or '(none)'}\" -> \"{planned.new_name}\"")
            follower.update_device(device.id, updates)
        outcome.success = True
    except Exception as e:  # pylint: disable=broad-except
        outcome.error = str(e)
        reporter.error(f"Failed to update device {device.mac}: {outcome.error}")
    return outcome

def perform_sync(master: MasterPlatform, follower: FollowerPlatform, dry_run: bool = False,
                 reporter: logging.Logger = logger,
                 stop_event: Optional[threading.Event] = None) -> RunSummary:
    """Runs one reconciliation pass from the master platform to the follower.

    Args:
        master: Client for the platform whose names are authoritative.
        follower: Client for the platform being corrected.
        dry_run: Log the updates instead of sending them.
        reporter: Logger that receives progress and the summary.
        stop_event: When set, the run stops before its next stage or update.
            An update already in flight always completes.

    Returns:
        The RunSummary for this pass.

    Raises:
        FetchError: if either inventory cannot be fetched. Nothing is applied.
        SyncCancelled: if stop_event was set.
    """
    reporter.info("Starting sync operation...")
    if dry_run:
        reporter.info("DRY RUN MODE - No changes will be persisted")

    _check_cancelled(stop_event, "fetching")
    master_devices, follower_devices = _fetch_inventories(master, follower)

    _check_cancelled(stop_event, "matching")
    matches = match_devices(master_devices, follower_devices)
    reporter.info(f"Matched {len(matches)} devices between master and follower")

    to_update = find_devices_to_update(matches)
    reporter.info(f"Found {len(to_update)} devices that need name updates")
    if not to_update:
        reporter.info("No updates needed")

    outcomes: List[UpdateOutcome] = []
    for planned in to_update:
        _check_cancelled(stop_event, f"updating {planned.follower.mac}")
        outcomes.append(_apply_update(follower, planned, dry_run, reporter))

    summary = create_sync_summary(len(follower_devices), matches, outcomes)
    log_sync_summary(summary, reporter)

    if summary.failed_updates > 0:
        reporter.warning(f"Sync completed with {summary.failed_updates} failed updates")
    else:
        reporter.info("Sync completed successfully")
    return summary
