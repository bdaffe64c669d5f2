# network_sync.py
import argparse
import logging
import signal
import sys
import threading

from clients import get_master_client, get_follower_client
from errors import ConfigError, SyncCancelled
from settings import load_config, validate_config
from sync import perform_sync

logger = logging.getLogger(__name__)

def run_scheduler(master, follower, interval_minutes: int, dry_run: bool,
                  stop_event: threading.Event) -> None:
    """Re-runs the sync every interval until stop_event is set.

    The next wait only starts once the current run has finished, so runs
    never overlap. A failed run is logged and retried on the next interval.
    """
    logger.info(f"Scheduling sync every {interval_minutes} minutes")
    logger.info("Sync scheduler running. Press Ctrl+C to exit.")
    while not stop_event.wait(interval_minutes * 60):
        try:
            perform_sync(master, follower, dry_run=dry_run, stop_event=stop_event)
        except SyncCancelled as e:
            logger.info(str(e))
        except Exception as e:  # pylint: disable=broad-except
            logger.error(f"Scheduled sync failed: {e}")
    logger.info("Sync scheduler stopped.")

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Sync device names from Firewalla to UniFi Network")
    parser.add_argument("--dry-run", action="store_true", help="Log the updates without applying them")
    parser.add_argument("--once", action="store_true", help="Run a single sync and exit")
    parser.add_argument("--interval", type=int, help="Minutes between syncs (overrides settings)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--settings", action="append", help="Settings file (default: config/settings.toml)")
    args = parser.parse_args(argv)

    config = load_config(args.settings)

    level = "DEBUG" if args.debug else str(config.get("general.log_level", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        validate_config(config)
    except ConfigError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    dry_run = args.dry_run or bool(config.get("general.dry_run", False))
    interval = args.interval if args.interval is not None else config.get("general.sync_interval_minutes", 60)
    if interval < 0:
        logger.error("Fatal error: --interval must be >= 0")
        return 1

    logger.info("Firewalla-UniFi network sync starting...")
    logger.info(f"Firewalla host: {config.get('firewalla.host')}")
    logger.info(f"UniFi host: {config.get('unifi.host')}")
    logger.info(f"UniFi site ID: {config.get('unifi.site_id')}")
    logger.info(f"Sync interval: {interval} minutes")
    logger.info(f"Dry run: {dry_run}")

    master = get_master_client(config)
    follower = get_follower_client(config)

    stop_event = threading.Event()

    # Ctrl+C / SIGTERM stop between steps; an update in flight is allowed to finish
    def _stop(signum, _frame):
        logger.info(f"Received signal {signum}, stopping after the current step")
        stop_event.set()

    signal.signal(signal.SIGINT, _stop)
    signal.signal(signal.SIGTERM, _stop)

    try:
        perform_sync(master, follower, dry_run=dry_run, stop_event=stop_event)
    except SyncCancelled as e:
        logger.info(f"{e}. Exiting.")
        return 0
    except Exception as e:  # pylint: disable=broad-except
        logger.error(f"Sync operation failed: {e}")
        return 1

    if args.once or interval == 0:
        logger.info("Single sync completed. Exiting.")
        return 0

    run_scheduler(master, follower, interval, dry_run, stop_event)
    return 0

if __name__ == "__main__":
    sys.exit(main())
