#!/usr/bin/env python3
"""Command-line interface for the pwr-notify battery daemon."""

import sys
import json
import signal
import logging
import argparse
import threading

from pwr_notify import __version__
from pwr_notify.config import resolve_settings
from pwr_notify.core.errors import ConfigError
from pwr_notify.core.monitor import BatteryMonitor
from pwr_notify.discovery import list_batteries
from pwr_notify.notifier import Notifier
from pwr_notify.providers.sysfs import SysfsProvider

log = logging.getLogger("pwr_notify")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pwr-notify",
        description="Get notifications on critical battery levels",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  %(prog)s                      Watch BAT1, alert below 20%%
  %(prog)s -b BAT0 BAT1         Combine two batteries into one level
  %(prog)s --threshold 10       Alert below 10%%
  %(prog)s --once --json        Run a single check and print the result
  %(prog)s --list               List batteries known to udev
""",
    )
    parser.add_argument(
        "--bats", "-b", nargs="+", metavar="BAT", default=None,
        help="Battery names in /sys/class/power_supply (default: BAT1)",
    )
    parser.add_argument(
        "--threshold", type=int, default=None,
        help="Combined percentage all batteries have to be under to trigger "
             "notifications on discharge (default: 20)",
    )
    parser.add_argument(
        "--timeout", type=int, default=None,
        help="Notification timeout in seconds, 0 makes it stay until closed (default: 10)",
    )
    parser.add_argument(
        "--polling-interval", "--polling-intervall", dest="polling_interval",
        type=int, default=None, help="Polling interval in seconds (default: 180)",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to config.json")
    parser.add_argument("--list", "-l", action="store_true", help="List batteries and exit")
    parser.add_argument("--once", action="store_true", help="Run one check and exit")
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _overrides_from_args(args) -> dict:
    """Turn the command line flags that were given into a config overlay."""
    overrides = {}
    if args.bats is not None:
        overrides["batteries"] = args.bats
    if args.threshold is not None:
        overrides["threshold"] = args.threshold
    if args.timeout is not None:
        overrides.setdefault("notifications", {})["timeout"] = args.timeout
    if args.polling_interval is not None:
        overrides.setdefault("polling", {})["interval_seconds"] = args.polling_interval
    return overrides


def _print_batteries(as_json: bool) -> int:
    devices = list_batteries()
    if as_json:
        print(json.dumps([{
            "name": d.name,
            "status": d.status,
            "capacity": d.capacity,
            "energy_full": d.energy_full,
            "energy_now": d.energy_now,
            "model": d.model,
            "manufacturer": d.manufacturer,
        } for d in devices]))
        return 0

    if not devices:
        print("No batteries found.")
        return 0

    print(f"Found {len(devices)} battery(s):\n")
    for dev in devices:
        capacity = f"{dev.capacity}%" if dev.capacity is not None else "N/A"
        print(f"  {dev.name}")
        if dev.model or dev.manufacturer:
            print(f"    Model:    {' '.join(p for p in (dev.manufacturer, dev.model) if p)}")
        print(f"    Status:   {dev.status}")
        print(f"    Capacity: {capacity}")
        if not dev.has_energy:
            print("    Note:     no energy_full/energy_now, cannot be monitored")
        print()
    return 0


def _print_cycle(result, as_json: bool) -> None:
    if as_json:
        print(json.dumps(result.to_dict()))
        return

    for name, status in result.statuses.items():
        print(f"{name}: {status.name.lower()}")
    if result.percent is not None:
        charging = " (charging)" if result.any_charging else ""
        print(f"Combined: {result.percent}%{charging}")
    for error in result.errors:
        print(f"Error: {error}")


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.list:
        return _print_batteries(args.json)

    try:
        settings = resolve_settings(args.config, _overrides_from_args(args))
    except ConfigError as e:
        parser.error(str(e))

    notifier = Notifier(app_name=settings.app_name, icon=settings.icon,
                        backend=settings.backend)
    provider = SysfsProvider(root=settings.power_supply_dir)
    monitor = BatteryMonitor(settings, provider, notifier)

    if args.once:
        _print_cycle(monitor.run_cycle(), args.json)
        monitor.close()
        return 0

    stop_event = threading.Event()

    def _handle_signal(signum, frame):
        log.info("received signal %d", signum)
        stop_event.set()

    signal.signal(signal.SIGTERM, _handle_signal)
    signal.signal(signal.SIGINT, _handle_signal)

    try:
        monitor.run_forever(stop_event)
    finally:
        monitor.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
