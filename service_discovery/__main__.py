"""CLI entry point for service discovery."""

import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

import yaml

from .config import load_config
from .discovery import DiscoveryUnavailableError, ServiceDiscovery

LOG_LEVELS = {
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: int, json_output: bool = False) -> None:
    """Send log records to stderr, as text or JSON lines."""
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler])


def cmd_browse(args: argparse.Namespace) -> int:
    """Browse for services and print their names."""
    config = load_config(args.config)
    if args.types:
        config.discovery.service_types = args.types
    timeout = args.timeout if args.timeout is not None else config.discovery.settle_seconds

    try:
        discovery = ServiceDiscovery.new(config.discovery)
    except DiscoveryUnavailableError as e:
        cause = e.__cause__ or e
        print(f"Error: {e}: {cause}", file=sys.stderr)
        return 1

    with discovery:
        # Answers to the initial query arrive over the whole settle window
        if timeout > 0:
            time.sleep(timeout)
        services = discovery.browse()

    if args.output_json:
        print(json.dumps({
            "timestamp": datetime.now().isoformat(),
            "service_types": config.discovery.service_types,
            "services": services,
        }, indent=2))
    elif services:
        for name in services:
            print(name)
    else:
        print("No services found", file=sys.stderr)

    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the effective configuration."""
    config = load_config(args.config)
    print(yaml.safe_dump(config.to_dict(), sort_keys=False), end="")
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="service-discovery",
        description="List network services visible via mDNS",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to config file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=list(LOG_LEVELS),
        default=None,
        help="Set log level explicitly (overrides -v/--verbose)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output logs as JSON for machine parsing",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Browse command
    browse_parser = subparsers.add_parser("browse", help="List visible services")
    browse_parser.add_argument(
        "-t", "--timeout",
        type=float,
        default=None,
        help="Seconds to collect answers before listing (default: settle_seconds from config)",
    )
    browse_parser.add_argument(
        "--type",
        dest="types",
        action="append",
        default=None,
        help="Service type to browse for, e.g. _http._tcp (repeatable)",
    )
    browse_parser.add_argument(
        "--json",
        dest="output_json",
        action="store_true",
        help="Output services as JSON",
    )
    browse_parser.set_defaults(func=cmd_browse)

    # Config command
    config_parser = subparsers.add_parser("config", help="Show effective configuration")
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args()

    if args.log_level:
        level = LOG_LEVELS[args.log_level]
    else:
        level = logging.DEBUG if args.verbose else logging.WARNING
    setup_logging(level, args.json)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
