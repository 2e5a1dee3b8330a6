import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from howsit_tui.app import run
from howsit_tui.config import VERSION, Settings, configure_logging, settings_from_env
from howsit_tui.errors import ConfigError


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="howsit",
        description="howsit -- live slab and eviction monitor for memcached",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"howsit {VERSION}",
    )
    parser.add_argument(
        "-r",
        "--refresh",
        type=_positive_int,
        default=defaults.refresh_seconds,
        help=f"refresh every N seconds (default: {defaults.refresh_seconds})",
    )
    parser.add_argument(
        "-s",
        "--server",
        default=defaults.server,
        help=f"memcached host (default: {defaults.server})",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=_positive_int,
        default=defaults.port,
        help=f"memcached port (default: {defaults.port})",
    )
    parser.add_argument(
        "-m",
        "--max-slabs",
        "--max_slabs",
        dest="max_slabs",
        type=_positive_int,
        default=defaults.max_slabs_per_page,
        help=f"maximum number of slabs to show at once (default: {defaults.max_slabs_per_page})",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=defaults.timeout_seconds,
        help=f"network timeout in seconds (default: {defaults.timeout_seconds})",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        metavar="DIR",
        help="read stats.txt, slabs.txt and items.txt from DIR instead of a server",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="write log records to this file instead of the textual console",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"log level (default: {defaults.log_level})",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    try:
        defaults = settings_from_env()
    except ConfigError as exc:
        build_parser(Settings()).error(str(exc))
    args = build_parser(defaults).parse_args(argv)
    return replace(
        defaults,
        server=args.server,
        port=args.port,
        refresh_seconds=args.refresh,
        max_slabs_per_page=args.max_slabs,
        timeout_seconds=args.timeout,
        replay_dir=args.replay,
        log_file=args.log_file,
        log_level=args.log_level,
    )


def main(argv: Sequence[str] | None = None) -> None:
    settings = parse_args(argv)
    configure_logging(settings)

    sys.exit(run(settings))


if __name__ == "__main__":
    main()
