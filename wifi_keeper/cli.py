# Copyright 2025 wifi-keeper contributors
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review required for correctness, security, and licensing.
"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import math
import re
import signal
import sys
import threading
from types import FrameType

from wifi_keeper.monitor import ReconnectMonitor
from wifi_keeper.netsh import COMMAND_TIMEOUT, CommandError, NetshRunner
from wifi_keeper.wlan import InterfaceNotFoundError, WlanClient

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "err": logging.ERROR,
}

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(raw: str) -> float:
    """Parse a duration such as ``15s``, ``1m30s`` or ``500ms`` into seconds.

    A bare number is read as seconds. The result must be positive.
    """

    text = raw.strip()
    try:
        seconds = float(text)
    except ValueError:
        seconds = _parse_duration_parts(raw, text)
    if not math.isfinite(seconds) or seconds <= 0:
        raise argparse.ArgumentTypeError(f"duration must be positive: {raw!r}")
    return seconds


def _parse_duration_parts(raw: str, text: str) -> float:
    position = 0
    seconds = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if not text or position != len(text):
        raise argparse.ArgumentTypeError(f"invalid duration: {raw!r}")
    return seconds


def parse_log_level(raw: str) -> int:
    """Map debug, info, warn or error (any case) to a logging level."""

    level = _LOG_LEVELS.get(raw.strip().lower())
    if level is None:
        raise argparse.ArgumentTypeError(
            f"invalid log level: {raw!r} (must be debug, info, warn, or error)"
        )
    return level


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""

    parser = argparse.ArgumentParser(
        description="wifi-keeper: keep a wireless interface connected to one network"
    )
    parser.add_argument("--ssid", default="", help="SSID of the network to stay connected to")
    parser.add_argument(
        "--interface",
        default="",
        help="wireless interface name (e.g. WLAN, Wi-Fi); detected when omitted",
    )
    parser.add_argument(
        "--interval",
        type=parse_duration,
        default=15.0,
        help="time between checks, e.g. 10s or 1m (default: 15s)",
    )
    parser.add_argument(
        "--log-file",
        default="",
        help="append logs to this file instead of the console",
    )
    parser.add_argument(
        "--log-level",
        type=parse_log_level,
        default=logging.INFO,
        help="log level: debug, info, warn or error (default: info)",
    )
    parser.add_argument(
        "--timeout",
        type=parse_duration,
        default=COMMAND_TIMEOUT,
        help="netsh command timeout; connect uses twice this (default: 10s)",
    )
    parser.add_argument("--netsh", default="netsh", help="netsh executable")
    parser.add_argument(
        "--encoding",
        default=None,
        help="encoding of netsh output (default: platform encoding)",
    )
    return parser


def configure_logging(level: int, log_file: str | None = None) -> None:
    """Configure logging to the console or, when given, an append-mode file."""

    handler: logging.Handler
    error: OSError | None = None
    if log_file:
        try:
            handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            error = exc
            handler = logging.StreamHandler()
    else:
        handler = logging.StreamHandler()
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[handler],
        force=True,
    )

    if error is not None:
        _LOGGER.error("Cannot open log file %s, logging to console: %s", log_file, error)
    elif log_file:
        _LOGGER.info("Logging to %s", log_file)


def install_signal_handlers(stop_event: threading.Event) -> None:
    """Set ``stop_event`` on SIGINT or SIGTERM.

    The monitor waits in slices of at most ``WAIT_SLICE`` seconds, so a stop
    request is noticed within about a second once the current check ends.
    """

    def _handle(signum: int, _frame: FrameType | None) -> None:
        _LOGGER.info("Received signal %s; stopping", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main(argv: list[str] | None = None) -> int:
    """Run wifi-keeper."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    ssid = args.ssid
    if not ssid:
        _LOGGER.error("The target network must be given with --ssid")
        parser.print_usage(sys.stderr)
        return 1

    _LOGGER.info(
        "Starting wifi-keeper ssid=%s interface=%s interval=%ss level=%s",
        ssid,
        args.interface or "<auto>",
        args.interval,
        logging.getLevelName(args.log_level),
    )

    runner = NetshRunner(args.netsh, encoding=args.encoding)
    client = WlanClient(runner, timeout=args.timeout)

    interface = args.interface
    if not interface:
        _LOGGER.info("No interface given; detecting one")
        try:
            interface = client.detect_interface()
        except (CommandError, InterfaceNotFoundError) as exc:
            _LOGGER.error("Cannot detect a wireless interface, use --interface: %s", exc)
            return 1
    _LOGGER.info("Using interface %s", interface)

    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    monitor = ReconnectMonitor(client, ssid, interface, args.interval)
    monitor.run(stop_event)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
