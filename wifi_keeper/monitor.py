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
"""Poll loop that keeps a wireless interface on its target network."""

from __future__ import annotations

import logging
import math
import threading
import time
from typing import Callable

from wifi_keeper.models import (
    OUTCOME_CONNECTED,
    OUTCOME_NOT_VISIBLE,
    OUTCOME_RECONNECT_FAILED,
    OUTCOME_RECONNECT_SENT,
    OUTCOME_STATUS_ERROR,
    OUTCOME_VISIBILITY_ERROR,
)
from wifi_keeper.netsh import CommandError
from wifi_keeper.wlan import WlanClient

_LOGGER = logging.getLogger(__name__)

# Longest single wait; Event.wait is not interrupted by Ctrl+C on Windows.
WAIT_SLICE = 1.0


class ReconnectMonitor:
    """Check the target network on a fixed period and reconnect when it drops."""

    def __init__(
        self,
        client: WlanClient,
        ssid: str,
        interface: str,
        interval: float,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._client = client
        self._ssid = ssid
        self._interface = interface
        self._interval = interval
        self._logger = logger or _LOGGER
        self._clock = clock

    def check_once(self) -> str:
        """Run one status check and react to it; return the outcome code."""

        self._logger.info("Checking %s on %s", self._ssid, self._interface)
        try:
            connected = self._client.is_connected(self._ssid, self._interface)
        except CommandError as exc:
            self._logger.error("Status check failed: %s", exc)
            return OUTCOME_STATUS_ERROR

        if connected:
            self._logger.info("Connected to %s", self._ssid)
            return OUTCOME_CONNECTED

        self._logger.warning("Not connected to %s", self._ssid)
        try:
            visible = self._client.is_network_visible(self._ssid, self._interface)
        except CommandError as exc:
            self._logger.error("Visibility check for %s failed: %s", self._ssid, exc)
            return OUTCOME_VISIBILITY_ERROR

        if not visible:
            self._logger.warning("%s is not visible; skipping connect", self._ssid)
            return OUTCOME_NOT_VISIBLE

        try:
            self._client.connect(self._ssid, self._interface)
        except CommandError as exc:
            self._logger.error("Connect attempt for %s failed: %s", self._ssid, exc)
            return OUTCOME_RECONNECT_FAILED
        self._logger.info("Connect command sent; state will be confirmed next check")
        return OUTCOME_RECONNECT_SENT

    def run(self, stop_event: threading.Event | None = None) -> None:
        """Check immediately, then once per interval until ``stop_event`` is set.

        Ticks fall on a fixed grid anchored at the start time. When a grid
        point passes while a check is still running, the next check starts
        straight away; further missed ticks are dropped rather than queued.
        """

        stop = stop_event or threading.Event()
        start = self._clock()
        started = start
        self.check_once()
        while not self._wait_until(stop, self._next_tick(start, started)):
            started = self._clock()
            self._logger.debug("Poll tick")
            self.check_once()
        self._logger.info("Monitor stopped")

    def _wait_until(self, stop: threading.Event, deadline: float) -> bool:
        """Wait for ``deadline`` in short slices; return True once ``stop`` is set."""

        while True:
            remaining = deadline - self._clock()
            if remaining <= 0:
                return stop.is_set()
            if stop.wait(min(remaining, WAIT_SLICE)):
                return True

    def _next_tick(self, start: float, after: float) -> float:
        """Return the first tick time strictly after ``after``."""

        tick = start + (math.floor((after - start) / self._interval) + 1) * self._interval
        if tick <= after:
            tick += self._interval
        return tick
