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
"""Wireless interface queries and commands built on `netsh wlan`."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from wifi_keeper.models import CommandResult
from wifi_keeper.netsh import COMMAND_TIMEOUT, CommandError, NetshRunner
from wifi_keeper.parse import (
    find_interface_status,
    is_no_networks_message,
    parse_interface_names,
    parse_visible_ssids,
)

_LOGGER = logging.getLogger(__name__)

Runner = Callable[[Sequence[str], float], CommandResult]

SHOW_INTERFACES = ("wlan", "show", "interfaces")


class InterfaceNotFoundError(LookupError):
    """No wireless interface name could be found in netsh output."""


class WlanClient:
    """Query and command one machine's wireless interfaces through netsh."""

    def __init__(
        self,
        runner: Runner | None = None,
        timeout: float = COMMAND_TIMEOUT,
        connect_timeout: float | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._runner: Runner = runner or NetshRunner()
        self._timeout = timeout
        self._connect_timeout = connect_timeout if connect_timeout is not None else timeout * 2
        self._logger = logger or _LOGGER

    def detect_interface(self) -> str:
        """Return the name of the first wireless interface netsh reports."""

        self._logger.debug("Detecting wireless interface")
        result = self._runner(SHOW_INTERFACES, self._timeout)
        names = parse_interface_names(result.stdout)
        if not names:
            raise InterfaceNotFoundError(
                "no wireless interface found in 'netsh wlan show interfaces' output"
            )
        self._logger.info("Detected wireless interface %s", names[0])
        return names[0]

    def is_connected(self, ssid: str, interface: str) -> bool:
        """Return True when ``interface`` is associated with ``ssid`` and connected.

        Missing or unparseable status is reported as not connected. Only a
        failing netsh command raises :class:`CommandError`.
        """

        self._logger.debug("Checking connection state of %s for %s", interface, ssid)
        result = self._runner(SHOW_INTERFACES, self._timeout)
        status = find_interface_status(result.stdout, interface)
        if status is None:
            self._logger.debug("Interface %s not found in status output", interface)
            return False
        if status.is_connected_to(ssid):
            self._logger.debug("Interface %s connected to %s", interface, ssid)
            return True
        if status.ssid == ssid:
            self._logger.debug(
                "Interface %s sees %s but state is %r", interface, ssid, status.state
            )
        else:
            self._logger.debug(
                "Interface %s on %r (state %r)", interface, status.ssid, status.state
            )
        return False

    def is_network_visible(self, ssid: str, interface: str) -> bool:
        """Return True when ``ssid`` appears in a scan on ``interface``."""

        self._logger.debug("Scanning for %s on %s", ssid, interface)
        args = ("wlan", "show", "networks", f'interface="{interface}"', "mode=bssid")
        try:
            result = self._runner(args, self._timeout)
        except CommandError as exc:
            if is_no_networks_message(exc.stderr) or is_no_networks_message(exc.stdout):
                self._logger.info("No wireless networks visible on %s", interface)
                return False
            raise

        for scanned in parse_visible_ssids(result.stdout):
            self._logger.debug("Visible SSID %s", scanned)
            if scanned == ssid:
                self._logger.info("Network %s is visible on %s", ssid, interface)
                return True
        self._logger.info("Network %s is not visible on %s", ssid, interface)
        return False

    def connect(self, ssid: str, interface: str) -> None:
        """Ask netsh to connect ``interface`` to ``ssid``.

        Returning normally only means netsh accepted the request; association
        completes later and is confirmed by the next status check.
        """

        self._logger.info("Connecting %s to %s", interface, ssid)
        args = ("wlan", "connect", f'name="{ssid}"', f'interface="{interface}"')
        try:
            self._runner(args, self._connect_timeout)
        except CommandError as exc:
            self._logger.error(
                "Connect command for %s failed: %s", ssid, exc.stderr.strip() or "<empty>"
            )
            raise
        self._logger.info("Connect command for %s accepted", ssid)
