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
"""Data models for wifi-keeper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

# Labels printed by `netsh wlan show ...` on Chinese and English systems.
INTERFACE_NAME_LABELS: tuple[str, ...] = ("名称", "Name")
SSID_LABEL = "SSID"
BSSID_MARKER = "BSSID"
STATE_LABELS: tuple[str, ...] = ("状态", "State")
CONNECTED_STATES: tuple[str, ...] = ("已连接", "connected")
SCAN_SSID_PREFIX = "SSID "
NO_NETWORKS_MESSAGES: tuple[str, ...] = (
    "没有无线网络可见",
    "No wireless networks are currently visible",
)

# Outcome codes of a single poll tick.
OUTCOME_CONNECTED = "CONNECTED"
OUTCOME_STATUS_ERROR = "STATUS_ERROR"
OUTCOME_VISIBILITY_ERROR = "VISIBILITY_ERROR"
OUTCOME_NOT_VISIBLE = "NOT_VISIBLE"
OUTCOME_RECONNECT_SENT = "RECONNECT_SENT"
OUTCOME_RECONNECT_FAILED = "RECONNECT_FAILED"


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished netsh invocation."""

    args: Sequence[str]
    stdout: str
    stderr: str
    returncode: int
    duration: float = 0.0


@dataclass(frozen=True)
class InterfaceStatus:
    """SSID and association state parsed from one interface block."""

    name: str
    ssid: str = ""
    state: str = ""

    def is_connected_to(self, ssid: str) -> bool:
        """Return True when associated with ``ssid`` in the connected state."""

        return self.ssid == ssid and is_connected_state(self.state)


def is_connected_state(state: str) -> bool:
    """Return True when ``state`` is a recognized "connected" token."""

    lowered = state.strip().casefold()
    return any(lowered == token.casefold() for token in CONNECTED_STATES)
