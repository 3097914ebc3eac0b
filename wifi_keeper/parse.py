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
"""Parsers for `netsh wlan show ...` text output.

All label matching lives here: raw command output goes in, plain values come
out. The label spellings themselves are kept in :mod:`wifi_keeper.models`.
"""

from __future__ import annotations

from typing import Iterable

from wifi_keeper.models import (
    BSSID_MARKER,
    INTERFACE_NAME_LABELS,
    NO_NETWORKS_MESSAGES,
    SCAN_SSID_PREFIX,
    SSID_LABEL,
    STATE_LABELS,
    InterfaceStatus,
)


def parse_interface_names(output: str) -> list[str]:
    """Return the non-empty interface names listed by `show interfaces`."""

    names: list[str] = []
    for line in output.splitlines():
        value = _labeled_value(line.strip(), INTERFACE_NAME_LABELS)
        if value:
            names.append(value)
    return names


def parse_interface_blocks(output: str) -> list[InterfaceStatus]:
    """Split `show interfaces` output into one status per interface block."""

    blocks: list[InterfaceStatus] = []
    name: str | None = None
    ssid = ""
    state = ""
    for line in output.splitlines():
        trimmed = line.strip()
        new_name = _labeled_value(trimmed, INTERFACE_NAME_LABELS)
        if new_name is not None:
            if name is not None:
                blocks.append(InterfaceStatus(name, ssid, state))
            name, ssid, state = new_name, "", ""
            continue
        if name is None:
            continue
        if not ssid and BSSID_MARKER not in trimmed.split(":", 1)[0]:
            ssid = _labeled_value(trimmed, (SSID_LABEL,)) or ""
            if ssid:
                continue
        if not state:
            state = _labeled_value(trimmed, STATE_LABELS) or ""
    if name is not None:
        blocks.append(InterfaceStatus(name, ssid, state))
    return blocks


def find_interface_status(output: str, interface: str) -> InterfaceStatus | None:
    """Return the status block for ``interface`` or None when it is absent."""

    for block in parse_interface_blocks(output):
        if block.name == interface:
            return block
    return None


def parse_visible_ssids(output: str) -> list[str]:
    """Extract SSIDs from `show networks` list entries such as ``SSID 1 : home``."""

    ssids: list[str] = []
    for line in output.splitlines():
        trimmed = line.strip()
        if not trimmed.startswith(SCAN_SSID_PREFIX):
            continue
        parts = trimmed.split(":", 1)
        if len(parts) == 2:
            ssids.append(parts[1].strip())
    return ssids


def is_no_networks_message(text: str) -> bool:
    """Return True when ``text`` reports that no wireless network is visible."""

    return any(message in text for message in NO_NETWORKS_MESSAGES)


def _labeled_value(line: str, labels: Iterable[str]) -> str | None:
    """Return the trimmed value of ``label : value`` when the line starts with a label."""

    if ":" not in line:
        return None
    if not any(line.startswith(label) for label in labels):
        return None
    return line.split(":", 1)[1].strip()
