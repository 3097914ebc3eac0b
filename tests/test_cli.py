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
"""Tests for the wifi-keeper CLI."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pytest

from wifi_keeper import cli
from wifi_keeper.netsh import CommandError


@pytest.fixture(autouse=True)
def _restore_root_logger():  # type: ignore[no-untyped-def]
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("15s", 15.0),
        ("1m30s", 90.0),
        ("500ms", 0.5),
        ("1h", 3600.0),
        ("2.5s", 2.5),
        ("20", 20.0),
    ],
)
def test_parse_duration_accepts_go_style_values(raw: str, expected: float) -> None:
    assert cli.parse_duration(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "abc", "10x", "s", "-5s", "0s", "0", "inf"])
def test_parse_duration_rejects_invalid_values(raw: str) -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_duration(raw)


def test_parse_log_level_accepts_aliases() -> None:
    assert cli.parse_log_level("DEBUG") == logging.DEBUG
    assert cli.parse_log_level("warn") == logging.WARNING
    assert cli.parse_log_level("Warning") == logging.WARNING
    assert cli.parse_log_level("err") == logging.ERROR

    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_log_level("trace")


def test_build_parser_defaults() -> None:
    args = cli.build_parser().parse_args(["--ssid", "home_5G"])

    assert args.ssid == "home_5G"
    assert args.interface == ""
    assert args.interval == 15.0
    assert args.timeout == 10.0
    assert args.log_level == logging.INFO
    assert args.netsh == "netsh"


def test_configure_logging_writes_to_file(tmp_path: Path) -> None:
    log_path = tmp_path / "keeper.log"

    cli.configure_logging(logging.INFO, str(log_path))
    logging.getLogger("wifi_keeper.test").info("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "INFO wifi_keeper.test hello file" in log_path.read_text(encoding="utf-8")


def test_configure_logging_falls_back_to_console(tmp_path: Path) -> None:
    missing = tmp_path / "missing-dir" / "keeper.log"

    cli.configure_logging(logging.INFO, str(missing))

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert not isinstance(handlers[0], logging.FileHandler)
    assert not missing.exists()


def test_main_requires_ssid() -> None:
    assert cli.main([]) == 1


def test_main_fails_when_interface_detection_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_detect(self: object) -> str:
        raise CommandError(["wlan", "show", "interfaces"], 1)

    monkeypatch.setattr(cli.WlanClient, "detect_interface", fail_detect)

    assert cli.main(["--ssid", "home_5G"]) == 1


def test_main_runs_monitor_with_resolved_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_run(self: cli.ReconnectMonitor, stop_event: object = None) -> None:
        seen["ssid"] = self._ssid
        seen["interface"] = self._interface
        seen["interval"] = self._interval

    monkeypatch.setattr(cli.WlanClient, "detect_interface", lambda self: "WLAN")
    monkeypatch.setattr(cli.ReconnectMonitor, "run", fake_run)
    monkeypatch.setattr(cli, "install_signal_handlers", lambda stop_event: None)

    assert cli.main(["--ssid", "home_5G", "--interval", "1m"]) == 0
    assert seen == {"ssid": "home_5G", "interface": "WLAN", "interval": 60.0}


def test_main_passes_ssid_and_interface_unchanged(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_run(self: cli.ReconnectMonitor, stop_event: object = None) -> None:
        seen["ssid"] = self._ssid
        seen["interface"] = self._interface

    monkeypatch.setattr(cli.ReconnectMonitor, "run", fake_run)
    monkeypatch.setattr(cli, "install_signal_handlers", lambda stop_event: None)

    assert cli.main(["--ssid", " cafe guest ", "--interface", "Wi-Fi 2"]) == 0
    assert seen == {"ssid": " cafe guest ", "interface": "Wi-Fi 2"}
