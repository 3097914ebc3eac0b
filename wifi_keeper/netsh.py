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
"""Run the netsh CLI with a bounded timeout."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Sequence

from wifi_keeper.models import CommandResult

_LOGGER = logging.getLogger(__name__)

COMMAND_TIMEOUT = 10.0


class CommandError(Exception):
    """A netsh invocation failed to start or exited non-zero."""

    def __init__(
        self,
        args: Sequence[str],
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if reason is None:
            reason = f"exit status {returncode}"
        message = f"command '{' '.join(self.command)}' failed: {reason}"
        if stderr.strip():
            message = f"{message}, stderr: {stderr.strip()}"
        super().__init__(message)


class CommandTimeoutError(CommandError):
    """A netsh invocation did not finish within its timeout."""

    def __init__(
        self,
        args: Sequence[str],
        timeout: float,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.timeout = timeout
        super().__init__(args, None, stdout, stderr, reason=f"timed out after {timeout:g}s")


class NetshRunner:
    """Callable that runs ``netsh`` sub-commands and captures their output."""

    def __init__(self, netsh_cmd: str = "netsh", encoding: str | None = None) -> None:
        self._netsh_cmd = netsh_cmd
        self._encoding = encoding

    def __call__(self, args: Sequence[str], timeout: float = COMMAND_TIMEOUT) -> CommandResult:
        command = [self._netsh_cmd, *args]
        _LOGGER.debug("Running %s (timeout=%ss)", " ".join(command), timeout)
        started = time.monotonic()
        try:
            completed = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                encoding=self._encoding,
                errors="replace",
                timeout=timeout,
                creationflags=_hidden_window_flags(),
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandTimeoutError(
                args,
                timeout,
                stdout=_as_text(exc.stdout, self._encoding),
                stderr=_as_text(exc.stderr, self._encoding),
            ) from exc
        except OSError as exc:
            raise CommandError(args, None, reason=str(exc)) from exc

        result = CommandResult(
            args=tuple(args),
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
            duration=time.monotonic() - started,
        )
        if result.returncode != 0:
            raise CommandError(args, result.returncode, result.stdout, result.stderr)
        return result


def _hidden_window_flags() -> int:
    """Return creation flags that keep the child console window hidden."""

    if os.name != "nt":
        return 0
    return getattr(subprocess, "CREATE_NO_WINDOW", 0)


def _as_text(output: str | bytes | None, encoding: str | None) -> str:
    """Decode partial output captured before a timeout."""

    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode(encoding or "utf-8", errors="replace")
    return output
