# Copyright 2025 Canonical Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Call `systemctl` with logging, cancellation, and error classification enabled."""

__all__ = ["Result", "call"]

import logging
import subprocess
import threading
import time
from collections.abc import Sequence
from typing import NamedTuple

from ...errors import (
    CommandTimeoutError,
    NoSudoError,
    NotInstalledError,
    SystemdError,
    UnspecifiedError,
)
from ..options import Options
from .args import Executables, build_command, default_executables
from .classify import classify

_logger = logging.getLogger(__name__)

# Interval used to check the cancellation event while waiting on a command.
POLL_INTERVAL = 0.1

# Seconds a terminated command is given to exit before it is killed.
KILL_GRACE = 1.0


class Result(NamedTuple):
    """Outcome of a `systemctl` command.

    Attributes:
        stdout: Captured standard output. Trailing newlines are preserved.
        stderr: Captured standard error.
        returncode: Exit code of the command.
        error: Error classified from `stderr` and `returncode`, or `None`.
    """

    stdout: str
    stderr: str
    returncode: int
    error: SystemdError | None = None

    def check(self) -> "Result":
        """Raise the classified error, if any. Otherwise return this result."""
        if self.error is not None:
            raise self.error

        return self


def _communicate(
    process: subprocess.Popen,
    stdin: str | None,
    timeout: float | None,
    cancel: threading.Event | None,
) -> tuple[str, str]:
    """Wait for `process` to exit, honoring the deadline and cancellation event.

    Raises:
        subprocess.TimeoutExpired:
            Raised if the deadline elapses or `cancel` is set before the process exits.
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    while True:
        if cancel is not None and cancel.is_set():
            raise subprocess.TimeoutExpired(process.args, timeout or 0)

        wait = None if deadline is None else max(deadline - time.monotonic(), 0)
        if cancel is not None:
            wait = POLL_INTERVAL if wait is None else min(wait, POLL_INTERVAL)

        try:
            return process.communicate(input=stdin, timeout=wait)
        except subprocess.TimeoutExpired:
            if deadline is not None and time.monotonic() >= deadline:
                raise

        # Input is only sent by the first call. Later calls collect output.
        stdin = None


def _stop(process: subprocess.Popen) -> None:
    """Terminate `process`, then kill it if it does not exit within `KILL_GRACE` seconds.

    Notes:
        - `sudo` relays SIGTERM to the command it runs, but SIGKILL cannot be relayed.
          If `sudo` has to be killed, the `systemctl` process it started keeps running.
    """
    process.terminate()
    try:
        process.communicate(timeout=KILL_GRACE)
    except subprocess.TimeoutExpired:
        process.kill()
        process.communicate()


def call(
    args: Sequence[str],
    /,
    options: Options | None = None,
    *,
    timeout: float | None = None,
    cancel: threading.Event | None = None,
    executables: Executables | None = None,
) -> Result:
    """Call `systemctl` with logging enabled.

    Args:
        args: Arguments to pass to `systemctl`, usually produced by `build`.
        options: Execution options. Defaults to running without `sudo`.
        timeout: Seconds to wait for the command to exit before it is killed.
        cancel: Event that kills the command when set.
        executables: Resolved executable paths. Defaults to `default_executables()`.

    Raises:
        NotInstalledError: Raised if `systemctl` is not installed.
        NoSudoError: Raised if `sudo` is requested but is not installed.
        CommandTimeoutError: Raised if the command is cancelled or exceeds `timeout`.

    Notes:
        - Errors classified after the command exits are not raised. They are stored
          in `Result.error`. Call `Result.check()` to raise them.
    """
    options = options or Options()
    executables = executables or default_executables()
    if executables.systemctl is None:
        raise NotInstalledError("systemctl not in $PATH")
    if options.sudo and executables.sudo is None:
        raise NoSudoError("sudo not in $PATH")

    cmd = build_command(args, options, executables)
    if (timeout is not None and timeout <= 0) or (cancel is not None and cancel.is_set()):
        _logger.warning("command '%s' cancelled before it was started", " ".join(cmd))
        raise CommandTimeoutError(f"command '{' '.join(cmd)}' timed out")

    stdin = f"{options.sudo_password}\n" if options.sudo_password else None
    _logger.debug("running command %s", cmd)
    process = subprocess.Popen(
        cmd,
        stdin=subprocess.PIPE if stdin else subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    try:
        stdout, stderr = _communicate(process, stdin, timeout, cancel)
    except subprocess.TimeoutExpired:
        _stop(process)
        _logger.warning("command '%s' timed out and was killed", " ".join(cmd))
        raise CommandTimeoutError(f"command '{' '.join(cmd)}' timed out")
    except BaseException:
        _stop(process)
        raise

    stdout = stdout or ""
    stderr = stderr or ""
    returncode = process.returncode
    error = classify(stderr, returncode=returncode)
    if error is None and returncode != 0:
        error = UnspecifiedError(
            f"received exit code {returncode} for stderr `{stderr.strip()}`",
            returncode=returncode,
            stderr=stderr,
        )

    if error is not None:
        _logger.error(
            "command '%s' failed with:\nexit code %s\nstderr: %s\nerror: %s",
            " ".join(cmd),
            returncode,
            stderr,
            type(error).__name__,
        )

    _logger.debug(
        "command '%s' completed with:\nexit code: %s\nstdout: %s\nstderr: %s",
        " ".join(cmd),
        returncode,
        stdout,
        stderr,
    )
    return Result(stdout=stdout, stderr=stderr, returncode=returncode, error=error)
