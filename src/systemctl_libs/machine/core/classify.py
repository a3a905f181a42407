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

"""Classify the diagnostic output of `systemctl` into typed errors.

`systemctl` does not report failures through a machine-readable channel, so
the text it writes to standard error is matched against known phrases. The
phrases are checked in order, and the first match wins. More specific phrases
must come before the generic `Failed` marker, otherwise it would mask them.
"""

__all__ = ["PATTERNS", "classify"]

from ...errors import (
    BusFailureError,
    InsufficientPermissionsError,
    SudoPasswordEntryError,
    SystemdError,
    UnitMaskedError,
    UnitNotFoundError,
    UnitNotLoadedError,
    UnspecifiedError,
)

PATTERNS: tuple[tuple[str, type[SystemdError], str], ...] = (
    ("a terminal is required to read the password", SudoPasswordEntryError,
     "sudo requires a terminal to read the password"),
    ("does not exist", UnitNotFoundError, "unit does not exist"),
    ("not found.", UnitNotFoundError, "unit does not exist"),
    ("No such file or directory", UnitNotFoundError, "unit does not exist"),
    ("not loaded.", UnitNotLoadedError, "unit not loaded"),
    ("Interactive authentication required", InsufficientPermissionsError,
     "insufficient permissions"),
    ("Access denied", InsufficientPermissionsError, "insufficient permissions"),
    ("DBUS_SESSION_BUS_ADDRESS", BusFailureError, "bus connection failure"),
    ("is masked", UnitMaskedError, "unit masked"),
    ("Failed", UnspecifiedError, "unknown error"),
)  # fmt: skip


def classify(stderr: str | None, /, returncode: int | None = None) -> SystemdError | None:
    """Map the standard error of a `systemctl` command to a typed error.

    Args:
        stderr: Captured standard error of the command.
        returncode: Exit code of the command. Attached to the returned error.

    Returns:
        An error instance for the first matching phrase, or `None` if no phrase matches.
    """
    if not stderr:
        return None

    for phrase, kind, reason in PATTERNS:
        if phrase in stderr:
            return kind(
                f"{reason}. stderr: {stderr.strip()}", returncode=returncode, stderr=stderr
            )

    return None
