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

"""Common errors raised by functions and methods in the `systemctl_libs` package."""

__all__ = [
    "Error",
    "SystemdError",
    "BusFailureError",
    "CommandTimeoutError",
    "InsufficientPermissionsError",
    "NoSudoError",
    "NotInstalledError",
    "SudoPasswordEntryError",
    "UnitLinkedError",
    "UnitMaskedError",
    "UnitNotActiveError",
    "UnitNotFoundError",
    "UnitNotLoadedError",
    "UnspecifiedError",
    "ValueNotSetError",
]


class Error(Exception):
    """Base error used to compose other errors."""

    @property
    def message(self) -> str:
        """Return message passed as first argument to error."""
        return self.args[0]


class SystemdError(Error):
    """Error raised if a `systemd`-related operation fails.

    Args:
        message: Description of the failure.
        returncode: Exit code of the `systemctl` command, if one was collected.
        stderr: Captured standard error of the `systemctl` command, if any.
    """

    def __init__(
        self, message: str, /, *, returncode: int | None = None, stderr: str | None = None
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


# Errors detected before or instead of collecting a command's exit status.


class NotInstalledError(SystemdError):
    """Error raised if `systemctl` cannot be found on `$PATH`."""


class NoSudoError(SystemdError):
    """Error raised if privilege elevation is requested but `sudo` cannot be found."""


class CommandTimeoutError(SystemdError):
    """Error raised if a command is cancelled or exceeds its deadline before exiting."""


# Errors classified from the diagnostic text written by `systemctl`.


class SudoPasswordEntryError(SystemdError):
    """Error raised if `sudo` needs a terminal to read a password, but none is available."""


class UnitNotFoundError(SystemdError):
    """Error raised if the unit does not exist or cannot be found."""


class UnitNotLoadedError(SystemdError):
    """Error raised if a unit was expected to be loaded, but was not.

    Notes:
        - Stopping a unit that does not exist is a common way to hit this error.
    """


class InsufficientPermissionsError(SystemdError):
    """Error raised if the caller is not authorized to run the selected command.

    Notes:
        - Running as superuser or adding the correct PolicyKit rules resolves this error.
    """


class BusFailureError(SystemdError):
    """Error raised if the connection to the service manager's bus fails.

    Notes:
        - `$DBUS_SESSION_BUS_ADDRESS` and `$XDG_RUNTIME_DIR` are usually undefined
          when this happens, e.g. when running `--user` commands as root.
    """


class UnitMaskedError(SystemdError):
    """Error raised if the unit is masked.

    Notes:
        - Masked units can only be unmasked. Unmask the unit before acting on it.
    """


class UnspecifiedError(SystemdError):
    """Error raised if a command fails in a way that matches no known failure."""


# Errors raised while interpreting the output of a successful command.


class UnitLinkedError(SystemdError):
    """Error raised if the unit file resides outside of the unit file search path."""


class UnitNotActiveError(SystemdError):
    """Error raised if a unit was expected to be running, but was found inactive."""


class ValueNotSetError(SystemdError):
    """Error raised if a unit property has no value set."""
