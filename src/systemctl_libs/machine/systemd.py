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

"""Classes and functions for managing operations involving `systemd`/`systemctl`."""

__all__ = [
    "SystemctlServiceManager",
    "daemon_reload",
    "disable",
    "enable",
    "is_active",
    "is_enabled",
    "is_failed",
    "mask",
    "reenable",
    "restart",
    "show",
    "start",
    "status",
    "stop",
    "systemctl",
    "unmask",
]

from collections.abc import Callable, Iterable, Mapping
from typing import Any, NamedTuple

from ..errors import SystemdError, UnitLinkedError, UnitMaskedError, UnspecifiedError
from .core import Result, ServiceManager, build, call, classify
from .options import Options
from .properties import Property


def systemctl(
    subcommand: str,
    /,
    *units: str,
    args: Iterable[str] = (),
    options: Options | None = None,
    check: bool = True,
    **kwargs: Any,
) -> Result:
    """Control systemd units using `systemctl ...` commands.

    Args:
        subcommand: `systemctl` subcommand to run.
        units: Units the subcommand acts on.
        args: Extra arguments appended after the units.
        options: Execution options. Defaults to the system scope without `sudo`.
        check: If set to `True`, raise the error classified from the command's output.

    Keyword Args:
        timeout: Seconds to wait for the command to exit before it is killed.
        cancel: Event that kills the command when set.
        executables: Resolved executable paths to use instead of the default ones.

    Raises:
        SystemdError: Raised if a `systemctl` command fails and check is set to `True`.
    """
    options = options or Options()
    result = call(build(subcommand, options, *units, args=args), options, **kwargs)
    return result.check() if check else result


class _Operation(NamedTuple):
    """Subcommand paired with the rule that interprets its result."""

    subcommand: str
    interpret: Callable[[Result], Any]


def _perform(
    operation: _Operation, units: tuple[str, ...], args: Iterable[str], **kwargs: Any
) -> Any:
    result = systemctl(operation.subcommand, *units, args=args, check=False, **kwargs)
    return operation.interpret(result)


def _action(result: Result) -> None:
    result.check()


def _keywords(table: Mapping[str, bool | type[SystemdError]]) -> Callable[[Result], bool]:
    """Interpret the keyword printed by a query subcommand.

    Notes:
        - Known keywords are trusted over the exit code, because query subcommands
          exit with a non-zero code for perfectly valid answers such as `inactive`.
    """

    def interpret(result: Result) -> bool:
        keyword = result.stdout.strip()
        answer = table.get(keyword)
        if isinstance(answer, bool):
            return answer
        if answer is not None:
            raise answer(
                f"unit is {keyword}", returncode=result.returncode, stderr=result.stderr
            )

        result.check()
        raise UnspecifiedError(
            f"unexpected output `{keyword}`", returncode=result.returncode, stderr=result.stderr
        )

    return interpret


def _status(result: Result) -> str:
    # `systemctl status` follows the LSB exit codes: 1-3 mean the unit is not running.
    if result.returncode in (1, 2, 3) and result.stdout and classify(result.stderr) is None:
        return result.stdout

    result.check()
    return result.stdout


_ACTIVE_STATES = {
    "active": True,
    "reloading": True,
    "inactive": False,
    "failed": False,
    "activating": False,
    "deactivating": False,
}

_ENABLED_STATES = {
    "enabled": True,
    "enabled-runtime": True,
    "alias": True,
    "static": True,
    "indirect": True,
    "generated": True,
    "transient": True,
    "disabled": False,
    "linked": UnitLinkedError,
    "linked-runtime": UnitLinkedError,
    "masked": UnitMaskedError,
    "masked-runtime": UnitMaskedError,
}

_FAILED_STATES = {
    "failed": True,
    "active": False,
    "reloading": False,
    "inactive": False,
    "activating": False,
    "deactivating": False,
}

_DAEMON_RELOAD = _Operation("daemon-reload", _action)
_START = _Operation("start", _action)
_STOP = _Operation("stop", _action)
_RESTART = _Operation("restart", _action)
_ENABLE = _Operation("enable", _action)
_DISABLE = _Operation("disable", _action)
_REENABLE = _Operation("reenable", _action)
_MASK = _Operation("mask", _action)
_UNMASK = _Operation("unmask", _action)
_IS_ACTIVE = _Operation("is-active", _keywords(_ACTIVE_STATES))
_IS_ENABLED = _Operation("is-enabled", _keywords(_ENABLED_STATES))
_IS_FAILED = _Operation("is-failed", _keywords(_FAILED_STATES))
_STATUS = _Operation("status", _status)


def daemon_reload(*args: str, **kwargs: Any) -> None:
    """Reload the service manager's configuration.

    This reruns all generators, reloads all unit files, and recreates the entire
    dependency tree.
    """
    _perform(_DAEMON_RELOAD, (), args, **kwargs)


def start(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Start (activate) a unit."""
    _perform(_START, (unit,), args, **kwargs)


def stop(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Stop (deactivate) a unit."""
    _perform(_STOP, (unit,), args, **kwargs)


def restart(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Stop and then start a unit. The unit is started if it is not running yet."""
    _perform(_RESTART, (unit,), args, **kwargs)


def enable(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Enable a unit by creating the symlinks encoded in its `[Install]` section."""
    _perform(_ENABLE, (unit,), args, **kwargs)


def disable(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Disable a unit by removing the symlinks to its unit file."""
    _perform(_DISABLE, (unit,), args, **kwargs)


def reenable(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Disable and then enable a unit, atomically recreating its symlinks."""
    _perform(_REENABLE, (unit,), args, **kwargs)


def mask(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Mask a unit by linking its unit file to `/dev/null`.

    Notes:
        - `systemctl` masks a unit that does not exist, but still reports it as missing.
          `UnitNotFoundError` is raised in that case even though the unit is masked.
    """
    _perform(_MASK, (unit,), args, **kwargs)


def unmask(unit: str, /, *args: str, **kwargs: Any) -> None:
    """Unmask a unit, undoing the effect of `mask`.

    Notes:
        - `UnitNotFoundError` is raised if the unit does not exist and is not masked.
    """
    _perform(_UNMASK, (unit,), args, **kwargs)


def is_active(unit: str, /, *args: str, **kwargs: Any) -> bool:
    """Check if a unit is active.

    Raises:
        SystemdError: Raised if the state of the unit cannot be determined.
    """
    return _perform(_IS_ACTIVE, (unit,), args, **kwargs)


def is_enabled(unit: str, /, *args: str, **kwargs: Any) -> bool:
    """Check if a unit is enabled.

    Returns:
        `True` if the unit is enabled, aliased, static, indirect, generated, or
        transient. `False` if the unit is disabled.

    Raises:
        UnitLinkedError: Raised if the unit file is linked.
        UnitMaskedError: Raised if the unit is masked.
        SystemdError: Raised if the state of the unit cannot be determined.
    """
    return _perform(_IS_ENABLED, (unit,), args, **kwargs)


def is_failed(unit: str, /, *args: str, **kwargs: Any) -> bool:
    """Check if a unit is in the `failed` state.

    Raises:
        SystemdError: Raised if the state of the unit cannot be determined.
    """
    return _perform(_IS_FAILED, (unit,), args, **kwargs)


def status(unit: str, /, *args: str, **kwargs: Any) -> str:
    """Get the human-readable output of `systemctl status`.

    Notes:
        - Prefer `show` to retrieve unit properties programmatically.
    """
    return _perform(_STATUS, (unit,), args, **kwargs)


def show(unit: str, property: Property | str, /, *args: str, **kwargs: Any) -> str:
    """Get the value of a unit property.

    Notes:
        - The value is returned as-is. An empty value or `[not set]` usually means
          that the property is unavailable, e.g. because the unit is not running.
    """
    result = systemctl("show", unit, args=("--property", str(property), *args), **kwargs)
    return result.stdout.removeprefix(f"{property}=").removesuffix("\n")


class SystemctlServiceManager(ServiceManager):
    """Control a unit using `systemctl`.

    Args:
        unit: Name of the unit to control.
        options: Execution options used for every command.
        timeout: Seconds to wait for each command before it is killed.
    """

    def __init__(
        self, unit: str, /, options: Options | None = None, timeout: float | None = None
    ) -> None:
        self._unit = unit
        self._options = options or Options()
        self._timeout = timeout

    @property
    def _kwargs(self) -> dict[str, Any]:
        return {"options": self._options, "timeout": self._timeout}

    def start(self) -> None:
        """Start unit."""
        start(self._unit, **self._kwargs)

    def stop(self) -> None:
        """Stop unit."""
        stop(self._unit, **self._kwargs)

    def restart(self) -> None:
        """Restart unit."""
        restart(self._unit, **self._kwargs)

    def enable(self) -> None:
        """Enable unit."""
        enable(self._unit, **self._kwargs)

    def disable(self) -> None:
        """Disable unit."""
        disable(self._unit, **self._kwargs)

    def mask(self) -> None:
        """Mask unit."""
        mask(self._unit, **self._kwargs)

    def unmask(self) -> None:
        """Unmask unit."""
        unmask(self._unit, **self._kwargs)

    def is_active(self) -> bool:
        """Check if unit is active."""
        return is_active(self._unit, **self._kwargs)

    def is_enabled(self) -> bool:
        """Check if unit is enabled."""
        return is_enabled(self._unit, **self._kwargs)

    def is_failed(self) -> bool:
        """Check if unit has failed."""
        return is_failed(self._unit, **self._kwargs)
