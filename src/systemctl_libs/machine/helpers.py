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

"""Typed accessors and aggregations built on top of `systemctl` commands."""

__all__ = [
    "UNIT_TYPES",
    "Unit",
    "get_masked_units",
    "get_memory_usage",
    "get_num_restarts",
    "get_pid",
    "get_sockets_for_service_unit",
    "get_start_time",
    "get_units",
    "is_masked",
    "is_running",
]

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from ..errors import UnitNotActiveError, ValueNotSetError
from ..utils import plog
from .properties import Property
from .systemd import show, systemctl

_logger = logging.getLogger(__name__)

UNIT_TYPES = (
    "automount",
    "device",
    "mount",
    "path",
    "scope",
    "service",
    "slice",
    "snapshot",
    "socket",
    "swap",
    "target",
    "timer",
)

# Format of timestamps printed by `systemctl show`, minus the trailing timezone name.
TIMESTAMP_FORMAT = "%a %Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Unit:
    """Unit entry listed by `systemctl list-units`."""

    name: str
    load: str
    active: str
    sub: str
    description: str = ""


def _strip_type(unit: str) -> str:
    """Strip a known unit type suffix, e.g. `nginx.service` -> `nginx`."""
    name, _, suffix = unit.rpartition(".")
    return name if name and suffix in UNIT_TYPES else unit


def get_start_time(unit: str, /, **kwargs: Any) -> datetime:
    """Get the time the main process of a unit was started.

    Raises:
        UnitNotActiveError: Raised if the unit is not running.

    Notes:
        - Timestamps in `UTC` or `GMT` are returned timezone-aware. Timestamps in
          any other timezone are returned naive, in the timezone they were printed in.
    """
    value = show(unit, Property.EXEC_MAIN_START_TIMESTAMP, **kwargs)
    if not value:
        raise UnitNotActiveError(f"unit '{unit}' is not active")

    timestamp, _, tz = value.rpartition(" ")
    start = datetime.strptime(timestamp, TIMESTAMP_FORMAT)
    return start.replace(tzinfo=UTC) if tz in ("UTC", "GMT") else start


def get_num_restarts(unit: str, /, **kwargs: Any) -> int:
    """Get the number of times the service manager restarted a unit."""
    return int(show(unit, Property.N_RESTARTS, **kwargs))


def get_memory_usage(unit: str, /, **kwargs: Any) -> int:
    """Get the current memory usage of a unit in bytes.

    Raises:
        ValueNotSetError: Raised if memory usage is not tracked for the unit.
    """
    value = show(unit, Property.MEMORY_CURRENT, **kwargs)
    if value == "[not set]":
        raise ValueNotSetError(f"memory usage of unit '{unit}' is not set")

    return int(value)


def get_pid(unit: str, /, **kwargs: Any) -> int:
    """Get the PID of the main process of a unit. `0` means no process is running."""
    return int(show(unit, Property.MAIN_PID, **kwargs))


def is_running(unit: str, /, **kwargs: Any) -> bool:
    """Check if the sub-state of a unit is `running`."""
    return show(unit, Property.SUB_STATE, **kwargs) == "running"


def get_units(**kwargs: Any) -> list[Unit]:
    """Get all units loaded by the service manager and their states."""
    result = systemctl(
        "list-units", args=("--all", "--no-legend", "--full", "--no-pager"), **kwargs
    )
    units = []
    for line in result.stdout.splitlines():
        # Failed units are prefixed with a status marker, e.g. `● foo.service ...`.
        fields = line.lstrip("●* ").split()
        if len(fields) < 4:
            continue

        name, load, active, sub, *description = fields
        units.append(Unit(name, load, active, sub, " ".join(description)))

    _logger.debug("found %s units:\n%s", len(units), plog(units))
    return units


def get_masked_units(**kwargs: Any) -> list[str]:
    """Get the names of all masked units, without their type suffix."""
    result = systemctl("list-unit-files", args=("--state=masked", "--no-legend"), **kwargs)
    units = []
    for line in result.stdout.splitlines():
        fields = line.split()
        if len(fields) >= 2 and fields[1] == "masked":
            units.append(_strip_type(fields[0]))

    _logger.debug("found masked units:\n%s", plog(units))
    return units


def is_masked(unit: str, /, **kwargs: Any) -> bool:
    """Check if a unit is masked. The unit's type suffix is optional."""
    return _strip_type(unit) in get_masked_units(**kwargs)


def get_sockets_for_service_unit(unit: str, /, **kwargs: Any) -> list[str]:
    """Get the socket units that activate a service unit.

    Args:
        unit: Name of the service unit, without the `.service` suffix.
    """
    result = systemctl("list-sockets", args=("--all", "--no-legend", "--no-pager"), **kwargs)
    sockets = []
    for line in result.stdout.splitlines():
        fields = line.split()
        if len(fields) < 3:
            continue

        _, socket, activates, *_ = fields
        if activates == f"{_strip_type(unit)}.service":
            sockets.append(socket)

    return sockets
