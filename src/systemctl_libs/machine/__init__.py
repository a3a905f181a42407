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

"""Machine libraries for controlling `systemd` units."""

__all__ = [
    # From `core` module
    "Executables",
    "Result",
    "ServiceManager",
    "build",
    "call",
    "classify",
    "default_executables",
    # From `helpers.py`
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
    # From `options.py`
    "Options",
    "Scope",
    # From `properties.py`
    "Property",
    # From `systemd.py`
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

from systemctl_libs.machine.core import (
    Executables,
    Result,
    ServiceManager,
    build,
    call,
    classify,
    default_executables,
)
from systemctl_libs.machine.helpers import (
    UNIT_TYPES,
    Unit,
    get_masked_units,
    get_memory_usage,
    get_num_restarts,
    get_pid,
    get_sockets_for_service_unit,
    get_start_time,
    get_units,
    is_masked,
    is_running,
)
from systemctl_libs.machine.options import Options, Scope
from systemctl_libs.machine.properties import Property
from systemctl_libs.machine.systemd import (
    SystemctlServiceManager,
    daemon_reload,
    disable,
    enable,
    is_active,
    is_enabled,
    is_failed,
    mask,
    reenable,
    restart,
    show,
    start,
    status,
    stop,
    systemctl,
    unmask,
)
