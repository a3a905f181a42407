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

"""Unit properties that can be queried with `systemctl show --property ...`."""

__all__ = ["Property"]

from enum import StrEnum


class Property(StrEnum):
    """Commonly queried unit properties.

    Notes:
        - See `systemd.exec(5)`, `systemd.service(5)`, and `systemd.unit(5)`
          for the meaning of each property.
    """

    ACTIVE_ENTER_TIMESTAMP = "ActiveEnterTimestamp"
    ACTIVE_EXIT_TIMESTAMP = "ActiveExitTimestamp"
    ACTIVE_STATE = "ActiveState"
    CPU_USAGE_NSEC = "CPUUsageNSec"
    CAN_RELOAD = "CanReload"
    CAN_START = "CanStart"
    CAN_STOP = "CanStop"
    CONTROL_GROUP = "ControlGroup"
    DESCRIPTION = "Description"
    EXEC_MAIN_CODE = "ExecMainCode"
    EXEC_MAIN_EXIT_TIMESTAMP = "ExecMainExitTimestamp"
    EXEC_MAIN_PID = "ExecMainPID"
    EXEC_MAIN_START_TIMESTAMP = "ExecMainStartTimestamp"
    EXEC_MAIN_STATUS = "ExecMainStatus"
    FRAGMENT_PATH = "FragmentPath"
    ID = "Id"
    INACTIVE_ENTER_TIMESTAMP = "InactiveEnterTimestamp"
    LOAD_STATE = "LoadState"
    MAIN_PID = "MainPID"
    MEMORY_CURRENT = "MemoryCurrent"
    MEMORY_PEAK = "MemoryPeak"
    NAMES = "Names"
    N_RESTARTS = "NRestarts"
    RESTART = "Restart"
    RESULT = "Result"
    STATE_CHANGE_TIMESTAMP = "StateChangeTimestamp"
    SUB_STATE = "SubState"
    TASKS_CURRENT = "TasksCurrent"
    TYPE = "Type"
    UNIT_FILE_PRESET = "UnitFilePreset"
    UNIT_FILE_STATE = "UnitFileState"
    USER = "User"
    WANTED_BY = "WantedBy"
