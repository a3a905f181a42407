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

"""Detect if `systemd` is the init system of the machine.

Every `systemctl` command in this package assumes that `systemd` is running as
PID 1. Containers and some minimal environments use a different init system, in
which case `systemctl` is either missing or fails to connect to the service manager.

### Example Usage:

```python3
from systemctl_libs.is_systemd import is_systemd
from systemctl_libs.machine import start

if is_systemd():
    start("nginx")
```
"""

__all__ = ["is_systemd"]

from pathlib import Path

INIT_COMM = Path("/proc/1/comm")


def is_systemd() -> bool:
    """Detect if `systemd` is running as PID 1.

    Raises:
        OSError: Raised if the command name of PID 1 cannot be read.
    """
    return INIT_COMM.read_text().strip() == "systemd"
