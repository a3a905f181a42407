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

"""Configure integration tests that run against a live `systemctl`."""

import os
import shutil
from pathlib import Path

import pytest

from systemctl_libs.is_systemd import is_systemd


def _systemd_available() -> bool:
    try:
        return shutil.which("systemctl") is not None and is_systemd()
    except OSError:
        return False


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Skip every test in this directory unless the machine is running `systemd`."""
    if _systemd_available():
        return

    here = Path(__file__).parent
    skip = pytest.mark.skip(reason="machine is not running systemd")
    for item in items:
        if here in item.path.parents:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def superuser() -> bool:
    """Check if the tests are running as root."""
    return os.geteuid() == 0
