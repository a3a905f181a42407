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

"""Unit tests for the `is_systemd` library."""

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from systemctl_libs.is_systemd import is_systemd


@pytest.mark.parametrize(
    "comm,expected",
    (
        pytest.param("systemd\n", True, id="systemd"),
        pytest.param("init\n", False, id="sysvinit"),
        pytest.param("bash\n", False, id="container"),
    ),
)
def test_is_systemd(fs: FakeFilesystem, comm, expected) -> None:
    """Test that `is_systemd` checks the command name of PID 1."""
    fs.create_file("/proc/1/comm", contents=comm)
    assert is_systemd() is expected


def test_is_systemd_unreadable(fs: FakeFilesystem) -> None:
    """Test that errors reading the command name of PID 1 are propagated."""
    with pytest.raises(OSError):
        is_systemd()
