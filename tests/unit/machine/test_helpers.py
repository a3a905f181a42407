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

"""Unit tests for the `systemctl` helper functions."""

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest
from pytest_mock import MockerFixture

from systemctl_libs.errors import UnitNotActiveError, UnitNotFoundError, ValueNotSetError
from systemctl_libs.machine import (
    Options,
    Result,
    Scope,
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

LIST_UNITS = """  proc-sys-fs-binfmt_misc.automount loaded active   waiting Arbitrary Executable File Formats File System Automount Point
  dev-loop0.device                  loaded active   plugged /dev/loop0
● mdmonitor.service                 loaded failed   failed  Software RAID monitoring and management
  nginx.service                     loaded active   running A high performance web server and a reverse proxy server
  nonexistent.service               not-found inactive dead nonexistent.service
  broken line
"""  # noqa E501

LIST_UNIT_FILES = """cryptdisks-early.service masked enabled
cryptdisks.service       masked enabled
hwclock.service          masked enabled
nginx.service            enabled enabled
"""

LIST_SOCKETS = """/run/dbus/system_bus_socket dbus.socket          dbus.service
/run/nginx.sock             nginx.socket         nginx.service
[::]:80                     nginx-http.socket    nginx.service
/run/systemd/journal/stdout systemd-journald.socket systemd-journald.service
"""


@pytest.fixture
def mock_call(mocker: MockerFixture) -> Mock:
    """Create a mocked `call` function."""
    return mocker.patch("systemctl_libs.machine.systemd.call")


def _stdout(mock_call: Mock, stdout: str) -> None:
    mock_call.return_value = Result(stdout=stdout, stderr="", returncode=0)


class TestGetStartTime:
    """Test the `get_start_time` function."""

    def test_utc(self, mock_call) -> None:
        """Test that UTC timestamps are returned timezone-aware."""
        _stdout(mock_call, "ExecMainStartTimestamp=Mon 2024-06-03 14:05:09 UTC\n")
        assert get_start_time("nginx") == datetime(2024, 6, 3, 14, 5, 9, tzinfo=UTC)
        mock_call.assert_called_once_with(
            ["show", "--system", "nginx", "--property", "ExecMainStartTimestamp"], Options()
        )

    def test_other_timezone(self, mock_call) -> None:
        """Test that timestamps in other timezones are returned naive."""
        _stdout(mock_call, "ExecMainStartTimestamp=Tue 2024-06-04 09:00:00 CEST\n")
        assert get_start_time("nginx") == datetime(2024, 6, 4, 9, 0, 0)

    def test_not_active(self, mock_call) -> None:
        """Test that an empty timestamp means the unit is not active."""
        _stdout(mock_call, "ExecMainStartTimestamp=\n")
        with pytest.raises(UnitNotActiveError) as exec_info:
            get_start_time("nginx")

        assert exec_info.value.message == "unit 'nginx' is not active"


def test_get_num_restarts(mock_call) -> None:
    """Test the `get_num_restarts` function."""
    _stdout(mock_call, "NRestarts=3\n")
    assert get_num_restarts("nginx", options=Options(scope=Scope.USER)) == 3
    mock_call.assert_called_once_with(
        ["show", "--user", "nginx", "--property", "NRestarts"], Options(scope=Scope.USER)
    )


def test_get_pid(mock_call) -> None:
    """Test the `get_pid` function."""
    _stdout(mock_call, "MainPID=1234\n")
    assert get_pid("nginx") == 1234


class TestGetMemoryUsage:
    """Test the `get_memory_usage` function."""

    def test_memory_usage(self, mock_call) -> None:
        """Test that memory usage is returned in bytes."""
        _stdout(mock_call, "MemoryCurrent=5365760\n")
        assert get_memory_usage("nginx") == 5365760

    def test_not_set(self, mock_call) -> None:
        """Test that `[not set]` means that the value is unavailable."""
        _stdout(mock_call, "MemoryCurrent=[not set]\n")
        with pytest.raises(ValueNotSetError):
            get_memory_usage("init.scope")


@pytest.mark.parametrize(
    "stdout,expected",
    (
        pytest.param("SubState=running\n", True, id="running"),
        pytest.param("SubState=exited\n", False, id="exited"),
        pytest.param("SubState=dead\n", False, id="dead"),
    ),
)
def test_is_running(mock_call, stdout, expected) -> None:
    """Test the `is_running` function."""
    _stdout(mock_call, stdout)
    assert is_running("nginx") is expected


def test_get_units(mock_call) -> None:
    """Test the `get_units` function."""
    _stdout(mock_call, LIST_UNITS)
    units = get_units()

    assert len(units) == 5
    assert units[0] == Unit(
        name="proc-sys-fs-binfmt_misc.automount",
        load="loaded",
        active="active",
        sub="waiting",
        description="Arbitrary Executable File Formats File System Automount Point",
    )
    assert units[2] == Unit(
        "mdmonitor.service",
        "loaded",
        "failed",
        "failed",
        "Software RAID monitoring and management",
    )
    assert units[4].load == "not-found"
    mock_call.assert_called_once_with(
        ["list-units", "--system", "--all", "--no-legend", "--full", "--no-pager"], Options()
    )


def test_get_units_error(mock_call) -> None:
    """Test that `get_units` raises classified errors."""
    mock_call.return_value = Result(
        stdout="",
        stderr="",
        returncode=1,
        error=UnitNotFoundError("unit does not exist", returncode=1),
    )
    with pytest.raises(UnitNotFoundError):
        get_units()


def test_get_masked_units(mock_call) -> None:
    """Test the `get_masked_units` function."""
    _stdout(mock_call, LIST_UNIT_FILES)
    assert get_masked_units() == ["cryptdisks-early", "cryptdisks", "hwclock"]
    mock_call.assert_called_once_with(
        ["list-unit-files", "--system", "--state=masked", "--no-legend"], Options()
    )


@pytest.mark.parametrize(
    "unit,expected",
    (
        pytest.param("hwclock", True, id="masked"),
        pytest.param("hwclock.service", True, id="masked with suffix"),
        pytest.param("nginx", False, id="not masked"),
    ),
)
def test_is_masked(mock_call, unit, expected) -> None:
    """Test the `is_masked` function."""
    _stdout(mock_call, LIST_UNIT_FILES)
    assert is_masked(unit) is expected


def test_get_sockets_for_service_unit(mock_call) -> None:
    """Test the `get_sockets_for_service_unit` function."""
    _stdout(mock_call, LIST_SOCKETS)
    assert get_sockets_for_service_unit("nginx") == ["nginx.socket", "nginx-http.socket"]
    assert get_sockets_for_service_unit("systemd-journald") == ["systemd-journald.socket"]
    assert get_sockets_for_service_unit("sshd") == []
    mock_call.assert_called_with(
        ["list-sockets", "--system", "--all", "--no-legend", "--no-pager"], Options()
    )
