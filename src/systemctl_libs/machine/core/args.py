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

"""Build argument vectors for `systemctl` commands."""

__all__ = ["Executables", "build", "build_command", "default_executables"]

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from functools import cache
from typing import Self

from ..options import Options

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Executables:
    """Resolved paths of the executables used to run `systemctl` commands.

    Args:
        systemctl: Path to `systemctl`. `None` if it is not installed.
        sudo: Path to `sudo`. `None` if it is not installed.
    """

    systemctl: str | None
    sudo: str | None = None

    @classmethod
    def resolve(cls) -> Self:
        """Look up `systemctl` and `sudo` on `$PATH`."""
        executables = cls(systemctl=shutil.which("systemctl"), sudo=shutil.which("sudo"))
        _logger.debug("resolved executables %s", executables)
        return executables


@cache
def default_executables() -> Executables:
    """Get executables resolved on first use and reused for the process lifetime."""
    return Executables.resolve()


def build(
    subcommand: str, options: Options, /, *units: str, args: Iterable[str] = ()
) -> list[str]:
    """Build the arguments passed to `systemctl`.

    Args:
        subcommand: `systemctl` subcommand to run, e.g. `start`.
        options: Execution options that select the scope flag.
        units: Units the subcommand acts on.
        args: Extra arguments appended after the units, e.g. `--no-block`.
    """
    return [subcommand, options.scope.flag, *units, *args]


def build_command(args: Iterable[str], options: Options, executables: Executables) -> list[str]:
    """Build the complete command line for a set of `systemctl` arguments.

    Args:
        args: Arguments produced by `build`.
        options: Execution options that select privilege elevation.
        executables: Resolved executable paths. Both paths must be resolved if
            `options.sudo` is set.

    Notes:
        - The `sudo` password is never placed on the command line. `--stdin` is
          passed instead so that `sudo` reads the password from standard input.
    """
    if not options.sudo:
        return [executables.systemctl, *args]

    sudo = [executables.sudo]
    if options.sudo_askpass:
        sudo.append("--askpass")
    if options.sudo_password:
        sudo.append("--stdin")

    return [*sudo, executables.systemctl, *args]
