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

"""Configure how `systemctl` commands are executed."""

__all__ = ["Options", "Scope"]

from dataclasses import dataclass, field
from enum import StrEnum
from os import PathLike
from typing import Self

import dotenv

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _as_bool(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


class Scope(StrEnum):
    """Service manager instance targeted by a `systemctl` command."""

    SYSTEM = "system"
    USER = "user"

    @property
    def flag(self) -> str:
        """Get the `systemctl` flag that selects this scope."""
        return f"--{self.value}"


@dataclass(frozen=True)
class Options:
    """Execution options for a `systemctl` command.

    Args:
        scope: Service manager instance to target.
        sudo: If set to `True`, run `systemctl` through `sudo`.
        sudo_password:
            Password to pass to `sudo` on standard input.
            Optional if passwordless `sudo` is configured or `sudo_askpass` is set.
        sudo_askpass: If set to `True`, run `sudo` with `--askpass`.

    Raises:
        ValueError:
            Raised if `sudo_password` and `sudo_askpass` are both set, or if either
            is set without `sudo`.
    """

    scope: Scope = Scope.SYSTEM
    sudo: bool = False
    sudo_password: str | None = field(default=None, repr=False)
    sudo_askpass: bool = False

    def __post_init__(self) -> None:  # noqa D105
        object.__setattr__(self, "scope", Scope(self.scope))
        if self.sudo_password and self.sudo_askpass:
            raise ValueError("`sudo_password` and `sudo_askpass` are mutually exclusive")
        if (self.sudo_password or self.sudo_askpass) and not self.sudo:
            raise ValueError("`sudo_password` and `sudo_askpass` require `sudo` to be set")

    @classmethod
    def from_env(cls, file: str | PathLike, /) -> Self:
        """Load execution options from an environment file.

        Notes:
            - Recognized keys are `SYSTEMCTL_SCOPE`, `SYSTEMCTL_SUDO`,
              `SYSTEMCTL_SUDO_ASKPASS`, and `SYSTEMCTL_SUDO_PASSWORD`.
            - Missing keys fall back to their default values.
        """
        env = dotenv.dotenv_values(file)
        try:
            scope = Scope((env.get("SYSTEMCTL_SCOPE") or Scope.SYSTEM).strip().lower())
        except ValueError:
            raise ValueError(
                f"invalid `SYSTEMCTL_SCOPE` '{env['SYSTEMCTL_SCOPE']}' in {file}. "
                + f"expected one of {[s.value for s in Scope]}"
            )

        return cls(
            scope=scope,
            sudo=_as_bool(env.get("SYSTEMCTL_SUDO")),
            sudo_password=env.get("SYSTEMCTL_SUDO_PASSWORD") or None,
            sudo_askpass=_as_bool(env.get("SYSTEMCTL_SUDO_ASKPASS")),
        )
