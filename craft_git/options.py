# Copyright 2024 Canonical Ltd.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License version 3 as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Options for git repository operations.

Every option record accepts a ``timeout`` in seconds. A missing, zero or
negative timeout means the operation waits for git indefinitely.
"""

from __future__ import annotations

import pydantic

from .runner import normalize_timeout


class OperationOptions(pydantic.BaseModel):
    """Base model for operation options."""

    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)

    timeout: float | None = None

    @pydantic.field_validator("timeout")
    @classmethod
    def _normalize_timeout(cls, timeout: float | None) -> float | None:
        return normalize_timeout(timeout)


class CloneOptions(OperationOptions):
    """Options for cloning a repository."""

    mirror: bool = False
    bare: bool = False
    quiet: bool = False


class PullOptions(OperationOptions):
    """Options for pulling from remotes."""

    all: bool = False


class FetchOptions(OperationOptions):
    """Options for fetching from remotes."""

    prune: bool = False


class RebaseOptions(OperationOptions):
    """Options for rebasing the current branch."""

    branch: str | None = None


class PushOptions(OperationOptions):
    """Options for pushing to a remote."""

    force: bool = False


class ResetOptions(OperationOptions):
    """Options for resetting HEAD."""

    hard: bool = False
