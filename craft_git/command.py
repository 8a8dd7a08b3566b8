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

"""Git command line builder."""

from __future__ import annotations

import shlex
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing_extensions import Self


class GitCommand:
    """A git subcommand and its arguments.

    Arguments are passed to git verbatim. The git binary itself is not part
    of the command; it is supplied by the runner executing it.

    >>> str(GitCommand("clone").add_arguments("--quiet", "url", "dest"))
    'git clone --quiet url dest'
    """

    def __init__(self, name: str, *args: str) -> None:
        self.name = name
        self._args: list[str] = [name, *args]

    def add_arguments(self, *args: str) -> Self:
        """Append arguments to the command."""
        self._args.extend(args)
        return self

    @property
    def args(self) -> list[str]:
        """Get the subcommand followed by its arguments."""
        return list(self._args)

    def __str__(self) -> str:
        return shlex.join(["git", *self._args])

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(map(repr, self._args))})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GitCommand):
            return NotImplemented
        return self._args == other._args
