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

"""Git object models."""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import Final

from ._consts import COMMIT_SHA_LEN, COMMIT_SHORT_SHA_LEN

COMMIT_REGEX: Final[re.Pattern[str]] = re.compile(f"[0-9a-f]{{{COMMIT_SHA_LEN}}}")


def is_commit(ref: str) -> bool:
    """Check if given commit is a valid git commit sha."""
    return bool(COMMIT_REGEX.fullmatch(ref))


def short_commit_sha(commit_sha: str) -> str:
    """Return shortened version of the commit."""
    return commit_sha[:COMMIT_SHORT_SHA_LEN]


def timestamp_to_datetime(timestamp: str) -> datetime.datetime:
    """Convert a unix timestamp printed by git to an aware UTC datetime."""
    return datetime.datetime.fromtimestamp(int(timestamp), tz=datetime.timezone.utc)


@dataclass(frozen=True)
class Signature:
    """Author, committer or tagger of a git object."""

    name: str
    email: str
    when: datetime.datetime


@dataclass(frozen=True)
class Commit:
    """Model representing a commit."""

    sha: str
    tree_sha: str
    parents: tuple[str, ...]
    author: Signature
    committer: Signature
    message: str

    @property
    def short_sha(self) -> str:
        """Get short commit sha."""
        return short_commit_sha(self.sha)

    @property
    def summary(self) -> str:
        """Get the first line of the commit message."""
        return self.message.split("\n", 1)[0]


@dataclass(frozen=True)
class Tag:
    """Model representing a tag.

    ``sha`` is the object the tag reference points at: the tag object for an
    annotated tag and the commit itself for a lightweight one. ``commit_sha`` is
    always the tagged commit.
    """

    name: str
    sha: str
    commit_sha: str
    tagger: Signature | None = None
    message: str = ""

    @property
    def is_annotated(self) -> bool:
        """Whether the tag is an annotated tag object."""
        return self.sha != self.commit_sha
