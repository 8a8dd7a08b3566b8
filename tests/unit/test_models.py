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

"""Tests for git object models."""

import datetime

import pytest

from craft_git import (
    COMMIT_SHORT_SHA_LEN,
    Commit,
    Signature,
    Tag,
    is_commit,
    short_commit_sha,
)
from craft_git.models import timestamp_to_datetime

SIGNATURE = Signature(
    "Testcraft",
    "testcraft@canonical.com",
    datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc),
)


@pytest.mark.parametrize(
    ("commit_str", "is_valid"),
    [
        ("test", False),
        ("fake-commit", False),
        ("1234", False),
        ("x" * 40, False),
        ("a" * 40, True),
        ("9d51ca832224e9a31e1898dd11b2764374402f09", True),
        ("9d51ca832224e9a31e1898dd11b2764374402f09a", False),
        ("9d51ca8", False),
        ("aaaaaaa", False),
    ],
)
def test_is_commit(commit_str: str, *, is_valid: bool) -> None:
    """Check function that checks if something is a valid sha."""
    assert is_commit(commit_str) is is_valid


def test_short_commit_sha() -> None:
    sha = "9d51ca832224e9a31e1898dd11b2764374402f09"

    assert short_commit_sha(sha) == "9d51ca8"
    assert len(short_commit_sha(sha)) == COMMIT_SHORT_SHA_LEN


def test_timestamp_to_datetime() -> None:
    assert timestamp_to_datetime("0") == datetime.datetime(
        1970, 1, 1, tzinfo=datetime.timezone.utc
    )


def test_timestamp_to_datetime_invalid() -> None:
    with pytest.raises(ValueError):  # noqa: PT011
        timestamp_to_datetime("yesterday")


def test_commit_properties() -> None:
    commit = Commit(
        sha="9d51ca832224e9a31e1898dd11b2764374402f09",
        tree_sha="a" * 40,
        parents=(),
        author=SIGNATURE,
        committer=SIGNATURE,
        message="Add a feature\n\nWith a longer description.",
    )

    assert commit.short_sha == "9d51ca8"
    assert commit.summary == "Add a feature"


@pytest.mark.parametrize(
    ("tag", "annotated"),
    [
        pytest.param(Tag("v1", sha="a" * 40, commit_sha="a" * 40), False, id="light"),
        pytest.param(
            Tag("v1", sha="b" * 40, commit_sha="a" * 40, tagger=SIGNATURE),
            True,
            id="annotated",
        ),
    ],
)
def test_tag_is_annotated(tag: Tag, *, annotated: bool) -> None:
    assert tag.is_annotated is annotated
