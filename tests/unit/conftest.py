# This file is part of craft_git.
#
# Copyright 2024 Canonical Ltd.
#
# This program is free software: you can redistribute it and/or modify it
# under the terms of the GNU Lesser General Public License version 3, as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranties of MERCHANTABILITY,
# SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License along
# with this program.  If not, see <http://www.gnu.org/licenses/>.
"""Configuration for craft-git unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from craft_git import Repository

if TYPE_CHECKING:
    import pathlib

    from craft_git.pytest_plugin import FakeGitRunner


@pytest.fixture
def repository_path(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "repository"
    path.mkdir()
    return path


@pytest.fixture
def fake_repository(
    repository_path: pathlib.Path, fake_git_runner: FakeGitRunner
) -> Repository:
    """A repository whose git commands go to the fake runner."""
    return Repository(repository_path, runner=fake_git_runner)
