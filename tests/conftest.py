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
"""Shared data for all craft-git tests."""

from __future__ import annotations

import pathlib
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest

from craft_git import config

if TYPE_CHECKING:
    from collections.abc import Callable

pytest_plugins = ["craft_git.pytest_plugin"]


@pytest.fixture(autouse=True)
def isolated_config_file(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> pathlib.Path:
    """Keep the user's configuration file and CRAFT_GIT variables out of tests."""
    config_file = tmp_path_factory.mktemp("config") / "config.yaml"
    monkeypatch.setattr(config, "default_config_file", lambda: config_file)
    for item in config.ConfigModel.model_fields:
        monkeypatch.delenv(f"CRAFT_GIT_{item.upper()}", raising=False)
    return config_file


@pytest.fixture
def empty_working_directory(
    tmp_path: pathlib.Path,
    monkeypatch: pytest.MonkeyPatch,
) -> pathlib.Path:
    repo_dir = pathlib.Path(tmp_path, "test-repo")
    repo_dir.mkdir()
    monkeypatch.chdir(repo_dir)
    return repo_dir


@pytest.fixture
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give git an identity so that commits can be created in tests."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Testcraft")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "testcraft@canonical.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Testcraft")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "testcraft@canonical.com")


@pytest.fixture
def empty_repository(
    empty_working_directory: pathlib.Path, git_identity: None
) -> pathlib.Path:
    subprocess.run(["git", "init"], check=True)
    return empty_working_directory


@dataclass
class RepositoryDefinition:
    repository_path: pathlib.Path
    commit: str
    branch: str
    tag: str | None = None


def _make_commit(path: pathlib.Path, message: str) -> str:
    """Create an empty commit in the repository at path and return its sha."""
    subprocess.run(
        ["git", "commit", "--allow-empty", "--quiet", "-m", message],
        cwd=path,
        check=True,
    )
    return subprocess.run(
        ["git", "rev-parse", "HEAD"],
        cwd=path,
        check=True,
        capture_output=True,
        text=True,
    ).stdout.strip()


@pytest.fixture
def repository_with_commit(empty_repository: pathlib.Path) -> RepositoryDefinition:
    commit_sha = _make_commit(empty_repository, "1")
    branch = subprocess.run(
        ["git", "rev-parse", "--abbrev-ref", "HEAD"],
        check=True,
        capture_output=True,
        text=True,
    ).stdout.strip()
    return RepositoryDefinition(
        repository_path=empty_repository,
        commit=commit_sha,
        branch=branch,
    )


@pytest.fixture
def repository_with_annotated_tag(
    repository_with_commit: RepositoryDefinition,
) -> RepositoryDefinition:
    test_tag = "v3.2.1"
    subprocess.run(["git", "tag", "-a", "-m", "testcraft tag", test_tag], check=True)
    repository_with_commit.tag = test_tag
    return repository_with_commit


@pytest.fixture
def repository_with_unannotated_tag(
    repository_with_commit: RepositoryDefinition,
) -> RepositoryDefinition:
    test_tag = "non-annotated"
    subprocess.run(["git", "tag", test_tag], check=True)
    repository_with_commit.tag = test_tag
    return repository_with_commit


@pytest.fixture
def make_commit(git_identity: None) -> Callable[[pathlib.Path, str], str]:
    """Get a function creating an empty commit and returning its sha."""
    return _make_commit
