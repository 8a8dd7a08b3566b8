#  This file is part of craft-git.
#
#  Copyright 2024 Canonical Ltd.
#
#  This program is free software: you can redistribute it and/or modify it
#  under the terms of the GNU Lesser General Public License version 3, as
#  published by the Free Software Foundation.
#
#  This program is distributed in the hope that it will be useful, but WITHOUT
#  ANY WARRANTY; without even the implied warranties of MERCHANTABILITY,
#  SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR PURPOSE.
#  See the GNU Lesser General Public License for more details.
#
#  You should have received a copy of the GNU Lesser General Public License
#  along with this program.  If not, see <http://www.gnu.org/licenses/>.
"""Timeout handling with real child processes."""

import pathlib
import sys
import time

import pytest

from craft_git import GitCommand, GitCommandNotFoundError, GitTimeoutError
from craft_git.runner import SubprocessRunner

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="uses a shell script as the git binary"
)


def _write_script(path: pathlib.Path, body: str) -> str:
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(0o755)
    return str(path)


def test_timeout_terminates_git(tmp_path: pathlib.Path) -> None:
    slow_git = _write_script(tmp_path / "slow-git", "exec sleep 30")
    runner = SubprocessRunner(slow_git, kill_timeout=5)

    start = time.monotonic()
    with pytest.raises(GitTimeoutError) as raised:
        runner.run(GitCommand("fetch"), timeout=0.2)

    assert raised.value.timeout == 0.2
    assert time.monotonic() - start < 10


def test_timeout_kills_git_ignoring_sigterm(tmp_path: pathlib.Path) -> None:
    stubborn_git = _write_script(
        tmp_path / "stubborn-git", "trap '' TERM\nwhile true; do sleep 0.1; done"
    )
    runner = SubprocessRunner(stubborn_git, kill_timeout=0.5)

    start = time.monotonic()
    with pytest.raises(GitTimeoutError):
        runner.run(GitCommand("clone", "url"), timeout=0.2)

    assert time.monotonic() - start < 10


def test_timeout_stops_child_processes(tmp_path: pathlib.Path) -> None:
    """Children of git that hold its output open are stopped as well."""
    forking_git = _write_script(tmp_path / "forking-git", "sleep 20")
    runner = SubprocessRunner(forking_git, kill_timeout=0.5)

    start = time.monotonic()
    with pytest.raises(GitTimeoutError):
        runner.run(GitCommand("fetch"), timeout=0.2)

    assert time.monotonic() - start < 5


def test_timeout_kills_children_ignoring_sigterm(tmp_path: pathlib.Path) -> None:
    stubborn_helper_git = _write_script(
        tmp_path / "stubborn-helper-git",
        "trap '' TERM\n(trap '' TERM; sleep 20) &\nwait",
    )
    runner = SubprocessRunner(stubborn_helper_git, kill_timeout=0.5)

    start = time.monotonic()
    with pytest.raises(GitTimeoutError):
        runner.run(GitCommand("clone", "url"), timeout=0.2)

    assert time.monotonic() - start < 5


@pytest.mark.parametrize("timeout", [None, 0, -1])
def test_no_timeout(tmp_path: pathlib.Path, timeout) -> None:
    quick_git = _write_script(tmp_path / "quick-git", "sleep 0.3\necho done")

    output = SubprocessRunner(quick_git).run(GitCommand("status"), timeout=timeout)

    assert output == "done\n"


def test_missing_binary(tmp_path: pathlib.Path) -> None:
    with pytest.raises(GitCommandNotFoundError):
        SubprocessRunner(str(tmp_path / "no-git")).run(GitCommand("status"))
