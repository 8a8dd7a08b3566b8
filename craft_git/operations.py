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

"""Git repository operations.

Each operation translates its options into git flags and runs a single git
command. Errors from the runner are propagated unchanged.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .command import GitCommand
from .errors import PathCreationError
from .options import (
    CloneOptions,
    FetchOptions,
    PullOptions,
    PushOptions,
    RebaseOptions,
    ResetOptions,
)
from .runner import CommandRunner, normalize_timeout, resolve_runner

logger = logging.getLogger(__name__)


def _make_dirs(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise PathCreationError(path, error.strerror or str(error)) from error


def init_repository(
    path: Path | str, *, bare: bool = False, runner: CommandRunner | None = None
) -> None:
    """Initialize a new git repository, creating the directory if needed.

    :param path: directory of the new repository
    :param bare: create a bare repository
    :param runner: runner for the git command, the default runner if None

    :raises PathCreationError: if the directory cannot be created
    """
    path = Path(path)
    logger.debug("Initializing git repository in %r", str(path))
    _make_dirs(path)

    command = GitCommand("init")
    if bare:
        command.add_arguments("--bare")
    resolve_runner(runner).run(command, cwd=path)


def clone(
    url: str,
    path: Path | str,
    options: CloneOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Clone a repository to the given path.

    Parent directories of the destination are created first.

    :param url: URL or path of the repository to clone
    :param path: destination of the clone
    :param options: clone flags and timeout

    :raises PathCreationError: if the parent directory cannot be created
    """
    path = Path(path)
    options = options or CloneOptions()
    logger.debug("Cloning %s to %s", url, path)
    _make_dirs(path.parent)

    command = GitCommand("clone")
    if options.mirror:
        command.add_arguments("--mirror")
    if options.bare:
        command.add_arguments("--bare")
    if options.quiet:
        command.add_arguments("--quiet")
    command.add_arguments(url, os.fspath(path))

    resolve_runner(runner).run(command, timeout=options.timeout)


def pull(
    path: Path | str,
    options: PullOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Pull changes from remotes into the repository at the given path."""
    options = options or PullOptions()
    path = Path(path)
    command = GitCommand("pull")
    if options.all:
        command.add_arguments("--all")

    resolve_runner(runner).run(command, cwd=path, timeout=options.timeout)


def fetch(
    path: Path | str,
    options: FetchOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Fetch changes from remotes into the repository at the given path."""
    options = options or FetchOptions()
    path = Path(path)
    command = GitCommand("fetch")
    if options.prune:
        command.add_arguments("--prune")

    resolve_runner(runner).run(command, cwd=path, timeout=options.timeout)


def rebase(
    path: Path | str,
    options: RebaseOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Rebase local commits on top of a branch.

    Without a branch, git rebases onto the upstream of the current branch.
    """
    options = options or RebaseOptions()
    path = Path(path)
    command = GitCommand("rebase")
    if options.branch:
        command.add_arguments(options.branch)

    resolve_runner(runner).run(command, cwd=path, timeout=options.timeout)


def push(
    path: Path | str,
    remote: str,
    branch: str,
    options: PushOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Push local commits to the given branch of a remote."""
    options = options or PushOptions()
    path = Path(path)
    logger.debug("Pushing %r to remote %r", branch, remote)
    command = GitCommand("push")
    if options.force:
        command.add_arguments("--force")
    command.add_arguments(remote, branch)

    resolve_runner(runner).run(command, cwd=path, timeout=options.timeout)


def reset_head(
    path: Path | str,
    revision: str,
    options: ResetOptions | None = None,
    *,
    runner: CommandRunner | None = None,
) -> None:
    """Reset HEAD to the given revision or head of a branch."""
    options = options or ResetOptions()
    path = Path(path)
    command = GitCommand("reset")
    if options.hard:
        command.add_arguments("--hard")
    command.add_arguments(revision)

    resolve_runner(runner).run(command, cwd=path, timeout=options.timeout)


def checkout(
    path: Path | str,
    revision: str,
    *,
    timeout: float | None = None,
    runner: CommandRunner | None = None,
) -> None:
    """Check out a branch, tag or commit in the repository at the given path."""
    path = Path(path)
    command = GitCommand("checkout", revision)
    resolve_runner(runner).run(
        command, cwd=path, timeout=normalize_timeout(timeout)
    )
