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

"""Execution of git commands."""

from __future__ import annotations

import abc
import contextlib
import logging
import os
import shutil
import signal
import subprocess
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from typing_extensions import override

from ._consts import GIT_FALLBACK_BINARY_NAME
from .config import get_config
from .errors import (
    GitCommandError,
    GitCommandNotFoundError,
    GitTimeoutError,
    RepositoryNotFoundError,
)

if TYPE_CHECKING:
    from .command import GitCommand

logger = logging.getLogger(__name__)


def normalize_timeout(timeout: float | None) -> float | None:
    """Return None (no timeout) for a missing, zero or negative timeout."""
    if timeout is None or timeout <= 0:
        return None
    return timeout


class CommandRunner(abc.ABC):
    """Runs git commands on behalf of repository operations."""

    @abc.abstractmethod
    def run(
        self,
        command: GitCommand,
        *,
        cwd: Path | str | None = None,
        timeout: float | None = None,
    ) -> str:
        """Run a git command and return its standard output.

        :param command: the git command to run
        :param cwd: directory to run the command in, the current directory if None
        :param timeout: seconds to wait for the command; non-positive or None
            waits forever

        :raises GitCommandNotFoundError: if git cannot be executed
        :raises GitTimeoutError: if the timeout expires
        :raises GitCommandError: if git exits with a non-zero return code
        """


class SubprocessRunner(CommandRunner):
    """Run git commands as child processes.

    :param binary: the git executable
    :param kill_timeout: seconds a timed out process is given to exit after
        SIGTERM before it is sent SIGKILL
    """

    def __init__(
        self, binary: str = GIT_FALLBACK_BINARY_NAME, *, kill_timeout: float = 5.0
    ) -> None:
        self.binary = binary
        self.kill_timeout = kill_timeout

    @override
    def run(
        self,
        command: GitCommand,
        *,
        cwd: Path | str | None = None,
        timeout: float | None = None,
    ) -> str:
        timeout = normalize_timeout(timeout)
        if cwd is not None:
            cwd = Path(cwd)
            if not cwd.is_dir():
                raise RepositoryNotFoundError(cwd)

        logger.debug(
            "Running %r in %r (timeout: %s)",
            str(command),
            str(cwd) if cwd is not None else ".",
            timeout,
        )
        try:
            process = subprocess.Popen(
                [self.binary, *command.args],
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                start_new_session=True,
            )
        except (FileNotFoundError, PermissionError) as error:
            raise GitCommandNotFoundError(self.binary) from error

        with process:
            try:
                stdout, stderr = process.communicate(timeout=timeout)
            except subprocess.TimeoutExpired as error:
                logger.warning(
                    "%r did not finish in %s seconds, terminating it.",
                    str(command),
                    timeout,
                )
                self._stop(process)
                raise GitTimeoutError(str(command), error.timeout) from error

        if process.returncode != 0:
            logger.debug("%r exited with code %d", str(command), process.returncode)
            raise GitCommandError(str(command), process.returncode, stderr or "")
        return stdout or ""

    def _stop(self, process: subprocess.Popen[str]) -> None:
        """Stop a running git process and the helpers it started.

        git runs in its own session, so the signals reach every process in
        its group, such as ssh or credential helpers, that may hold the output
        pipes open. SIGTERM is sent first, then SIGKILL after
        ``kill_timeout`` seconds. Waiting for the pipes to close is bounded by
        ``kill_timeout`` as well.
        """
        _signal_group(process, signal.SIGTERM)
        try:
            process.communicate(timeout=self.kill_timeout)
        except subprocess.TimeoutExpired:
            logger.warning("git process %d ignored SIGTERM, killing it.", process.pid)
            _signal_group(process, signal.SIGKILL)
            try:
                process.communicate(timeout=self.kill_timeout)
            except subprocess.TimeoutExpired:
                logger.warning(
                    "Output of git process %d is still open, not waiting for it.",
                    process.pid,
                )


def _signal_group(process: subprocess.Popen[str], signum: int) -> None:
    """Send a signal to the process group led by the given process."""
    logger.debug("Sending signal %d to process group %d", signum, process.pid)
    # The whole group may already have exited.
    with contextlib.suppress(ProcessLookupError):
        os.killpg(process.pid, signum)


@lru_cache(maxsize=8)
def get_git_command(binary: str = GIT_FALLBACK_BINARY_NAME) -> str:
    """Get name of the git executable that may be used in subprocesses.

    Fall back to plain ``git`` if the requested binary cannot be found.
    """
    if binary == GIT_FALLBACK_BINARY_NAME or shutil.which(binary):
        return binary
    logger.warning("Cannot find git binary: %r.", binary)
    logger.warning("Falling back to: %r", GIT_FALLBACK_BINARY_NAME)
    return GIT_FALLBACK_BINARY_NAME


@lru_cache(maxsize=1)
def get_default_runner() -> CommandRunner:
    """Get the runner used by operations that are not given one."""
    config = get_config()
    return SubprocessRunner(
        get_git_command(config.get("git_binary")),
        kill_timeout=config.get("kill_timeout"),
    )


def resolve_runner(runner: CommandRunner | None) -> CommandRunner:
    """Return the given runner, or the default runner if it is None."""
    if runner is not None:
        return runner
    return get_default_runner()
