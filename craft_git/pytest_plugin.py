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
"""A pytest plugin for testing code that uses craft-git without running git."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

import pytest
from typing_extensions import override

from craft_git import config, runner

if TYPE_CHECKING:
    import pathlib
    from collections.abc import Iterator, Sequence

    from craft_git.command import GitCommand


@dataclasses.dataclass(frozen=True)
class FakeGitCall:
    """A git command received by a :class:`FakeGitRunner`."""

    args: tuple[str, ...]
    cwd: pathlib.Path | None
    timeout: float | None


class FakeGitRunner(runner.CommandRunner):
    """A runner that records git commands instead of running them.

    Responses are registered per command, matched on the subcommand and its
    arguments. Several responses registered for the same command are replayed
    in order, the last one repeating. Unregistered commands succeed with no
    output.
    """

    def __init__(self) -> None:
        self.calls: list[FakeGitCall] = []
        self._responses: dict[tuple[str, ...], list[str | Exception]] = {}

    def register(
        self,
        args: Sequence[str],
        *,
        stdout: str = "",
        error: Exception | None = None,
    ) -> None:
        """Register the output of, or the error raised by, a git command."""
        response = error if error is not None else stdout
        self._responses.setdefault(tuple(args), []).append(response)

    @override
    def run(
        self,
        command: GitCommand,
        *,
        cwd: pathlib.Path | None = None,
        timeout: float | None = None,
    ) -> str:
        args = tuple(command.args)
        self.calls.append(FakeGitCall(args=args, cwd=cwd, timeout=timeout))

        responses = self._responses.get(args)
        if not responses:
            return ""
        response = responses.pop(0) if len(responses) > 1 else responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def commands(self) -> list[list[str]]:
        """Get the arguments of every command run, in order."""
        return [list(call.args) for call in self.calls]

    def call_count(self, args: Sequence[str]) -> int:
        """Get how many times the given command was run."""
        return sum(1 for call in self.calls if call.args == tuple(args))


@pytest.fixture(autouse=True)
def _reset_craft_git_caches() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Reset the memoized configuration and default runner around each test."""
    memoized = (config.get_config, runner.get_default_runner, runner.get_git_command)
    for function in memoized:
        function.cache_clear()
    yield
    for function in memoized:
        function.cache_clear()


@pytest.fixture
def fake_git_runner(monkeypatch: pytest.MonkeyPatch) -> FakeGitRunner:
    """Replace the default git runner with a :class:`FakeGitRunner`.

    Operations called without an explicit runner will use the fake.
    """
    fake_runner = FakeGitRunner()
    monkeypatch.setattr(runner, "get_default_runner", lambda: fake_runner)
    return fake_runner
