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

"""Git repository handle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from ._consts import PRETTY_LOG_FORMAT
from .cache import ObjectCache
from .command import GitCommand
from .config import get_config
from .errors import (
    CommitNotFoundError,
    GitCommandError,
    GitOutputParseError,
    RepositoryNotFoundError,
    TagNotFoundError,
)
from .models import (
    Commit,
    Signature,
    Tag,
    is_commit,
    short_commit_sha,
    timestamp_to_datetime,
)
from .runner import CommandRunner, resolve_runner

logger = logging.getLogger(__name__)

# One field per line, the raw message last since it may span several lines.
_COMMIT_FORMAT: Final[str] = "%H%n%T%n%P%n%an%n%ae%n%at%n%cn%n%ce%n%ct%n%B"
_COMMIT_FIELDS: Final[int] = 10

# NUL separated, tag messages may span several lines.
_TAG_FORMAT: Final[str] = "%00".join(
    [
        "%(refname)",
        "%(objectname)",
        "%(objecttype)",
        "%(*objectname)",
        "%(taggername)",
        "%(taggeremail)",
        "%(taggerdate:unix)",
        "%(contents)",
    ]
)
_TAG_FIELDS: Final[int] = 8


def _parse_commit(output: str) -> Commit:
    """Parse the output of ``git log`` run with the commit format."""
    fields = output.split("\n", _COMMIT_FIELDS - 1)
    if len(fields) != _COMMIT_FIELDS or not is_commit(fields[0]):
        raise GitOutputParseError(f"unexpected commit output: {output[:80]!r}")

    sha, tree, parents, a_name, a_email, a_time, c_name, c_email, c_time, body = fields
    try:
        author = Signature(a_name, a_email, timestamp_to_datetime(a_time))
        committer = Signature(c_name, c_email, timestamp_to_datetime(c_time))
    except ValueError as error:
        raise GitOutputParseError(
            f"invalid timestamp for commit {short_commit_sha(sha)!r}"
        ) from error

    return Commit(
        sha=sha,
        tree_sha=tree,
        parents=tuple(parents.split()),
        author=author,
        committer=committer,
        message=body.rstrip("\n"),
    )


def _parse_tag(name: str, output: str) -> Tag:
    """Parse the output of ``git for-each-ref`` run with the tag format."""
    fields = output.rstrip("\n").split("\0", _TAG_FIELDS - 1)
    if len(fields) != _TAG_FIELDS:
        raise GitOutputParseError(f"unexpected tag output: {output[:80]!r}")

    _, sha, object_type, peeled, t_name, t_email, t_time, contents = fields
    if object_type == "commit":
        return Tag(name=name, sha=sha, commit_sha=sha)
    if object_type != "tag":
        raise GitOutputParseError(
            f"tag {name!r} points at a {object_type}, not a commit"
        )

    tagger = None
    if t_time:
        try:
            tagger = Signature(
                t_name, t_email.strip("<>"), timestamp_to_datetime(t_time)
            )
        except ValueError as error:
            raise GitOutputParseError(f"invalid timestamp for tag {name!r}") from error
    return Tag(
        name=name,
        sha=sha,
        commit_sha=peeled,
        tagger=tagger,
        message=contents.rstrip("\n"),
    )


class Repository:
    """A git working directory.

    Parsed commits and tags are memoized per handle, keyed by full commit sha
    and tag name respectively.

    :param path: the repository working directory
    :param runner: the runner used for git commands, the default runner if None
    :param cache_size: maximum number of entries per cache, ``0`` for no bound.
        Taken from the ``cache_size`` configuration item if None.

    :raises RepositoryNotFoundError: if the path is not an existing directory
    """

    def __init__(
        self,
        path: Path | str,
        *,
        runner: CommandRunner | None = None,
        cache_size: int | None = None,
    ) -> None:
        path = Path(path).absolute()
        if not path.is_dir():
            raise RepositoryNotFoundError(path)

        self.path = path
        self._runner = runner
        if cache_size is None:
            cache_size = get_config().get("cache_size")
        self._commit_cache: ObjectCache[Commit] = ObjectCache(cache_size)
        self._tag_cache: ObjectCache[Tag] = ObjectCache(cache_size)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self.path)!r})"

    @property
    def runner(self) -> CommandRunner:
        """Get the runner executing git commands for this repository."""
        return resolve_runner(self._runner)

    def _run(self, command: GitCommand) -> str:
        return self.runner.run(command, cwd=self.path)

    def clear_caches(self) -> None:
        """Forget every memoized commit and tag."""
        self._commit_cache.clear()
        self._tag_cache.clear()

    def _resolve_commit(self, ref: str) -> str:
        """Get the full commit sha a ref points at.

        :raises CommitNotFoundError: if the ref does not name a commit
        """
        command = GitCommand("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")
        try:
            sha = self._run(command).strip()
        except GitCommandError as error:
            raise CommitNotFoundError(ref) from error
        if not is_commit(sha):
            raise GitOutputParseError(f"cannot resolve {ref!r}: unexpected {sha!r}")
        logger.debug("Resolved %r to commit %r", ref, short_commit_sha(sha))
        return sha

    def get_commit(self, ref: str) -> Commit:
        """Get a commit by sha or by any ref git can resolve to a commit.

        Only full commit shas are served from the cache; other refs are
        resolved on every call since they may move. A tag object sha is
        peeled to its commit, which is cached under the commit sha.

        :param ref: commit sha, branch, tag or other revision

        :raises CommitNotFoundError: if the ref does not resolve to a commit
        :raises GitOutputParseError: if git's output cannot be parsed
        """
        sha = ref if is_commit(ref) else self._resolve_commit(ref)

        cached = self._commit_cache.get(sha)
        if cached is not None:
            return cached

        command = GitCommand(
            "log", "--max-count=1", f"--format={_COMMIT_FORMAT}", sha, "--"
        )
        try:
            output = self._run(command)
        except GitCommandError as error:
            raise CommitNotFoundError(ref) from error

        commit = _parse_commit(output)
        if commit.sha != sha:
            # A tag object sha, peeled by git log. Only commit shas are keys.
            logger.debug("Object %r peels to commit %r", sha, commit.short_sha)
            cached = self._commit_cache.get(commit.sha)
            if cached is not None:
                return cached
        self._commit_cache.set(commit.sha, commit)
        return commit

    def parse_pretty_log(self, output: str) -> list[Commit]:
        """Resolve each line of ``git log --pretty=format:%H`` output to a commit.

        :param output: one commit sha per line

        :returns: the commits in output order, empty for empty output

        :raises CommitNotFoundError: if any line does not resolve, in which
            case no commits are returned
        """
        return [self.get_commit(line) for line in output.splitlines()]

    def log(
        self, revision: str = "HEAD", *, max_count: int | None = None
    ) -> list[Commit]:
        """Get the commits reachable from a revision, newest first.

        :param revision: revision or revision range to list
        :param max_count: maximum number of commits to list
        """
        command = GitCommand("log", PRETTY_LOG_FORMAT)
        if max_count is not None:
            command.add_arguments(f"--max-count={max_count}")
        command.add_arguments(revision, "--")
        return self.parse_pretty_log(self._run(command))

    def commits_between(self, base: str, head: str) -> list[Commit]:
        """Get the commits reachable from head but not from base, newest first."""
        return self.log(f"{base}..{head}")

    def get_tag(self, name: str) -> Tag:
        """Get a tag by name.

        :raises TagNotFoundError: if the tag does not exist
        :raises GitOutputParseError: if git's output cannot be parsed
        """
        cached = self._tag_cache.get(name)
        if cached is not None:
            return cached

        ref = f"refs/tags/{name}"
        output = self._run(
            GitCommand("for-each-ref", "--count=1", f"--format={_TAG_FORMAT}", ref)
        )
        # for-each-ref also matches refs below the pattern, e.g. refs/tags/v1/rc
        if not output.startswith(f"{ref}\0"):
            raise TagNotFoundError(name)

        tag = _parse_tag(name, output)
        self._tag_cache.set(name, tag)
        return tag

    def get_tag_commit(self, name: str) -> Commit:
        """Get the commit a tag points at."""
        return self.get_commit(self.get_tag(name).commit_sha)

    def get_tags(self) -> list[str]:
        """Get the names of all tags in the repository."""
        return self._run(GitCommand("tag", "--list")).splitlines()

    def get_branches(self) -> list[str]:
        """Get the names of all local branches in the repository."""
        output = self._run(
            GitCommand("for-each-ref", "--format=%(refname:short)", "refs/heads/")
        )
        return output.splitlines()

    def _ref_exists(self, ref: str) -> bool:
        try:
            self._run(GitCommand("show-ref", "--verify", "--quiet", ref))
        except GitCommandError:
            return False
        return True

    def tag_exists(self, name: str) -> bool:
        """Check if a tag with the given name exists."""
        return self._ref_exists(f"refs/tags/{name}")

    def branch_exists(self, name: str) -> bool:
        """Check if a local branch with the given name exists."""
        return self._ref_exists(f"refs/heads/{name}")


def open_repository(
    path: Path | str, *, runner: CommandRunner | None = None
) -> Repository:
    """Open the repository at the given path.

    :raises RepositoryNotFoundError: if the path is not an existing directory
    """
    logger.debug("Opening git repository in %r", str(path))
    return Repository(path, runner=runner)
