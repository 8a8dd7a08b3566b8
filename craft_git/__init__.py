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

"""Typed wrapper around the git command line tool."""

from ._consts import COMMIT_SHA_LEN, COMMIT_SHORT_SHA_LEN, GIT_FALLBACK_BINARY_NAME
from .cache import ObjectCache
from .command import GitCommand
from .config import Config, get_config
from .errors import (
    CommitNotFoundError,
    GitCommandError,
    GitCommandNotFoundError,
    GitError,
    GitOutputParseError,
    GitTimeoutError,
    InvalidConfigError,
    ObjectNotFoundError,
    PathCreationError,
    RepositoryNotFoundError,
    TagNotFoundError,
)
from .models import Commit, Signature, Tag, is_commit, short_commit_sha
from .operations import (
    checkout,
    clone,
    fetch,
    init_repository,
    pull,
    push,
    rebase,
    reset_head,
)
from .options import (
    CloneOptions,
    FetchOptions,
    PullOptions,
    PushOptions,
    RebaseOptions,
    ResetOptions,
)
from .repository import Repository, open_repository
from .runner import (
    CommandRunner,
    SubprocessRunner,
    get_default_runner,
    get_git_command,
    normalize_timeout,
)

__all__ = [
    "COMMIT_SHA_LEN",
    "COMMIT_SHORT_SHA_LEN",
    "GIT_FALLBACK_BINARY_NAME",
    "CloneOptions",
    "CommandRunner",
    "Commit",
    "CommitNotFoundError",
    "Config",
    "FetchOptions",
    "GitCommand",
    "GitCommandError",
    "GitCommandNotFoundError",
    "GitError",
    "GitOutputParseError",
    "GitTimeoutError",
    "InvalidConfigError",
    "ObjectCache",
    "ObjectNotFoundError",
    "PathCreationError",
    "PullOptions",
    "PushOptions",
    "RebaseOptions",
    "Repository",
    "RepositoryNotFoundError",
    "ResetOptions",
    "Signature",
    "SubprocessRunner",
    "Tag",
    "TagNotFoundError",
    "checkout",
    "clone",
    "fetch",
    "get_config",
    "get_default_runner",
    "get_git_command",
    "init_repository",
    "is_commit",
    "normalize_timeout",
    "open_repository",
    "pull",
    "push",
    "rebase",
    "reset_head",
    "short_commit_sha",
]
