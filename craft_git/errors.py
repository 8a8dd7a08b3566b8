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
# SATISFACTORY QUALITY, or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License along
# with this program.  If not, see <http://www.gnu.org/licenses/>.
"""Error classes for craft-git.

All errors inherit from craft_cli.CraftError.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import yaml
from craft_cli import CraftError

if TYPE_CHECKING:  # pragma: no cover
    import pathlib

    import pydantic
    from typing_extensions import Self


class GitError(CraftError):
    """Git is not working as expected."""

    def __init__(self, details: str, *, resolution: str | None = None) -> None:
        brief = "Git operation failed."
        super().__init__(message=brief, details=details, resolution=resolution)


class RepositoryNotFoundError(GitError, FileNotFoundError):
    """The repository path does not exist or is not a directory."""

    def __init__(self, path: pathlib.Path) -> None:
        self.path = path
        super().__init__(
            f"no such file or directory: {str(path)!r}",
            resolution="Ensure the path points to an existing directory.",
        )


class PathCreationError(GitError, OSError):
    """A directory needed by a git operation could not be created."""

    def __init__(self, path: pathlib.Path, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot create directory {str(path)!r}: {reason}")


class GitCommandNotFoundError(GitError):
    """The git executable could not be run."""

    def __init__(self, binary: str) -> None:
        self.binary = binary
        super().__init__(
            f"{binary} command not found in the system",
            resolution="Install git or set CRAFT_GIT_GIT_BINARY to a git executable.",
        )


class GitCommandError(GitError):
    """Git exited with a non-zero return code."""

    def __init__(self, command: str, returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        details = stderr.strip() or f"{command!r} exited with code {returncode}"
        super().__init__(details)


class GitTimeoutError(GitError, TimeoutError):
    """Git did not finish before the timeout expired."""

    def __init__(self, command: str, timeout: float) -> None:
        self.command = command
        self.timeout = timeout
        super().__init__(f"{command!r} timed out after {timeout:g} seconds")


class GitOutputParseError(GitError):
    """Git produced output that cannot be parsed."""


class ObjectNotFoundError(GitError):
    """A git object cannot be resolved."""


class CommitNotFoundError(ObjectNotFoundError):
    """A commit identifier does not resolve to a commit."""

    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"cannot find commit: {ref!r}")


class TagNotFoundError(ObjectNotFoundError):
    """A tag name does not exist in the repository."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"cannot find tag: {name!r}")


class InvalidConfigError(CraftError):
    """Invalid configuration item or environment variable."""

    def __init__(self, item: str, value: object, *, details: str | None = None) -> None:
        message = f"Value {value!r} is invalid for configuration item {item!r}."
        super().__init__(
            message=message,
            details=details,
            resolution=f"Unset {item!r} or set it to a valid value.",
            retcode=os.EX_CONFIG,
        )

    @classmethod
    def from_pydantic(
        cls, item: str, value: object, error: pydantic.ValidationError
    ) -> Self:
        """Convert a pydantic ValidationError for a single config item."""
        details = "\n".join(err["msg"] for err in error.errors())
        return cls(item, value, details=details)


class YamlError(CraftError, yaml.YAMLError):
    """Craft-cli friendly version of a YAML error."""

    @classmethod
    def from_yaml_error(cls, filename: str, error: yaml.YAMLError) -> Self:
        """Convert a pyyaml YAMLError to a craft-git YamlError."""
        message = f"error parsing {filename!r}"
        if isinstance(error, yaml.MarkedYAMLError):
            message += f": {error.problem}"
        details = str(error)
        return cls(
            message,
            details=details,
            resolution=f"Ensure {filename} contains valid YAML",
        )
