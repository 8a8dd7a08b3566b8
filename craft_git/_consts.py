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

"""Git related constants."""

from typing import Final

COMMIT_SHA_LEN: Final[int] = 40

COMMIT_SHORT_SHA_LEN: Final[int] = 7

GIT_FALLBACK_BINARY_NAME: Final[str] = "git"

PRETTY_LOG_FORMAT: Final[str] = "--pretty=format:%H"

CONFIG_ENV_PREFIX: Final[str] = "CRAFT_GIT"

APP_NAME: Final[str] = "craft-git"
