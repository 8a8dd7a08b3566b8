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
"""Configuration model for craft-git."""
from __future__ import annotations

import pydantic

from craft_git._consts import GIT_FALLBACK_BINARY_NAME


class ConfigModel(pydantic.BaseModel):
    """The configuration items understood by craft-git."""

    model_config = pydantic.ConfigDict(extra="forbid", frozen=True)

    git_binary: str = GIT_FALLBACK_BINARY_NAME
    cache_size: int = pydantic.Field(default=1024, ge=0)
    kill_timeout: float = pydantic.Field(default=5.0, gt=0)
