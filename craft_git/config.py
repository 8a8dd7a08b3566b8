#  This file is part of craft_git.
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
"""Configuration access for craft-git.

Each configuration item is looked up, in order, in:

1. The ``CRAFT_GIT_<ITEM>`` environment variable.
2. Any extra handlers passed to :class:`Config`.
3. The user configuration file (``config.yaml`` in the platform's user
   configuration directory for ``craft-git``).
4. The default declared on :class:`craft_git._config.ConfigModel`.
"""
from __future__ import annotations

import abc
import functools
import logging
import os
import pathlib
from collections.abc import Iterable
from typing import Any, final

import platformdirs
import pydantic
from typing_extensions import override

from craft_git import errors, util
from craft_git._config import ConfigModel
from craft_git._consts import APP_NAME, CONFIG_ENV_PREFIX

logger = logging.getLogger(__name__)


def default_config_file() -> pathlib.Path:
    """Get the path of the user configuration file."""
    return platformdirs.user_config_path(APP_NAME) / "config.yaml"


class ConfigHandler(abc.ABC):
    """An abstract class for configuration handlers."""

    @abc.abstractmethod
    def get_raw(self, item: str) -> Any:  # noqa: ANN401
        """Get the raw value for a configuration item.

        :param item: the name of the configuration item.
        :returns: The raw value of the item.
        :raises: KeyError if the item cannot be found.
        """


@final
class EnvironmentHandler(ConfigHandler):
    """Configuration handler to get values from CRAFT_GIT environment variables."""

    @override
    def get_raw(self, item: str) -> str:
        return os.environ[f"{CONFIG_ENV_PREFIX}_{item.upper()}"]


@final
class FileHandler(ConfigHandler):
    """Configuration handler that reads a YAML mapping from a file.

    Keys may be spelled with underscores or dashes (``cache_size`` or
    ``cache-size``). A missing file is treated as an empty mapping.
    """

    def __init__(self, path: pathlib.Path) -> None:
        self._path = path
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        if not self._path.is_file():
            logger.debug("No configuration file at %r", str(self._path))
            self._data = {}
            return self._data

        with self._path.open() as config_file:
            data = util.safe_yaml_load(config_file)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise errors.YamlError(
                f"error parsing {self._path.name!r}",
                details=(
                    "Configuration should be a YAML mapping, "
                    f"not {type(data).__name__!r}"
                ),
                resolution=f"Ensure {self._path.name} contains a YAML mapping",
            )
        self._data = data
        return self._data

    @override
    def get_raw(self, item: str) -> Any:
        data = self._load()
        if item in data:
            return data[item]
        return data[item.replace("_", "-")]


@final
class DefaultHandler(ConfigHandler):
    """Configuration handler for getting default values."""

    @override
    def get_raw(self, item: str) -> Any:
        field = ConfigModel.model_fields[item]
        if field.is_required():
            raise KeyError(f"config item {item!r} has no default value.")
        return field.get_default(call_default_factory=True)


class Config:
    """Configuration access for craft-git."""

    def __init__(
        self,
        *,
        config_file: pathlib.Path | None = None,
        extra_handlers: Iterable[ConfigHandler] = (),
    ) -> None:
        self._handlers: list[ConfigHandler] = [
            EnvironmentHandler(),
            *extra_handlers,
            FileHandler(config_file or default_config_file()),
        ]
        self._default_handler = DefaultHandler()

    def get(self, item: str) -> Any:  # noqa: ANN401
        """Get the given configuration item.

        :raises KeyError: if the item is not a known configuration item.
        :raises InvalidConfigError: if the configured value is not valid.
        """
        if item not in ConfigModel.model_fields:
            raise KeyError(f"unknown config item: {item!r}")

        for handler in self._handlers:
            try:
                value = handler.get_raw(item)
            except KeyError:
                continue
            else:
                break
        else:
            return self._default_handler.get_raw(item)

        try:
            model = ConfigModel.model_validate({item: value})
        except pydantic.ValidationError as error:
            raise errors.InvalidConfigError.from_pydantic(
                item, value, error
            ) from error
        return getattr(model, item)


@functools.lru_cache(maxsize=1)
def get_config() -> Config:
    """Get the process-wide configuration."""
    return Config()
