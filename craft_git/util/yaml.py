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
"""YAML helpers for craft-git configuration files."""

from __future__ import annotations

import contextlib
import pathlib
from typing import TYPE_CHECKING, Any, TextIO

import yaml

from craft_git import errors

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Hashable


def _check_duplicate_keys(node: yaml.MappingNode) -> None:
    """Ensure that the keys in a YAML mapping node are not duplicates."""
    seen: set[Any] = set()

    for key_node, _ in node.value:
        with contextlib.suppress(TypeError):
            if key_node.value in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key_node.value!r}",
                    key_node.start_mark,
                )
            seen.add(key_node.value)


def _dict_constructor(
    loader: yaml.Loader, node: yaml.MappingNode
) -> dict[Hashable, Any]:
    _check_duplicate_keys(node)

    # Necessary in order to make yaml merge tags work
    loader.flatten_mapping(node)
    return dict(loader.construct_mapping(node))


class _SafeYamlLoader(yaml.SafeLoader):
    def __init__(self, stream: TextIO) -> None:
        super().__init__(stream)

        self.add_constructor(
            yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _dict_constructor
        )


def safe_yaml_load(stream: TextIO) -> Any:  # noqa: ANN401 - The YAML could be anything
    """Equivalent to pyyaml's safe_load function, but rejecting duplicate keys.

    :param stream: Any text-like IO object.
    :returns: The loaded YAML document.
    :raises YamlError: if the document cannot be parsed.
    """
    try:
        # Silencing S506 ("probable use of unsafe loader") because we override it by
        # using our own safe loader.
        return yaml.load(stream, Loader=_SafeYamlLoader)  # noqa: S506
    except yaml.YAMLError as error:
        filename = pathlib.Path(stream.name).name
        raise errors.YamlError.from_yaml_error(filename, error) from error
