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

"""Memoization table for parsed git objects."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Generic, TypeVar

T = TypeVar("T")


class ObjectCache(Generic[T]):
    """A thread-safe, least recently used cache keyed by object identifier.

    :param max_size: the maximum number of entries to keep. ``0`` disables
        eviction.
    """

    def __init__(self, max_size: int = 0) -> None:
        if max_size < 0:
            raise ValueError(f"cache size cannot be negative: {max_size}")
        self.max_size = max_size
        self._lock = threading.Lock()
        self._items: OrderedDict[str, T] = OrderedDict()

    def get(self, key: str) -> T | None:
        """Get a cached object, or None if it is not cached."""
        with self._lock:
            try:
                self._items.move_to_end(key)
            except KeyError:
                return None
            return self._items[key]

    def set(self, key: str, value: T) -> None:
        """Cache an object, evicting the least recently used one if full."""
        with self._lock:
            self._items[key] = value
            self._items.move_to_end(key)
            if self.max_size and len(self._items) > self.max_size:
                self._items.popitem(last=False)

    def clear(self) -> None:
        """Drop every cached object."""
        with self._lock:
            self._items.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
