# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Position hint for rebuilding an ordered container from a stream of elements.

Ordered containers are written in ascending key order, so when decoding, each element is expected to go right after
the previous one. The hint remembers the key of the previous insertion: an element whose key is above it is appended
to a pending run, and the run is merged into the container with a single bulk insert instead of one search per element.
What the bulk insert costs depends on the container: `SortedDict.update` keeps the run in order, so sorting it again is
linear, while `SortedSet.update` goes through an unordered `set` first and sorts the run in O(N log N), so for sets the
hint only saves the per-element insertion calls. An element at or below the hint (a stream not written by our
encoder, or a corrupted one) flushes the run and falls back to plain insertion.

The result does not depend on whether the hint was right, only the cost does.

>>> inserted = []
>>> hint = PositionHint(key=lambda x: x, insert=inserted.append, insert_run=inserted.extend)
>>> for value in [1, 3, 5, 4, 6]:
...     hint.insert(value)
>>> hint.flush()
>>> inserted
[1, 3, 5, 4, 6]
>>> hint.misses
1
"""

from typing import Any, Callable, Generic, TypeVar

T = TypeVar('T')


class PositionHint(Generic[T]):
    def __init__(
        self,
        *,
        key: Callable[[T], Any],
        insert: Callable[[T], Any],
        insert_run: Callable[[list[T]], Any],
    ) -> None:
        self._key = key
        self._insert = insert
        self._insert_run = insert_run
        self._run: list[T] = []
        self._position: Any = None
        self._has_position = False
        # how many elements did not follow the hint
        self.misses = 0

    def insert(self, item: T) -> None:
        key = self._key(item)
        if self._has_position and not self._position < key:
            self.misses += 1
            self.flush()
            self._insert(item)
        else:
            self._run.append(item)
        self._position = key
        self._has_position = True

    def flush(self) -> None:
        """Merge the pending run into the container, must be called after the last insert."""
        if self._run:
            run, self._run = self._run, []
            self._insert_run(run)
