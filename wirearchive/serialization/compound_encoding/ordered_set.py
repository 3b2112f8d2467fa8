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
An ordered set is framed like a sequence, with its elements always written in ascending order.

Layout: [N: uint64][value_0]...[value_N-1], value_0 < ... < value_N-1

>>> from functools import partial
>>> from wirearchive.serialization.encoding.int import decode_int, encode_int
>>> encode_u8 = partial(encode_int, length=1, signed=False)
>>> decode_u8 = partial(decode_int, length=1, signed=False)
>>> se = Serializer.build_bytes_serializer()
>>> encode_ordered_set(se, {5, 1, 3}, encode_u8)
>>> bytes(se.finalize()).hex()
'0300000000000000010305'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0300000000000000010305'))
>>> decode_ordered_set(de, decode_u8)
Ok(SortedSet([1, 3, 5]))

Order in the stream is only a performance matter, and duplicates are absorbed:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0400000000000000050103' '05'))
>>> decode_ordered_set(de, decode_u8)
Ok(SortedSet([1, 3, 5]))
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional, Protocol, TypeVar

from sortedcontainers import SortedSet

from wirearchive.serialization import Deserializer, SerializationError, Serializer
from wirearchive.serialization.consts import DEFAULT_MAX_CONTAINER_COUNT
from wirearchive.serialization.encoding.size import decode_count, encode_count
from wirearchive.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder
from .hint import PositionHint

T = TypeVar('T')


class SetLike(Protocol[T]):
    def __len__(self) -> int: ...

    def __iter__(self): ...

    def clear(self) -> None: ...

    def add(self, value: T) -> None: ...

    def update(self, values: Iterable[T]) -> None: ...


def encode_ordered_set(serializer: Serializer, values: SetLike[T], encoder: Encoder[T]) -> None:
    encode_count(serializer, len(values))
    # XXX: linear for containers that are already sorted
    for value in sorted(values):
        encoder(serializer, value)


@propagate_result
def decode_ordered_set(
    deserializer: Deserializer,
    decoder: Decoder[T],
    *,
    out: Optional[SetLike[T]] = None,
    max_count: Optional[int] = DEFAULT_MAX_CONTAINER_COUNT,
    use_hint: bool = True,
) -> Result[SetLike[T], SerializationError]:
    """ Decodes an ordered set into `out` (a new `SortedSet` by default).

    With `use_hint=True` elements go through a `PositionHint`, otherwise each one is added on its own.
    """
    values: SetLike[T] = SortedSet() if out is None else out
    values.clear()
    size = decode_count(deserializer, max_count=max_count).unwrap_or_propagate()
    hint = PositionHint(key=_identity, insert=values.add, insert_run=values.update) if use_hint else None
    insert = values.add if hint is None else hint.insert
    for _ in range(size):
        insert(decoder(deserializer).unwrap_or_propagate())
    if hint is not None:
        hint.flush()
    return Ok(values)


def _identity(value: T) -> T:
    return value
