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
An ordered map is a count followed by its key/value pairs in ascending key order.

Layout: [N: uint64][key_0][value_0]...[key_N-1][value_N-1], key_0 < ... < key_N-1

>>> from functools import partial
>>> from wirearchive.serialization.encoding.int import decode_int, encode_int
>>> from wirearchive.serialization.encoding.utf8 import decode_utf8, encode_utf8
>>> encode_u8 = partial(encode_int, length=1, signed=False)
>>> decode_u8 = partial(decode_int, length=1, signed=False)
>>> se = Serializer.build_bytes_serializer()
>>> encode_ordered_map(se, {5: 'e', 1: 'a', 3: 'c'}, encode_u8, encode_utf8)
>>> data = bytes(se.finalize())
>>> data[:10].hex()
'03000000000000000101'

Breakdown of the result:

    0300000000000000: 3, the number of entries
    01 010000000000000061: 1 -> 'a'
    03 010000000000000063: 3 -> 'c'
    05 010000000000000065: 5 -> 'e'

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_ordered_map(de, decode_u8, decode_utf8)
Ok(SortedDict({1: 'a', 3: 'c', 5: 'e'}))

When a key shows up more than once the first value is kept and the rest are ignored, it is not an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from operator import itemgetter
from typing import Optional, Protocol, TypeVar

from sortedcontainers import SortedDict

from wirearchive.serialization import Deserializer, SerializationError, Serializer
from wirearchive.serialization.consts import DEFAULT_MAX_CONTAINER_COUNT
from wirearchive.serialization.encoding.size import decode_count, encode_count
from wirearchive.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder
from .hint import PositionHint
from .pair import decode_pair, encode_pair

KT = TypeVar('KT')
VT = TypeVar('VT')


class MappingLike(Protocol[KT, VT]):
    def __contains__(self, key: object) -> bool: ...

    def clear(self) -> None: ...

    def setdefault(self, key: KT, default: VT) -> VT: ...

    def update(self, items: Iterable[tuple[KT, VT]]) -> None: ...


def encode_ordered_map(
    serializer: Serializer,
    values: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    encode_count(serializer, len(values))
    # XXX: linear for containers that are already sorted
    for item in sorted(values.items(), key=itemgetter(0)):
        encode_pair(serializer, item, key_encoder, value_encoder)


@propagate_result
def decode_ordered_map(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    *,
    out: Optional[MappingLike[KT, VT]] = None,
    max_count: Optional[int] = DEFAULT_MAX_CONTAINER_COUNT,
    use_hint: bool = True,
) -> Result[MappingLike[KT, VT], SerializationError]:
    """ Decodes an ordered map into `out` (a new `SortedDict` by default).

    Each entry is decoded as a pair into a temporary and then inserted, through a `PositionHint` when `use_hint=True`.
    """
    values: MappingLike[KT, VT] = SortedDict() if out is None else out
    values.clear()
    size = decode_count(deserializer, max_count=max_count).unwrap_or_propagate()

    def insert(item: tuple[KT, VT]) -> None:
        values.setdefault(*item)

    def insert_run(run: list[tuple[KT, VT]]) -> None:
        values.update(item for item in run if item[0] not in values)

    hint = PositionHint(key=itemgetter(0), insert=insert, insert_run=insert_run) if use_hint else None
    for _ in range(size):
        item = decode_pair(deserializer, key_decoder, value_decoder).unwrap_or_propagate()
        if hint is None:
            insert(item)
        else:
            hint.insert(item)
    if hint is not None:
        hint.flush()
    return Ok(values)
