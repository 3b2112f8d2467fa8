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
A linked list (a `collections.deque`, which can't be preallocated and indexed efficiently) uses the same framing as a
sequence, but is rebuilt by appending each decoded element to the tail.

Layout: [N: uint64][value_0]...[value_N-1]

Decoding is deliberately relaxed: by default the count is not checked against any limit, and decoding simply stops at
the first element that fails. Nothing is allocated up front, so a huge count can only make the decoder run out of
data. Pass `strict=True` to apply `max_count` like the other container decoders do.

>>> from wirearchive.serialization.encoding.bool import decode_bool, encode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_linked_list(se, deque([True, False, True]), encode_bool)
>>> bytes(se.finalize()).hex()
'0300000000000000010001'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0300000000000000010001'))
>>> decode_linked_list(de, decode_bool)
Ok(deque([True, False, True]))
"""

from collections import deque
from collections.abc import Collection, MutableSequence
from typing import Optional, TypeVar

from wirearchive.serialization import Deserializer, SerializationError, Serializer
from wirearchive.serialization.consts import DEFAULT_MAX_CONTAINER_COUNT
from wirearchive.serialization.encoding.size import decode_count, encode_count
from wirearchive.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder

T = TypeVar('T')


def encode_linked_list(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    encode_count(serializer, len(values))
    for value in values:
        encoder(serializer, value)


@propagate_result
def decode_linked_list(
    deserializer: Deserializer,
    decoder: Decoder[T],
    *,
    out: Optional[MutableSequence[T]] = None,
    strict: bool = False,
    max_count: Optional[int] = DEFAULT_MAX_CONTAINER_COUNT,
) -> Result[MutableSequence[T], SerializationError]:
    values: MutableSequence[T] = deque() if out is None else out
    values.clear()
    size = decode_count(deserializer, max_count=max_count if strict else None).unwrap_or_propagate()
    for _ in range(size):
        values.append(decoder(deserializer).unwrap_or_propagate())
    return Ok(values)
