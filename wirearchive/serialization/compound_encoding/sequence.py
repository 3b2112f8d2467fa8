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
A sequence is an index-addressable container (a `list`) framed with its element count.

Layout: [N: uint64][value_0]...[value_N-1]

>>> from wirearchive.serialization.encoding.utf8 import decode_utf8, encode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_sequence(se, ['foobar', 'π'], encode_utf8)
>>> data = bytes(se.finalize())
>>> data.hex()
'02000000000000000600000000000000666f6f6261720200000000000000cf80'

Breakdown of the result:

    0200000000000000: 2, the element count
    0600000000000000666f6f626172: 'foobar' (with length prefix)
    0200000000000000cf80: 'π' (with length prefix)

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_sequence(de, decode_utf8)
Ok(['foobar', 'π'])

When an element fails the destination keeps the decoded prefix and the `fill` placeholders for the rest:

>>> out = ['old', 'values', 'are', 'cleared']
>>> de = Deserializer.build_bytes_deserializer(data[:-1])
>>> print(decode_sequence(de, decode_utf8, out=out, fill='').err())
expected 2 bytes, got 1
>>> out
['foobar', '']
"""

from collections.abc import Collection, MutableSequence
from itertools import repeat
from typing import Any, Optional, TypeVar

from wirearchive.serialization import Deserializer, SerializationError, Serializer
from wirearchive.serialization.consts import DEFAULT_MAX_CONTAINER_COUNT
from wirearchive.serialization.encoding.size import decode_count, encode_count
from wirearchive.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder

T = TypeVar('T')


def encode_sequence(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    encode_count(serializer, len(values))
    for value in values:
        encoder(serializer, value)


@propagate_result
def decode_sequence(
    deserializer: Deserializer,
    decoder: Decoder[T],
    *,
    out: Optional[MutableSequence[T]] = None,
    fill: Any = None,
    max_count: Optional[int] = DEFAULT_MAX_CONTAINER_COUNT,
) -> Result[MutableSequence[T], SerializationError]:
    """ Decodes a sequence into `out` (a new list by default).

    The destination is cleared, then resized to exactly N `fill` placeholders once the count has passed the
    `max_count` check, and each element is decoded directly into its final index.
    """
    values: MutableSequence[T] = [] if out is None else out
    values.clear()
    size = decode_count(deserializer, max_count=max_count).unwrap_or_propagate()
    values.extend(repeat(fill, size))
    for i in range(size):
        values[i] = decoder(deserializer).unwrap_or_propagate()
    return Ok(values)
