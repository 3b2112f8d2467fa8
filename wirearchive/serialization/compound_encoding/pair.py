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
A pair has a fixed arity, so there is no length prefix: it is the encoding of the first value followed by the
encoding of the second.

Layout: [first][second]

>>> from functools import partial
>>> from wirearchive.serialization.encoding.int import decode_int, encode_int
>>> from wirearchive.serialization.encoding.utf8 import decode_utf8, encode_utf8
>>> encode_i64 = partial(encode_int, length=8, signed=True)
>>> decode_i64 = partial(decode_int, length=8, signed=True)
>>> se = Serializer.build_bytes_serializer()
>>> encode_pair(se, (42, 'hi'), encode_i64, encode_utf8)
>>> bytes(se.finalize()).hex()
'2a0000000000000002000000000000006869'

Breakdown of the result:

    2a00000000000000: 42 as int64
    0200000000000000: 2, the length of 'hi' as int64
    6869: 'hi'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('2a0000000000000002000000000000006869'))
>>> decode_pair(de, decode_i64, decode_utf8)
Ok((42, 'hi'))
>>> de.finalize()
Ok(None)
"""

from typing import TypeVar

from wirearchive.serialization import Deserializer, SerializationError, Serializer
from wirearchive.utils.result import Ok, Result, propagate_result

from . import Decoder, Encoder

A = TypeVar('A')
B = TypeVar('B')


def encode_pair(
    serializer: Serializer,
    value: tuple[A, B],
    first_encoder: Encoder[A],
    second_encoder: Encoder[B],
) -> None:
    first, second = value
    first_encoder(serializer, first)
    second_encoder(serializer, second)


@propagate_result
def decode_pair(
    deserializer: Deserializer,
    first_decoder: Decoder[A],
    second_decoder: Decoder[B],
) -> Result[tuple[A, B], SerializationError]:
    # second is never attempted if first fails
    first = first_decoder(deserializer).unwrap_or_propagate()
    second = second_decoder(deserializer).unwrap_or_propagate()
    return Ok((first, second))
