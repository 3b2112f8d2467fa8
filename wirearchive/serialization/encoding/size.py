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
Size fields: container counts and text lengths.

Both are 64-bit wide on every platform, independently of the host's native size type, so a stream written on one
machine decodes identically on any other. Counts are unsigned since no negative count can exist. Lengths are signed
so that a negative value, which can only come from a corrupted or malicious stream, is recognizable before anything
is read after it.

>>> se = Serializer.build_bytes_serializer()
>>> encode_count(se, 3)
>>> encode_length(se, 2)
>>> bytes(se.finalize()).hex()
'03000000000000000200000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0300000000000000ffffffffffffffff'))
>>> decode_count(de)
Ok(3)
>>> decode_length(de)
Ok(-1)

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0300000000000000'))
>>> print(decode_count(de, max_count=2).err())
count 3 exceeds maximum of 2
"""

from typing import Optional

from wirearchive.serialization import Deserializer, InvalidLengthError, SerializationError, Serializer
from wirearchive.serialization.consts import DEFAULT_MAX_CONTAINER_COUNT, SIZE_FIELD_LENGTH
from wirearchive.utils.result import Err, Ok, Result, propagate_result

from .int import decode_int, encode_int


def encode_count(serializer: Serializer, count: int) -> None:
    encode_int(serializer, count, length=SIZE_FIELD_LENGTH, signed=False)


@propagate_result
def decode_count(
    deserializer: Deserializer,
    *,
    max_count: Optional[int] = DEFAULT_MAX_CONTAINER_COUNT,
) -> Result[int, SerializationError]:
    """ Decodes an element count, rejecting it when it is above `max_count` (unless `max_count` is None).
    """
    count = decode_int(deserializer, length=SIZE_FIELD_LENGTH, signed=False).unwrap_or_propagate()
    if max_count is not None and count > max_count:
        return Err(InvalidLengthError(f'count {count} exceeds maximum of {max_count}'))
    return Ok(count)


def encode_length(serializer: Serializer, length: int) -> None:
    assert length >= 0
    encode_int(serializer, length, length=SIZE_FIELD_LENGTH, signed=True)


def decode_length(deserializer: Deserializer) -> Result[int, SerializationError]:
    """ Decodes a signed length, it's up to the caller to reject negative values.
    """
    return decode_int(deserializer, length=SIZE_FIELD_LENGTH, signed=True)
