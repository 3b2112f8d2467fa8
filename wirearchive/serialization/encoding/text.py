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

r"""
This module implements the text codec: a byte string prefixed by its length as a signed 64-bit integer.

Layout: [L: int64][L raw bytes]

>>> se = Serializer.build_bytes_serializer()
>>> encode_text(se, b'hi')
>>> encode_text(se, b'')
>>> bytes(se.finalize()).hex()
'020000000000000068690000000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('020000000000000068690000000000000000'))
>>> decode_text(de)
Ok(b'hi')
>>> decode_text(de)
Ok(b'')
>>> de.finalize()
Ok(None)

A negative length is rejected before any payload byte is touched:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffffffffffff') + b'hi')
>>> print(decode_text(de).err())
negative length: -1
>>> bytes(de.read_all().unwrap())
b'hi'

A stream that ends before the declared length is a truncated stream:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0500000000000000') + b'hi')
>>> print(decode_text(de).err())
expected 5 bytes, got 2
"""

from typing import Optional

from wirearchive.serialization import (
    Deserializer,
    InvalidLengthError,
    SerializationError,
    Serializer,
    TruncatedError,
)
from wirearchive.serialization.consts import DEFAULT_MAX_TEXT_LENGTH
from wirearchive.utils.result import Err, Ok, Result, propagate_result

from .size import decode_length, encode_length


def encode_text(serializer: Serializer, value: bytes) -> None:
    """ Encodes a byte string adding a signed length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, bytes)
    encode_length(serializer, len(value))
    serializer.write_bytes(value)


@propagate_result
def decode_text(
    deserializer: Deserializer,
    *,
    max_length: Optional[int] = DEFAULT_MAX_TEXT_LENGTH,
) -> Result[bytes, SerializationError]:
    """ Decodes a byte string with a signed length prefix.

    The length is validated (non-negative, at most `max_length` unless it is None) before any payload is read. A
    source that fails outright propagates its `ReadError`, a source that runs dry gives a `TruncatedError`.
    """
    length = decode_length(deserializer).unwrap_or_propagate()
    if length < 0:
        return Err(InvalidLengthError(f'negative length: {length}'))
    if max_length is not None and length > max_length:
        return Err(InvalidLengthError(f'length {length} exceeds maximum of {max_length}'))
    data = deserializer.read_bytes(length, exact=False).unwrap_or_propagate()
    if len(data) < length:
        return Err(TruncatedError(f'expected {length} bytes, got {len(data)}'))
    return Ok(bytes(data))
