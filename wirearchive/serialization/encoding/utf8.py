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
This module implements utf-8 string encoding with a length prefix.

It works exactly like the text codec but the encoded byte-sequence is utf-8 and it takes/returns a `str`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'foobar')  # writes 0600000000000000666f6f626172
>>> encode_utf8(se, 'π')  # writes 0200000000000000cf80
>>> bytes(se.finalize()).hex()
'0600000000000000666f6f6261720200000000000000cf80'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0600000000000000666f6f6261720200000000000000cf80'))
>>> decode_utf8(de)
Ok('foobar')
>>> decode_utf8(de)
Ok('π')

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0100000000000000ff'))
>>> print(decode_utf8(de).err())
invalid utf-8: invalid start byte
"""

from typing import Optional

from wirearchive.serialization import BadDataError, Deserializer, SerializationError, Serializer
from wirearchive.serialization.consts import DEFAULT_MAX_TEXT_LENGTH
from wirearchive.utils.result import Err, Ok, Result, propagate_result

from .text import decode_text, encode_text


def encode_utf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using UTF-8 and adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    data = value.encode('utf-8')
    encode_text(serializer, data)


@propagate_result
def decode_utf8(
    deserializer: Deserializer,
    *,
    max_length: Optional[int] = DEFAULT_MAX_TEXT_LENGTH,
) -> Result[str, SerializationError]:
    """ Decodes a UTF-8 string with a length prefix.

    This modules's docstring has more details and examples.
    """
    data = decode_text(deserializer, max_length=max_length).unwrap_or_propagate()
    try:
        return Ok(data.decode('utf-8'))
    except UnicodeDecodeError as e:
        return Err(BadDataError(f'invalid utf-8: {e.reason}'), e)
