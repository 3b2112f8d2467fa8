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
This module implements encoding a boolean value using 1 byte.

- `False` maps to `b'\x00'`
- `True` maps to `b'\x01'`
- any other byte value is invalid

>>> se = Serializer.build_bytes_serializer()
>>> encode_bool(se, False)
>>> encode_bool(se, True)
>>> bytes(se.finalize())
b'\x00\x01'

>>> de = Deserializer.build_bytes_deserializer(b'\x00\x01\x02')
>>> decode_bool(de)
Ok(False)
>>> decode_bool(de)
Ok(True)
>>> print(decode_bool(de).err())
b'\x02' is not a valid boolean
"""

from wirearchive.serialization import BadDataError, Deserializer, SerializationError, Serializer
from wirearchive.utils.result import Err, Ok, Result, propagate_result


def encode_bool(serializer: Serializer, value: bool) -> None:
    """ Encodes a boolean value using 1 byte.
    """
    assert isinstance(value, bool)
    serializer.write_byte(0x01 if value else 0x00)


@propagate_result
def decode_bool(deserializer: Deserializer) -> Result[bool, SerializationError]:
    """ Decodes a boolean value from 1 byte.
    """
    i = deserializer.read_byte().unwrap_or_propagate()
    if i == 0:
        return Ok(False)
    elif i == 1:
        return Ok(True)
    else:
        raw = bytes([i])
        return Err(BadDataError(f'{raw!r} is not a valid boolean'))
