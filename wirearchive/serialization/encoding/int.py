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
This module implements encoding of integers with a fixed size, the size and signedness are parametrized.

The byte order is always little-endian (see `consts.BYTEORDER`), never the host's.

>>> se = Serializer.build_bytes_serializer()
>>> encode_int(se, 0, length=1, signed=True)  # writes 00
>>> encode_int(se, 255, length=1, signed=False)  # writes ff
>>> encode_int(se, 1234, length=2, signed=True)  # writes d204
>>> encode_int(se, -1234, length=2, signed=True)  # writes 2efb
>>> bytes(se.finalize()).hex()
'00ffd2042efb'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00ffd2042efb'))
>>> decode_int(de, length=1, signed=True)  # reads 00
Ok(0)
>>> decode_int(de, length=1, signed=False)  # reads ff
Ok(255)
>>> decode_int(de, length=2, signed=True)  # reads d204
Ok(1234)
>>> decode_int(de, length=2, signed=True)  # reads 2efb
Ok(-1234)
>>> print(decode_int(de, length=2, signed=True).err())
not enough bytes to read
"""

from wirearchive.serialization import Deserializer, SerializationError, Serializer
from wirearchive.serialization.consts import BYTEORDER
from wirearchive.utils.result import Ok, Result, propagate_result


def encode_int(serializer: Serializer, number: int, *, length: int, signed: bool) -> None:
    """ Encode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    try:
        data = int.to_bytes(number, length, byteorder=BYTEORDER, signed=signed)
    except OverflowError:
        raise ValueError('too big to encode')
    serializer.write_bytes(data)


@propagate_result
def decode_int(deserializer: Deserializer, *, length: int, signed: bool) -> Result[int, SerializationError]:
    """ Decode an int using the given byte-length and signedness.

    This modules's docstring has more details and examples.
    """
    data = deserializer.read_bytes(length).unwrap_or_propagate()
    return Ok(int.from_bytes(data, byteorder=BYTEORDER, signed=signed))
