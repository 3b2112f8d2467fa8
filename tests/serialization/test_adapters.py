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

import pytest

from wirearchive.serialization import Deserializer, ErrorCode, MaxBytesExceededError, Serializer
from wirearchive.serialization.adapters import MaxBytesDeserializer, MaxBytesSerializer
from wirearchive.serialization.encoding.size import encode_length
from wirearchive.serialization.encoding.text import decode_text, encode_text


def test_max_bytes_serializer():
    serializer = Serializer.build_bytes_serializer().with_max_bytes(3)
    assert isinstance(serializer, MaxBytesSerializer)
    serializer.write_bytes(b'ab')
    serializer.write_byte(0x63)
    with pytest.raises(MaxBytesExceededError):
        serializer.write_byte(0x64)


def test_max_bytes_serializer_whole_write_is_refused():
    serializer = Serializer.build_bytes_serializer().with_max_bytes(8)
    with pytest.raises(MaxBytesExceededError):
        encode_text(serializer, b'hi')
    # the length prefix fitted, the payload did not
    assert serializer.cur_pos() == 8


def test_optional_max_bytes():
    serializer = Serializer.build_bytes_serializer()
    assert serializer.with_optional_max_bytes(None) is serializer
    deserializer = Deserializer.build_bytes_deserializer(b'')
    assert deserializer.with_optional_max_bytes(None) is deserializer
    assert isinstance(deserializer.with_optional_max_bytes(1), MaxBytesDeserializer)


def test_max_bytes_deserializer_refuses_before_reading():
    inner = Deserializer.build_bytes_deserializer(b'abcdef')
    deserializer = inner.with_max_bytes(4)
    assert bytes(deserializer.read_bytes(3).unwrap()) == b'abc'
    assert deserializer.bytes_left == 1

    error = deserializer.read_bytes(2).unwrap_err()
    assert isinstance(error, MaxBytesExceededError)
    assert error.code == ErrorCode.LIMIT_EXCEEDED
    # nothing was consumed from the inner source
    assert bytes(inner.read_all().unwrap()) == b'def'


def test_max_bytes_deserializer_read_byte():
    deserializer = Deserializer.build_bytes_deserializer(b'ab').with_max_bytes(1)
    assert deserializer.read_byte().unwrap() == ord('a')
    assert isinstance(deserializer.read_byte().unwrap_err(), MaxBytesExceededError)


def test_max_bytes_deserializer_text_length_over_budget():
    serializer = Serializer.build_bytes_serializer()
    encode_length(serializer, 1000)
    inner = Deserializer.build_bytes_deserializer(bytes(serializer.finalize()) + b'xyz')
    error = decode_text(inner.with_max_bytes(16)).unwrap_err()
    assert isinstance(error, MaxBytesExceededError)
    assert bytes(inner.read_all().unwrap()) == b'xyz'


def test_max_bytes_deserializer_read_all():
    deserializer = Deserializer.build_bytes_deserializer(b'abc').with_max_bytes(3)
    assert bytes(deserializer.read_all().unwrap()) == b'abc'
    assert deserializer.bytes_left == 0

    deserializer = Deserializer.build_bytes_deserializer(b'abcd').with_max_bytes(3)
    assert isinstance(deserializer.read_all().unwrap_err(), MaxBytesExceededError)


def test_max_bytes_deserializer_finalize():
    deserializer = Deserializer.build_bytes_deserializer(b'ab').with_max_bytes(10)
    deserializer.read_byte().unwrap()
    assert deserializer.finalize().is_err()
    deserializer.read_byte().unwrap()
    assert deserializer.finalize().is_ok()
