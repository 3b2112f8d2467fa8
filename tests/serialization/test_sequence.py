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

from wirearchive.serialization import Deserializer, InvalidLengthError, Serializer, TruncatedError
from wirearchive.serialization.compound_encoding.sequence import decode_sequence, encode_sequence
from wirearchive.serialization.encoding.size import encode_count
from wirearchive.serialization.encoding.utf8 import decode_utf8, encode_utf8
from wirearchive.utils.result import Err, Ok


def _encode(values):
    serializer = Serializer.build_bytes_serializer()
    encode_sequence(serializer, values, encode_utf8)
    return bytes(serializer.finalize())


@pytest.mark.parametrize('values', [
    [],
    [''],
    ['a', 'a', 'a'],
    ['foo', '', 'bar', 'π'],
    [str(i) for i in range(100)],
])
def test_sequence_roundtrip(values):
    deserializer = Deserializer.build_bytes_deserializer(_encode(values))
    assert decode_sequence(deserializer, decode_utf8) == Ok(values)
    assert deserializer.is_empty()


def test_empty_sequence_is_only_the_count():
    assert _encode([]) == bytes(8)


def test_sequence_out_is_cleared_and_reused():
    out = ['stale', 'values']
    deserializer = Deserializer.build_bytes_deserializer(_encode(['x']))
    result = decode_sequence(deserializer, decode_utf8, out=out)
    assert result.unwrap() is out
    assert out == ['x']


def test_sequence_count_above_limit_reads_no_element():
    calls = []

    def decoder(deserializer):
        calls.append(deserializer)
        return decode_utf8(deserializer)

    out = ['stale']
    deserializer = Deserializer.build_bytes_deserializer(_encode(['a', 'b', 'c']))
    error = decode_sequence(deserializer, decoder, out=out, max_count=2).unwrap_err()
    assert isinstance(error, InvalidLengthError)
    assert calls == []
    assert out == []


def test_sequence_huge_count_is_not_allocated():
    serializer = Serializer.build_bytes_serializer()
    encode_count(serializer, 2**60)
    deserializer = Deserializer.build_bytes_deserializer(serializer.finalize())
    assert isinstance(decode_sequence(deserializer, decode_utf8).unwrap_err(), InvalidLengthError)


def test_sequence_partial_failure():
    data = _encode(['a', 'b', 'c'])
    out = []
    deserializer = Deserializer.build_bytes_deserializer(data[:-1])
    error = decode_sequence(deserializer, decode_utf8, out=out, fill='?').unwrap_err()
    assert isinstance(error, TruncatedError)
    assert out == ['a', 'b', '?']


def test_sequence_element_failure_is_returned_unchanged():
    error = Err(TruncatedError('element'))
    results = iter([Ok('a'), error, Ok('c')])
    deserializer = Deserializer.build_bytes_deserializer(_encode(['a', 'b', 'c']))
    assert decode_sequence(deserializer, lambda _: next(results)) is error
