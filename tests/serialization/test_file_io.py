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

import io
from collections import deque
from functools import partial

import pytest

from wirearchive.serialization import BadDataError, Deserializer, ReadError, Serializer
from wirearchive.serialization.compound_encoding.linked_list import decode_linked_list, encode_linked_list
from wirearchive.serialization.encoding.int import encode_int
from wirearchive.serialization.encoding.text import decode_text, encode_text
from wirearchive.serialization.encoding.utf8 import decode_utf8, encode_utf8


class TrickleReader(io.RawIOBase):
    """A pipe-like reader that never returns more than one byte per read."""

    def __init__(self, data):
        super().__init__()
        self._data = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, buf):
        return self._data.readinto(memoryview(buf)[:1])


class BrokenWriter(io.RawIOBase):
    def __init__(self):
        super().__init__()
        self.attempts = 0

    def writable(self):
        return True

    def write(self, data):
        self.attempts += 1
        raise OSError('disk full')


class ResetAfterDataReader(io.RawIOBase):
    """Serves `data` and then fails instead of reporting EOF."""

    def __init__(self, data):
        super().__init__()
        self._data = io.BytesIO(data)

    def readable(self):
        return True

    def readinto(self, buf):
        n = self._data.readinto(buf)
        if not n:
            raise OSError('connection reset')
        return n


class BrokenReader(io.RawIOBase):
    def readable(self):
        return True

    def readinto(self, buf):
        raise OSError('connection reset')


def test_file_roundtrip():
    fp = io.BytesIO()
    serializer = Serializer.build_file_serializer(fp)
    encode_linked_list(serializer, deque(['a', 'bc', '']), encode_utf8)
    encode_text(serializer, b'tail')
    assert serializer.finalize() == b''
    assert serializer.cur_pos() == len(fp.getvalue())

    fp.seek(0)
    deserializer = Deserializer.build_file_deserializer(fp)
    assert list(decode_linked_list(deserializer, decode_utf8).unwrap()) == ['a', 'bc', '']
    assert decode_text(deserializer).unwrap() == b'tail'
    assert deserializer.is_empty()
    assert deserializer.finalize().is_ok()


def test_file_and_bytes_serializers_agree():
    fp = io.BytesIO()
    file_serializer = Serializer.build_file_serializer(fp)
    bytes_serializer = Serializer.build_bytes_serializer()
    for serializer in (file_serializer, bytes_serializer):
        encode_int(serializer, -7, length=2, signed=True)
        encode_utf8(serializer, 'π')
    file_serializer.finalize()
    assert fp.getvalue() == bytes(bytes_serializer.finalize())


def test_short_reads_are_repeated():
    serializer = Serializer.build_bytes_serializer()
    encode_text(serializer, b'hello world')
    deserializer = Deserializer.build_file_deserializer(TrickleReader(bytes(serializer.finalize())))
    assert decode_text(deserializer).unwrap() == b'hello world'
    assert deserializer.is_empty()


def test_file_trailing_data():
    deserializer = Deserializer.build_file_deserializer(io.BytesIO(b'\x00\x01'))
    assert deserializer.read_byte().unwrap() == 0
    assert isinstance(deserializer.finalize().unwrap_err(), BadDataError)
    # the byte peeked by the check is still there
    assert deserializer.read_byte().unwrap() == 1
    assert deserializer.finalize().is_ok()


def test_file_read_all():
    deserializer = Deserializer.build_file_deserializer(io.BytesIO(b'abcdef'))
    assert bytes(deserializer.read_bytes(2).unwrap()) == b'ab'
    assert not deserializer.is_empty()
    assert bytes(deserializer.read_all().unwrap()) == b'cdef'
    assert deserializer.is_empty()


def test_file_read_error():
    deserializer = Deserializer.build_file_deserializer(BrokenReader())
    error = deserializer.read_bytes(4).unwrap_err()
    assert isinstance(error, ReadError)
    assert str(error) == 'read of 4 bytes failed'


def test_file_write_error_is_deferred():
    fp = BrokenWriter()
    serializer = Serializer.build_file_serializer(fp)
    encode_utf8(serializer, 'first')
    encode_utf8(serializer, 'second')
    assert isinstance(serializer.error, OSError)
    # the first failure drops every write after it
    assert fp.attempts == 1
    assert serializer.cur_pos() == 0
    with pytest.raises(OSError, match='disk full'):
        serializer.finalize()


def test_file_serializer_many_small_writes():
    fp = io.BytesIO()
    serializer = Serializer.build_file_serializer(fp)
    write = partial(encode_int, serializer, length=1, signed=False)
    for value in (1, 2, 3):
        write(value)
    serializer.finalize()
    assert fp.getvalue() == b'\x01\x02\x03'


def test_file_finalize_read_error():
    deserializer = Deserializer.build_file_deserializer(ResetAfterDataReader(b'\x01'))
    assert deserializer.read_byte().unwrap() == 1

    error = deserializer.finalize().unwrap_err()
    assert isinstance(error, ReadError)
    assert isinstance(error.__cause__, OSError)
    assert not deserializer.is_empty()
