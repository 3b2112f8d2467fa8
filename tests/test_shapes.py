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

from collections import deque

import pytest
from sortedcontainers import SortedDict, SortedSet

from wirearchive.conf.get_settings import get_global_settings
from wirearchive.conf.settings import ArchiveSettings
from wirearchive.serialization import Deserializer, InvalidLengthError, Serializer, TruncatedError
from wirearchive.shapes import (
    BOOL,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    ListShape,
    OrderedMapShape,
    OrderedSetShape,
    PairShape,
    SequenceShape,
    StrShape,
    TextShape,
)

SETTINGS = ArchiveSettings()
TEXT = TextShape(settings=SETTINGS)
STR = StrShape(settings=SETTINGS)


def _encode(shape, value):
    serializer = Serializer.build_bytes_serializer()
    shape.encode(serializer, value)
    return bytes(serializer.finalize())


@pytest.mark.parametrize('shape,value', [
    (INT8, -128),
    (INT16, -300),
    (INT32, -2**31),
    (INT64, -2**63),
    (UINT8, 255),
    (UINT16, 65535),
    (UINT32, 2**32 - 1),
    (UINT64, 2**64 - 1),
    (BOOL, True),
    (TEXT, b'\x00raw\xff'),
    (TEXT, b''),
    (STR, 'π'),
    (PairShape(UINT8, STR), (1, 'one')),
    (SequenceShape(BOOL, settings=SETTINGS), [True, False, True]),
    (SequenceShape(TEXT, settings=SETTINGS), []),
    (SequenceShape(STR, settings=SETTINGS), ['', '', '']),
    (ListShape(INT32, settings=SETTINGS), deque([3, 2, 1])),
    (ListShape(INT32, settings=SETTINGS), deque()),
    (OrderedSetShape(STR, settings=SETTINGS), SortedSet(['b', 'a', 'c'])),
    (OrderedSetShape(UINT8, settings=SETTINGS), SortedSet()),
    (OrderedMapShape(UINT64, SequenceShape(STR, settings=SETTINGS), settings=SETTINGS),
     SortedDict({2: ['x', 'y'], 1: []})),
    (PairShape(OrderedSetShape(UINT8, settings=SETTINGS), ListShape(PairShape(BOOL, INT8), settings=SETTINGS)),
     (SortedSet([9, 1]), deque([(True, -1), (False, 1)]))),
])
def test_shape_roundtrip(shape, value):
    deserializer = Deserializer.build_bytes_deserializer(_encode(shape, value))
    assert shape.decode(deserializer).unwrap() == value
    assert deserializer.is_empty()


@pytest.mark.parametrize('shape,expected', [
    (INT64, 0),
    (BOOL, False),
    (TEXT, b''),
    (STR, ''),
    (PairShape(UINT8, STR), (0, '')),
    (SequenceShape(UINT8, settings=SETTINGS), []),
    (ListShape(UINT8, settings=SETTINGS), deque()),
    (OrderedSetShape(UINT8, settings=SETTINGS), SortedSet()),
    (OrderedMapShape(UINT8, UINT8, settings=SETTINGS), SortedDict()),
])
def test_shape_default(shape, expected):
    assert shape.default() == expected
    assert type(shape.default()) is type(expected)


def test_sequence_fills_with_element_default():
    shape = SequenceShape(PairShape(UINT8, STR), settings=SETTINGS)
    data = _encode(shape, [(1, 'a'), (2, 'b')])
    out = []
    deserializer = Deserializer.build_bytes_deserializer(data[:-1])
    assert isinstance(shape.decode(deserializer, out=out).unwrap_err(), TruncatedError)
    assert out == [(1, 'a'), (0, '')]


def test_text_limit_from_settings():
    shape = TextShape(settings=ArchiveSettings(MAX_TEXT_LENGTH=2))
    deserializer = Deserializer.build_bytes_deserializer(_encode(TEXT, b'abc'))
    assert isinstance(shape.decode(deserializer).unwrap_err(), InvalidLengthError)


def test_str_limit_from_settings():
    shape = StrShape(settings=ArchiveSettings(MAX_TEXT_LENGTH=1))
    # two bytes of utf-8 for a single character
    deserializer = Deserializer.build_bytes_deserializer(_encode(STR, 'π'))
    assert isinstance(shape.decode(deserializer).unwrap_err(), InvalidLengthError)


def test_container_limit_from_settings():
    settings = ArchiveSettings(MAX_CONTAINER_COUNT=1)
    data = _encode(SequenceShape(UINT8, settings=SETTINGS), [1, 2])
    for shape in (
        SequenceShape(UINT8, settings=settings),
        OrderedSetShape(UINT8, settings=settings),
        OrderedMapShape(UINT8, UINT8, settings=settings),
    ):
        deserializer = Deserializer.build_bytes_deserializer(data + b'\x00\x00')
        assert isinstance(shape.decode(deserializer).unwrap_err(), InvalidLengthError)


def test_list_is_relaxed_unless_strict():
    data = _encode(ListShape(UINT8, settings=SETTINGS), deque([1, 2, 3]))

    relaxed = ListShape(UINT8, settings=ArchiveSettings(MAX_CONTAINER_COUNT=1))
    deserializer = Deserializer.build_bytes_deserializer(data)
    assert relaxed.decode(deserializer).unwrap() == deque([1, 2, 3])

    strict = ListShape(UINT8, settings=ArchiveSettings(MAX_CONTAINER_COUNT=1, STRICT_LIST_DECODING=True))
    deserializer = Deserializer.build_bytes_deserializer(data)
    assert isinstance(strict.decode(deserializer).unwrap_err(), InvalidLengthError)


@pytest.mark.parametrize('use_hint', [True, False])
def test_ordered_shapes_with_and_without_hint(use_hint):
    settings = ArchiveSettings(USE_INSERTION_HINT=use_hint)
    # a map written by someone else, out of order and with a repeated key
    data = _encode(SequenceShape(PairShape(UINT8, STR), settings=SETTINGS), [(3, 'c'), (1, 'a'), (3, 'x')])
    shape = OrderedMapShape(UINT8, STR, settings=settings)
    assert shape.use_hint is use_hint
    deserializer = Deserializer.build_bytes_deserializer(data)
    assert shape.decode(deserializer).unwrap() == SortedDict({1: 'a', 3: 'c'})


def test_decode_into_out():
    shape = OrderedSetShape(UINT8, settings=SETTINGS)
    out = SortedSet([100])
    deserializer = Deserializer.build_bytes_deserializer(_encode(shape, SortedSet([1, 2])))
    assert shape.decode(deserializer, out=out).unwrap() is out
    assert list(out) == [1, 2]


def test_shapes_default_to_global_settings():
    settings = get_global_settings()
    assert TextShape().max_length == settings.MAX_TEXT_LENGTH
    assert StrShape().max_length == settings.MAX_TEXT_LENGTH
    assert SequenceShape(BOOL).max_count == settings.MAX_CONTAINER_COUNT
    assert ListShape(BOOL).strict == settings.STRICT_LIST_DECODING
    assert OrderedMapShape(BOOL, BOOL).use_hint == settings.USE_INSERTION_HINT


def test_shape_repr():
    shape = OrderedMapShape(UINT64, PairShape(STR, ListShape(BOOL, settings=SETTINGS)), settings=SETTINGS)
    assert repr(shape) == 'OrderedMapShape(IntShape(8, signed=False), PairShape(StrShape(), ListShape(BoolShape())))'
