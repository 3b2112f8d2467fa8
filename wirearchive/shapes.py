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
Shapes are the codec variants values are encoded with.

A shape bundles how one form of value is encoded, decoded and default-constructed. Codecs for concrete types are
built by composing shapes explicitly, the codec is fully determined when it is built and no value is ever inspected
to pick an encoding:

>>> settings = ArchiveSettings()
>>> shape = OrderedMapShape(UINT64, SequenceShape(StrShape(settings=settings), settings=settings), settings=settings)
>>> se = Serializer.build_bytes_serializer()
>>> shape.encode(se, {3: ['c'], 1: ['a', 'b']})
>>> de = Deserializer.build_bytes_deserializer(se.finalize())
>>> shape.decode(de)
Ok(SortedDict({1: ['a', 'b'], 3: ['c']}))

The variants provided here are final. User types compose with them by implementing `Shape` themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Generic, Optional, TypeVar, cast, final

from sortedcontainers import SortedDict, SortedSet
from typing_extensions import override

from wirearchive.conf.get_settings import get_global_settings
from wirearchive.conf.settings import ArchiveSettings
from wirearchive.serialization import Deserializer, SerializationError, Serializer
from wirearchive.serialization.compound_encoding.linked_list import decode_linked_list, encode_linked_list
from wirearchive.serialization.compound_encoding.ordered_map import decode_ordered_map, encode_ordered_map
from wirearchive.serialization.compound_encoding.ordered_set import decode_ordered_set, encode_ordered_set
from wirearchive.serialization.compound_encoding.pair import decode_pair, encode_pair
from wirearchive.serialization.compound_encoding.sequence import decode_sequence, encode_sequence
from wirearchive.serialization.encoding.bool import decode_bool, encode_bool
from wirearchive.serialization.encoding.int import decode_int, encode_int
from wirearchive.serialization.encoding.text import decode_text, encode_text
from wirearchive.serialization.encoding.utf8 import decode_utf8, encode_utf8
from wirearchive.utils.result import Result

T = TypeVar('T')
A = TypeVar('A')
B = TypeVar('B')


class Shape(ABC, Generic[T]):
    @abstractmethod
    def encode(self, serializer: Serializer, value: T) -> None:
        raise NotImplementedError

    @abstractmethod
    def decode(self, deserializer: Deserializer) -> Result[T, SerializationError]:
        raise NotImplementedError

    @abstractmethod
    def default(self) -> T:
        """A default-constructed value, used as placeholder by containers that preallocate."""
        raise NotImplementedError


@final
class IntShape(Shape[int]):
    def __init__(self, length: int, *, signed: bool) -> None:
        self.length = length
        self.signed = signed

    def __repr__(self) -> str:
        return f'IntShape({self.length}, signed={self.signed})'

    @override
    def encode(self, serializer: Serializer, value: int) -> None:
        encode_int(serializer, value, length=self.length, signed=self.signed)

    @override
    def decode(self, deserializer: Deserializer) -> Result[int, SerializationError]:
        return decode_int(deserializer, length=self.length, signed=self.signed)

    @override
    def default(self) -> int:
        return 0


INT8 = IntShape(1, signed=True)
INT16 = IntShape(2, signed=True)
INT32 = IntShape(4, signed=True)
INT64 = IntShape(8, signed=True)
UINT8 = IntShape(1, signed=False)
UINT16 = IntShape(2, signed=False)
UINT32 = IntShape(4, signed=False)
UINT64 = IntShape(8, signed=False)


@final
class BoolShape(Shape[bool]):
    def __repr__(self) -> str:
        return 'BoolShape()'

    @override
    def encode(self, serializer: Serializer, value: bool) -> None:
        encode_bool(serializer, value)

    @override
    def decode(self, deserializer: Deserializer) -> Result[bool, SerializationError]:
        return decode_bool(deserializer)

    @override
    def default(self) -> bool:
        return False


BOOL = BoolShape()


@final
class TextShape(Shape[bytes]):
    """Byte string with a signed 64-bit length prefix."""

    def __init__(self, *, settings: Optional[ArchiveSettings] = None) -> None:
        settings = settings or get_global_settings()
        self.max_length = settings.MAX_TEXT_LENGTH

    def __repr__(self) -> str:
        return 'TextShape()'

    @override
    def encode(self, serializer: Serializer, value: bytes) -> None:
        encode_text(serializer, value)

    @override
    def decode(self, deserializer: Deserializer) -> Result[bytes, SerializationError]:
        return decode_text(deserializer, max_length=self.max_length)

    @override
    def default(self) -> bytes:
        return b''


@final
class StrShape(Shape[str]):
    """A `str` carried as the text of its UTF-8 encoding."""

    def __init__(self, *, settings: Optional[ArchiveSettings] = None) -> None:
        settings = settings or get_global_settings()
        self.max_length = settings.MAX_TEXT_LENGTH

    def __repr__(self) -> str:
        return 'StrShape()'

    @override
    def encode(self, serializer: Serializer, value: str) -> None:
        encode_utf8(serializer, value)

    @override
    def decode(self, deserializer: Deserializer) -> Result[str, SerializationError]:
        return decode_utf8(deserializer, max_length=self.max_length)

    @override
    def default(self) -> str:
        return ''


@final
class PairShape(Shape[tuple[A, B]]):
    def __init__(self, first: Shape[A], second: Shape[B]) -> None:
        self.first = first
        self.second = second

    def __repr__(self) -> str:
        return f'PairShape({self.first!r}, {self.second!r})'

    @override
    def encode(self, serializer: Serializer, value: tuple[A, B]) -> None:
        encode_pair(serializer, value, self.first.encode, self.second.encode)

    @override
    def decode(self, deserializer: Deserializer) -> Result[tuple[A, B], SerializationError]:
        return decode_pair(deserializer, self.first.decode, self.second.decode)

    @override
    def default(self) -> tuple[A, B]:
        return (self.first.default(), self.second.default())


@final
class SequenceShape(Shape[list[T]]):
    """Index-addressable sequence, decoded into a `list`."""

    def __init__(self, element: Shape[T], *, settings: Optional[ArchiveSettings] = None) -> None:
        settings = settings or get_global_settings()
        self.element = element
        self.max_count = settings.MAX_CONTAINER_COUNT

    def __repr__(self) -> str:
        return f'SequenceShape({self.element!r})'

    @override
    def encode(self, serializer: Serializer, value: list[T]) -> None:
        encode_sequence(serializer, value, self.element.encode)

    @override
    def decode(
        self,
        deserializer: Deserializer,
        *,
        out: Optional[list[T]] = None,
    ) -> Result[list[T], SerializationError]:
        result = decode_sequence(
            deserializer,
            self.element.decode,
            out=out,
            fill=self.element.default(),
            max_count=self.max_count,
        )
        return cast(Result[list[T], SerializationError], result)

    @override
    def default(self) -> list[T]:
        return []


@final
class ListShape(Shape[deque[T]]):
    """Linked list, decoded into a `collections.deque` in relaxed mode unless STRICT_LIST_DECODING is set."""

    def __init__(self, element: Shape[T], *, settings: Optional[ArchiveSettings] = None) -> None:
        settings = settings or get_global_settings()
        self.element = element
        self.max_count = settings.MAX_CONTAINER_COUNT
        self.strict = settings.STRICT_LIST_DECODING

    def __repr__(self) -> str:
        return f'ListShape({self.element!r})'

    @override
    def encode(self, serializer: Serializer, value: deque[T]) -> None:
        encode_linked_list(serializer, value, self.element.encode)

    @override
    def decode(
        self,
        deserializer: Deserializer,
        *,
        out: Optional[deque[T]] = None,
    ) -> Result[deque[T], SerializationError]:
        result = decode_linked_list(
            deserializer,
            self.element.decode,
            out=out,
            strict=self.strict,
            max_count=self.max_count,
        )
        return cast(Result[deque[T], SerializationError], result)

    @override
    def default(self) -> deque[T]:
        return deque()


@final
class OrderedSetShape(Shape[SortedSet]):
    def __init__(self, element: Shape[Any], *, settings: Optional[ArchiveSettings] = None) -> None:
        settings = settings or get_global_settings()
        self.element = element
        self.max_count = settings.MAX_CONTAINER_COUNT
        self.use_hint = settings.USE_INSERTION_HINT

    def __repr__(self) -> str:
        return f'OrderedSetShape({self.element!r})'

    @override
    def encode(self, serializer: Serializer, value: SortedSet) -> None:
        encode_ordered_set(serializer, value, self.element.encode)

    @override
    def decode(
        self,
        deserializer: Deserializer,
        *,
        out: Optional[SortedSet] = None,
    ) -> Result[SortedSet, SerializationError]:
        result = decode_ordered_set(
            deserializer,
            self.element.decode,
            out=out,
            max_count=self.max_count,
            use_hint=self.use_hint,
        )
        return cast(Result[SortedSet, SerializationError], result)

    @override
    def default(self) -> SortedSet:
        return SortedSet()


@final
class OrderedMapShape(Shape[SortedDict]):
    def __init__(self, key: Shape[Any], value: Shape[Any], *, settings: Optional[ArchiveSettings] = None) -> None:
        settings = settings or get_global_settings()
        self.key = key
        self.value = value
        self.max_count = settings.MAX_CONTAINER_COUNT
        self.use_hint = settings.USE_INSERTION_HINT

    def __repr__(self) -> str:
        return f'OrderedMapShape({self.key!r}, {self.value!r})'

    @override
    def encode(self, serializer: Serializer, value: SortedDict) -> None:
        encode_ordered_map(serializer, value, self.key.encode, self.value.encode)

    @override
    def decode(
        self,
        deserializer: Deserializer,
        *,
        out: Optional[SortedDict] = None,
    ) -> Result[SortedDict, SerializationError]:
        result = decode_ordered_map(
            deserializer,
            self.key.decode,
            self.value.decode,
            out=out,
            max_count=self.max_count,
            use_hint=self.use_hint,
        )
        return cast(Result[SortedDict, SerializationError], result)

    @override
    def default(self) -> SortedDict:
        return SortedDict()

