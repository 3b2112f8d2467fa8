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

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, BinaryIO, overload

from typing_extensions import Self

from ..utils.result import Ok, Result, propagate_result
from .exceptions import SerializationError
from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxBytesDeserializer
    from .bytes_deserializer import BytesDeserializer
    from .file_deserializer import FileDeserializer


class Deserializer(ABC):
    """Pull-based byte source.

    Every read returns a `Result`. A source distinguishes a hard failure of whatever is underneath it (`ReadError`)
    from simply not having enough bytes (`TruncatedError` on exact reads, or a short buffer on `exact=False` reads).
    """

    def finalize(self) -> Result[None, SerializationError]:
        """Check that all bytes were consumed, the deserializer cannot be used after this."""
        raise TypeError('this deserializer does not support finalization')

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @staticmethod
    def build_file_deserializer(fp: BinaryIO) -> FileDeserializer:
        from .file_deserializer import FileDeserializer
        return FileDeserializer(fp)

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> Result[int, SerializationError]:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int, *, exact: bool = True) -> Result[Buffer, SerializationError]:
        """Read n bytes.

        When exact=True it errors with `TruncatedError` if there isn't enough data, when exact=False it returns
        whatever could be read, which can be shorter than n.
        """
        raise NotImplementedError

    @abstractmethod
    def read_all(self) -> Result[Buffer, SerializationError]:
        """Read all bytes until the reader is empty."""
        raise NotImplementedError

    @propagate_result
    def read_struct(self, format: str) -> Result[tuple[Any, ...], SerializationError]:
        size = struct.calcsize(format)
        data = self.read_bytes(size).unwrap_or_propagate()
        return Ok(struct.unpack_from(format, data))

    def with_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        """Helper method to wrap the current deserializer with MaxBytesDeserializer."""
        from .adapters import MaxBytesDeserializer
        return MaxBytesDeserializer(self, max_bytes)

    @overload
    def with_optional_max_bytes(self, max_bytes: None) -> Self:
        ...

    @overload
    def with_optional_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        ...

    def with_optional_max_bytes(self, max_bytes: int | None) -> Self | MaxBytesDeserializer[Self]:
        """Helper method to optionally wrap the current deserializer."""
        if max_bytes is None:
            return self
        return self.with_max_bytes(max_bytes)
