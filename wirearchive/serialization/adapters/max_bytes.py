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

from typing import TypeVar

from typing_extensions import override

from ...utils.result import Err, Ok, Result, propagate_result
from ..deserializer import Deserializer
from ..exceptions import MaxBytesExceededError, SerializationError
from ..serializer import Serializer
from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter, GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class MaxBytesSerializer(GenericSerializerAdapter[S]):
    """Serializer adapter that raises `MaxBytesExceededError` once more than `max_bytes` would be written.

    Writing past the budget is a contract violation of the caller, so unlike reads it raises.
    """

    def __init__(self, serializer: S, max_bytes: int) -> None:
        super().__init__(serializer)
        self._bytes_left = max_bytes

    def _check_update_exceeds(self, write_size: int) -> None:
        self._bytes_left -= write_size
        if self._bytes_left < 0:
            raise MaxBytesExceededError(f'write exceeds budget by {-self._bytes_left} bytes')

    @override
    def write_byte(self, data: int) -> None:
        self._check_update_exceeds(1)
        super().write_byte(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        data_view = memoryview(data)
        self._check_update_exceeds(len(data_view))
        super().write_bytes(data_view)


class MaxBytesDeserializer(GenericDeserializerAdapter[D]):
    """Deserializer adapter that refuses any read that would go past `max_bytes`.

    The check happens before the inner deserializer is touched, so a declared length that can't possibly fit is
    rejected without reading (or allocating) anything.
    """

    def __init__(self, deserializer: D, max_bytes: int) -> None:
        super().__init__(deserializer)
        self._bytes_left = max_bytes

    @property
    def bytes_left(self) -> int:
        return self._bytes_left

    def _check_exceeds(self, read_size: int) -> Result[None, SerializationError]:
        if read_size > self._bytes_left:
            return Err(MaxBytesExceededError(f'read of {read_size} bytes exceeds budget of {self._bytes_left}'))
        return Ok(None)

    @propagate_result
    @override
    def read_byte(self) -> Result[int, SerializationError]:
        self._check_exceeds(1).unwrap_or_propagate()
        b = super().read_byte().unwrap_or_propagate()
        self._bytes_left -= 1
        return Ok(b)

    @propagate_result
    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Result[Buffer, SerializationError]:
        self._check_exceeds(n).unwrap_or_propagate()
        data = super().read_bytes(n, exact=exact).unwrap_or_propagate()
        self._bytes_left -= len(data)
        return Ok(data)

    @propagate_result
    @override
    def read_all(self) -> Result[Buffer, SerializationError]:
        data = super().read_bytes(self._bytes_left, exact=False).unwrap_or_propagate()
        self._bytes_left -= len(data)
        if not self.is_empty():
            return Err(MaxBytesExceededError('data left after reading the whole budget'))
        return Ok(data)
