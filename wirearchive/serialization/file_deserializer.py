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

from typing import BinaryIO

from structlog import get_logger
from typing_extensions import override

from ..utils.result import Err, Ok, Result, propagate_result
from .deserializer import Deserializer
from .exceptions import BadDataError, InvalidLengthError, ReadError, SerializationError, TruncatedError
from .types import Buffer

logger = get_logger()


class FileDeserializer(Deserializer):
    """Deserializer that pulls bytes from a binary file object (a file, a pipe, a socket file).

    A read is repeated until it is satisfied or the file reports EOF, so a short `read()` from a pipe is not mistaken
    for the end of the stream. Any `OSError` raised by the file becomes a `ReadError`.
    """

    def __init__(self, fp: BinaryIO) -> None:
        self._fp = fp
        self._peeked: bytes = b''
        self._eof: bool = False
        self.log = logger.new(name=getattr(fp, 'name', None))

    @propagate_result
    @override
    def finalize(self) -> Result[None, SerializationError]:
        if self._peek().unwrap_or_propagate():
            return Err(BadDataError('trailing data'))
        return Ok(None)

    @override
    def is_empty(self) -> bool:
        match self._peek():
            case Ok(has_data):
                return not has_data
            case Err(error):
                self.log.debug('read failed while checking for eof', error=str(error))
                return False

    def _peek(self) -> Result[bool, SerializationError]:
        """Whether there is at least one more byte, which is kept for the next read."""
        if self._peeked:
            return Ok(True)
        if self._eof:
            return Ok(False)
        try:
            self._peeked = self._fp.read(1)
        except OSError as e:
            return Err(ReadError('read failed while checking for end of data'), e)
        if not self._peeked:
            self._eof = True
        return Ok(not self._eof)

    @override
    def read_byte(self) -> Result[int, SerializationError]:
        match self.read_bytes(1):
            case Ok(data):
                return Ok(data[0])
            case err:
                return err

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> Result[Buffer, SerializationError]:
        if n < 0:
            return Err(InvalidLengthError('value cannot be negative'))
        buf = bytearray(n)
        view = memoryview(buf)
        pos = len(self._peeked[:n])
        view[:pos] = self._peeked[:pos]
        self._peeked = self._peeked[pos:]
        while pos < n and not self._eof:
            try:
                read = self._fp.readinto(view[pos:])  # type: ignore[attr-defined]
            except OSError as e:
                return Err(ReadError(f'read of {n} bytes failed'), e)
            if not read:
                self._eof = True
                break
            pos += read
        if exact and pos < n:
            return Err(TruncatedError('not enough bytes to read'))
        return Ok(view[:pos])

    @override
    def read_all(self) -> Result[Buffer, SerializationError]:
        try:
            rest = self._fp.read()
        except OSError as e:
            return Err(ReadError('read failed'), e)
        data = self._peeked + rest
        self._peeked = b''
        self._eof = True
        return Ok(memoryview(data))
