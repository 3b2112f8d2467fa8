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

from typing import Any, BinaryIO, Generic, Optional, TypeVar

from structlog import get_logger

from wirearchive.conf.get_settings import get_global_settings
from wirearchive.conf.settings import ArchiveSettings
from wirearchive.serialization import Deserializer, ErrorCode, SerializationError, Serializer
from wirearchive.serialization.types import Buffer
from wirearchive.shapes import Shape
from wirearchive.utils.result import Err, Ok, Result

logger = get_logger()

T = TypeVar('T')


class Archive(Generic[T]):
    """ Reads and writes whole values of a single shape, from/to bytes or binary files.

    >>> from wirearchive.shapes import PairShape, StrShape, UINT64
    >>> archive = Archive(PairShape(UINT64, StrShape(settings=ArchiveSettings())), settings=ArchiveSettings())
    >>> data = archive.dumps((42, 'hi'))
    >>> data.hex()
    '2a0000000000000002000000000000006869'
    >>> archive.loads(data)
    Ok((42, 'hi'))
    >>> print(archive.loads(data + b'!').err())
    trailing data
    """

    def __init__(self, shape: Shape[T], *, settings: Optional[ArchiveSettings] = None) -> None:
        self.shape = shape
        self._settings = settings or get_global_settings()
        self.log = logger.new(shape=repr(shape))

    def dumps(self, value: T) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.shape.encode(serializer, value)
        return bytes(serializer.finalize())

    def dump(self, value: T, fp: BinaryIO) -> None:
        """Write the encoded value to `fp`, a write error on `fp` is raised after the whole value was encoded."""
        serializer = Serializer.build_file_serializer(fp)
        self.shape.encode(serializer, value)
        serializer.finalize()

    def loads(self, data: Buffer) -> Result[T, SerializationError]:
        return self._decode(Deserializer.build_bytes_deserializer(data))

    def load(self, fp: BinaryIO) -> Result[T, SerializationError]:
        """ Read one value from `fp`.

        Unless ALLOW_TRAILING_DATA is set, the file must end right after the value.
        """
        return self._decode(Deserializer.build_file_deserializer(fp))

    def _decode(self, deserializer: Deserializer) -> Result[T, SerializationError]:
        source = deserializer.with_optional_max_bytes(self._settings.MAX_MESSAGE_SIZE)
        result = self.shape.decode(source)
        match result:
            case Err(error):
                self.log.debug('decode failed', code=error.code.name, reason=str(error))
                return result
            case Ok() if not self._settings.ALLOW_TRAILING_DATA:
                match source.finalize():
                    case Err(error) as trailing:
                        self.log.debug('decode failed', code=error.code.name, reason=str(error))
                        return trailing
        return result


def error_code(result: Result[Any, SerializationError]) -> int:
    """ Integer view of a decode result: 0 on success, a negative code per failure kind.

    >>> error_code(Ok(1))
    0
    >>> from wirearchive.serialization import TruncatedError
    >>> error_code(Err(TruncatedError('not enough bytes to read')))
    -2
    """
    match result:
        case Ok():
            return int(ErrorCode.OK)
        case Err(error):
            return int(error.code)
    raise TypeError(f'not a result: {result!r}')
