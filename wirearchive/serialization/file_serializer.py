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

from typing import BinaryIO, Optional

from structlog import get_logger
from typing_extensions import override

from .serializer import Serializer
from .types import Buffer

logger = get_logger()


class FileSerializer(Serializer):
    """Serializer that writes straight to a binary file object.

    Encoders treat writes as infallible, so an `OSError` from the file is not raised on the spot: the first one is
    recorded in `error`, every write after it is dropped, and `finalize()` raises it.
    """

    def __init__(self, fp: BinaryIO) -> None:
        self._fp = fp
        self._pos: int = 0
        self.error: Optional[OSError] = None
        self.log = logger.new(name=getattr(fp, 'name', None))

    @override
    def finalize(self) -> Buffer:
        """Flush the file and return an empty buffer, the bytes are in the file.

        Raises the deferred `OSError` if any write failed.
        """
        if self.error is None:
            try:
                self._fp.flush()
            except OSError as e:
                self._fail(e)
        if self.error is not None:
            raise self.error
        return b''

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        self.write_bytes(int.to_bytes(data, length=1, byteorder='little'))

    @override
    def write_bytes(self, data: Buffer) -> None:
        if self.error is not None:
            return
        view = memoryview(data)
        try:
            self._fp.write(view)
        except OSError as e:
            self._fail(e)
            return
        self._pos += len(view)

    def _fail(self, e: OSError) -> None:
        self.log.error('write failed, dropping further writes', pos=self._pos, error=str(e))
        self.error = e
