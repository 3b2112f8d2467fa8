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

from enum import IntEnum
from typing import ClassVar


class ErrorCode(IntEnum):
    """Integer view of a decode result, zero is success and each failure kind has its own negative code."""
    OK = 0
    READ_FAILED = -1
    TRUNCATED = -2
    INVALID_LENGTH = -3
    BAD_DATA = -4
    LIMIT_EXCEEDED = -5


class SerializationError(Exception):
    code: ClassVar[ErrorCode]


class ReadError(SerializationError):
    """The underlying source failed outright, as opposed to simply running out of data."""
    code = ErrorCode.READ_FAILED


class TruncatedError(SerializationError):
    """The source returned fewer bytes than a declared length required."""
    code = ErrorCode.TRUNCATED


class InvalidLengthError(SerializationError):
    """A length or count field decoded to a value that is negative or above the accepted limit."""
    code = ErrorCode.INVALID_LENGTH


class BadDataError(SerializationError):
    code = ErrorCode.BAD_DATA


class MaxBytesExceededError(SerializationError):
    """ This error is returned (or raised, when writing) when an adapted serializer reached its byte budget.

    After this error the adapted serializer/deserializer cannot be used anymore. The point where it stopped leaves the
    rest of the data unusable, so it should be considered a failed (de)serialization overall, and not simply a failed
    read/write operation.
    """
    code = ErrorCode.LIMIT_EXCEEDED
