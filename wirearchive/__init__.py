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
Binary encoding of container values: pairs, sequences, linked lists, ordered sets and maps, and text.

The encoding is not self-describing, both ends must agree on the shape of the value beforehand.
"""

from wirearchive.archive import Archive, error_code
from wirearchive.conf.settings import ArchiveSettings
from wirearchive.serialization import ErrorCode, SerializationError
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
    BoolShape,
    IntShape,
    ListShape,
    OrderedMapShape,
    OrderedSetShape,
    PairShape,
    SequenceShape,
    Shape,
    StrShape,
    TextShape,
)
from wirearchive.version import __version__

__all__ = [
    'Archive',
    'ArchiveSettings',
    'error_code',
    'ErrorCode',
    'SerializationError',
    'Shape',
    'IntShape',
    'BoolShape',
    'TextShape',
    'StrShape',
    'PairShape',
    'SequenceShape',
    'ListShape',
    'OrderedSetShape',
    'OrderedMapShape',
    'INT8',
    'INT16',
    'INT32',
    'INT64',
    'UINT8',
    'UINT16',
    'UINT32',
    'UINT64',
    'BOOL',
    '__version__',
]
