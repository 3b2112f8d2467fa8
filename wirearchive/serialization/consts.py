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

from typing import Final, Literal

# Every fixed-width integer, size fields included, is written in this byte order regardless of the host.
BYTEORDER: Final[Literal['little']] = 'little'

# Width in bytes of container counts (unsigned) and text lengths (signed).
SIZE_FIELD_LENGTH: Final[int] = 8

# Largest text payload a decoder will allocate a buffer for, 64 MiB.
DEFAULT_MAX_TEXT_LENGTH: Final[int] = 64 * 2**20

# Largest element count a container decoder will accept before reading elements.
DEFAULT_MAX_CONTAINER_COUNT: Final[int] = 2**20
