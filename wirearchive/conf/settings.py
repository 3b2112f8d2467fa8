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

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from wirearchive.serialization.consts import DEFAULT_MAX_CONTAINER_COUNT, DEFAULT_MAX_TEXT_LENGTH
from wirearchive.utils.yaml import model_from_extended_yaml


class ArchiveSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    # Largest text payload, in bytes, a decoder will allocate for; `None` removes the limit
    MAX_TEXT_LENGTH: Optional[int] = DEFAULT_MAX_TEXT_LENGTH

    # Largest element count a container decoder accepts; `None` removes the limit
    MAX_CONTAINER_COUNT: Optional[int] = DEFAULT_MAX_CONTAINER_COUNT

    # Byte budget for a whole message decoded through `Archive`; `None` removes the limit
    MAX_MESSAGE_SIZE: Optional[int] = None

    # Whether `Archive.loads` accepts bytes left over after the value
    ALLOW_TRAILING_DATA: bool = False

    # Apply MAX_CONTAINER_COUNT to linked lists too, which are decoded in relaxed mode otherwise
    STRICT_LIST_DECODING: bool = False

    # Rebuild ordered sets/maps through the position hint, plain insertion otherwise; results are the same
    USE_INSERTION_HINT: bool = True

    @field_validator('MAX_TEXT_LENGTH', 'MAX_CONTAINER_COUNT', 'MAX_MESSAGE_SIZE')
    @classmethod
    def _check_not_negative(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError('limit must not be negative')
        return value

    @classmethod
    def from_yaml(cls, *, filepath: str) -> 'ArchiveSettings':
        """Takes a filepath to a yaml file and returns a validated ArchiveSettings instance."""
        return model_from_extended_yaml(cls, filepath=filepath, custom_root=Path(__file__).parent)
