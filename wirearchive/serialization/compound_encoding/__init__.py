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
This module was made to hold compound encoding implementations.

Compound encoders are encoders that are generic in some way and will delegate the encoding of some portion to another
encoder. For example a `Pair[A, B]` encoder is prepared to encode the framing and delegate the rest to encoders that
know how to encode `A` and `B`.

The general organization should be that each submodule `x` deals with a single container shape and look like this:

    def encode_x(serializer: Serializer, value: ValueType, ...encoders..., ...config params...) -> None:
        ...

    @propagate_result
    def decode_x(deserializer: Deserializer, ...decoders..., ...config params...) -> Result[ValueType, ...]:
        ...

Decoders stop at the first failing nested decode and return its `Err` unchanged. Container decoders accept an optional
`out` destination, which is cleared before anything is read and must be discarded if the result is an `Err`.
"""

from typing import Protocol, TypeVar

from wirearchive.serialization.deserializer import Deserializer
from wirearchive.serialization.exceptions import SerializationError
from wirearchive.serialization.serializer import Serializer
from wirearchive.utils.result import Result

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)


class Decoder(Protocol[T_co]):
    def __call__(self, deserializer: Deserializer, /) -> Result[T_co, SerializationError]:
        ...


class Encoder(Protocol[T_contra]):
    def __call__(self, serializer: Serializer, value: T_contra, /) -> None:
        ...
