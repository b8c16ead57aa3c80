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

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.encoding.float import is_f32_exact
from serdecore.utils.typing import is_subclass


class _FloatSerdeType(SerdeType[float]):
    """ Base class for IEEE-754 floats, the bit pattern (NaN payloads included) is left to the format.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_subclass(type_, float):
            raise TypeError('expected float type')
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if not isinstance(value, float):
            raise TypeError('expected float')


class F32SerdeType(_FloatSerdeType):
    """ Represents `F32` values, they must be exactly representable in binary32.
    """

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        super()._check_value(value, deep=deep)
        if not is_f32_exact(value):
            raise ValueError(f'{value!r} is not representable as a 32-bit float')

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        serializer.write_f32(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        return deserializer.read_f32()


class F64SerdeType(_FloatSerdeType):
    """ Represents `F64` and builtin `float` values.
    """

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        serializer.write_f64(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        return deserializer.read_f64()
