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
from serdecore.serialization.encoding.char import is_scalar_value
from serdecore.types import Char
from serdecore.utils.typing import is_subclass


class CharSerdeType(SerdeType[Char]):
    """ Represents a single Unicode scalar value, a `str` of length 1 that is not a surrogate.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[Char], /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_subclass(type_, str):
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: Char, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str')
        if len(value) != 1:
            raise ValueError(f'expected a single character, got {len(value)}')
        if not is_scalar_value(ord(value)):
            raise ValueError(f'{value!r} is not a Unicode scalar value')

    @override
    def _serialize(self, serializer: Serializer, value: Char, /) -> None:
        serializer.write_char(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Char:
        return Char(deserializer.read_char())
