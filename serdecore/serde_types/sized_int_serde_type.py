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

from typing import ClassVar

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.utils.typing import is_subclass


class _SizedIntSerdeType(SerdeType[int]):
    """ Base class for classes that represent builtin `int` values with a fixed size and signedness.

    The value goes to the wire through the writer operation of its kind, `write_u8` for `U8`, `write_i64` for `I64`
    and so on.
    """

    _is_hashable = True
    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _bit_size: ClassVar[int]

    @classmethod
    def _kind(cls) -> str:
        return f'{"i" if cls._signed else "u"}{cls._bit_size}'

    @classmethod
    def _upper_bound_value(cls) -> int:
        if cls._signed:
            return 2**(cls._bit_size - 1) - 1
        else:
            return 2**cls._bit_size - 1

    @classmethod
    def _lower_bound_value(cls) -> int:
        if cls._signed:
            return -(2**(cls._bit_size - 1))
        else:
            return 0

    @override
    @classmethod
    def _from_type(cls, type_: type[int], /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_subclass(type_, int) or is_subclass(type_, bool):
            raise TypeError('expected int type')
        return cls()

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        # XXX: bool is a subclass of int, but it is a different shape
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError('expected integer')
        self._check_range(value)

    def _check_range(self, value: int) -> None:
        if value > self._upper_bound_value():
            raise ValueError(f'{value} is above the upper bound of {self._kind()}')
        if value < self._lower_bound_value():
            raise ValueError(f'{value} is below the lower bound of {self._kind()}')

    @override
    def _serialize(self, serializer: Serializer, value: int, /) -> None:
        getattr(serializer, f'write_{self._kind()}')(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> int:
        return getattr(deserializer, f'read_{self._kind()}')()


class U8SerdeType(_SizedIntSerdeType):
    _signed = False
    _bit_size = 8


class U16SerdeType(_SizedIntSerdeType):
    _signed = False
    _bit_size = 16


class U32SerdeType(_SizedIntSerdeType):
    _signed = False
    _bit_size = 32


class U64SerdeType(_SizedIntSerdeType):
    _signed = False
    _bit_size = 64


class U128SerdeType(_SizedIntSerdeType):
    _signed = False
    _bit_size = 128


class I8SerdeType(_SizedIntSerdeType):
    _signed = True
    _bit_size = 8


class I16SerdeType(_SizedIntSerdeType):
    _signed = True
    _bit_size = 16


class I32SerdeType(_SizedIntSerdeType):
    _signed = True
    _bit_size = 32


class I64SerdeType(_SizedIntSerdeType):
    _signed = True
    _bit_size = 64


class I128SerdeType(_SizedIntSerdeType):
    _signed = True
    _bit_size = 128
