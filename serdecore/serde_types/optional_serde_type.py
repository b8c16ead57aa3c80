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

from types import NoneType, UnionType
from typing import Optional, TypeVar, Union, get_args, get_origin

from typing_extensions import Self, override

from serdecore.serde_types.box_serde_type import BoxSerdeType
from serdecore.serde_types.serde_type import SerdeType
from serdecore.serde_types.unit_serde_type import UnitSerdeType
from serdecore.serde_types.utils import pretty_type
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.compound_encoding.optional import decode_optional, encode_optional
from serdecore.types import Option, Some

V = TypeVar('V')


class OptionalSerdeType(SerdeType[V | None]):
    """ Represents a serde_type that is either `V` or `None`.

    `None` is the absent value, so `V` itself cannot have `None` among its values: `T | None` is rejected when `T` is
    a unit or an optional (directly or through a `Box`), `Option[T]` is the way to express those.
    """

    __slots__ = ('_value',)

    _value: SerdeType[V]

    def __init__(self, serde_type: SerdeType[V]) -> None:
        self._value = serde_type

    @property
    def _is_hashable(self) -> bool:  # type: ignore[override]
        return self._value.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: SerdeType.TypeMap) -> Self:
        if get_origin(type_) not in (UnionType, Union):
            raise TypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if len(args) != 2 or NoneType not in args:
            raise TypeError('type must be either `None | T` or `T | None`')
        not_none_type, = tuple(arg for arg in args if arg is not NoneType)  # get the type that is not None
        value_serde_type = SerdeType.from_type(not_none_type, type_map=type_map)
        if _has_none_value(value_serde_type):
            raise TypeError(f'{pretty_type(not_none_type)} can be None, use Option[{pretty_type(not_none_type)}]')
        return cls(value_serde_type)

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        if deep:
            self._value._check_value(value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: V | None, /) -> None:
        encode_optional(serializer, value, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> V | None:
        return decode_optional(deserializer, self._value.deserialize)


class OptionSerdeType(SerdeType[Optional[Some[V]]]):
    """ Represents `Option[V]`, the values are `None` or `Some(value)`, on the wire it is the same as `V | None`.
    """

    __slots__ = ('_value',)

    _value: SerdeType[V]

    def __init__(self, serde_type: SerdeType[V]) -> None:
        self._value = serde_type

    @property
    def _is_hashable(self) -> bool:  # type: ignore[override]
        return self._value.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[Optional[Some[V]]], /, *, type_map: SerdeType.TypeMap) -> Self:
        if get_origin(type_) is not Option:
            raise TypeError('expected Option[<type>]')
        value_type, = get_args(type_)
        return cls(SerdeType.from_type(value_type, type_map=type_map))

    @override
    def _check_value(self, value: Optional[Some[V]], /, *, deep: bool) -> None:
        if value is None:
            return
        if not isinstance(value, Some):
            raise TypeError('expected None or a Some instance')
        if deep:
            self._value._check_value(value.value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Optional[Some[V]], /) -> None:
        encode_optional(serializer, value, self._serialize_some)

    def _serialize_some(self, serializer: Serializer, value: Some[V], /) -> None:
        self._value.serialize(serializer, value.value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[Some[V]]:
        return decode_optional(deserializer, self._deserialize_some)

    def _deserialize_some(self, deserializer: Deserializer, /) -> Some[V]:
        return Some(self._value.deserialize(deserializer))


def _has_none_value(serde_type: SerdeType) -> bool:
    while isinstance(serde_type, BoxSerdeType):
        serde_type = serde_type.inner
    return isinstance(serde_type, (UnitSerdeType, OptionalSerdeType, OptionSerdeType))
