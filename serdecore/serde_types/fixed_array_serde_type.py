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

from collections.abc import Sequence
from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.compound_encoding.fixed_array import decode_fixed_array, encode_fixed_array
from serdecore.types import FixedArray

T = TypeVar('T')


class FixedArraySerdeType(SerdeType[tuple[T, ...]]):
    """ Represents `FixedArray[T, N]` values, tuples of exactly N items, lists are also accepted when serializing.
    """

    __slots__ = ('_item', '_length')

    _item: SerdeType[T]
    _length: int

    def __init__(self, item_serde_type: SerdeType[T], length: int) -> None:
        self._item = item_serde_type
        self._length = length

    @property
    def _is_hashable(self) -> bool:  # type: ignore[override]
        return self._item.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple[T, ...]], /, *, type_map: SerdeType.TypeMap) -> Self:
        if get_origin(type_) is not FixedArray:
            raise TypeError('expected FixedArray[<type>, <length>]')
        item_type, length = get_args(type_)
        return cls(SerdeType.from_type(item_type, type_map=type_map), length)

    @override
    def _check_value(self, value: tuple[T, ...], /, *, deep: bool) -> None:
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
            raise TypeError('expected tuple')
        if len(value) != self._length:
            raise ValueError(f'expected exactly {self._length} elements, got {len(value)}')
        if deep:
            for i in value:
                self._item._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple[T, ...], /) -> None:
        encode_fixed_array(serializer, value, self._item.serialize, length=self._length)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple[T, ...]:
        return decode_fixed_array(deserializer, self._item.deserialize, length=self._length)
