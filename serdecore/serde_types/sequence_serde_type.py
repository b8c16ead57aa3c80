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

from collections.abc import Iterable, Sequence
from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.compound_encoding.collection import decode_collection, encode_collection

T = TypeVar('T')


class SequenceSerdeType(SerdeType[list[T]]):
    """ Represents builtin `list` values, a length followed by each item in order.

    Tuples are also accepted when serializing, `tuple[T, ...]` is handled by `TupleSerdeType`.
    """

    __slots__ = ('_item',)

    _is_hashable = False
    _item: SerdeType[T]

    def __init__(self, item_serde_type: SerdeType[T], /) -> None:
        self._item = item_serde_type

    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)

    @override
    @classmethod
    def _from_type(cls, type_: type[list[T]], /, *, type_map: SerdeType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not isinstance(origin_type, type) or not issubclass(origin_type, Sequence):
            raise TypeError('expected Sequence type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise TypeError(f'expected {origin_type.__name__}[<type>]')
        item_type, = args
        return cls(SerdeType.from_type(item_type, type_map=type_map))

    @override
    def _check_value(self, value: list[T], /, *, deep: bool) -> None:
        if not isinstance(value, (list, tuple)):
            raise TypeError('expected list')
        if deep:
            for i in value:
                self._item._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: list[T], /) -> None:
        encode_collection(serializer, value, self._item.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> list[T]:
        return decode_collection(deserializer, self._item.deserialize, self._build)
