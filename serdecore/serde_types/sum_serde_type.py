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

from typing import Any, Optional, TypeVar

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serde_types.variant_case_table import VariantCaseTable
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.compound_encoding.variant import decode_variant, encode_variant
from serdecore.sum_type import Sum

S = TypeVar('S', bound=Sum)


class SumSerdeType(SerdeType[S]):
    """ Represents the values of a `Sum` subclass: the variant index of the alternative followed by its payload.

    Decoding goes through the variant case table of the sum type, which is built once, together with this SerdeType.
    """

    __slots__ = ('_is_hashable', '_sum_class', '_payloads', '_table')

    _sum_class: type[S]
    _payloads: tuple[SerdeType[Any], ...]
    _table: Optional[VariantCaseTable[S]]

    def __init__(self, sum_class: type[S]) -> None:
        self._sum_class = sum_class
        # filled by _resolve, they are empty while the class is being registered
        self._payloads = ()
        self._table = None
        self._is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[S], /, *, type_map: SerdeType.TypeMap) -> Self:
        if not isinstance(type_, type) or not issubclass(type_, Sum) or type_ is Sum:
            raise TypeError('expected a Sum subclass')
        if type_._sum_class is not type_:  # type: ignore[attr-defined]
            raise TypeError(f'{type_.__qualname__} is an alternative, use the sum type in annotations')
        return type_map.registry.get_or_build(
            type_,
            lambda: cls(type_),
            lambda serde_type: serde_type._resolve(type_map),
        )

    def _resolve(self, type_map: SerdeType.TypeMap) -> None:
        payload_types = self._sum_class.payload_types()
        self._payloads = tuple(
            SerdeType.from_type(payload_type, type_map=type_map) for payload_type in payload_types.values()
        )
        self._update_hashable()
        self._table = VariantCaseTable.build(self._sum_class, self._payloads)

    def _update_hashable(self) -> bool:
        """Recompute `_is_hashable` from the members, returns whether it changed."""
        is_hashable = all(payload.is_hashable() for payload in self._payloads)
        changed = is_hashable != self._is_hashable
        self._is_hashable = is_hashable
        return changed

    @property
    def variant_case_table(self) -> VariantCaseTable[S]:
        assert self._table is not None, 'not resolved yet'
        return self._table

    @override
    def _check_value(self, value: S, /, *, deep: bool) -> None:
        if not isinstance(value, self._sum_class) or type(value) is self._sum_class:
            raise TypeError(f'expected {self._sum_class.__qualname__} instance')
        if deep:
            self._payloads[value.variant_index]._check_value(value.value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: S, /) -> None:
        index = value.variant_index
        encode_variant(serializer, index, value.value, self._payloads[index].serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> S:
        return decode_variant(deserializer, self.variant_case_table)
