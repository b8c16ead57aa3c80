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

from collections.abc import Hashable, Iterable, Mapping
from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from serdecore.conf.get_settings import get_global_settings
from serdecore.serde_types.serde_type import SerdeType
from serdecore.serde_types.utils import is_origin_hashable, pretty_type
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.compound_encoding.mapping import decode_mapping, encode_mapping

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class MapSerdeType(SerdeType[Mapping[H, T]]):
    """ Represents builtin `dict` values, a length followed by each key and its value, in iteration order.

    Duplicate keys can only come from decoding, what happens then depends on the `MAP_DUPLICATE_KEYS` setting (read
    when the SerdeType is built): with `last_wins` the value read last is kept, with `reject` decoding fails.
    """

    __slots__ = ('_key', '_value', '_reject_duplicates')

    _key: SerdeType[H]
    _value: SerdeType[T]
    _reject_duplicates: bool
    _is_hashable = False

    def __init__(self, key: SerdeType[H], value: SerdeType[T], *, reject_duplicates: bool = False) -> None:
        self._key = key
        self._value = value
        self._reject_duplicates = reject_duplicates

    def _build(self, items: Iterable[tuple[H, T]]) -> dict[H, T]:
        return dict(items)

    @override
    @classmethod
    def _from_type(cls, type_: type[Mapping[H, T]], /, *, type_map: SerdeType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not isinstance(origin_type, type) or not issubclass(origin_type, Mapping):
            raise TypeError('expected Mapping type')
        args = get_args(type_)
        if not args or len(args) != 2:
            raise TypeError(f'expected {origin_type.__name__}[<key type>, <value type>]')
        key_type, value_type = args
        if not is_origin_hashable(key_type):
            raise TypeError(f'{key_type} is not hashable')
        key_serde_type = SerdeType.from_type(key_type, type_map=type_map)

        def check_key() -> None:
            if not key_serde_type.is_hashable():
                raise TypeError(f'{pretty_type(key_type)} values are not hashable')

        # a recursive key type is only known to be hashable once it's completely built
        type_map.registry.check_when_built(check_key)
        reject_duplicates = get_global_settings().MAP_DUPLICATE_KEYS == 'reject'
        return cls(
            key_serde_type,
            SerdeType.from_type(value_type, type_map=type_map),
            reject_duplicates=reject_duplicates,
        )

    @override
    def _check_value(self, value: Mapping[H, T], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise TypeError('expected Mapping type')
        if deep:
            for k, v in value.items():
                self._key._check_value(k, deep=True)
                self._value._check_value(v, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Mapping[H, T], /) -> None:
        encode_mapping(serializer, value, self._key.serialize, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Mapping[H, T]:
        return decode_mapping(
            deserializer,
            self._key.deserialize,
            self._value.deserialize,
            self._build,
            reject_duplicates=self._reject_duplicates,
        )
