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

from typing import NamedTuple, TypeVar, get_type_hints

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.compound_encoding.tuple import decode_tuple, encode_tuple

N = TypeVar('N', bound=tuple)


# XXX: we can't usefully describe the tuple type
class NamedTupleSerdeType(SerdeType[N]):
    """ Represents `typing.NamedTuple` classes, encoded exactly like the tuple of their fields.
    """

    __slots__ = ('_is_hashable', '_args', '_actual_type')

    _args: tuple[SerdeType, ...]
    _actual_type: type[N]

    def __init__(self, namedtuple: type[N]) -> None:
        self._actual_type = namedtuple
        # filled by _resolve, it is empty while the class is being registered
        self._args = ()
        self._is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[N], /, *, type_map: SerdeType.TypeMap) -> Self:
        if not isinstance(type_, type) or NamedTuple not in getattr(type_, '__orig_bases__', tuple()):
            raise TypeError('expected NamedTuple type')
        return type_map.registry.get_or_build(
            type_,
            lambda: cls(type_),
            lambda serde_type: serde_type._resolve(type_map),
        )

    def _resolve(self, type_map: SerdeType.TypeMap) -> None:
        hints = get_type_hints(self._actual_type)
        field_names = self._actual_type._fields  # type: ignore[attr-defined]
        self._args = tuple(SerdeType.from_type(hints[field_name], type_map=type_map) for field_name in field_names)
        self._update_hashable()

    def _update_hashable(self) -> bool:
        is_hashable = all(arg_serde_type.is_hashable() for arg_serde_type in self._args)
        changed = is_hashable != self._is_hashable
        self._is_hashable = is_hashable
        return changed

    @override
    def _check_value(self, value: N, /, *, deep: bool) -> None:
        if not isinstance(value, tuple):
            raise TypeError('expected tuple or namedtuple')
        if len(value) != len(self._args):
            raise TypeError('wrong number of arguments')
        if deep:
            for i, arg_serde_type in zip(value, self._args):
                arg_serde_type._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: N, /) -> None:
        encode_tuple(serializer, value, tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> N:
        return self._actual_type(*decode_tuple(deserializer, tuple(i.deserialize for i in self._args)))
