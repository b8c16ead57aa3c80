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

from collections.abc import Iterable
from typing import get_args, get_origin

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.compound_encoding.collection import decode_collection, encode_collection
from serdecore.serialization.compound_encoding.tuple import decode_tuple, encode_tuple


# XXX: we can't usefully describe the tuple type
class TupleSerdeType(SerdeType[tuple]):
    """ Represents tuple values, which can either be homogeneous-type variable size or heterogeneous-type fixed size.

    `tuple[T, ...]` is a sequence (length then items), `tuple[A, B, C]` is a tuple of the value model (each item in
    order, nothing else).
    """

    __slots__ = ('_varsize', '_args')

    _varsize: bool
    _args: tuple[SerdeType, ...]

    def __init__(self, args: SerdeType | Iterable[SerdeType]) -> None:
        if isinstance(args, SerdeType):
            self._varsize = True
            self._args = (args,)
        else:
            self._varsize = False
            self._args = tuple(args)
            for arg in self._args:
                assert isinstance(arg, SerdeType)

    @property
    def _is_hashable(self) -> bool:  # type: ignore[override]
        return all(arg_serde_type.is_hashable() for arg_serde_type in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: SerdeType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not isinstance(origin_type, type) or not issubclass(origin_type, tuple):
            raise TypeError('expected tuple type')
        if not hasattr(type_, '__args__'):
            raise TypeError('expected tuple[<args...>]')
        args = list(get_args(type_))
        if args and args[-1] is Ellipsis:
            if len(args) != 2:
                raise TypeError('ellipsis only allowed with one type: tuple[T, ...]')
            arg, _ellipsis = args
            return cls(SerdeType.from_type(arg, type_map=type_map))
        else:
            return cls(SerdeType.from_type(arg, type_map=type_map) for arg in args)

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, tuple):
            raise TypeError('expected tuple')
        if not self._varsize and len(value) != len(self._args):
            raise TypeError(f'expected a tuple of size {len(self._args)}, got {len(value)}')
        if deep:
            if self._varsize:
                arg_serde_type, = self._args
                for i in value:
                    arg_serde_type._check_value(i, deep=True)
            else:
                for i, arg_serde_type in zip(value, self._args):
                    arg_serde_type._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple, /) -> None:
        if self._varsize:
            assert len(self._args) == 1
            encode_collection(serializer, value, self._args[0].serialize)
        else:
            encode_tuple(serializer, value, tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple:
        if self._varsize:
            assert len(self._args) == 1
            return decode_collection(deserializer, self._args[0].deserialize, tuple)
        else:
            return decode_tuple(deserializer, tuple(i.deserialize for i in self._args))
