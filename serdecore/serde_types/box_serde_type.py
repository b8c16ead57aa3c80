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

from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.types import Box

T = TypeVar('T')


class BoxSerdeType(SerdeType[T]):
    """ Represents `Box[T]`, it is transparent: the value is the `T` itself and it is (de)serialized as a `T`.
    """

    __slots__ = ('_inner',)

    _inner: SerdeType[T]

    def __init__(self, inner: SerdeType[T]) -> None:
        self._inner = inner

    @property
    def _is_hashable(self) -> bool:  # type: ignore[override]
        # computed on demand, the inner type can be a composite that is still being built
        return self._inner.is_hashable()

    @property
    def inner(self) -> SerdeType[T]:
        return self._inner

    @override
    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: SerdeType.TypeMap) -> Self:
        if get_origin(type_) is not Box:
            raise TypeError('expected Box[<type>]')
        inner_type, = get_args(type_)
        return cls(SerdeType.from_type(inner_type, type_map=type_map))

    @override
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        self._inner._check_value(value, deep=deep)

    @override
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        self._inner._serialize(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        return self._inner._deserialize(deserializer)
