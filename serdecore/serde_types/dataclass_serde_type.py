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

"""
Dataclasses are user-defined products, they are encoded exactly like the tuple of their fields in declaration order.

Only fields that take part in `__init__` are encoded, the others are expected to be derived from them.

>>> from dataclasses import dataclass
>>> from serdecore.serde_types import make_serde_type
>>> from serdecore.types import U8
>>> @dataclass
... class Pixel:
...     x: U8
...     y: U8
...     label: str
>>> serde_type = make_serde_type(Pixel)
>>> serde_type.to_bytes(Pixel(1, 2, 'a')).hex()
'01020161'
>>> serde_type.from_bytes(bytes.fromhex('01020161'))
Pixel(x=1, y=2, label='a')
"""

from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING, Any, TypeVar, get_type_hints

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

D = TypeVar('D', bound='DataclassInstance')


class DataclassSerdeType(SerdeType[D]):
    __slots__ = ('_fields', '_class')
    _is_hashable = False  # it might be possible to calculate _is_hashable, but we don't need it
    _fields: dict[str, SerdeType]
    _class: type[D]

    def __init__(self, class_: type[D]) -> None:
        self._class = class_
        # filled by _resolve, it is empty while the class is being registered
        self._fields = {}

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: SerdeType.TypeMap) -> Self:
        if not isinstance(type_, type) or not is_dataclass(type_):
            raise TypeError('expected a dataclass')
        return type_map.registry.get_or_build(
            type_,
            lambda: cls(type_),
            lambda serde_type: serde_type._resolve(type_map),
        )

    def _resolve(self, type_map: SerdeType.TypeMap) -> None:
        hints = get_type_hints(self._class)
        # XXX: the order is important, but `dict` and `fields` should have a stable order
        for field in fields(self._class):
            if not field.init:
                continue
            self._fields[field.name] = SerdeType.from_type(hints[field.name], type_map=type_map)

    def _update_hashable(self) -> bool:
        return False

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__qualname__} instance')
        if deep:
            for field_name, field_serde_type in self._fields.items():
                field_serde_type._check_value(getattr(value, field_name), deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: D, /) -> None:
        for field_name, field_serde_type in self._fields.items():
            field_serde_type.serialize(serializer, getattr(value, field_name))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> D:
        kwargs: dict[str, Any] = {}
        for field_name, field_serde_type in self._fields.items():
            kwargs[field_name] = field_serde_type.deserialize(deserializer)
        return self._class(**kwargs)
