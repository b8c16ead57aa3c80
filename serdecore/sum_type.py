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
Sum types (tagged unions) and the mixin that gives user-defined composites their own serialization methods.

A sum type is declared by subclassing `Sum` with one annotation per alternative, the annotation is the type of the
payload carried by that alternative. The order of the annotations is the order of the alternatives, and it is part of
the wire identity of the type: the zero-based position of the active alternative is what gets written.

>>> from serdecore.types import U32
>>> class Message(Sum):
...     Ping: None
...     Data: U32
>>> Message.Data(42)
Message.Data(42)
>>> Message.Data(42).variant_index, Message.Data(42).variant_name
(1, 'Data')
>>> Message.Ping() == Message.Ping(None)
True
>>> Message.Data(1) == Message.Ping(None)
False
>>> Message.Data(42).to_bytes().hex()
'012a000000'
>>> Message.from_bytes(bytes.fromhex('012a000000'))
Message.Data(42)

Forward references (recursive types included) must be quoted, they are resolved when the codec is first built.
"""

import inspect
from typing import TYPE_CHECKING, Any, get_type_hints

from typing_extensions import Self

if TYPE_CHECKING:
    from serdecore.serde_types import SerdeType
    from serdecore.serialization import Deserializer, Serializer


class SerdeMixin:
    """ Adds `serialize`/`deserialize`/`to_bytes`/`from_bytes` to a user-defined composite.

    It can be used on dataclasses and is already included in `Sum`. The codec comes from `make_serde_type` with the
    default type map, so it is only built once per class.
    """

    __slots__ = ()

    @classmethod
    def serde_type(cls) -> 'SerdeType[Self]':
        from serdecore.serde_types import make_serde_type
        return make_serde_type(cls._serde_class())

    @classmethod
    def _serde_class(cls) -> type:
        return cls

    def serialize(self, serializer: 'Serializer') -> None:
        self.serde_type().serialize(serializer, self)

    @classmethod
    def deserialize(cls, deserializer: 'Deserializer') -> Self:
        return cls.serde_type().deserialize(deserializer)

    def to_bytes(self) -> bytes:
        return self.serde_type().to_bytes(self)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls.serde_type().from_bytes(data)


class Sum(SerdeMixin):
    """ Base class for sum types.

    Each annotation of a direct subclass becomes a nested class with the same name, a subclass of the sum type, that
    is used to build values of that alternative. The payload is kept in `value`. A sum type cannot be subclassed again.
    """

    __slots__ = ('value',)

    # XXX: these are set by __init_subclass__, they are not annotated so they aren't mistaken for alternatives:
    # _sum_class: the sum type itself, also visible from each alternative
    # _variant_names: names of the alternatives in declaration order
    # _variant_classes: the generated class of each alternative, same order
    # _variant_index: only on the generated classes, the position of the alternative

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if '_variant_index' in cls.__dict__:
            # one of the generated alternatives
            return
        if getattr(cls, '_variant_names', None) is not None:
            raise TypeError(f'sum type {cls.__mro__[1].__qualname__} cannot be extended')
        names = tuple(inspect.get_annotations(cls))
        if not names:
            raise TypeError(f'sum type {cls.__qualname__} must declare at least one alternative')
        variant_classes = []
        for index, name in enumerate(names):
            if hasattr(cls, name):
                raise TypeError(f'alternative {name!r} clashes with an existing attribute of {cls.__qualname__}')
            variant_class = type(cls)(name, (cls,), {
                '__slots__': (),
                '__module__': cls.__module__,
                '__qualname__': f'{cls.__qualname__}.{name}',
                '_variant_index': index,
            })
            setattr(cls, name, variant_class)
            variant_classes.append(variant_class)
        cls._sum_class = cls  # type: ignore[attr-defined]
        cls._variant_names = names
        cls._variant_classes = tuple(variant_classes)

    def __init__(self, value: Any = None) -> None:
        if '_variant_index' not in type(self).__dict__:
            raise TypeError(f'{type(self).__qualname__} cannot be instantiated, use one of its alternatives')
        self.value = value

    @classmethod
    def variants(cls) -> tuple[type[Self], ...]:
        """The class of each alternative, in declaration order."""
        return cls._variant_classes  # type: ignore[attr-defined]

    @classmethod
    def payload_types(cls) -> dict[str, Any]:
        """ The payload annotation of each alternative, by name and in declaration order.

        Annotations are resolved here, so forward references must be resolvable by now.
        """
        sum_class = cls._sum_class  # type: ignore[attr-defined]
        hints = get_type_hints(sum_class)
        return {name: hints[name] for name in sum_class._variant_names}  # type: ignore[attr-defined]

    @classmethod
    def _serde_class(cls) -> type:
        return cls._sum_class  # type: ignore[attr-defined]

    @property
    def variant_index(self) -> int:
        return self._variant_index  # type: ignore[attr-defined]

    @property
    def variant_name(self) -> str:
        return type(self).__name__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sum):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self), self.value))

    def __repr__(self) -> str:
        return f'{type(self).__qualname__}({self.value!r})'
