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

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, TypeVar, final

from typing_extensions import Self

from serdecore.serde_types.registry import SerdeTypeRegistry
from serdecore.serde_types.utils import TypeAliasMap, TypeToSerdeTypeMap, get_aliased_type, get_usable_origin_type
from serdecore.serialization import Deserializer, Serializer

T = TypeVar('T')


class SerdeType(ABC, Generic[T]):
    """ This class is used to model a type with a known type signature and how it will be (de)serialized.

    There is one SerdeType class per shape of the value model, an instance is the codec of one concrete annotation,
    for example `list[U8]` is modeled by a `SequenceSerdeType` holding the `SizedIntSerdeType` of `U8`. Instances are
    built from annotations with `SerdeType.from_type`, which recurses on the annotation arguments, so the whole
    annotation is resolved up front and serializing or deserializing a value never has to look at types again.

    Only the operations of the `Serializer`/`Deserializer` contracts are used, so a SerdeType works with any format.
    """

    @dataclass(frozen=True)
    class TypeMap:
        alias_map: TypeAliasMap
        serde_types_map: TypeToSerdeTypeMap
        # named composites built with this map, it is what makes recursive types possible
        registry: SerdeTypeRegistry = field(default_factory=SerdeTypeRegistry, compare=False, repr=False)

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property
    _is_hashable: bool

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> SerdeType[T]:
        """ Instantiate a SerdeType instance from a type signature using the given maps.

        The `serde_types_map` associates concrete types to SerdeType classes, while the `alias_map` associates types
        with substitute types to use instead. A `TypeError` is raised when the annotation is not supported.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        serde_type = type_map.serde_types_map[usable_origin]
        # XXX: first we try to create the serde_type without making an alias, this ensures that an invalid annotation
        #      would not be accepted
        _ = serde_type._from_type(type_, type_map=type_map)
        # XXX: then we create the actual serde_type with type-alias
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        return serde_type._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a SerdeType instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        use `SerdeType.from_type`, forwarding the given `type_map`, for the inner types, this is the case for all
        compound SerdeTypes, like OptionalSerdeType or MapSerdeType.
        """
        # XXX: a SerdeType that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a SerdeType.TypeMap')

    @final
    def is_hashable(self) -> bool:
        """ Indicates whether the type being abstracted over is expected to be hashable.

        This is used to prevent unhashable types from being used as map keys."""
        return self._is_hashable

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a TypeError if the value's type is not compatible, or ValueError if it is out of range.

        A value being compatible is more than just having the correct instance, for example if the value is a dict, all
        the dict's keys and values must be checked for compatibility.
        """
        # XXX: subclasses must implement SerdeType._check_value, not SerdeType.check_value
        self._check_value(value, deep=True)

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value instance according to the signature that was abstracted.

        Serialization includes calling check_value while the value is being serialized, so calling check_value before
        calling serialize is not needed.
        """
        # XXX: subclasses must implement SerdeType._serialize, not SerdeType.serialize
        self._check_value(value, deep=False)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """ Deserialize a value instance according to the signature that was abstracted.

        Deserializers are expected to always produce valid values, the value is still shallow checked afterwards.
        """
        # XXX: subclasses must implement SerdeType._deserialize, not SerdeType.deserialize
        value = self._deserialize(deserializer)
        self._check_value(value, deep=False)
        return value

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` with the binary format.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes, /) -> T:
        """ Shortcut to quickly parse a value T from `bytes` with the binary format, trailing bytes are an error.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `SerdeType.check_value`.

        Compound values should use `SerdeType._check_value` on the inner type(s) instead of `SerdeType.check_value` and
        pass the appropriate deep argument.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the given value has been "shallow checked".

        When implementing the serialization with compound encoders, `SerdeType.serialize` should be passed as an
        `Encoder` instead of `SerdeType._serialize`, that way the next `_serialize` can also assume that its value was
        checked.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        """ Inner implementation of `deserialize`, it is expected that deserializers always produce valid values.
        """
        raise NotImplementedError
