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
from collections.abc import Iterable
from typing import TYPE_CHECKING, TypeVar

from .exceptions import UnsupportedTypeError
from .types import Buffer

if TYPE_CHECKING:
    from .bytes_deserializer import BytesDeserializer
    from .recording import Operation, ReplayDeserializer

T = TypeVar('T')


class Deserializer(ABC):
    """ The reader side of a wire format, it mirrors `Serializer`.

    Every `read_*` either returns a valid value of the requested kind or raises a `SerializationError` (usually a
    `BadDataError` or an `OutOfDataError`), the callers never try to recover from those.
    """

    def finalize(self) -> None:
        """Check that all data was consumed, the deserializer cannot be used after this."""
        raise TypeError('this deserializer does not support finalization')

    @abstractmethod
    def read_unit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def read_bool(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def read_char(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def read_f32(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def read_f64(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def read_u8(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_u16(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_u32(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_u64(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_u128(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_i8(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_i16(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_i32(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_i64(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_i128(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_str(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def read_len(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_variant_index(self) -> int:
        raise NotImplementedError

    def read_type(self, type_: type[T]) -> T:
        """ Deserialize a value of the given type annotation and return it.

        The effect on the deserializer is consuming only what was used by the value.
        """
        from serdecore.serde_types import make_serde_type
        try:
            serde_type = make_serde_type(type_)
        except TypeError as e:
            raise UnsupportedTypeError(f'type not supported: {type_}') from e
        return serde_type.deserialize(self)

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @staticmethod
    def build_replay_deserializer(operations: Iterable[Operation]) -> ReplayDeserializer:
        from .recording import ReplayDeserializer
        return ReplayDeserializer(operations)
