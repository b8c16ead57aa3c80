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
from typing import TYPE_CHECKING, Any, TypeVar

from .exceptions import UnsupportedTypeError

if TYPE_CHECKING:
    from .bytes_serializer import BytesSerializer
    from .recording import RecordingSerializer

T = TypeVar('T')


class Serializer(ABC):
    """ The writer side of a wire format.

    There is one operation for each primitive kind of the value model, plus `write_len` for the prefix of sequences and
    maps and `write_variant_index` for the discriminant of sum types. How each of them ends up on the medium is entirely
    up to the implementation, the only thing callers can rely on is that a `Deserializer` of the same format reads back
    what was written when the same operations are called in the same order.
    """

    def finalize(self) -> Any:
        """Get the result of the writes, the serializer cannot be reused after this."""
        raise TypeError('this serializer does not support finalization')

    @abstractmethod
    def write_unit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_bool(self, value: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_char(self, value: str) -> None:
        """Write a single Unicode scalar value, given as a `str` of length 1."""
        raise NotImplementedError

    @abstractmethod
    def write_f32(self, value: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_f64(self, value: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_u8(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_u16(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_u32(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_u64(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_u128(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_i8(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_i16(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_i32(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_i64(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_i128(self, value: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_str(self, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_len(self, value: int) -> None:
        """Write the number of elements of a sequence or the number of entries of a map."""
        raise NotImplementedError

    @abstractmethod
    def write_variant_index(self, value: int) -> None:
        """Write the zero-based position of the active alternative of a sum type."""
        raise NotImplementedError

    def write_type(self, type_: type[T], value: T) -> None:
        """Write a value using the codec registered for the given type annotation."""
        from serdecore.serde_types import make_serde_type
        try:
            serde_type = make_serde_type(type_)
        except TypeError as e:
            raise UnsupportedTypeError(f'type not supported: {type_}') from e
        serde_type.serialize(self, value)

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    @staticmethod
    def build_recording_serializer() -> RecordingSerializer:
        from .recording import RecordingSerializer
        return RecordingSerializer()
