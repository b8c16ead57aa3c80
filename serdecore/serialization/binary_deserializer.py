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

import struct
from abc import abstractmethod
from typing import Any, Iterator, Optional

from typing_extensions import override

from .consts import MAX_U32
from .deserializer import Deserializer
from .exceptions import BadDataError, TooLongError
from .types import Buffer


class BinaryDeserializer(Deserializer):
    """ Reader of the binary format, over an abstract byte source.

    The layout is documented in `BinarySerializer`. Lengths above `max_length` and LEB128 values longer than
    `max_leb128_bytes` are rejected, when not given those limits come from the global settings.
    """

    def __init__(self, *, max_length: Optional[int] = None, max_leb128_bytes: Optional[int] = None) -> None:
        if max_length is None or max_leb128_bytes is None:
            from serdecore.conf.get_settings import get_global_settings
            settings = get_global_settings()
            if max_length is None:
                max_length = settings.MAX_LENGTH
            if max_leb128_bytes is None:
                max_leb128_bytes = settings.MAX_LEB128_BYTES
        self._max_length = max_length
        self._max_leb128_bytes = max_leb128_bytes

    @property
    def max_length(self) -> int:
        return self._max_length

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek_byte(self) -> int:
        """Read a single byte but don't consume from buffer."""
        raise NotImplementedError

    @abstractmethod
    def peek_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        """Read n single byte but don't consume from buffer."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        """Read n bytes, when exact=True it errors if there isn't enough data"""
        # XXX: this is a blanket implementation that is an example of the behavior, this implementation has to be
        #      explicitly used if needed
        def iter_bytes() -> Iterator[int]:
            for _ in range(n):
                if not exact and self.is_empty():
                    break
                yield self.read_byte()
        return bytes(iter_bytes())

    @abstractmethod
    def read_all(self) -> Buffer:
        """Read all bytes until the reader is empty."""
        # XXX: it is recommended that implementors of BinaryDeserializer specialize this implementation
        def iter_bytes() -> Iterator[int]:
            while not self.is_empty():
                yield self.read_byte()
        return bytes(iter_bytes())

    def read_struct(self, format: str) -> tuple[Any, ...]:
        size = struct.calcsize(format)
        data = self.read_bytes(size)
        return struct.unpack_from(format, data)

    def _read_int(self, *, length: int, signed: bool) -> int:
        from .encoding.int import decode_int
        return decode_int(self, length=length, signed=signed)

    @override
    def read_unit(self) -> None:
        # XXX: zero sized, nothing to read
        pass

    @override
    def read_bool(self) -> bool:
        from .encoding.bool import decode_bool
        return decode_bool(self)

    @override
    def read_char(self) -> str:
        from .encoding.char import decode_char
        return decode_char(self)

    @override
    def read_f32(self) -> float:
        from .encoding.float import decode_f32
        return decode_f32(self)

    @override
    def read_f64(self) -> float:
        from .encoding.float import decode_f64
        return decode_f64(self)

    @override
    def read_u8(self) -> int:
        return self._read_int(length=1, signed=False)

    @override
    def read_u16(self) -> int:
        return self._read_int(length=2, signed=False)

    @override
    def read_u32(self) -> int:
        return self._read_int(length=4, signed=False)

    @override
    def read_u64(self) -> int:
        return self._read_int(length=8, signed=False)

    @override
    def read_u128(self) -> int:
        return self._read_int(length=16, signed=False)

    @override
    def read_i8(self) -> int:
        return self._read_int(length=1, signed=True)

    @override
    def read_i16(self) -> int:
        return self._read_int(length=2, signed=True)

    @override
    def read_i32(self) -> int:
        return self._read_int(length=4, signed=True)

    @override
    def read_i64(self) -> int:
        return self._read_int(length=8, signed=True)

    @override
    def read_i128(self) -> int:
        return self._read_int(length=16, signed=True)

    @override
    def read_str(self) -> str:
        from .encoding.utf8 import decode_utf8
        return decode_utf8(self, max_length=self._max_length, max_leb128_bytes=self._max_leb128_bytes)

    @override
    def read_len(self) -> int:
        length = self._read_u32_leb128()
        if length > self._max_length:
            raise TooLongError(f'length {length} exceeds the maximum of {self._max_length}')
        return length

    @override
    def read_variant_index(self) -> int:
        return self._read_u32_leb128()

    def _read_u32_leb128(self) -> int:
        from .encoding.leb128 import decode_leb128
        value = decode_leb128(self, signed=False, max_bytes=self._max_leb128_bytes)
        if value > MAX_U32:
            raise BadDataError(f'{value} is out of the u32 range')
        return value
