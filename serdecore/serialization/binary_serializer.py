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
from typing import Any

from typing_extensions import override

from .consts import MAX_U32
from .serializer import Serializer
from .types import Buffer


class BinarySerializer(Serializer):
    """ Writer of the binary format, over an abstract byte sink.

    Layout of each primitive:

    - unit: nothing
    - bool: 1 byte, `0x00` or `0x01`
    - char: the scalar value as a little-endian u32
    - f32/f64: IEEE-754 little-endian
    - u8..u128/i8..i128: little-endian, two's complement for signed
    - str: unsigned LEB128 byte-length followed by the UTF-8 bytes
    - len/variant index: unsigned LEB128, restricted to the u32 range

    Implementors only have to provide the byte sink (`write_byte`, `write_bytes`).
    """

    @abstractmethod
    def write_byte(self, data: int) -> None:
        """Write a single byte."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        # XXX: it is recommended that implementors of BinarySerializer specialize this implementation
        for byte in bytes(memoryview(data)):
            self.write_byte(byte)

    def write_struct(self, data: tuple[Any, ...], format: str) -> None:
        data_bytes = struct.pack(format, *data)
        self.write_bytes(data_bytes)

    def _write_int(self, value: int, *, length: int, signed: bool) -> None:
        from .encoding.int import encode_int
        encode_int(self, value, length=length, signed=signed)

    @override
    def write_unit(self) -> None:
        # XXX: zero sized, nothing to write
        pass

    @override
    def write_bool(self, value: bool) -> None:
        from .encoding.bool import encode_bool
        encode_bool(self, value)

    @override
    def write_char(self, value: str) -> None:
        from .encoding.char import encode_char
        encode_char(self, value)

    @override
    def write_f32(self, value: float) -> None:
        from .encoding.float import encode_f32
        encode_f32(self, value)

    @override
    def write_f64(self, value: float) -> None:
        from .encoding.float import encode_f64
        encode_f64(self, value)

    @override
    def write_u8(self, value: int) -> None:
        self._write_int(value, length=1, signed=False)

    @override
    def write_u16(self, value: int) -> None:
        self._write_int(value, length=2, signed=False)

    @override
    def write_u32(self, value: int) -> None:
        self._write_int(value, length=4, signed=False)

    @override
    def write_u64(self, value: int) -> None:
        self._write_int(value, length=8, signed=False)

    @override
    def write_u128(self, value: int) -> None:
        self._write_int(value, length=16, signed=False)

    @override
    def write_i8(self, value: int) -> None:
        self._write_int(value, length=1, signed=True)

    @override
    def write_i16(self, value: int) -> None:
        self._write_int(value, length=2, signed=True)

    @override
    def write_i32(self, value: int) -> None:
        self._write_int(value, length=4, signed=True)

    @override
    def write_i64(self, value: int) -> None:
        self._write_int(value, length=8, signed=True)

    @override
    def write_i128(self, value: int) -> None:
        self._write_int(value, length=16, signed=True)

    @override
    def write_str(self, value: str) -> None:
        from .encoding.utf8 import encode_utf8
        encode_utf8(self, value)

    @override
    def write_len(self, value: int) -> None:
        self._write_u32_leb128(value)

    @override
    def write_variant_index(self, value: int) -> None:
        self._write_u32_leb128(value)

    def _write_u32_leb128(self, value: int) -> None:
        from .encoding.leb128 import encode_leb128
        if not 0 <= value <= MAX_U32:
            raise ValueError(f'{value} is out of the u32 range')
        encode_leb128(self, value, signed=False)
