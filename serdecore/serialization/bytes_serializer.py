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

from typing_extensions import override

from .binary_serializer import BinarySerializer
from .types import Buffer


class BytesSerializer(BinarySerializer):
    """ In-memory BinarySerializer, everything is written to a growing `bytearray`.

    `finalize` returns a read-only view of the result, the serializer cannot be used afterwards.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    @override
    def finalize(self) -> memoryview:
        result = memoryview(bytes(self._buffer))
        del self._buffer
        return result

    @override
    def write_byte(self, data: int) -> None:
        if not 0 <= data <= 0xff:
            raise ValueError(f'byte out of range: {data}')
        self._buffer.append(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        self._buffer += data
