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

r"""
The recording format keeps the sequence of writer operations itself instead of turning it into bytes.

Each operation is a pair `(kind, argument)`, where the kind is the name of the writer operation without the `write_`
prefix. This is the most direct way of observing what a value turns into, regardless of any concrete wire format:

>>> se = Serializer.build_recording_serializer()
>>> se.write_variant_index(1)
>>> se.write_u32(42)
>>> se.finalize()
(('variant_index', 1), ('u32', 42))

A `ReplayDeserializer` reads the operations back, every read must match the kind of the next recorded operation:

>>> de = Deserializer.build_replay_deserializer([('variant_index', 1), ('u32', 42)])
>>> de.read_variant_index()
1
>>> de.read_u32()
42
>>> de.finalize()

>>> de = Deserializer.build_replay_deserializer([('u8', 2)])
>>> try:
...     de.read_bool()
... except BadDataError as e:
...     print(*e.args)
expected a bool operation, got u8
"""

from collections import deque
from collections.abc import Iterable
from typing import Any, TypeAlias

from typing_extensions import override

from .consts import MAX_U32, SURROGATE_RANGE
from .deserializer import Deserializer
from .exceptions import BadDataError, OutOfDataError
from .serializer import Serializer

Operation: TypeAlias = tuple[str, Any]

# kind -> (signed, bit size)
_INT_KINDS: dict[str, tuple[bool, int]] = {
    'u8': (False, 8),
    'u16': (False, 16),
    'u32': (False, 32),
    'u64': (False, 64),
    'u128': (False, 128),
    'i8': (True, 8),
    'i16': (True, 16),
    'i32': (True, 32),
    'i64': (True, 64),
    'i128': (True, 128),
}


def _int_in_range(kind: str, value: int) -> bool:
    signed, bits = _INT_KINDS[kind]
    if signed:
        return -(1 << (bits - 1)) <= value < (1 << (bits - 1))
    return 0 <= value < (1 << bits)


class RecordingSerializer(Serializer):
    """Serializer that records every operation, `finalize` returns them as a tuple."""

    def __init__(self) -> None:
        self._operations: list[Operation] = []

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._operations)

    @override
    def finalize(self) -> tuple[Operation, ...]:
        result = tuple(self._operations)
        del self._operations
        return result

    def _record(self, kind: str, value: Any = None) -> None:
        self._operations.append((kind, value))

    @override
    def write_unit(self) -> None:
        self._record('unit')

    @override
    def write_bool(self, value: bool) -> None:
        self._record('bool', value)

    @override
    def write_char(self, value: str) -> None:
        self._record('char', value)

    @override
    def write_f32(self, value: float) -> None:
        self._record('f32', value)

    @override
    def write_f64(self, value: float) -> None:
        self._record('f64', value)

    @override
    def write_u8(self, value: int) -> None:
        self._record('u8', value)

    @override
    def write_u16(self, value: int) -> None:
        self._record('u16', value)

    @override
    def write_u32(self, value: int) -> None:
        self._record('u32', value)

    @override
    def write_u64(self, value: int) -> None:
        self._record('u64', value)

    @override
    def write_u128(self, value: int) -> None:
        self._record('u128', value)

    @override
    def write_i8(self, value: int) -> None:
        self._record('i8', value)

    @override
    def write_i16(self, value: int) -> None:
        self._record('i16', value)

    @override
    def write_i32(self, value: int) -> None:
        self._record('i32', value)

    @override
    def write_i64(self, value: int) -> None:
        self._record('i64', value)

    @override
    def write_i128(self, value: int) -> None:
        self._record('i128', value)

    @override
    def write_str(self, value: str) -> None:
        self._record('str', value)

    @override
    def write_len(self, value: int) -> None:
        self._record('len', value)

    @override
    def write_variant_index(self, value: int) -> None:
        self._record('variant_index', value)


class ReplayDeserializer(Deserializer):
    """Deserializer that replays recorded operations, failing when the requested kind doesn't match."""

    def __init__(self, operations: Iterable[Operation]) -> None:
        self._operations: deque[Operation] = deque(operations)

    def is_empty(self) -> bool:
        return not self._operations

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise BadDataError('trailing data')

    def _replay(self, kind: str) -> Any:
        if not self._operations:
            raise OutOfDataError('no more operations to replay')
        actual_kind, value = self._operations[0]
        if actual_kind != kind:
            raise BadDataError(f'expected a {kind} operation, got {actual_kind}')
        self._operations.popleft()
        return value

    def _replay_int(self, kind: str) -> int:
        value = self._replay(kind)
        if not isinstance(value, int) or isinstance(value, bool) or not _int_in_range(kind, value):
            raise BadDataError(f'{value!r} is not a valid {kind}')
        return value

    def _replay_u32(self, kind: str) -> int:
        value = self._replay(kind)
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= MAX_U32:
            raise BadDataError(f'{value!r} is not a valid {kind}')
        return value

    def _replay_float(self, kind: str) -> float:
        value = self._replay(kind)
        if not isinstance(value, float):
            raise BadDataError(f'{value!r} is not a valid {kind}')
        return value

    @override
    def read_unit(self) -> None:
        self._replay('unit')

    @override
    def read_bool(self) -> bool:
        value = self._replay('bool')
        if not isinstance(value, bool):
            raise BadDataError(f'{value!r} is not a valid boolean')
        return value

    @override
    def read_char(self) -> str:
        value = self._replay('char')
        if not isinstance(value, str) or len(value) != 1 or ord(value) in SURROGATE_RANGE:
            raise BadDataError(f'{value!r} is not a valid char')
        return value

    @override
    def read_f32(self) -> float:
        from .encoding.float import is_f32_exact
        value = self._replay_float('f32')
        if not is_f32_exact(value):
            raise BadDataError(f'{value!r} is not a valid f32')
        return value

    @override
    def read_f64(self) -> float:
        return self._replay_float('f64')

    @override
    def read_u8(self) -> int:
        return self._replay_int('u8')

    @override
    def read_u16(self) -> int:
        return self._replay_int('u16')

    @override
    def read_u32(self) -> int:
        return self._replay_int('u32')

    @override
    def read_u64(self) -> int:
        return self._replay_int('u64')

    @override
    def read_u128(self) -> int:
        return self._replay_int('u128')

    @override
    def read_i8(self) -> int:
        return self._replay_int('i8')

    @override
    def read_i16(self) -> int:
        return self._replay_int('i16')

    @override
    def read_i32(self) -> int:
        return self._replay_int('i32')

    @override
    def read_i64(self) -> int:
        return self._replay_int('i64')

    @override
    def read_i128(self) -> int:
        return self._replay_int('i128')

    @override
    def read_str(self) -> str:
        value = self._replay('str')
        if not isinstance(value, str):
            raise BadDataError(f'{value!r} is not a valid str')
        return value

    @override
    def read_len(self) -> int:
        return self._replay_u32('len')

    @override
    def read_variant_index(self) -> int:
        return self._replay_u32('variant_index')
