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
A fixed array has its length as part of its type, so the length is not written at all.

Layout: [value_0]...[value_N-1]

>>> from serdecore.serialization.recording import RecordingSerializer, ReplayDeserializer
>>> se = Serializer.build_recording_serializer()
>>> encode_fixed_array(se, (1, 2, 3), RecordingSerializer.write_u16, length=3)
>>> se.finalize()
(('u16', 1), ('u16', 2), ('u16', 3))

>>> de = Deserializer.build_replay_deserializer([('u16', 1), ('u16', 2), ('u16', 3)])
>>> decode_fixed_array(de, ReplayDeserializer.read_u16, length=3)
(1, 2, 3)
>>> de.finalize()

Values with a different length can't be encoded:

>>> se = Serializer.build_recording_serializer()
>>> try:
...     encode_fixed_array(se, (1, 2), RecordingSerializer.write_u16, length=3)
... except ValueError as e:
...     print(*e.args)
expected exactly 3 elements, got 2
"""

from collections.abc import Iterable, Sized
from typing import Any, Callable, TypeVar

from serdecore.serialization.deserializer import Deserializer
from serdecore.serialization.serializer import Serializer

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R')


def encode_fixed_array(serializer: Serializer, values: Iterable[T], encoder: Encoder[T], *, length: int) -> None:
    if not isinstance(values, Sized) or len(values) != length:
        got = len(values) if isinstance(values, Sized) else '?'
        raise ValueError(f'expected exactly {length} elements, got {got}')
    for value in values:
        encoder(serializer, value)


def decode_fixed_array(
    deserializer: Deserializer,
    decoder: Decoder[T],
    *,
    length: int,
    builder: Callable[[Iterable[T]], Any] = tuple,
) -> Any:
    return builder(decoder(deserializer) for _ in range(length))
