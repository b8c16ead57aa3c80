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
In Python a tuple type can be used in annotations in 2 different ways:

1. `tuple[A, B, C]`: known fixed length and heterogeneous types
2. `tuple[X, ...]`: variable length and homogeneous type

This module only implements encoding of the first case, the second case can be encoded using the collection encoder.

There actually isn't a "format" per-se, the encoding of `tuple[A, B, C]` is just the encoding of A followed by B
followed by C, with no length and no discriminant. So this compound encoder is basically a shortcut that can be used by
cases that already have a tuple of values and a matching tuple of encoders of those values.

>>> from serdecore.serialization.recording import RecordingSerializer, ReplayDeserializer
>>> se = Serializer.build_recording_serializer()
>>> values = ('foobar', False, 7)
>>> encoders = (RecordingSerializer.write_str, RecordingSerializer.write_bool, RecordingSerializer.write_i8)
>>> encode_tuple(se, values, encoders)
>>> se.finalize()
(('str', 'foobar'), ('bool', False), ('i8', 7))

>>> de = Deserializer.build_replay_deserializer([('str', 'foobar'), ('bool', False), ('i8', 7)])
>>> decode_tuple(de, (ReplayDeserializer.read_str, ReplayDeserializer.read_bool, ReplayDeserializer.read_i8))
('foobar', False, 7)
"""

from typing import Any

from typing_extensions import TypeVarTuple, Unpack

from serdecore.serialization.deserializer import Deserializer
from serdecore.serialization.serializer import Serializer

from . import Decoder, Encoder

Ts = TypeVarTuple('Ts')


def encode_tuple(serializer: Serializer, values: tuple[Unpack[Ts]], encoders: tuple[Encoder[Any], ...]) -> None:
    assert len(values) == len(encoders)
    # mypy can't track tuple element-wise mapping yet, it's safe due to length check above
    for value, encoder in zip(values, encoders):  # type: ignore
        encoder(serializer, value)


def decode_tuple(deserializer: Deserializer, decoders: tuple[Decoder[Any], ...]) -> tuple[Unpack[Ts]]:
    return tuple(decoder(deserializer) for decoder in decoders)
