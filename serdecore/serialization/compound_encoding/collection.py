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
A collection is basically any value that has a known size and is iterable.

Layout: [len: N][value_0]...[value_N-1]

>>> from serdecore.serialization.recording import RecordingSerializer, ReplayDeserializer
>>> se = Serializer.build_recording_serializer()
>>> value = ['foobar', 'π', '😎']
>>> encode_collection(se, value, RecordingSerializer.write_str)
>>> se.finalize()
(('len', 3), ('str', 'foobar'), ('str', 'π'), ('str', '😎'))

When decoding, the builder can be any compatible collection, in the previous example a `list` was encoded, but when
decoding a `tuple` could be used, it only matters that the collection can be initialized with an `Iterable[T]`.

>>> de = Deserializer.build_replay_deserializer([('len', 3), ('str', 'foobar'), ('str', 'π'), ('str', '😎')])
>>> decode_collection(de, ReplayDeserializer.read_str, tuple)
('foobar', 'π', '😎')
>>> de.finalize()

An empty collection doesn't read anything after its length:

>>> de = Deserializer.build_replay_deserializer([('len', 0)])
>>> decode_collection(de, ReplayDeserializer.read_str, list)
[]
>>> de.finalize()
"""

from collections.abc import Collection, Iterable
from typing import Callable, TypeVar

from serdecore.serialization.deserializer import Deserializer
from serdecore.serialization.serializer import Serializer

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_collection(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    serializer.write_len(len(values))
    for value in values:
        encoder(serializer, value)


def decode_collection(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
) -> R:
    length = deserializer.read_len()
    return builder(decoder(deserializer) for _ in range(length))
