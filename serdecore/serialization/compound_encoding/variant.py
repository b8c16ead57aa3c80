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
A variant of a sum type is encoded as the zero-based index of the active alternative followed by its payload.

Layout: [variant index: i][payload_i]

Decoding goes through a table of decoders indexed by alternative, so choosing what to decode is a bounds check and an
indexed lookup:

>>> from serdecore.serialization.recording import RecordingSerializer
>>> se = Serializer.build_recording_serializer()
>>> encode_variant(se, 1, 42, RecordingSerializer.write_u32)
>>> se.finalize()
(('variant_index', 1), ('u32', 42))

>>> cases = (lambda de: ('first', de.read_unit()), lambda de: ('second', de.read_u32()))
>>> de = Deserializer.build_replay_deserializer([('variant_index', 1), ('u32', 42)])
>>> decode_variant(de, cases)
('second', 42)

>>> de = Deserializer.build_replay_deserializer([('variant_index', 2), ('u32', 42)])
>>> try:
...     decode_variant(de, cases)
... except VariantIndexOutOfRangeError as e:
...     print(e.args[0])
variant index out of range
"""

from collections.abc import Sequence
from typing import TypeVar

from serdecore.serialization.deserializer import Deserializer
from serdecore.serialization.exceptions import VariantIndexOutOfRangeError
from serdecore.serialization.serializer import Serializer

from . import Decoder, Encoder

T = TypeVar('T')


def encode_variant(serializer: Serializer, index: int, value: T, encoder: Encoder[T]) -> None:
    serializer.write_variant_index(index)
    encoder(serializer, value)


def decode_variant(deserializer: Deserializer, cases: Sequence[Decoder[T]]) -> T:
    index = deserializer.read_variant_index()
    if not 0 <= index < len(cases):
        raise VariantIndexOutOfRangeError(index, len(cases))
    return cases[index](deserializer)
