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
An optional value is encoded with a one-byte discriminant (written with `write_u8`) followed by the value iff present.

Layout:

    [0] when None
    [1][value] when not None

>>> from serdecore.serialization.recording import RecordingSerializer, ReplayDeserializer
>>> se = Serializer.build_recording_serializer()
>>> encode_optional(se, 'foobar', RecordingSerializer.write_str)
>>> se.finalize()
(('u8', 1), ('str', 'foobar'))

>>> se = Serializer.build_recording_serializer()
>>> encode_optional(se, None, RecordingSerializer.write_str)
>>> se.finalize()
(('u8', 0),)

>>> de = Deserializer.build_replay_deserializer([('u8', 1), ('str', 'foobar')])
>>> decode_optional(de, ReplayDeserializer.read_str)
'foobar'
>>> de.finalize()

Decoding an absent value doesn't read anything after the discriminant:

>>> de = Deserializer.build_replay_deserializer([('u8', 0), ('str', 'foobar')])
>>> str(decode_optional(de, ReplayDeserializer.read_str))
'None'
>>> de.read_str()
'foobar'

Any other discriminant is invalid:

>>> de = Deserializer.build_replay_deserializer([('u8', 2)])
>>> try:
...     decode_optional(de, ReplayDeserializer.read_str)
... except InvalidOptionDiscriminantError as e:
...     print(e.args[0])
invalid option discriminant
"""

from typing import Optional, TypeVar

from serdecore.serialization.deserializer import Deserializer
from serdecore.serialization.exceptions import InvalidOptionDiscriminantError
from serdecore.serialization.serializer import Serializer

from . import Decoder, Encoder

T = TypeVar('T')

ABSENT = 0
PRESENT = 1


def encode_optional(serializer: Serializer, value: Optional[T], encoder: Encoder[T]) -> None:
    if value is None:
        serializer.write_u8(ABSENT)
    else:
        serializer.write_u8(PRESENT)
        encoder(serializer, value)


def decode_optional(deserializer: Deserializer, decoder: Decoder[T]) -> Optional[T]:
    discriminant = deserializer.read_u8()
    if discriminant == ABSENT:
        return None
    elif discriminant == PRESENT:
        return decoder(deserializer)
    else:
        raise InvalidOptionDiscriminantError(discriminant)
