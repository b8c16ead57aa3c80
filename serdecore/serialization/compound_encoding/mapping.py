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
Encoding a mapping is equivalent to encoding a collection of 2-tuples.

Layout: [len: N][key_0][value_0]...[key_N-1][value_N-1]

>>> from serdecore.serialization.recording import RecordingSerializer, ReplayDeserializer
>>> se = Serializer.build_recording_serializer()
>>> encode_mapping(se, {'a': 1, 'b': 2}, RecordingSerializer.write_str, RecordingSerializer.write_u32)
>>> se.finalize()
(('len', 2), ('str', 'a'), ('u32', 1), ('str', 'b'), ('u32', 2))

>>> ops = [('len', 2), ('str', 'b'), ('u32', 2), ('str', 'a'), ('u32', 1)]
>>> de = Deserializer.build_replay_deserializer(ops)
>>> decode_mapping(de, ReplayDeserializer.read_str, ReplayDeserializer.read_u32, dict) == {'a': 1, 'b': 2}
True
>>> de.finalize()

Keys are never de-duplicated on the encoding side, on the decoding side a repeated key replaces the previous entry,
unless `reject_duplicates=True` is used:

>>> ops = [('len', 2), ('str', 'a'), ('u32', 1), ('str', 'a'), ('u32', 2)]
>>> de = Deserializer.build_replay_deserializer(ops)
>>> decode_mapping(de, ReplayDeserializer.read_str, ReplayDeserializer.read_u32, dict)
{'a': 2}

>>> de = Deserializer.build_replay_deserializer(ops)
>>> try:
...     decode_mapping(de, ReplayDeserializer.read_str, ReplayDeserializer.read_u32, dict, reject_duplicates=True)
... except DuplicateKeyError as e:
...     print(*e.args)
duplicate map key: 'a'
"""

from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Callable, TypeVar

from structlog import get_logger

from serdecore.serialization.deserializer import Deserializer
from serdecore.serialization.exceptions import DuplicateKeyError
from serdecore.serialization.serializer import Serializer

from . import Decoder, Encoder

logger = get_logger()

KT = TypeVar('KT', bound=Hashable)
VT = TypeVar('VT')
R = TypeVar('R', bound=Mapping)


def encode_mapping(
    serializer: Serializer,
    values_mapping: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    serializer.write_len(len(values_mapping))
    for key, value in values_mapping.items():
        key_encoder(serializer, key)
        value_encoder(serializer, value)


def decode_mapping(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    mapping_builder: Callable[[Iterable[tuple[KT, VT]]], R],
    *,
    reject_duplicates: bool = False,
) -> R:
    size = deserializer.read_len()
    return mapping_builder(_iter_entries(deserializer, size, key_decoder, value_decoder, reject_duplicates))


def _iter_entries(
    deserializer: Deserializer,
    size: int,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    reject_duplicates: bool,
) -> Iterator[tuple[KT, VT]]:
    seen: set[KT] = set()
    for _ in range(size):
        key = key_decoder(deserializer)
        if key in seen:
            if reject_duplicates:
                raise DuplicateKeyError(f'duplicate map key: {key!r}')
            logger.debug('duplicate map key replaced', key=key)
        seen.add(key)
        yield key, value_decoder(deserializer)
