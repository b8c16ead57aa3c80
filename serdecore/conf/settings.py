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

from pathlib import Path
from typing import Literal, Union

from pydantic import Field

from serdecore.serialization.consts import DEFAULT_MAX_LENGTH, LEB128_U32_MAX_BYTES
from serdecore.utils import pydantic
from serdecore.utils.yaml import model_from_yaml

MapDuplicateKeysPolicy = Literal['last_wins', 'reject']


class SerdeSettings(pydantic.BaseModel):
    # Maximum length accepted when reading a sequence/map length or a string's byte length, lengths above this are
    # rejected before any element is read.
    MAX_LENGTH: int = Field(default=DEFAULT_MAX_LENGTH, ge=0)

    # What to do when a decoded map has the same key more than once: `last_wins` keeps the value that was read last
    # (like inserting into a dict), `reject` fails the decoding.
    MAP_DUPLICATE_KEYS: MapDuplicateKeysPolicy = 'last_wins'

    # Maximum number of LEB128 blocks accepted for lengths and variant indexes.
    MAX_LEB128_BYTES: int = Field(default=LEB128_U32_MAX_BYTES, ge=1)

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'SerdeSettings':
        """Takes a filepath to a yaml file and returns a validated SerdeSettings instance."""
        return model_from_yaml(cls, filepath=filepath)
