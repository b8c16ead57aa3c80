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

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer
from serdecore.utils.typing import is_subclass


class StrSerdeType(SerdeType[str]):
    """ Represents builtin `str` values, they go to the wire as UTF-8.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_subclass(type_, str):
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str')

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        serializer.write_str(value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return deserializer.read_str()
