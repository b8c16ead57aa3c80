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

from types import NoneType

from typing_extensions import Self, override

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer, Serializer


class UnitSerdeType(SerdeType[None]):
    """ Represents the unit value, which is `None` in Python.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: type[None], /, *, type_map: SerdeType.TypeMap) -> Self:
        if type_ is not None and type_ is not NoneType:
            raise TypeError('expected None type')
        return cls()

    @override
    def _check_value(self, value: None, /, *, deep: bool) -> None:
        if value is not None:
            raise TypeError('expected None')

    @override
    def _serialize(self, serializer: Serializer, value: None, /) -> None:
        serializer.write_unit()

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> None:
        deserializer.read_unit()
        return None
