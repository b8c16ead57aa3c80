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

from .binary_deserializer import BinaryDeserializer
from .binary_serializer import BinarySerializer
from .deserializer import Deserializer
from .exceptions import (
    BadDataError,
    DuplicateKeyError,
    InvalidOptionDiscriminantError,
    OutOfDataError,
    SerializationError,
    TooLongError,
    UnsupportedTypeError,
    VariantIndexOutOfRangeError,
)
from .serializer import Serializer

__all__ = [
    'BadDataError',
    'BinaryDeserializer',
    'BinarySerializer',
    'Deserializer',
    'DuplicateKeyError',
    'InvalidOptionDiscriminantError',
    'OutOfDataError',
    'SerializationError',
    'Serializer',
    'TooLongError',
    'UnsupportedTypeError',
    'VariantIndexOutOfRangeError',
]
