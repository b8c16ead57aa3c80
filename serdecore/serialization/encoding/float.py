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

"""
This module implements IEEE-754 binary32 and binary64 encoding, both little-endian.

The bit pattern is kept as is, a binary64 value round-trips exactly (including NaN payloads). Python floats are
binary64, so a value given to `encode_f32` must be exactly representable in binary32, otherwise it would be silently
rounded:

>>> se = BinarySerializer.build_bytes_serializer()
>>> encode_f32(se, 1.5)  # writes 0000c03f
>>> encode_f64(se, -2.0)  # writes 00000000000000c0
>>> bytes(se.finalize()).hex()
'0000c03f00000000000000c0'

>>> de = BinaryDeserializer.build_bytes_deserializer(bytes.fromhex('0000c03f00000000000000c0'))
>>> decode_f32(de)
1.5
>>> decode_f64(de)
-2.0
>>> de.finalize()

>>> se = BinarySerializer.build_bytes_serializer()
>>> try:
...     encode_f32(se, 0.1)
... except ValueError as e:
...     print(*e.args)
0.1 is not representable as a 32-bit float
"""

import math
import struct

from serdecore.serialization.binary_deserializer import BinaryDeserializer
from serdecore.serialization.binary_serializer import BinarySerializer


def is_f32_exact(value: float) -> bool:
    """ Whether the given float survives a conversion to binary32 and back unchanged.

    >>> is_f32_exact(0.5)
    True
    >>> is_f32_exact(0.1)
    False
    >>> is_f32_exact(float('inf'))
    True
    >>> is_f32_exact(float('nan'))
    True
    >>> is_f32_exact(1e300)
    False
    """
    if math.isnan(value):
        return True
    try:
        data = struct.pack('<f', value)
    except OverflowError:
        return False
    converted, = struct.unpack('<f', data)
    return bool(converted == value)


def encode_f32(serializer: BinarySerializer, value: float) -> None:
    """ Encodes a float as IEEE-754 binary32, it must be exactly representable.
    """
    if not is_f32_exact(value):
        raise ValueError(f'{value} is not representable as a 32-bit float')
    serializer.write_struct((value,), '<f')


def decode_f32(deserializer: BinaryDeserializer) -> float:
    """ Decodes an IEEE-754 binary32 float.
    """
    value, = deserializer.read_struct('<f')
    return value


def encode_f64(serializer: BinarySerializer, value: float) -> None:
    """ Encodes a float as IEEE-754 binary64.
    """
    serializer.write_struct((value,), '<d')


def decode_f64(deserializer: BinaryDeserializer) -> float:
    """ Decodes an IEEE-754 binary64 float.
    """
    value, = deserializer.read_struct('<d')
    return value
