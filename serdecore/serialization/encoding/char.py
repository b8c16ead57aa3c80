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
This module implements encoding of a single Unicode scalar value as a little-endian u32.

A scalar value is any code point except the surrogates (U+D800 to U+DFFF), those can exist in a Python `str` but
cannot be encoded:

>>> se = BinarySerializer.build_bytes_serializer()
>>> encode_char(se, 'a')  # writes 61000000
>>> encode_char(se, '😎')  # writes 0ef60100
>>> bytes(se.finalize()).hex()
'610000000ef60100'

>>> de = BinaryDeserializer.build_bytes_deserializer(bytes.fromhex('610000000ef60100'))
>>> decode_char(de)
'a'
>>> decode_char(de)
'😎'
>>> de.finalize()

>>> de = BinaryDeserializer.build_bytes_deserializer(bytes.fromhex('00d80000'))
>>> try:
...     decode_char(de)
... except ValueError as e:
...     print(*e.args)
0xd800 is not a valid unicode scalar value
"""

from serdecore.serialization.binary_deserializer import BinaryDeserializer
from serdecore.serialization.binary_serializer import BinarySerializer
from serdecore.serialization.consts import MAX_SCALAR_VALUE, SURROGATE_RANGE
from serdecore.serialization.exceptions import BadDataError

from .int import decode_int, encode_int


def is_scalar_value(code_point: int) -> bool:
    return 0 <= code_point <= MAX_SCALAR_VALUE and code_point not in SURROGATE_RANGE


def encode_char(serializer: BinarySerializer, value: str) -> None:
    """ Encodes a single character, given as a `str` of length 1.
    """
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError('expected a single character')
    code_point = ord(value)
    if not is_scalar_value(code_point):
        raise ValueError(f'{code_point:#x} is not a valid unicode scalar value')
    encode_int(serializer, code_point, length=4, signed=False)


def decode_char(deserializer: BinaryDeserializer) -> str:
    """ Decodes a single character.
    """
    code_point = decode_int(deserializer, length=4, signed=False)
    if not is_scalar_value(code_point):
        raise BadDataError(f'{code_point:#x} is not a valid unicode scalar value')
    return chr(code_point)
