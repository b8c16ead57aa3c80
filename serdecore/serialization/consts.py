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

# Largest length accepted by default for sequences, maps and strings, same as the maximum sequence length in BCS.
DEFAULT_MAX_LENGTH = 2**31 - 1

# Lengths and variant indexes are u32 values, which take at most 5 LEB128 blocks.
LEB128_U32_MAX_BYTES = 5

MAX_U32 = 2**32 - 1

# Largest Unicode scalar value, surrogates (U+D800 to U+DFFF) are not scalar values.
MAX_SCALAR_VALUE = 0x10FFFF
SURROGATE_RANGE = range(0xD800, 0xE000)
