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
This module was made to hold the leaf encodings of the binary format.

Leaf in this context means "not compound": an encoding can have sized/signed parameters, but not a generic function or
type as a parameter. Compound encodings (optionals, sequences, maps, ...) are in the `compound_encoding` module and
don't depend on any binary detail.

The general organization should be that each submodule `x` deals with a single type and look like this:

    def encode_x(serializer: BinarySerializer, value: ValueType, ...config params...) -> None:
        ...

    def decode_x(deserializer: BinaryDeserializer, ...config params...) -> ValueType:
        ...

The "config params" are optional and specific to each encoder.
"""
