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

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import NoneType, UnionType
from typing import NamedTuple, TypeVar, Union

from serdecore.serde_types.bool_serde_type import BoolSerdeType
from serdecore.serde_types.box_serde_type import BoxSerdeType
from serdecore.serde_types.char_serde_type import CharSerdeType
from serdecore.serde_types.dataclass_serde_type import DataclassSerdeType
from serdecore.serde_types.fixed_array_serde_type import FixedArraySerdeType
from serdecore.serde_types.float_serde_type import F32SerdeType, F64SerdeType
from serdecore.serde_types.map_serde_type import MapSerdeType
from serdecore.serde_types.namedtuple_serde_type import NamedTupleSerdeType
from serdecore.serde_types.optional_serde_type import OptionSerdeType, OptionalSerdeType
from serdecore.serde_types.registry import SerdeTypeRegistry
from serdecore.serde_types.sequence_serde_type import SequenceSerdeType
from serdecore.serde_types.serde_type import SerdeType
from serdecore.serde_types.sized_int_serde_type import (
    I8SerdeType,
    I16SerdeType,
    I32SerdeType,
    I64SerdeType,
    I128SerdeType,
    U8SerdeType,
    U16SerdeType,
    U32SerdeType,
    U64SerdeType,
    U128SerdeType,
)
from serdecore.serde_types.str_serde_type import StrSerdeType
from serdecore.serde_types.sum_serde_type import SumSerdeType
from serdecore.serde_types.tuple_serde_type import TupleSerdeType
from serdecore.serde_types.unit_serde_type import UnitSerdeType
from serdecore.serde_types.utils import TypeAliasMap, TypeToSerdeTypeMap
from serdecore.serde_types.variant_case_table import VariantCaseTable
from serdecore.serialization import Deserializer, Serializer
from serdecore.sum_type import Sum
from serdecore.types import F32, F64, I8, I16, I32, I64, I128, U8, U16, U32, U64, U128, Box, Char, FixedArray, Option

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'ESSENTIAL_TYPE_ALIAS_MAP',
    'TYPE_TO_SERDE_TYPE_MAP',
    'BoolSerdeType',
    'BoxSerdeType',
    'CharSerdeType',
    'DataclassSerdeType',
    'F32SerdeType',
    'F64SerdeType',
    'FixedArraySerdeType',
    'I8SerdeType',
    'I16SerdeType',
    'I32SerdeType',
    'I64SerdeType',
    'I128SerdeType',
    'MapSerdeType',
    'NamedTupleSerdeType',
    'OptionSerdeType',
    'OptionalSerdeType',
    'SequenceSerdeType',
    'SerdeType',
    'SerdeTypeRegistry',
    'StrSerdeType',
    'SumSerdeType',
    'TupleSerdeType',
    'TypeAliasMap',
    'TypeToSerdeTypeMap',
    'U8SerdeType',
    'U16SerdeType',
    'U32SerdeType',
    'U64SerdeType',
    'U128SerdeType',
    'UnitSerdeType',
    'VariantCaseTable',
    'deserialize',
    'make_serde_type',
    'serialize',
]

T = TypeVar('T')

# this is the minimum type-alias-map needed for everything to work as intended
ESSENTIAL_TYPE_ALIAS_MAP: TypeAliasMap = {
    # XXX: technically types.UnionType is not a type, so mypy complains, but for our purposes it is a type
    Union: UnionType,
}

# abstract collections are accepted in annotations, values are decoded as their builtin counterpart
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    **ESSENTIAL_TYPE_ALIAS_MAP,
    Mapping: dict,
    Sequence: list,
}

# Mapping between types and SerdeType classes.
TYPE_TO_SERDE_TYPE_MAP: TypeToSerdeTypeMap = {
    # unit:
    # XXX: technically None is not a type, type[None]/NoneType is, both can show up
    None: UnitSerdeType,
    NoneType: UnitSerdeType,
    # leaves:
    bool: BoolSerdeType,
    Char: CharSerdeType,
    F32: F32SerdeType,
    F64: F64SerdeType,
    float: F64SerdeType,
    U8: U8SerdeType,
    U16: U16SerdeType,
    U32: U32SerdeType,
    U64: U64SerdeType,
    U128: U128SerdeType,
    I8: I8SerdeType,
    I16: I16SerdeType,
    I32: I32SerdeType,
    I64: I64SerdeType,
    I128: I128SerdeType,
    int: I64SerdeType,
    str: StrSerdeType,
    # combinators:
    Union: OptionalSerdeType,
    UnionType: OptionalSerdeType,
    Option: OptionSerdeType,
    list: SequenceSerdeType,
    tuple: TupleSerdeType,
    FixedArray: FixedArraySerdeType,
    dict: MapSerdeType,
    Box: BoxSerdeType,
    # named composites, see get_usable_origin_type:
    Sum: SumSerdeType,
    dataclass: DataclassSerdeType,
    NamedTuple: NamedTupleSerdeType,
}

DEFAULT_TYPE_MAP = SerdeType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, TYPE_TO_SERDE_TYPE_MAP)


def make_serde_type(type_: type[T], /, *, type_map: SerdeType.TypeMap = DEFAULT_TYPE_MAP) -> SerdeType[T]:
    """ Like SerdeType.from_type, but with the default maps.

    Named composites are built once per type map, so calling this again for the same sum type, dataclass or namedtuple
    returns the same SerdeType (and the same variant case table).

    >>> from serdecore.types import U16
    >>> make_serde_type(dict[str, list[U16]]).to_bytes({'a': [1, 2]}).hex()
    '0101610201000200'
    """
    return SerdeType.from_type(type_, type_map=type_map)


def serialize(type_: type[T], value: T, serializer: Serializer, /) -> None:
    """Serialize `value` as a value of the annotation `type_`."""
    make_serde_type(type_).serialize(serializer, value)


def deserialize(type_: type[T], deserializer: Deserializer, /) -> T:
    """Deserialize a value of the annotation `type_`."""
    return make_serde_type(type_).deserialize(deserializer)
