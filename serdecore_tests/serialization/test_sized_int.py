import struct

import pytest

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
    _SizedIntSerdeType,
)


def _test_bounds_struct_pack(fmt: str, lower_bound: int, upper_bound: int) -> None:
    struct.pack(fmt, lower_bound)
    try:
        struct.pack(fmt, lower_bound - 1)
    except struct.error:
        pass
    else:
        assert False
    struct.pack(fmt, upper_bound)
    try:
        struct.pack(fmt, upper_bound + 1)
    except struct.error:
        pass
    else:
        assert False


@pytest.mark.parametrize('serde_type_class, fmt', [
    (I8SerdeType, 'b'),
    (U8SerdeType, 'B'),
    (I16SerdeType, '<h'),
    (U16SerdeType, '<H'),
    (I32SerdeType, '<i'),
    (U32SerdeType, '<I'),
    (I64SerdeType, '<q'),
    (U64SerdeType, '<Q'),
])
def test_bounds_match_struct(serde_type_class: type[_SizedIntSerdeType], fmt: str) -> None:
    lower_bound = serde_type_class._lower_bound_value()
    upper_bound = serde_type_class._upper_bound_value()
    _test_bounds_struct_pack(fmt, lower_bound, upper_bound)


def test_int128_bounds() -> None:
    assert I128SerdeType._lower_bound_value() == -170141183460469231731687303715884105728
    assert I128SerdeType._upper_bound_value() == 170141183460469231731687303715884105727
    assert U128SerdeType._lower_bound_value() == 0
    assert U128SerdeType._upper_bound_value() == 340282366920938463463374607431768211455


@pytest.mark.parametrize('serde_type_class, size', [
    (I8SerdeType, 1),
    (U8SerdeType, 1),
    (I16SerdeType, 2),
    (U16SerdeType, 2),
    (I32SerdeType, 4),
    (U32SerdeType, 4),
    (I64SerdeType, 8),
    (U64SerdeType, 8),
    (I128SerdeType, 16),
    (U128SerdeType, 16),
])
def test_bounds_round_trip(serde_type_class: type[_SizedIntSerdeType], size: int) -> None:
    serde_type = serde_type_class()
    for value in (serde_type._lower_bound_value(), serde_type._upper_bound_value()):
        data = serde_type.to_bytes(value)
        assert len(data) == size
        assert serde_type.from_bytes(data) == value
    with pytest.raises(ValueError):
        serde_type.to_bytes(serde_type._upper_bound_value() + 1)
    with pytest.raises(ValueError):
        serde_type.to_bytes(serde_type._lower_bound_value() - 1)


def test_u128_is_a_single_scalar() -> None:
    # values that only differ in one of the 64-bit halves must not compare or encode equal
    serde_type = U128SerdeType()
    low = serde_type.to_bytes(1)
    high = serde_type.to_bytes(1 << 64)
    assert low != high
    assert serde_type.from_bytes(high) == 1 << 64
    assert high.hex() == '00000000000000000100000000000000'


def test_bool_is_not_an_int() -> None:
    with pytest.raises(TypeError):
        U8SerdeType().to_bytes(True)
