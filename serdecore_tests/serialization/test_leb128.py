import pytest

from serdecore.serialization import BadDataError, Deserializer, Serializer
from serdecore.serialization.encoding.leb128 import decode_leb128, encode_leb128


def _do_round_trip_test_with_size(n: int, encoded_size: int, signed: bool) -> None:
    se = Serializer.build_bytes_serializer()
    encode_leb128(se, n, signed=signed)
    encoded_n = bytes(se.finalize())
    assert len(encoded_n) == encoded_size
    de = Deserializer.build_bytes_deserializer(encoded_n)
    assert decode_leb128(de, signed=signed) == n
    de.finalize()


EXAMPLES_SIGNED_BY_SIZE = {
    1: [0, 1, 2, 63, -1, -2, -63, -64],
    2: [64, 65, 1000, 8191, -65, -3000, -8191, -8192],
    3: [8192, 100000, 1048575, -8193, -100000, -1048576],
}


def gen_signed_test_cases():
    test_cases = []
    # convert example to test cases
    for size, examples in EXAMPLES_SIGNED_BY_SIZE.items():
        for example in examples:
            test_cases.append((example, size))
    # generate additional test cases, up to what an i128 needs
    for size in range(4, 20):
        n_pos_lo = (1 << (7 * (size - 1) - 1))
        n_pos_hi = (1 << (7 * size - 1)) - 1
        n_neg_lo = -(1 << (7 * size - 1))
        n_neg_hi = -(1 << (7 * (size - 1) - 1)) - 1
        test_cases.append((n_pos_lo, size))
        test_cases.append((n_pos_hi, size))
        test_cases.append((n_neg_lo, size))
        test_cases.append((n_neg_hi, size))
    return test_cases


@pytest.mark.parametrize('n, encoded_size', gen_signed_test_cases())
def test_signed_round_trip_with_size(n, encoded_size):
    _do_round_trip_test_with_size(n, encoded_size, True)


EXAMPLES_UNSIGNED_BY_SIZE = {
    1: [0, 1, 2, 63, 64, 126, 127],
    2: [128, 129, 1000, 8192, 16383],
    3: [16384, 100000, 1048576, 2097151],
}


def gen_unsigned_test_cases():
    test_cases = []
    # convert example to test cases
    for size, examples in EXAMPLES_UNSIGNED_BY_SIZE.items():
        for example in examples:
            test_cases.append((example, size))
    # generate additional test cases
    for size in range(4, 20):
        n_lo = 1 << (7 * (size - 1))
        n_hi = (1 << (7 * size)) - 1
        test_cases.append((n_lo, size))
        test_cases.append((n_hi, size))
    return test_cases


@pytest.mark.parametrize('n, encoded_size', gen_unsigned_test_cases())
def test_unsigned_round_trip_with_size(n, encoded_size):
    _do_round_trip_test_with_size(n, encoded_size, False)


@pytest.mark.parametrize('data', ['8000', '808000', 'ff00', 'ffff00'])
def test_unsigned_non_canonical_is_rejected(data):
    de = Deserializer.build_bytes_deserializer(bytes.fromhex(data))
    with pytest.raises(BadDataError, match='non-canonical'):
        decode_leb128(de, signed=False)


def test_max_bytes():
    # 2**32 - 1 fits in 5 blocks, 2**35 needs 6
    se = Serializer.build_bytes_serializer()
    encode_leb128(se, 2**32 - 1, signed=False)
    encode_leb128(se, 2**35, signed=False)
    de = Deserializer.build_bytes_deserializer(bytes(se.finalize()))
    assert decode_leb128(de, signed=False, max_bytes=5) == 2**32 - 1
    with pytest.raises(BadDataError, match='longer than 5 bytes'):
        decode_leb128(de, signed=False, max_bytes=5)


def test_unsigned_negative_cannot_be_encoded():
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_leb128(se, -1, signed=False)
