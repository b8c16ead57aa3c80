import math
import struct

import pytest

from serdecore.serialization import (
    BadDataError,
    Deserializer,
    OutOfDataError,
    Serializer,
    TooLongError,
)
from serdecore.serialization.bytes_deserializer import BytesDeserializer


def _write(*calls) -> str:
    se = Serializer.build_bytes_serializer()
    for name, *args in calls:
        getattr(se, f'write_{name}')(*args)
    return bytes(se.finalize()).hex()


def test_primitive_layouts() -> None:
    assert _write(('unit',)) == ''
    assert _write(('bool', True), ('bool', False)) == '0100'
    assert _write(('char', 'a')) == '61000000'
    assert _write(('char', '\U0001F600')) == '00f60100'
    assert _write(('u8', 255)) == 'ff'
    assert _write(('u16', 0x1234)) == '3412'
    assert _write(('u32', 42)) == '2a000000'
    assert _write(('u64', 1)) == '0100000000000000'
    assert _write(('i8', -1)) == 'ff'
    assert _write(('i16', -2)) == 'feff'
    assert _write(('i32', -1)) == 'ffffffff'
    assert _write(('i64', -1)) == 'ff' * 8
    assert _write(('i128', -1)) == 'ff' * 16
    assert _write(('f32', 1.5)) == '0000c03f'
    assert _write(('f64', -2.0)) == '00000000000000c0'


def test_str_is_byte_length_prefixed() -> None:
    # 'é' is 1 character but 2 bytes
    assert _write(('str', '')) == '00'
    assert _write(('str', 'abc')) == '03616263'
    assert _write(('str', 'é')) == '02c3a9'


def test_len_and_variant_index_are_leb128() -> None:
    assert _write(('len', 0)) == '00'
    assert _write(('len', 127)) == '7f'
    assert _write(('len', 128)) == '8001'
    assert _write(('variant_index', 300)) == 'ac02'
    assert _write(('variant_index', 2**32 - 1)) == 'ffffffff0f'


def test_len_out_of_u32_range_cannot_be_written() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        se.write_len(2**32)
    with pytest.raises(ValueError):
        se.write_variant_index(-1)


def test_f64_bit_pattern_is_preserved() -> None:
    # a NaN with a payload
    nan_bits = bytes.fromhex('0100000000f8ff7f')
    value, = struct.unpack('<d', nan_bits)
    assert math.isnan(value)
    se = Serializer.build_bytes_serializer()
    se.write_f64(value)
    data = bytes(se.finalize())
    assert data == nan_bits
    de = Deserializer.build_bytes_deserializer(data)
    assert struct.pack('<d', de.read_f64()) == nan_bits


def test_f32_must_be_exact() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        se.write_f32(0.1)


def test_invalid_bool() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x02')
    with pytest.raises(BadDataError):
        de.read_bool()


def test_invalid_utf8() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x02\xc3\x28')
    with pytest.raises(BadDataError, match='invalid utf-8'):
        de.read_str()


def test_invalid_char() -> None:
    # a surrogate is a code unit, not a scalar value
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('00d80000'))
    with pytest.raises(BadDataError):
        de.read_char()
    de = Deserializer.build_bytes_deserializer(bytes.fromhex('00001100'))
    with pytest.raises(BadDataError):
        de.read_char()


def test_lone_surrogate_str_cannot_be_written() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(UnicodeEncodeError):
        se.write_str('\ud800')


def test_out_of_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    with pytest.raises(OutOfDataError):
        de.read_u32()
    de = Deserializer.build_bytes_deserializer(b'\x05ab')
    with pytest.raises(OutOfDataError):
        de.read_str()


def test_trailing_data() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x01\x02')
    assert de.read_u8() == 1
    with pytest.raises(BadDataError, match='trailing data'):
        de.finalize()


def test_max_length() -> None:
    de = BytesDeserializer(bytes.fromhex('0b'), max_length=10)
    with pytest.raises(TooLongError):
        de.read_len()
    de = BytesDeserializer(bytes.fromhex('0a'), max_length=10)
    assert de.read_len() == 10
    de = BytesDeserializer(bytes.fromhex('0b') + b'x' * 11, max_length=10)
    with pytest.raises(TooLongError):
        de.read_str()


def test_max_length_defaults_to_settings() -> None:
    from serdecore.conf.get_settings import get_global_settings
    de = BytesDeserializer(b'')
    assert de.max_length == get_global_settings().MAX_LENGTH


def test_variant_index_above_u32_is_rejected() -> None:
    # 2**32 in 5 blocks
    de = BytesDeserializer(bytes.fromhex('8080808010'))
    with pytest.raises(BadDataError):
        de.read_variant_index()
    # 6 blocks is too long regardless of the value
    de = BytesDeserializer(bytes.fromhex('818080808000'))
    with pytest.raises(BadDataError):
        de.read_variant_index()


def test_max_leb128_bytes_applies_to_every_length() -> None:
    # 128 takes 2 blocks
    data = bytes.fromhex('8001') + b'x' * 128
    for read in ('read_len', 'read_variant_index', 'read_str'):
        de = BytesDeserializer(data, max_leb128_bytes=1)
        with pytest.raises(BadDataError, match='longer than 1 bytes'):
            getattr(de, read)()
    de = BytesDeserializer(data, max_leb128_bytes=2)
    assert de.read_str() == 'x' * 128
    de.finalize()


def test_bytes_serializer() -> None:
    se = Serializer.build_bytes_serializer()
    se.write_byte(0)
    se.write_bytes(b'ab')
    se.write_bytes(memoryview(b'c'))
    se.write_byte(255)
    with pytest.raises(ValueError):
        se.write_byte(256)
    with pytest.raises(ValueError):
        se.write_byte(-1)
    assert bytes(se.finalize()) == b'\x00abc\xff'


def test_round_trip_all_primitives() -> None:
    se = Serializer.build_bytes_serializer()
    se.write_unit()
    se.write_bool(True)
    se.write_char('ç')
    se.write_f32(-0.25)
    se.write_f64(math.pi)
    se.write_u128(2**128 - 1)
    se.write_i128(-2**127)
    se.write_str('hello')
    se.write_len(3)
    se.write_variant_index(7)
    de = Deserializer.build_bytes_deserializer(bytes(se.finalize()))
    assert de.read_unit() is None
    assert de.read_bool() is True
    assert de.read_char() == 'ç'
    assert de.read_f32() == -0.25
    assert de.read_f64() == math.pi
    assert de.read_u128() == 2**128 - 1
    assert de.read_i128() == -2**127
    assert de.read_str() == 'hello'
    assert de.read_len() == 3
    assert de.read_variant_index() == 7
    de.finalize()
