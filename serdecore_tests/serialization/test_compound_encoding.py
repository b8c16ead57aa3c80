import pytest

from serdecore.serialization import (
    Deserializer,
    DuplicateKeyError,
    InvalidOptionDiscriminantError,
    Serializer,
    VariantIndexOutOfRangeError,
)
from serdecore.serialization.compound_encoding.collection import decode_collection, encode_collection
from serdecore.serialization.compound_encoding.fixed_array import decode_fixed_array, encode_fixed_array
from serdecore.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from serdecore.serialization.compound_encoding.optional import decode_optional, encode_optional
from serdecore.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from serdecore.serialization.compound_encoding.variant import decode_variant, encode_variant
from serdecore.serialization.recording import RecordingSerializer, ReplayDeserializer


def test_optional_absent_reads_nothing_else() -> None:
    se = Serializer.build_recording_serializer()
    encode_optional(se, None, RecordingSerializer.write_str)
    assert se.finalize() == (('u8', 0),)
    # the inner decoder is never called, the next operation is left for the caller
    de = Deserializer.build_replay_deserializer([('u8', 0), ('bool', True)])
    assert decode_optional(de, ReplayDeserializer.read_str) is None
    assert de.read_bool() is True
    de.finalize()


def test_optional_present() -> None:
    se = Serializer.build_recording_serializer()
    encode_optional(se, 'x', RecordingSerializer.write_str)
    assert se.finalize() == (('u8', 1), ('str', 'x'))
    de = Deserializer.build_replay_deserializer([('u8', 1), ('str', 'x')])
    assert decode_optional(de, ReplayDeserializer.read_str) == 'x'
    de.finalize()


@pytest.mark.parametrize('discriminant', [2, 3, 127, 255])
def test_optional_invalid_discriminant(discriminant: int) -> None:
    de = Deserializer.build_replay_deserializer([('u8', discriminant), ('str', 'x')])
    with pytest.raises(InvalidOptionDiscriminantError) as exc_info:
        decode_optional(de, ReplayDeserializer.read_str)
    assert exc_info.value.args[0] == 'invalid option discriminant'
    assert exc_info.value.discriminant == discriminant


def test_optional_invalid_discriminant_binary() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x02\x00')
    with pytest.raises(InvalidOptionDiscriminantError):
        decode_optional(de, lambda de: de.read_str())


def test_collection_length_fidelity() -> None:
    se = Serializer.build_recording_serializer()
    encode_collection(se, [3, 1, 2], RecordingSerializer.write_u8)
    ops = se.finalize()
    assert ops == (('len', 3), ('u8', 3), ('u8', 1), ('u8', 2))
    de = Deserializer.build_replay_deserializer(ops + (('bool', False),))
    assert decode_collection(de, ReplayDeserializer.read_u8, list) == [3, 1, 2]
    # exactly the announced elements were consumed
    assert de.read_bool() is False
    de.finalize()


def test_empty_collection() -> None:
    se = Serializer.build_recording_serializer()
    encode_collection(se, [], RecordingSerializer.write_u8)
    assert se.finalize() == (('len', 0),)
    de = Deserializer.build_replay_deserializer([('len', 0)])
    assert decode_collection(de, ReplayDeserializer.read_u8, list) == []
    de.finalize()


def test_fixed_array_writes_no_length() -> None:
    se = Serializer.build_recording_serializer()
    encode_fixed_array(se, [7, 8, 9], RecordingSerializer.write_i32, length=3)
    assert se.finalize() == (('i32', 7), ('i32', 8), ('i32', 9))
    de = Deserializer.build_replay_deserializer([('i32', 7), ('i32', 8), ('i32', 9), ('i32', 10)])
    assert decode_fixed_array(de, ReplayDeserializer.read_i32, length=3) == (7, 8, 9)
    assert de.read_i32() == 10


def test_fixed_array_wrong_length() -> None:
    se = Serializer.build_recording_serializer()
    with pytest.raises(ValueError):
        encode_fixed_array(se, [1, 2, 3, 4], RecordingSerializer.write_i32, length=3)
    assert se.finalize() == ()


def test_fixed_array_too_short_input() -> None:
    from serdecore.serialization import OutOfDataError
    de = Deserializer.build_replay_deserializer([('i32', 7), ('i32', 8)])
    with pytest.raises(OutOfDataError):
        decode_fixed_array(de, ReplayDeserializer.read_i32, length=3)


def test_tuple_has_no_discriminant() -> None:
    se = Serializer.build_recording_serializer()
    encode_tuple(se, ('a', True), (RecordingSerializer.write_str, RecordingSerializer.write_bool))
    assert se.finalize() == (('str', 'a'), ('bool', True))
    de = Deserializer.build_replay_deserializer([('str', 'a'), ('bool', True)])
    assert decode_tuple(de, (ReplayDeserializer.read_str, ReplayDeserializer.read_bool)) == ('a', True)
    de.finalize()


def test_mapping_iteration_order() -> None:
    se = Serializer.build_recording_serializer()
    encode_mapping(se, {'a': 1, 'b': 2}, RecordingSerializer.write_str, RecordingSerializer.write_i32)
    assert se.finalize() == (('len', 2), ('str', 'a'), ('i32', 1), ('str', 'b'), ('i32', 2))


def test_mapping_duplicates() -> None:
    ops = [('len', 3), ('str', 'a'), ('i32', 1), ('str', 'b'), ('i32', 2), ('str', 'a'), ('i32', 3)]
    de = Deserializer.build_replay_deserializer(ops)
    assert decode_mapping(de, ReplayDeserializer.read_str, ReplayDeserializer.read_i32, dict) == {'a': 3, 'b': 2}
    de = Deserializer.build_replay_deserializer(ops)
    with pytest.raises(DuplicateKeyError):
        decode_mapping(de, ReplayDeserializer.read_str, ReplayDeserializer.read_i32, dict, reject_duplicates=True)


def test_variant() -> None:
    se = Serializer.build_recording_serializer()
    encode_variant(se, 0, 'x', RecordingSerializer.write_str)
    assert se.finalize() == (('variant_index', 0), ('str', 'x'))

    cases = (ReplayDeserializer.read_str, ReplayDeserializer.read_bool)
    de = Deserializer.build_replay_deserializer([('variant_index', 1), ('bool', True)])
    assert decode_variant(de, cases) is True
    de.finalize()


@pytest.mark.parametrize('index', [2, 3, 2**32 - 1])
def test_variant_index_out_of_range(index: int) -> None:
    cases = (ReplayDeserializer.read_str, ReplayDeserializer.read_bool)
    de = Deserializer.build_replay_deserializer([('variant_index', index), ('bool', True)])
    with pytest.raises(VariantIndexOutOfRangeError) as exc_info:
        decode_variant(de, cases)
    assert exc_info.value.args[0] == 'variant index out of range'
    assert exc_info.value.index == index
    assert exc_info.value.count == 2
