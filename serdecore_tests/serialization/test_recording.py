import pytest

from serdecore.serialization import BadDataError, Deserializer, OutOfDataError, Serializer
from serdecore.serialization.recording import RecordingSerializer, ReplayDeserializer


def test_records_every_operation_in_order() -> None:
    se = Serializer.build_recording_serializer()
    assert isinstance(se, RecordingSerializer)
    se.write_unit()
    se.write_bool(False)
    se.write_char('x')
    se.write_u128(2**100)
    se.write_i8(-5)
    se.write_f64(0.5)
    se.write_str('s')
    se.write_len(2)
    se.write_variant_index(0)
    assert se.operations == (
        ('unit', None),
        ('bool', False),
        ('char', 'x'),
        ('u128', 2**100),
        ('i8', -5),
        ('f64', 0.5),
        ('str', 's'),
        ('len', 2),
        ('variant_index', 0),
    )


def test_replay_checks_the_operation_kind() -> None:
    de = Deserializer.build_replay_deserializer([('u16', 1)])
    assert isinstance(de, ReplayDeserializer)
    with pytest.raises(BadDataError, match='expected a u32 operation, got u16'):
        de.read_u32()


@pytest.mark.parametrize('kind, value', [
    ('u8', 256),
    ('u8', -1),
    ('i8', 128),
    ('u32', 2**32),
    ('i128', 2**127),
    ('u64', True),
    ('len', -1),
    ('variant_index', 2**32),
])
def test_replay_checks_int_ranges(kind: str, value: object) -> None:
    de = Deserializer.build_replay_deserializer([(kind, value)])
    with pytest.raises(BadDataError):
        getattr(de, f'read_{kind}')()


def test_replay_out_of_data() -> None:
    de = Deserializer.build_replay_deserializer([])
    assert de.is_empty()
    with pytest.raises(OutOfDataError):
        de.read_unit()


def test_replay_trailing_data() -> None:
    de = Deserializer.build_replay_deserializer([('unit', None)])
    with pytest.raises(BadDataError, match='trailing data'):
        de.finalize()
    de.read_unit()
    de.finalize()


@pytest.mark.parametrize('kind, value', [
    ('char', '\ud800'),
    ('char', '\udfff'),
    ('char', 'ab'),
    ('char', 97),
    ('f32', 0.1),
    ('f32', 1e300),
    ('f32', 'x'),
    ('f32', 1),
    ('f64', None),
    ('f64', '1.5'),
    ('f64', True),
])
def test_replay_checks_chars_and_floats(kind: str, value: object) -> None:
    de = Deserializer.build_replay_deserializer([(kind, value)])
    with pytest.raises(BadDataError):
        getattr(de, f'read_{kind}')()


def test_replay_accepts_valid_chars_and_floats() -> None:
    de = Deserializer.build_replay_deserializer([
        ('char', '\U0010ffff'),
        ('f32', 0.5),
        ('f32', float('inf')),
        ('f64', 0.1),
    ])
    assert de.read_char() == '\U0010ffff'
    assert de.read_f32() == 0.5
    assert de.read_f32() == float('inf')
    assert de.read_f64() == 0.1
    de.finalize()


def test_invalid_replayed_values_are_bad_data() -> None:
    from serdecore.serde_types import make_serde_type
    from serdecore.types import F32, Char

    for type_, op in ((Char, ('char', '\ud800')), (F32, ('f32', 0.1)), (float, ('f64', 'nan'))):
        with pytest.raises(BadDataError):
            make_serde_type(type_).deserialize(Deserializer.build_replay_deserializer([op]))
