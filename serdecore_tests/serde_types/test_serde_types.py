import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from serdecore.serde_types import (
    F64SerdeType,
    I64SerdeType,
    MapSerdeType,
    SequenceSerdeType,
    StrSerdeType,
    TupleSerdeType,
    make_serde_type,
)
from serdecore.serialization import BadDataError, UnsupportedTypeError
from serdecore.types import F32, F64, I8, I16, I32, I64, I128, U8, U16, U32, U64, U128, Box, Char, FixedArray
from serdecore_tests import unittest


class Point(NamedTuple):
    x: I32
    y: I32


@dataclass
class Person:
    name: str
    age: U8
    emails: list[str]
    nickname: Optional[str] = None
    # not part of __init__, so not serialized
    tags: list[str] = field(default_factory=list, init=False)


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point


class SerdeTypesTestCase(unittest.TestCase):
    def test_unit(self) -> None:
        self.assertEqual(self._run_test(None, None), b'')
        self.assertEqual(self._run_replay_test(None, None), (('unit', None),))

    def test_bool(self) -> None:
        self._run_test(bool, True)
        self._run_test(bool, False)

    def test_invalid_bool(self) -> None:
        with self.assertRaises(ValueError):
            make_serde_type(bool).from_bytes(b'\x02')

    def test_char(self) -> None:
        self._run_test(Char, 'a')
        self._run_test(Char, '\U0010FFFF')
        self.assertEqual(self._run_replay_test(Char, 'z'), (('char', 'z'),))

    def test_char_invalid_values(self) -> None:
        serde_type = make_serde_type(Char)
        with self.assertRaises(ValueError):
            serde_type.to_bytes('ab')
        with self.assertRaises(ValueError):
            serde_type.to_bytes('\udfff')
        with self.assertRaises(TypeError):
            serde_type.to_bytes(1)

    def test_floats(self) -> None:
        self._run_test(F32, 1.5)
        self._run_test(F32, float('inf'))
        self._run_test(F64, 0.1)
        self._run_test(F64, -math.pi)
        self._run_test(float, 1e300)
        self.assertIsInstance(make_serde_type(float), F64SerdeType)

    def test_float_nan(self) -> None:
        for type_ in (F32, F64):
            serde_type = make_serde_type(type_)
            self.assertTrue(math.isnan(serde_type.from_bytes(serde_type.to_bytes(float('nan')))))

    def test_f32_not_exact(self) -> None:
        with self.assertRaises(ValueError):
            make_serde_type(F32).to_bytes(0.1)

    def test_float_requires_float(self) -> None:
        with self.assertRaises(TypeError):
            make_serde_type(F64).to_bytes(1)

    def test_sized_ints(self) -> None:
        self._run_test(U8, 255)
        self._run_test(U16, 65535)
        self._run_test(U32, 2**32 - 1)
        self._run_test(U64, 2**64 - 1)
        self._run_test(U128, 2**128 - 1)
        self._run_test(I8, -128)
        self._run_test(I16, -32768)
        self._run_test(I32, -2**31)
        self._run_test(I64, 2**63 - 1)
        self._run_test(I128, -2**127)
        self.assertEqual(self._run_replay_test(U16, 7), (('u16', 7),))
        self.assertEqual(self._run_replay_test(I128, -7), (('i128', -7),))

    def test_int_is_i64(self) -> None:
        self.assertIsInstance(make_serde_type(int), I64SerdeType)
        self.assertEqual(self._run_test(int, -1), b'\xff' * 8)
        with self.assertRaises(ValueError):
            make_serde_type(int).to_bytes(2**63)

    def test_random_ints(self) -> None:
        for type_, lo, hi in [(U32, 0, 2**32 - 1), (I64, -2**63, 2**63 - 1), (U128, 0, 2**128 - 1)]:
            for _ in range(50):
                self._run_test(type_, self.rng.randint(lo, hi))

    def test_str(self) -> None:
        self._run_test(str, '')
        self._run_test(str, 'serdecore')
        self._run_test(str, 'áéíóúçãõ')
        self.assertEqual(make_serde_type(str).to_bytes('é'), b'\x02\xc3\xa9')
        self.assertIsInstance(make_serde_type(str), StrSerdeType)

    def test_optional(self) -> None:
        self._run_test(Optional[str], None)
        self._run_test(str | None, None)
        self._run_test(Optional[str], '')
        self._run_test(str | None, 'serdecore')
        self.assertEqual(self._run_replay_test(Optional[U8], None), (('u8', 0),))
        self.assertEqual(self._run_replay_test(U8 | None, 3), (('u8', 1), ('u8', 3)))

    def test_optional_invalid_discriminant(self) -> None:
        from serdecore.serialization import InvalidOptionDiscriminantError
        with self.assertRaises(InvalidOptionDiscriminantError):
            make_serde_type(Optional[U8]).from_bytes(b'\x02\x01')

    def test_sequence(self) -> None:
        self._run_test(list[str], [])
        self._run_test(list[str], ['a', 'b'])
        self._run_test(list[list[U8]], [[1], [], [2, 3]])
        ops = self._run_replay_test(list[U8], [1, 2])
        self.assertEqual(ops, (('len', 2), ('u8', 1), ('u8', 2)))

    def test_abstract_sequence_is_list(self) -> None:
        serde_type = make_serde_type(Sequence[U8])
        self.assertIsInstance(serde_type, SequenceSerdeType)
        self.assertEqual(serde_type.from_bytes(serde_type.to_bytes((1, 2))), [1, 2])

    def test_var_tuple(self) -> None:
        self._run_test(tuple[str, ...], ('a', 'b', 'c'))
        serde_type = make_serde_type(tuple[U8, ...])
        self.assertIsInstance(serde_type, TupleSerdeType)
        # same layout as a list
        self.assertEqual(serde_type.to_bytes((1, 2)), make_serde_type(list[U8]).to_bytes([1, 2]))

    def test_fixed_array(self) -> None:
        self._run_test(FixedArray[U8, 3], (1, 2, 3))
        self._run_test(FixedArray[str, 0], ())
        serde_type = make_serde_type(FixedArray[U16, 2])
        self.assertEqual(serde_type.to_bytes([1, 2]), b'\x01\x00\x02\x00')
        self.assertEqual(serde_type.from_bytes(b'\x01\x00\x02\x00'), (1, 2))

    def test_fixed_array_wrong_size(self) -> None:
        serde_type = make_serde_type(FixedArray[U8, 3])
        with self.assertRaises(ValueError):
            serde_type.to_bytes((1, 2))
        with self.assertRaises(BadDataError):
            # the 4th byte is left over
            serde_type.from_bytes(b'\x01\x02\x03\x04')

    def test_fixed_array_annotation(self) -> None:
        with self.assertRaises(TypeError):
            FixedArray[U8]
        with self.assertRaises(TypeError):
            FixedArray[U8, -1]

    def test_map(self) -> None:
        self._run_test(dict[str, U32], {})
        self._run_test(dict[str, U32], {'a': 1, 'b': 2})
        self._run_test(dict[U8, list[str]], {1: ['x'], 2: []})
        self._run_test(dict[tuple[U8, str], bool], {(1, 'a'): True})
        serde_type = make_serde_type(Mapping[str, U8])
        self.assertIsInstance(serde_type, MapSerdeType)
        self.assertEqual(serde_type.from_bytes(serde_type.to_bytes({'k': 1})), {'k': 1})

    def test_map_unhashable_key(self) -> None:
        with self.assertRaises(TypeError):
            make_serde_type(dict[list[U8], U8])
        with self.assertRaises(TypeError):
            make_serde_type(dict[tuple[list[U8]], U8])

    def test_tuple(self) -> None:
        self._run_test(tuple[I64, str, bool], (1, 'a', False))
        self._run_test(tuple[()], ())
        self._run_test(tuple[I64, Optional[str]], (1, None))
        ops = self._run_replay_test(tuple[U8, str], (1, 'a'))
        self.assertEqual(ops, (('u8', 1), ('str', 'a')))

    def test_tuple_wrong_size(self) -> None:
        with self.assertRaises(TypeError):
            make_serde_type(tuple[U8, U8]).to_bytes((1,))

    def test_namedtuple(self) -> None:
        self._run_test(Point, Point(1, -2))
        as_tuple = make_serde_type(tuple[I32, I32]).to_bytes((1, 2))
        self.assertEqual(make_serde_type(Point).to_bytes(Point(1, 2)), as_tuple)
        self.assertIsInstance(make_serde_type(Point).from_bytes(bytes(8)), Point)
        self.assertTrue(make_serde_type(Point).is_hashable())

    def test_dataclass(self) -> None:
        self._run_test(Person, Person('alice', 30, ['a@example.com']))
        self._run_test(Person, Person('bob', 40, [], nickname='bobby'))
        self._run_test(Segment, Segment(Point(0, 0), Point(1, 1)))

    def test_dataclass_layout(self) -> None:
        person = Person('a', 1, [])
        person.tags.append('ignored')
        ops = self.record(Person, person)
        self.assertEqual(ops, (('str', 'a'), ('u8', 1), ('len', 0), ('u8', 0)))
        self.assertEqual(self.replay(Person, ops).tags, [])

    def test_box(self) -> None:
        self._run_test(Box[U8], 5)
        self._run_test(list[Box[str]], ['a'])
        self.assertEqual(make_serde_type(Box[U32]).to_bytes(1), make_serde_type(U32).to_bytes(1))
        with self.assertRaises(TypeError):
            Box()

    def test_nested(self) -> None:
        type_ = dict[str, list[tuple[Optional[U8], FixedArray[Char, 2]]]]
        self._run_test(type_, {'a': [(None, ('x', 'y')), (1, ('z', 'w'))], 'b': []})

    def test_check_value_is_deep(self) -> None:
        serde_type = make_serde_type(dict[str, list[U8]])
        serde_type.check_value({'a': [1, 2]})
        with self.assertRaises(ValueError):
            serde_type.check_value({'a': [1, 256]})
        with self.assertRaises(TypeError):
            serde_type.check_value({'a': ['1']})

    def test_ill_typed_value_writes_nothing(self) -> None:
        from serdecore.serialization import Serializer
        se = Serializer.build_recording_serializer()
        with self.assertRaises(TypeError):
            make_serde_type(list[U8]).serialize(se, 'not a list')
        self.assertEqual(se.finalize(), ())

    def test_unsupported_types(self) -> None:
        for type_ in (list, dict[str], int | str, bytes, set[int], object, 'Point'):
            with self.assertRaises(TypeError):
                make_serde_type(type_)

    def test_write_type_unsupported(self) -> None:
        from serdecore.serialization import Deserializer, Serializer
        with self.assertRaises(UnsupportedTypeError):
            Serializer.build_recording_serializer().write_type(bytes, b'')
        with self.assertRaises(UnsupportedTypeError):
            Deserializer.build_replay_deserializer([]).read_type(bytes)

    def test_from_bytes_trailing_data(self) -> None:
        with self.assertRaises(BadDataError):
            make_serde_type(U8).from_bytes(b'\x01\x02')

    def test_module_level_functions(self) -> None:
        from serdecore.serde_types import deserialize, serialize
        from serdecore.serialization import Deserializer, Serializer
        se = Serializer.build_bytes_serializer()
        serialize(list[str], ['a'], se)
        serialize(U8, 1, se)
        de = Deserializer.build_bytes_deserializer(bytes(se.finalize()))
        self.assertEqual(deserialize(list[str], de), ['a'])
        self.assertEqual(deserialize(U8, de), 1)
        de.finalize()
