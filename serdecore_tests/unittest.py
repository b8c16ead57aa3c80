import secrets
from random import Random
from typing import Any, Optional, TypeVar
from unittest import TestCase as _TestCase, main as ut_main

from structlog import get_logger

from serdecore.conf.get_settings import get_global_settings
from serdecore.serde_types import SerdeType, make_serde_type
from serdecore.serialization import Deserializer, Serializer
from serdecore.serialization.recording import Operation

logger = get_logger()
main = ut_main

T = TypeVar('T')


class TestCase(_TestCase):
    seed_config: Optional[int] = None

    def setUp(self) -> None:
        self.log = logger.new()
        self.seed = secrets.randbits(64) if self.seed_config is None else self.seed_config
        self.log.info('set seed', seed=self.seed)
        self.rng = Random(self.seed)
        self._settings = get_global_settings()

    def _run_test(self, type_: Any, value: T) -> bytes:
        """Round trip `value` through the binary format, returns the encoded bytes."""
        return self._run_test_serde_type(make_serde_type(type_), value)

    def _run_test_serde_type(self, serde_type: SerdeType[T], value: T) -> bytes:
        value_bytes = serde_type.to_bytes(value)
        value2: T = serde_type.from_bytes(value_bytes)
        self.assertEqual(value, value2)
        return value_bytes

    def _run_replay_test(self, type_: Any, value: T) -> tuple[Operation, ...]:
        """Round trip `value` through the recording format, returns the recorded operations."""
        operations = self.record(type_, value)
        self.assertEqual(value, self.replay(type_, operations))
        return operations

    def record(self, type_: Any, value: Any) -> tuple[Operation, ...]:
        serializer = Serializer.build_recording_serializer()
        serializer.write_type(type_, value)
        return serializer.finalize()

    def replay(self, type_: Any, operations: Any) -> Any:
        deserializer = Deserializer.build_replay_deserializer(operations)
        value = deserializer.read_type(type_)
        deserializer.finalize()
        return value
