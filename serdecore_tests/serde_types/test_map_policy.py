from collections.abc import Iterator
from pathlib import Path

import pytest

from serdecore.conf.get_settings import CONFIG_YAML_ENV_VAR, get_global_settings, reset_global_settings
from serdecore.serde_types import MapSerdeType, make_serde_type
from serdecore.serialization import Deserializer, DuplicateKeyError
from serdecore.types import U8

DUPLICATED_OPS = [('len', 3), ('str', 'a'), ('u8', 1), ('str', 'b'), ('u8', 2), ('str', 'a'), ('u8', 3)]


@pytest.fixture
def map_policy(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    policy = 'reject'
    config_path = tmp_path / 'reject.yml'
    config_path.write_text(f'MAP_DUPLICATE_KEYS: {policy}\n')
    reset_global_settings()
    monkeypatch.setenv(CONFIG_YAML_ENV_VAR, str(config_path))
    yield policy
    # the env var is restored after this, the next settings access reloads the test config
    reset_global_settings()


def test_last_wins_is_the_default_of_the_test_config() -> None:
    assert get_global_settings().MAP_DUPLICATE_KEYS == 'last_wins'
    de = Deserializer.build_replay_deserializer(DUPLICATED_OPS)
    assert make_serde_type(dict[str, U8]).deserialize(de) == {'a': 3, 'b': 2}
    de.finalize()


def test_last_wins_binary() -> None:
    data = bytes.fromhex('02' '0161' '01' '0161' '02')
    assert make_serde_type(dict[str, U8]).from_bytes(data) == {'a': 2}


def test_reject_from_settings(map_policy: str) -> None:
    assert get_global_settings().MAP_DUPLICATE_KEYS == map_policy
    serde_type = make_serde_type(dict[str, U8])
    de = Deserializer.build_replay_deserializer(DUPLICATED_OPS)
    with pytest.raises(DuplicateKeyError):
        serde_type.deserialize(de)
    # no duplicates, no error
    assert serde_type.deserialize(Deserializer.build_replay_deserializer(
        [('len', 2), ('str', 'a'), ('u8', 1), ('str', 'b'), ('u8', 2)]
    )) == {'a': 1, 'b': 2}


def test_policy_is_fixed_when_built() -> None:
    key = make_serde_type(str)
    value = make_serde_type(U8)
    rejecting = MapSerdeType(key, value, reject_duplicates=True)
    with pytest.raises(DuplicateKeyError):
        rejecting.deserialize(Deserializer.build_replay_deserializer(DUPLICATED_OPS))
    keeping = MapSerdeType(key, value)
    assert keeping.deserialize(Deserializer.build_replay_deserializer(DUPLICATED_OPS)) == {'a': 3, 'b': 2}
