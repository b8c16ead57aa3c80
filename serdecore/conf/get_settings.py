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

import os
from typing import NamedTuple, Optional

from structlog import get_logger

from serdecore.conf.settings import SerdeSettings as Settings

logger = get_logger()

CONFIG_YAML_ENV_VAR = 'SERDECORE_CONFIG_YAML'


class _SettingsMetadata(NamedTuple):
    source: Optional[str]
    settings: Settings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_global_settings() -> Settings:
    """
    Returns the process-wide settings.

    Settings are read from the yaml file named by the 'SERDECORE_CONFIG_YAML' env var, when it is not set the defaults
    are used. They are loaded once and reused afterwards.
    """
    settings_yaml_filepath = os.environ.get(CONFIG_YAML_ENV_VAR)
    return _load_settings_singleton(settings_yaml_filepath)


def get_settings_source() -> Optional[str]:
    """ Returns the path of the YAML file that was loaded, None means the defaults were used.

    XXX: Will raise an assertion error if get_global_settings() wasn't used before.
    """
    assert _settings_singleton is not None, 'get_global_settings() not called before'
    return _settings_singleton.source


def reset_global_settings() -> None:
    """Forget the loaded settings, the next get_global_settings() call will load them again."""
    global _settings_singleton
    _settings_singleton = None


def _load_settings_singleton(source: Optional[str]) -> Settings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _settings_singleton.settings

    settings = Settings() if source is None else Settings.from_yaml(filepath=source)
    logger.info('settings loaded', source=source or 'defaults')
    _settings_singleton = _SettingsMetadata(source=source, settings=settings)
    return settings
