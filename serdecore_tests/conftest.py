import os
from pathlib import Path

UNITTESTS_SETTINGS_FILEPATH = str(Path(__file__).parent / 'unittests.yml')

os.environ['SERDECORE_CONFIG_YAML'] = os.environ.get('SERDECORE_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)
