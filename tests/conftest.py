import json

import pytest

from keymapgen.logical import LogicalKeyData
from keymapgen.physical import PhysicalKeyData
from keymapgen.pipeline import KeySources, build_logical_key_data
from keymapgen.settings import SideTables

from samples import (
    ANDROID_HEADER,
    ANDROID_NAME_MAP,
    APPLE_LOGICAL_TO_PHYSICAL,
    CHROMIUM_KEYS,
    GTK_HEADER,
    GTK_NAME_MAP,
    PHYSICAL_KEYS,
    SIDE_TABLES,
    WINDOWS_HEADER,
    WINDOWS_NAME_MAP,
)


@pytest.fixture
def side_tables():
    return SideTables.from_mapping(SIDE_TABLES)


@pytest.fixture
def physical_data():
    return PhysicalKeyData.from_json(json.dumps(PHYSICAL_KEYS))


@pytest.fixture
def logical_data():
    return LogicalKeyData()


@pytest.fixture
def key_sources():
    return KeySources(
        chromium_keys=CHROMIUM_KEYS,
        gtk_header=GTK_HEADER,
        gtk_name_map=GTK_NAME_MAP,
        windows_header=WINDOWS_HEADER,
        windows_name_map=WINDOWS_NAME_MAP,
        android_header=ANDROID_HEADER,
        android_name_map=ANDROID_NAME_MAP,
        macos_logical_to_physical=APPLE_LOGICAL_TO_PHYSICAL,
        ios_logical_to_physical=APPLE_LOGICAL_TO_PHYSICAL,
    )


@pytest.fixture
def built(key_sources: KeySources, side_tables: SideTables, physical_data: PhysicalKeyData):
    return build_logical_key_data(key_sources, side_tables, physical_data)
