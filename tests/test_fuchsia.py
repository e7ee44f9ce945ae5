import pytest

from keymapgen.commontypes import Platform
from keymapgen.constants import HID_PLANE, UNICODE_PLANE, UNPRINTABLE_PLANE
from keymapgen.importers.chromium import read_chromium_keys
from keymapgen.importers.fuchsia import derive_fuchsia_code, read_fuchsia_key_codes
from keymapgen.logical import LogicalKeyData, LogicalKeyEntry
from keymapgen.physical import PhysicalKeyData, PhysicalKeyEntry
from keymapgen.pipeline import KeySources, Stage, build_logical_key_data
from keymapgen.settings import SideTables

from samples import CHROMIUM_KEYS


def test_hid_plane_from_physical_key(side_tables: SideTables):
    physical = PhysicalKeyData([PhysicalKeyEntry(name="Backspace", usb_hid_code=0x2A)])
    entry = LogicalKeyEntry(name="Backspace", value=0x08 | UNPRINTABLE_PLANE, key_label="\b")
    assert derive_fuchsia_code(entry, side_tables, physical) == HID_PLANE | 0x2A


def test_hid_and_unprintable_planes_do_not_collide(side_tables: SideTables):
    physical = PhysicalKeyData([PhysicalKeyEntry(name="Backspace", usb_hid_code=0x08)])
    entry = LogicalKeyEntry(name="Backspace", value=0x08 | UNPRINTABLE_PLANE)
    assert derive_fuchsia_code(entry, side_tables, physical) != entry.value


@pytest.mark.parametrize(
    "name,value,expected",
    (
        ("None", 0, 0),
        ("KeyA", 0x61, UNICODE_PLANE | 0x61),
        ("Space", 0x20, UNICODE_PLANE | 0x20),
        ("Tab", 0x09 | UNPRINTABLE_PLANE, HID_PLANE | 0x0007002B),
        # numpad keys are printable, but use their physical key
        ("Numpad5", 0x200000035, HID_PLANE | 0x0007005D),
        ("MediaPlayPause", 0x0D2F | UNPRINTABLE_PLANE, None),
    ),
)
def test_derive_fuchsia_code(side_tables: SideTables, physical_data: PhysicalKeyData, name: str, value: int, expected):
    entry = LogicalKeyEntry(name=name, value=value)
    assert derive_fuchsia_code(entry, side_tables, physical_data) == expected


def test_read_fuchsia_key_codes(logical_data: LogicalKeyData, side_tables: SideTables, physical_data: PhysicalKeyData):
    read_chromium_keys(logical_data, CHROMIUM_KEYS, side_tables)
    read_fuchsia_key_codes(logical_data, side_tables, physical_data)
    assert logical_data.entry_by_name("None").values_for(Platform.FUCHSIA) == [0]
    assert logical_data.entry_by_name("ShiftLeft").values_for(Platform.FUCHSIA) == [HID_PLANE | 0x000700E1]
    assert logical_data.entry_by_name("MediaPlayPause").values_for(Platform.FUCHSIA) == []
    assert logical_data.entry_by_name("Unidentified").values_for(Platform.FUCHSIA) == []
    assert all(entry.names_for(Platform.FUCHSIA) == [] for entry in logical_data.entries)


def test_empty_registry_is_left_alone(logical_data: LogicalKeyData, side_tables: SideTables, physical_data: PhysicalKeyData):
    read_fuchsia_key_codes(logical_data, side_tables, physical_data)
    assert len(logical_data) == 0


def test_unmatched_seed_text_builds_empty_registry(side_tables: SideTables, physical_data: PhysicalKeyData):
    data = build_logical_key_data(KeySources(chromium_keys="DOM_KEY_UNI(broken)"), side_tables, physical_data)
    assert data.finalized
    assert len(data) == 0
    assert data.stages == tuple(Stage)
