import json

import msgspec
import pytest

from keymapgen.commontypes import DuplicateName, DuplicateValue, InvalidCanonicalReference, KeymapError, Platform, StageOrderError
from keymapgen.logical import LogicalKeyData, LogicalKeyEntry
from keymapgen.pipeline import Stage


def make_entry(name="Backspace", value=0x100000008, **kwargs):
    return LogicalKeyEntry(name=name, value=value, **kwargs)


def test_add_rejects_duplicate_name(logical_data: LogicalKeyData):
    logical_data.add(make_entry())
    with pytest.raises(DuplicateName) as excinfo:
        logical_data.add(make_entry(value=0x100000009))
    assert excinfo.value.name == "Backspace"


def test_add_rejects_duplicate_value(logical_data: LogicalKeyData):
    logical_data.add(make_entry())
    with pytest.raises(DuplicateValue) as excinfo:
        logical_data.add(make_entry(name="Delete"))
    e = excinfo.value
    assert (e.value, e.existing_name, e.new_name) == (0x100000008, "Backspace", "Delete")


def test_add_if_absent_keeps_first_writer(logical_data: LogicalKeyData):
    first = logical_data.add_if_absent(make_entry())
    second = logical_data.add_if_absent(make_entry(value=0x100000009))
    assert second is first
    assert len(logical_data) == 1
    assert logical_data.entry_by_name("Backspace").value == 0x100000008


def test_add_if_absent_still_rejects_duplicate_value(logical_data: LogicalKeyData):
    logical_data.add_if_absent(make_entry())
    with pytest.raises(DuplicateValue):
        logical_data.add_if_absent(make_entry(name="Delete"))


def test_entry_by_name_missing(logical_data: LogicalKeyData):
    assert logical_data.get("Backspace") is None
    with pytest.raises(InvalidCanonicalReference) as excinfo:
        logical_data.entry_by_name("Backspace", source="test")
    assert excinfo.value.name == "Backspace"
    assert excinfo.value.source == "test"


def test_name_and_value_are_immutable():
    entry = make_entry()
    with pytest.raises(AttributeError):
        entry.name = "Delete"
    with pytest.raises(AttributeError):
        entry.value = 1


def test_aliases_stay_parallel():
    entry = make_entry()
    entry.add_alias(Platform.GTK, "BackSpace", 0xFF08)
    entry.add_alias(Platform.GTK, "KP_BackSpace", 0xFF99)
    assert entry.names_for(Platform.GTK) == ["BackSpace", "KP_BackSpace"]
    assert entry.values_for(Platform.GTK) == [0xFF08, 0xFF99]
    assert entry.names_for(Platform.ANDROID) == []
    assert entry.values_for(Platform.ANDROID) == []


def test_fuchsia_is_values_only():
    entry = make_entry()
    entry.add_value(Platform.FUCHSIA, 0x100007002A)
    assert entry.values_for(Platform.FUCHSIA) == [0x100007002A]
    assert entry.names_for(Platform.FUCHSIA) == []
    with pytest.raises(ValueError):
        entry.add_alias(Platform.FUCHSIA, "backspace", 1)
    with pytest.raises(ValueError):
        entry.add_value(Platform.WEB, 8)


def test_merge_alias_folds_shared_values():
    entry = make_entry(name="KanaMode", value=0x100000711)
    entry.merge_alias(Platform.WINDOWS, "KANA", 0x15)
    entry.merge_alias(Platform.WINDOWS, "HANGUL", 0x15)
    entry.merge_alias(Platform.WINDOWS, "HANGUL", 0x15)
    entry.merge_alias(Platform.WINDOWS, "JUNJA", 0x17)
    assert entry.names_for(Platform.WINDOWS) == ["KANA, HANGUL", "JUNJA"]
    assert entry.values_for(Platform.WINDOWS) == [0x15, 0x17]


def test_finalize_sorts_by_value(logical_data: LogicalKeyData):
    logical_data.add(make_entry(name="ShiftLeft", value=0x300000102))
    logical_data.add(make_entry(name="KeyA", value=0x61))
    logical_data.add(make_entry())
    logical_data.finalize()
    assert [e.name for e in logical_data.entries] == ["KeyA", "Backspace", "ShiftLeft"]
    with pytest.raises(KeymapError):
        logical_data.add(make_entry(name="Tab", value=0x100000009))


def test_stages_must_run_in_order(logical_data: LogicalKeyData):
    logical_data.mark_stage(Stage.SEED)
    logical_data.mark_stage(Stage.GTK)
    assert logical_data.has_run(Stage.SEED)
    assert not logical_data.has_run(Stage.WINDOWS)
    with pytest.raises(StageOrderError) as excinfo:
        logical_data.mark_stage(Stage.WINDOWS)
    assert excinfo.value.stage is Stage.WINDOWS
    assert excinfo.value.last_stage is Stage.GTK
    with pytest.raises(StageOrderError):
        logical_data.mark_stage(Stage.GTK)


def test_to_json_omits_empty_fields():
    entry = make_entry(name="ShiftLeft", value=0x300000102)
    data = LogicalKeyData([entry])
    assert data.to_json() == {"ShiftLeft": {"name": "ShiftLeft", "value": 0x300000102}}


def test_to_json_format():
    entry = make_entry(key_label="\b")
    entry.add_alias(Platform.WINDOWS, "BACK", 8)
    entry.add_alias(Platform.WEB, "Backspace", 8)
    entry.add_value(Platform.FUCHSIA, 0x100007002A)
    raw = LogicalKeyData([entry]).to_json()
    assert raw == {
        "Backspace": {
            "name": "Backspace",
            "value": 0x100000008,
            "keyLabel": "\b",
            "names": {"web": ["Backspace"], "windows": ["BACK"]},
            "values": {"web": [8], "windows": [8], "fuchsia": [0x100007002A]},
        }
    }
    # platform groups come out in a fixed order, not in the order they were filled
    assert list(raw["Backspace"]["names"]) == ["web", "windows"]


def test_json_round_trip():
    backspace = make_entry(key_label="\b")
    backspace.add_alias(Platform.WEB, "Backspace", 8)
    backspace.add_alias(Platform.MACOS, "Backspace", 0x33)
    backspace.add_alias(Platform.IOS, "Backspace", 0x2A)
    backspace.add_alias(Platform.GTK, "BackSpace", 0xFF08)
    backspace.add_alias(Platform.WINDOWS, "BACK", 8)
    backspace.add_alias(Platform.ANDROID, "DEL", 67)
    backspace.add_value(Platform.FUCHSIA, 0x100007002A)
    shift_left = make_entry(name="ShiftLeft", value=0x300000102)
    original = LogicalKeyData([shift_left, backspace]).finalize()

    loaded = LogicalKeyData.loads(original.dumps())

    assert [e.name for e in loaded.entries] == ["Backspace", "ShiftLeft"]
    assert list(loaded.entries) == list(original.entries)
    assert loaded.to_json() == original.to_json()
    assert loaded.entry_by_name("ShiftLeft").names_for(Platform.WEB) == []


def test_from_json_treats_empty_lists_as_missing():
    data = LogicalKeyData.from_json(
        {"Tab": {"name": "Tab", "value": 0x100000009, "names": {"web": ["Tab"], "gtk": []}, "values": {"web": [9], "gtk": []}}}
    )
    entry = data.entry_by_name("Tab")
    assert entry.names_for(Platform.GTK) == []
    assert data.to_json()["Tab"] == {"name": "Tab", "value": 0x100000009, "names": {"web": ["Tab"]}, "values": {"web": [9]}}


def test_dumps_is_pretty_json():
    data = LogicalKeyData([make_entry()])
    raw = data.dumps()
    assert raw.endswith(b"\n")
    assert json.loads(raw) == {"Backspace": {"name": "Backspace", "value": 0x100000008}}
    assert b'\n  "Backspace": {' in raw


def test_loads_rejects_bad_records():
    with pytest.raises(msgspec.ValidationError):
        LogicalKeyData.loads(b'{"Tab": {"name": "Tab"}}')
