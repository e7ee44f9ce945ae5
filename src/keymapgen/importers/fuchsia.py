# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Derive Fuchsia key codes from data already in the registry.

Fuchsia has no key code table of its own. Printable keys use their character in the unicode plane; everything else
uses the HID usage of the physical key with the same name. Keys with neither get no Fuchsia code.
"""
from __future__ import annotations

import typing

from ..commontypes import Platform
from ..constants import HID_PLANE, UNICODE_PLANE, VALUE_MASK

if typing.TYPE_CHECKING:
    from ..logical import LogicalKeyData, LogicalKeyEntry
    from ..physical import PhysicalKeyData
    from ..settings import SideTables


def derive_fuchsia_code(entry: LogicalKeyEntry, side_tables: SideTables, physical_data: PhysicalKeyData) -> typing.Optional[int]:
    if entry.value == 0:  # "None" key
        return 0
    key_label = side_tables.printable.get(entry.name)
    if key_label is not None and not entry.constant_name.startswith("numpad"):
        return UNICODE_PLANE | (ord(key_label) & VALUE_MASK)
    physical_entry = physical_data.try_entry_by_name(entry.name)
    if physical_entry is not None:
        return HID_PLANE | (physical_entry.usb_hid_code & VALUE_MASK)
    return None


def read_fuchsia_key_codes(data: LogicalKeyData, side_tables: SideTables, physical_data: PhysicalKeyData):
    for entry in data.entries:
        value = derive_fuchsia_code(entry, side_tables, physical_data)
        if value is not None:
            entry.add_value(Platform.FUCHSIA, value)
