# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Attach macOS and iOS key codes, found through the physical keys.

There is no native header for these platforms. A logical key's codes are the scan codes of the physical keys that
produce it, so both the physical data and the logical-to-physical map must be complete; any gap is fatal.
"""
from __future__ import annotations

import collections.abc
import logging
import typing

from ..commontypes import MissingRequiredPhysicalData, Platform
from ..util import reverse_map_of_list_of_string

if typing.TYPE_CHECKING:
    from ..logical import LogicalKeyData
    from ..physical import PhysicalKeyData, PhysicalKeyEntry

logger = logging.getLogger(__name__)

LogicalToPhysical = collections.abc.Mapping[str, collections.abc.Sequence[str]]
ScanCodeGetter = collections.abc.Callable[["PhysicalKeyEntry"], typing.Optional[int]]

SCAN_CODE_GETTERS: dict[Platform, ScanCodeGetter] = {
    Platform.MACOS: lambda entry: entry.mac_os_scan_code,
    Platform.IOS: lambda entry: entry.ios_scan_code,
}


def _read_apple_key_codes(data: LogicalKeyData, physical_data: PhysicalKeyData, logical_to_physical: LogicalToPhysical, platform: Platform):
    def on_duplicate(logical_name: str, physical_name: str):
        logger.warning("Duplicate logical key name %s for %s (physical key %s)", logical_name, platform.value, physical_name)

    physical_to_logical = reverse_map_of_list_of_string(logical_to_physical, on_duplicate)
    scan_code_of = SCAN_CODE_GETTERS[platform]

    for physical_name, logical_name in physical_to_logical.items():
        physical_entry = physical_data.entry_by_name(physical_name)
        scan_code = scan_code_of(physical_entry)
        if scan_code is None:
            raise MissingRequiredPhysicalData(physical_name, platform)
        logical_entry = data.entry_by_name(logical_name, source=f"{platform.value} logical to physical map")
        logical_entry.add_alias(platform, physical_entry.name, scan_code)


def read_macos_key_codes(data: LogicalKeyData, physical_data: PhysicalKeyData, logical_to_physical: LogicalToPhysical):
    _read_apple_key_codes(data, physical_data, logical_to_physical, Platform.MACOS)


def read_ios_key_codes(data: LogicalKeyData, physical_data: PhysicalKeyData, logical_to_physical: LogicalToPhysical):
    _read_apple_key_codes(data, physical_data, logical_to_physical, Platform.IOS)
