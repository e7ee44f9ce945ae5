# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Generate the per-platform lookup tables from the finished registries.

Every table is a block of lines, one per code, sorted by code. A template refers to a table by placeholder, e.g.
``@@@GTK_KEY_CODE_MAP@@@``. Two different keys claiming one code in the same table is an error: the generated
lookup would silently pick one of them.
"""
from __future__ import annotations

import collections.abc
import logging
import re
import typing

from .commontypes import DuplicateTargetCode, Platform, UnknownPlaceholder
from .util import is_ascii_letter, to_hex

if typing.TYPE_CHECKING:
    from .logical import LogicalKeyData, LogicalKeyEntry
    from .physical import PhysicalKeyData, PhysicalKeyEntry
    from .settings import SideTables

logger = logging.getLogger(__name__)

PLACEHOLDER_MATCHER = re.compile(r"@@@(?P<name>[A-Z0-9_]+)@@@")
FUNCTION_KEY_MATCHER = re.compile(r"^f[0-9]+$")

T = typing.TypeVar("T", int, str)


class OutputLines(typing.Generic[T]):
    def __init__(self, map_name: str):
        self.map_name = map_name
        self._lines: dict[T, tuple[str, str]] = {}

    def add(self, code: T, line: str, owner: str):
        existing = self._lines.get(code)
        if existing is not None:
            existing_owner, _ = existing
            if existing_owner == owner:
                return
            raise DuplicateTargetCode(self.map_name, code, existing_owner, owner)
        self._lines[code] = (owner, line)

    def sorted_join(self) -> str:
        return "\n".join(line for _, (_, line) in sorted(self._lines.items()))

    def __len__(self):
        return len(self._lines)


def _logical_line(code, entry: typing.Union[LogicalKeyEntry, PhysicalKeyEntry]):
    return f"  {code}: LogicalKeyboardKey.{entry.constant_name},"


def _physical_line(code, entry: PhysicalKeyEntry):
    return f"  {code}: PhysicalKeyboardKey.{entry.constant_name},"


def _values_of(platform: Platform):
    return lambda entry: entry.values_for(platform)


class KeyboardMapsGenerator:
    def __init__(self, physical_data: PhysicalKeyData, logical_data: LogicalKeyData, side_tables: SideTables):
        self.physical_data = physical_data
        self.logical_data = logical_data
        self.side_tables = side_tables

    @property
    def _numpad_physical_entries(self) -> list[PhysicalKeyEntry]:
        return [
            entry
            for entry in self.physical_data.entries
            if entry.constant_name.startswith("numpad") and entry.name in self.side_tables.printable
        ]

    @property
    def _function_key_physical_entries(self) -> list[PhysicalKeyEntry]:
        return [entry for entry in self.physical_data.entries if FUNCTION_KEY_MATCHER.match(entry.constant_name)]

    @property
    def _numpad_logical_entries(self) -> list[LogicalKeyEntry]:
        return [
            entry
            for entry in self.logical_data.entries
            if entry.constant_name.startswith("numpad") and entry.name in self.side_tables.printable
        ]

    def _logical_code_map(self, map_name: str, entries: collections.abc.Iterable[LogicalKeyEntry], codes_of, hex_codes=False):
        lines: OutputLines[int] = OutputLines(map_name)
        for entry in entries:
            for code in codes_of(entry):
                lines.add(code, _logical_line(to_hex(code) if hex_codes else code, entry), entry.name)
        return lines.sorted_join()

    def _physical_code_map(self, map_name: str, entries: collections.abc.Iterable[PhysicalKeyEntry], codes_of, line_of=_physical_line, hex_codes=True):
        lines: OutputLines[int] = OutputLines(map_name)
        for entry in entries:
            for code in codes_of(entry):
                lines.add(code, line_of(to_hex(code) if hex_codes else code, entry), entry.name)
        return lines.sorted_join()

    @staticmethod
    def _one(code: typing.Optional[int]) -> tuple[int, ...]:
        return () if code is None else (code,)

    def _windows_codes(self, entry: LogicalKeyEntry) -> list[int]:
        codes = entry.values_for(Platform.WINDOWS)
        if codes:
            return codes
        # Letter keys have no Windows entry in the name map; their code is the upper case letter.
        if is_ascii_letter(entry.key_label):
            return [ord(entry.key_label.upper())]
        return []

    def _web_location_map(self) -> str:
        lines: OutputLines[str] = OutputLines("Web location map")
        for web_code, key_names in self.side_tables.web_locations.items():
            constants = []
            for key_name in key_names:
                if key_name is None:
                    constants.append("null")
                else:
                    entry = self.logical_data.entry_by_name(key_name, source=f"web location map ({web_code})")
                    constants.append(f"LogicalKeyboardKey.{entry.constant_name}")
            lines.add(web_code, f"  '{web_code}': <LogicalKeyboardKey?>[{', '.join(constants)}],", web_code)
        return lines.sorted_join()

    def _web_name_map(self, map_name: str, pairs: collections.abc.Iterable[tuple[str, str, str]]) -> str:
        lines: OutputLines[str] = OutputLines(map_name)
        for web_name, line, owner in pairs:
            lines.add(web_name, line, owner)
        return lines.sorted_join()

    def mappings(self) -> dict[str, str]:
        logical = self.logical_data.entries
        physical = self.physical_data.entries
        numpad_logical = self._numpad_logical_entries
        numpad_physical = self._numpad_physical_entries

        return {
            "ANDROID_SCAN_CODE_MAP": self._physical_code_map("Android scan code map", physical, lambda e: e.android_scan_codes, hex_codes=False),
            "ANDROID_KEY_CODE_MAP": self._logical_code_map("Android key code map", logical, _values_of(Platform.ANDROID)),
            "ANDROID_NUMPAD_MAP": self._logical_code_map("Android numpad map", numpad_logical, _values_of(Platform.ANDROID)),
            "FUCHSIA_SCAN_CODE_MAP": self._physical_code_map("Fuchsia HID code map", physical, lambda e: (e.usb_hid_code,)),
            "FUCHSIA_KEY_CODE_MAP": self._logical_code_map("Fuchsia key code map", logical, _values_of(Platform.FUCHSIA), hex_codes=True),
            "MACOS_SCAN_CODE_MAP": self._physical_code_map("macOS scan code map", physical, lambda e: self._one(e.mac_os_scan_code)),
            "MACOS_NUMPAD_MAP": self._physical_code_map(
                "macOS numpad map", numpad_physical, lambda e: self._one(e.mac_os_scan_code), line_of=_logical_line
            ),
            "MACOS_FUNCTION_KEY_MAP": self._physical_code_map(
                "macOS function key map",
                self._function_key_physical_entries,
                lambda e: self._one(e.mac_os_scan_code),
                line_of=_logical_line,
            ),
            "MACOS_KEY_CODE_MAP": self._logical_code_map("macOS key code map", logical, _values_of(Platform.MACOS)),
            "IOS_SCAN_CODE_MAP": self._physical_code_map("iOS scan code map", physical, lambda e: self._one(e.ios_scan_code)),
            "IOS_NUMPAD_MAP": self._physical_code_map(
                "iOS numpad map", numpad_physical, lambda e: self._one(e.ios_scan_code), line_of=_logical_line
            ),
            "IOS_KEY_CODE_MAP": self._logical_code_map("iOS key code map", logical, _values_of(Platform.IOS)),
            "GLFW_KEY_CODE_MAP": self._physical_code_map(
                "GLFW key code map", physical, lambda e: e.glfw_key_codes, line_of=_logical_line, hex_codes=False
            ),
            "GLFW_NUMPAD_MAP": self._physical_code_map(
                "GLFW numpad map", numpad_physical, lambda e: e.glfw_key_codes, line_of=_logical_line, hex_codes=False
            ),
            "GTK_KEY_CODE_MAP": self._logical_code_map("GTK key code map", logical, _values_of(Platform.GTK)),
            "GTK_NUMPAD_MAP": self._logical_code_map("GTK numpad map", numpad_logical, _values_of(Platform.GTK)),
            "XKB_SCAN_CODE_MAP": self._physical_code_map("XKB scan code map", physical, lambda e: self._one(e.xkb_scan_code)),
            "WEB_LOGICAL_KEY_MAP": self._web_name_map(
                "Web logical key map",
                (
                    (name, f"  '{name}': LogicalKeyboardKey.{entry.constant_name},", entry.name)
                    for entry in logical
                    for name in entry.names_for(Platform.WEB)
                ),
            ),
            "WEB_PHYSICAL_KEY_MAP": self._web_name_map(
                "Web physical key map",
                ((entry.name, f"  '{entry.name}': PhysicalKeyboardKey.{entry.constant_name},", entry.name) for entry in physical),
            ),
            "WEB_NUMPAD_MAP": self._web_name_map(
                "Web numpad map",
                ((entry.name, f"  '{entry.name}': LogicalKeyboardKey.{entry.constant_name},", entry.name) for entry in numpad_logical),
            ),
            "WEB_LOCATION_MAP": self._web_location_map(),
            "WINDOWS_LOGICAL_KEY_MAP": self._logical_code_map("Windows key code map", logical, self._windows_codes),
            "WINDOWS_PHYSICAL_KEY_MAP": self._physical_code_map("Windows scan code map", physical, lambda e: self._one(e.windows_scan_code)),
            "WINDOWS_NUMPAD_MAP": self._logical_code_map("Windows numpad map", numpad_logical, _values_of(Platform.WINDOWS)),
        }

    def generate(self, template: str) -> str:
        mappings = self.mappings()

        def substitute(match: re.Match):
            name = match["name"]
            if name not in mappings:
                raise UnknownPlaceholder(name)
            return mappings[name]

        return PLACEHOLDER_MATCHER.sub(substitute, template)
