# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Read-only view of the physical key registry.

The registry is produced elsewhere; this module only loads it and answers lookups by name.
"""
import collections.abc
import pathlib
import typing

import msgspec

from .commontypes import InvalidCanonicalReference
from .util import compute_comment_name, compute_constant_name


class PhysicalNames(msgspec.Struct, frozen=True):
    name: str
    chromium: typing.Optional[str] = None


class ScanCodes(msgspec.Struct, frozen=True):
    usb: int
    linux: typing.Optional[int] = None
    xkb: typing.Optional[int] = None
    windows: typing.Optional[int] = None
    macos: typing.Optional[int] = None
    ios: typing.Optional[int] = None
    android: list[int] = []


# Platform key codes tied to a physical key, kept apart from the scan codes.
class KeyCodes(msgspec.Struct, frozen=True):
    glfw: list[int] = []


class PhysicalRecord(msgspec.Struct, frozen=True, rename="camel"):
    names: PhysicalNames
    scan_codes: ScanCodes
    key_codes: KeyCodes = KeyCodes()


class PhysicalKeyEntry(msgspec.Struct, frozen=True, kw_only=True):
    name: str
    usb_hid_code: int
    chromium_name: typing.Optional[str] = None
    linux_scan_code: typing.Optional[int] = None
    xkb_scan_code: typing.Optional[int] = None
    windows_scan_code: typing.Optional[int] = None
    mac_os_scan_code: typing.Optional[int] = None
    ios_scan_code: typing.Optional[int] = None
    android_scan_codes: tuple[int, ...] = ()
    glfw_key_codes: tuple[int, ...] = ()

    @classmethod
    def from_record(cls, record: PhysicalRecord):
        codes = record.scan_codes
        return cls(
            name=record.names.name,
            chromium_name=record.names.chromium,
            usb_hid_code=codes.usb,
            linux_scan_code=codes.linux,
            xkb_scan_code=codes.xkb,
            windows_scan_code=codes.windows,
            mac_os_scan_code=codes.macos,
            ios_scan_code=codes.ios,
            android_scan_codes=tuple(codes.android),
            glfw_key_codes=tuple(record.key_codes.glfw),
        )

    @property
    def constant_name(self):
        return compute_constant_name(compute_comment_name(self.name))


class PhysicalKeyData:
    def __init__(self, entries: collections.abc.Iterable[PhysicalKeyEntry]):
        ordered = sorted(entries, key=lambda e: e.usb_hid_code)
        self._data: dict[str, PhysicalKeyEntry] = {e.name: e for e in ordered}

    @classmethod
    def from_json(cls, raw: typing.Union[bytes, str]):
        records = msgspec.json.decode(raw, type=dict[str, PhysicalRecord])
        return cls(PhysicalKeyEntry.from_record(r) for r in records.values())

    @classmethod
    def load(cls, src: pathlib.Path):
        return cls.from_json(src.read_bytes())

    @property
    def entries(self):
        return self._data.values()

    def try_entry_by_name(self, name: str) -> typing.Optional[PhysicalKeyEntry]:
        return self._data.get(name)

    def entry_by_name(self, name: str) -> PhysicalKeyEntry:
        try:
            return self._data[name]
        except KeyError:
            raise InvalidCanonicalReference(name, "physical key data") from None

    def __len__(self):
        return len(self._data)
