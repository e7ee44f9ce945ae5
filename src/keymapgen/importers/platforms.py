# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Attach GTK, Windows and Android key codes to existing entries.

Each platform gets a name map (canonical name -> platform names) and the platform's own header. Codes that are not
in the name map, or that map to a name the registry doesn't have, are logged and skipped.
"""
from __future__ import annotations

import collections.abc
import logging
import re

import msgspec

from ..commontypes import Platform
from ..logical import LogicalKeyData
from ..util import reverse_map_of_list_of_string

logger = logging.getLogger(__name__)

NameMap = collections.abc.Mapping[str, collections.abc.Sequence[str]]


class PlatformCode(msgspec.Struct, frozen=True):
    name: str
    value: int


#  /** Space key. */
#  #define GDK_KEY_space 0x020
GTK_DEFINE_MATCHER = re.compile(r"#define GDK_KEY_(?P<name>[a-zA-Z0-9_]+)\s*0x(?P<value>[0-9a-f]+),?")

#  #define VK_RETURN         0x0D
WINDOWS_DEFINE_MATCHER = re.compile(r"define VK_(?P<name>[A-Z0-9_]+)\s*(?P<value>[A-Za-z0-9_]+),?")

#  /** Left Control modifier key. */
#  AKEYCODE_CTRL_LEFT       = 113,
ANDROID_ENUM_BLOCK_MATCHER = re.compile(r"enum\s*\{(.*?)\};", re.DOTALL)
ANDROID_ENUM_MATCHER = re.compile(r"AKEYCODE_(?P<name>[A-Z0-9_]+)\s*=\s*(?P<value>[0-9]+),?")


def parse_gtk_codes(header: str) -> list[PlatformCode]:
    return [PlatformCode(m["name"], int(m["value"], 16)) for m in GTK_DEFINE_MATCHER.finditer(header)]


def parse_windows_codes(header: str) -> list[PlatformCode]:
    codes = []
    for match in WINDOWS_DEFINE_MATCHER.finditer(header):
        raw = match["value"]
        if raw.lower().startswith("0x"):
            value = int(raw, 16)
        elif raw.isdigit():
            value = int(raw)
        else:
            # aliases such as "#define VK_OEM_FJ_JISHO VK_OEM_NEC_EQUAL" carry no number
            logger.debug("Skipping non-numeric Windows code %s = %s", match["name"], raw)
            continue
        codes.append(PlatformCode(match["name"], value))
    return codes


def parse_android_codes(header: str) -> list[PlatformCode]:
    codes = []
    for block in ANDROID_ENUM_BLOCK_MATCHER.finditer(header):
        codes.extend(PlatformCode(m["name"], int(m["value"])) for m in ANDROID_ENUM_MATCHER.finditer(block[1]))
    return codes


def _reverse_name_map(name_map: NameMap, label: str) -> dict[str, str]:
    def on_duplicate(canonical_name: str, platform_name: str):
        logger.warning("Duplicate %s logical name %s (claimed again by %s)", label, platform_name, canonical_name)

    return reverse_map_of_list_of_string(name_map, on_duplicate)


def _attach_codes(data: LogicalKeyData, codes: collections.abc.Iterable[PlatformCode], name_map: NameMap, platform: Platform, label: str, merge: bool = False):
    platform_to_canonical = _reverse_name_map(name_map, label)
    for code in codes:
        name = platform_to_canonical.get(code.name)
        if name is None:
            logger.info("Unmapped %s logical entry %s", label, code.name)
            continue
        entry = data.get(name)
        if entry is None:
            logger.warning("Invalid logical entry by name %s (from %s %s)", name, label, code.name)
            continue
        if merge:
            entry.merge_alias(platform, code.name, code.value)
        else:
            entry.add_alias(platform, code.name, code.value)


def read_gtk_key_codes(data: LogicalKeyData, header: str, name_map: NameMap):
    _attach_codes(data, parse_gtk_codes(header), name_map, Platform.GTK, "GTK")


def read_windows_key_codes(data: LogicalKeyData, header: str, name_map: NameMap):
    # Several VK_ names share a code (VK_HANGUL and VK_KANA, for instance); they fold into one alias.
    _attach_codes(data, parse_windows_codes(header), name_map, Platform.WINDOWS, "Windows", merge=True)


def read_android_key_codes(data: LogicalKeyData, header: str, name_map: NameMap):
    _attach_codes(data, parse_android_codes(header), name_map, Platform.ANDROID, "Android")
