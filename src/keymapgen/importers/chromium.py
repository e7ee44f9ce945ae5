# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Seed the registry from Chromium's DOM key table.

Lines in the table look like either of these:

                Key        Enum      Unicode code point
    DOM_KEY_UNI("Backspace", BACKSPACE, 0x0008),
                Key        Enum       Value
    DOM_KEY_MAP("Accel",      ACCEL,    0x0101),

Supplemental tables may give a character literal as the third argument instead:

    DOM_KEY_UNI("KeyB",      KEY_B,      'b'),
"""
from __future__ import annotations

import logging
import re
import typing

import msgspec

from ..commontypes import Platform
from ..constants import LEFT_MODIFIER_PLANE, NUMPAD_PLANE, RIGHT_MODIFIER_PLANE, UNICODE_PLANE, UNPRINTABLE_PLANE
from ..logical import LogicalKeyData, LogicalKeyEntry
from ..util import compute_name, is_control_character

if typing.TYPE_CHECKING:
    from ..settings import SideTables

logger = logging.getLogger(__name__)

DOM_KEY_MATCHER = re.compile(
    r"DOM_KEY_(?P<kind>UNI|MAP)\s*\(\s*"
    r'"(?P<name>[^\s]+?)",\s*'
    r"(?P<enum>[^\s]+?),\s*"
    r"(?:0[xX](?P<unicode>[a-fA-F0-9]+)|'(?P<char>.)')\s*"
    r"\)",
    # definitions may spread across several lines
    re.MULTILINE,
)
COMMENT_MATCHER = re.compile(r"//.*$", re.MULTILINE)
# Names with this prefix are consumed by Chromium and never reach the web, e.g. ".AltGraphLatch".
INTERNAL_PREFIX = "."


class DomKey(msgspec.Struct, frozen=True):
    web_name: str
    enum: str
    value: int
    # Only DOM_KEY_UNI entries print something.
    is_unicode: bool

    @property
    def key_label(self) -> typing.Optional[str]:
        return chr(self.value) if self.is_unicode else None


def parse_dom_keys(text: str) -> list[DomKey]:
    text = COMMENT_MATCHER.sub("", text)
    keys = []
    for match in DOM_KEY_MATCHER.finditer(text):
        web_name = match["name"]
        if web_name.startswith(INTERNAL_PREFIX):
            continue
        if match["unicode"] is not None:
            value = int(match["unicode"], 16)
        else:
            value = ord(match["char"])
        keys.append(DomKey(web_name=web_name, enum=match["enum"], value=value, is_unicode=match["kind"] == "UNI"))
    return keys


def is_printable(name: str, key: DomKey, side_tables: SideTables):
    key_label = key.key_label
    if key_label is not None and not is_control_character(key_label):
        return True
    # value 0 is the "None" key
    return name in side_tables.printable or key.value == 0


def read_chromium_keys(data: LogicalKeyData, text: str, side_tables: SideTables):
    unused_numpads = dict(side_tables.printable_to_numpads)

    for key in parse_dom_keys(text):
        name = compute_name(key.web_name)

        # Modifiers become a left and a right key. Their web names are resolved by location instead.
        pair = side_tables.modifiers.get(name)
        if pair is not None:
            for side_name, plane in ((pair.left, LEFT_MODIFIER_PLANE), (pair.right, RIGHT_MODIFIER_PLANE)):
                data.add_if_absent(LogicalKeyEntry(name=side_name, value=key.value + plane))
            continue

        char = chr(key.value) if key.value < 256 else None
        numpad_name = side_tables.printable_to_numpads.get(char) if char is not None else None
        if numpad_name is not None:
            numpad_value = key.value + NUMPAD_PLANE
            numpad = data.add_if_absent(LogicalKeyEntry(name=numpad_name, value=numpad_value))
            if not numpad.names_for(Platform.WEB):
                numpad.add_alias(Platform.WEB, numpad_name, numpad_value)
            unused_numpads.pop(char, None)

        if name in data:
            continue
        plane = UNICODE_PLANE if is_printable(name, key, side_tables) else UNPRINTABLE_PLANE
        entry = data.add(LogicalKeyEntry(name=name, value=key.value + plane, key_label=key.key_label))
        entry.add_alias(Platform.WEB, key.web_name, key.value)

    for char, numpad_name in unused_numpads.items():
        logger.warning("Unused numpad key %s (for %r)", numpad_name, char)
