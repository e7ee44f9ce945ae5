# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import collections.abc
import re
import typing

from .constants import RESERVED_WORDS

K = typing.TypeVar("K")
V = typing.TypeVar("V")

DuplicateCallback = collections.abc.Callable[[K, V], None]


def reverse_map_of_list_of_string(source: collections.abc.Mapping[K, collections.abc.Iterable[V]], on_duplicate: DuplicateCallback) -> dict[V, K]:
    """Turn a ``key -> [value, ...]`` mapping inside out.

    When a value is claimed by more than one key, ``on_duplicate(key, value)`` is called and the later key wins.
    """
    result: dict[V, K] = {}
    for key, values in source.items():
        for value in values:
            if value in result:
                on_duplicate(key, value)
            result[value] = key
    return result


def to_hex(value: typing.Optional[int], digits: int = 8):
    if value is None:
        return "null"
    return "0x{:0{}x}".format(value, digits)


def is_control_character(label: str):
    if len(label) != 1:
        return False
    code_unit = ord(label)
    return 0x00 <= code_unit <= 0x1F or 0x7F <= code_unit <= 0x9F


def is_ascii_letter(char: typing.Optional[str]):
    if char is None:
        return False
    return ("A" <= char <= "Z") or ("a" <= char <= "z")


def _avoid_reserved(name: str):
    if name in RESERVED_WORDS:
        return f"{name}Key"
    return name


def compute_name(raw_name: str):
    "Sanitize a raw web key name into a canonical name."
    sanitized = re.sub(r"[^A-Za-z0-9]", "", raw_name)
    return _avoid_reserved(sanitized.replace("PinP", "PInP"))


_NUMBERED_WORD = re.compile(r"(Digit|Numpad|Lang|Button|Left|Right)([0-9]+)")
_COMMENT_NAME_RULES = (
    # 'fooBar' => 'foo Bar', 'fooBAR' => 'foo BAR'
    (re.compile(r"([^A-Z])([A-Z])"), r"\1 \2"),
    # 'ABCDoo' => 'ABC Doo'
    (re.compile(r"([A-Z])([A-Z])([a-z])"), r"\1 \2\3"),
    # 'AB1' => 'AB 1', 'F1' => 'F1'
    (re.compile(r"([A-Z]{2,})([0-9])"), r"\1 \2"),
    # 'Foo1' => 'Foo 1'
    (re.compile(r"([a-z])([0-9])"), r"\1 \2"),
)


def compute_comment_name(name: str):
    """Split a camel case name into capitalized words, e.g. "wakeUp" becomes "wake Up" and "KeyA" stays "Key A"."""
    result = _NUMBERED_WORD.sub(r"\1 \2", name)
    for pattern, replacement in _COMMENT_NAME_RULES:
        result = pattern.sub(replacement, result)
    return result.strip()


def compute_constant_name(comment_name: str):
    first, _, rest = comment_name.partition(" ")
    return _avoid_reserved((first.lower() + " " + rest).replace(" ", ""))
