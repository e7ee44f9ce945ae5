# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# A logical key value is a 32-bit payload with a plane number above it. Values
# in different planes never collide, even when their payloads match.
VALUE_MASK = 0x000FFFFFFFF
PLANE_MASK = 0x0FF00000000

UNICODE_PLANE = 0x00000000000
UNPRINTABLE_PLANE = 0x00100000000
NUMPAD_PLANE = 0x00200000000
LEFT_MODIFIER_PLANE = 0x00300000000
RIGHT_MODIFIER_PLANE = 0x00400000000
HID_PLANE = 0x01000000000

# Identifiers the generated source cannot use as constant names.
RESERVED_WORDS = frozenset(
    {
        "abstract",
        "as",
        "assert",
        "async",
        "await",
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "covariant",
        "default",
        "deferred",
        "do",
        "dynamic",
        "else",
        "enum",
        "export",
        "extends",
        "extension",
        "external",
        "factory",
        "false",
        "final",
        "finally",
        "for",
        "Function",
        "get",
        "hide",
        "if",
        "implements",
        "import",
        "in",
        "inout",
        "interface",
        "is",
        "late",
        "library",
        "mixin",
        "native",
        "new",
        "null",
        "of",
        "on",
        "operator",
        "out",
        "part",
        "patch",
        "required",
        "rethrow",
        "return",
        "set",
        "show",
        "source",
        "static",
        "super",
        "switch",
        "sync",
        "this",
        "throw",
        "true",
        "try",
        "typedef",
        "var",
        "void",
        "while",
        "with",
        "yield",
    }
)


def plane_of(value: int) -> int:
    return value & PLANE_MASK
