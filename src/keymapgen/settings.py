# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Small reference tables shared by the importers and the generator.

They are loaded once, before any importer runs, and handed to each stage explicitly.
"""
import json
import pathlib
import typing

import attr
import cattrs
import cattrs.gen

from .commontypes import SideTableError

SIDE_TABLE_FILES = {
    "modifiers": "chromium_modifiers.json",
    "printable": "printable.json",
    "printable_to_numpads": "printable_to_numpads.json",
    "synonyms": "synonyms.json",
    "web_locations": "web_logical_location_mapping.json",
}


@attr.frozen
class ModifierPair:
    left: str
    right: str


@attr.frozen(kw_only=True)
class SideTables:
    # Chromium modifier name -> its left and right logical names.
    modifiers: dict[str, ModifierPair]
    # Canonical name -> the character printed by the key.
    printable: dict[str, str]
    # Character -> the name of the numpad key producing it.
    printable_to_numpads: dict[str, str]
    # Name -> exactly two sibling names.
    synonyms: dict[str, tuple[str, str]]
    # Web code -> logical names by location; None where a location has no key.
    web_locations: dict[str, list[typing.Optional[str]]] = attr.field(factory=dict)

    @classmethod
    def from_mapping(cls, raw: dict):
        return side_tables_converter.structure(raw, cls)

    @classmethod
    def load(cls, data_root: pathlib.Path):
        raw = {}
        for field_name, filename in SIDE_TABLE_FILES.items():
            path = data_root / filename
            if field_name == "web_locations" and not path.exists():
                continue
            with path.open(encoding="utf-8") as f:
                raw[field_name] = json.load(f)
        return cls.from_mapping(raw)


# Hooks raise SideTableError directly rather than cattrs validation groups.
side_tables_converter = cattrs.Converter(detailed_validation=False)


def structure_modifier_pair(v, _):
    if not isinstance(v, (list, tuple)) or len(v) != 2:
        raise SideTableError(SIDE_TABLE_FILES["modifiers"], f"expected a [left, right] pair, got {v!r}")
    return ModifierPair(left=v[0], right=v[1])


def structure_synonyms(d: dict, _):
    result = {}
    for name, values in d.items():
        # Nulls are placeholders in the source file; only names count.
        names = tuple(v for v in values if isinstance(v, str))
        if len(names) != 2:
            raise SideTableError(SIDE_TABLE_FILES["synonyms"], f"{name} must have exactly two synonyms, got {list(names)!r}")
        result[name] = names
    return result


def structure_printable(d: dict, _):
    for name, label in d.items():
        if not isinstance(label, str) or len(label) != 1:
            raise SideTableError(SIDE_TABLE_FILES["printable"], f"{name} must map to a single character, got {label!r}")
    return dict(d)


side_tables_converter.register_structure_hook(ModifierPair, structure_modifier_pair)
side_tables_converter.register_structure_hook(
    SideTables,
    cattrs.gen.make_dict_structure_fn(
        SideTables,
        side_tables_converter,
        printable=cattrs.gen.override(struct_hook=structure_printable),
        synonyms=cattrs.gen.override(struct_hook=structure_synonyms),
    ),
)
