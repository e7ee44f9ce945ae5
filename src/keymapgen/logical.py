# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""The logical key registry.

Entries are created by the seeding importer, extended in place by every later importer (aliases only), and
finally sorted by value. The registry can be saved to and loaded from JSON, keyed by canonical name:

    {"Backspace": {"name": "Backspace", "value": 4294967304, "keyLabel": "\\b",
                   "names": {"web": ["Backspace"]}, "values": {"web": [8]}}}

Empty alias lists and a missing key label are left out of the JSON.
"""
from __future__ import annotations

import collections.abc
import logging
import typing

import msgspec

from .commontypes import DuplicateName, DuplicateValue, InvalidCanonicalReference, KeymapError, Platform, StageOrderError
from .util import compute_comment_name, compute_constant_name, to_hex

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = frozenset({"name", "value", "key_label"})


def _ensure_group(groups: dict, platform: Platform) -> list:
    if platform not in groups:
        groups[platform] = []
        # keep groups in Platform declaration order so output doesn't depend on importer order
        ordered = {p: groups[p] for p in Platform if p in groups}
        groups.clear()
        groups.update(ordered)
    return groups[platform]


class LogicalKeyEntry(msgspec.Struct, kw_only=True, omit_defaults=True, rename={"key_label": "keyLabel"}):
    name: str
    value: int
    # The character on the keycap, if any. Only used for display and letter key derivation.
    key_label: typing.Optional[str] = None
    names: dict[Platform, list[str]] = {}
    values: dict[Platform, list[int]] = {}

    def __post_init__(self):
        for groups in (self.names, self.values):
            for platform in [p for p, members in groups.items() if not members]:
                del groups[platform]

    def __setattr__(self, name: str, value: typing.Any) -> None:
        if name in IMMUTABLE_FIELDS:
            raise AttributeError(f"The field {name!r} cannot be modified.")
        return super().__setattr__(name, value)

    def __str__(self):
        return f"{self.name!r}: (value: {to_hex(self.value, 11)})"

    @property
    def comment_name(self):
        return compute_comment_name(self.name)

    @property
    def constant_name(self):
        return compute_constant_name(self.comment_name)

    def names_for(self, platform: Platform) -> list[str]:
        return list(self.names.get(platform, ()))

    def values_for(self, platform: Platform) -> list[int]:
        return list(self.values.get(platform, ()))

    def add_alias(self, platform: Platform, name: str, value: int):
        if not platform.has_names:
            raise ValueError(f"{platform.value} aliases have no names")
        _ensure_group(self.names, platform).append(name)
        _ensure_group(self.values, platform).append(value)

    def merge_alias(self, platform: Platform, name: str, value: int):
        """Add an alias, folding the name into an existing slot when the value is already present.

        Several platform names sharing one code end up as a single "A, B" name, which keeps names and values parallel.
        """
        values = self.values.get(platform, [])
        if value not in values:
            self.add_alias(platform, name, value)
            return
        names = self.names[platform]
        index = values.index(value)
        if name not in names[index].split(", "):
            names[index] = f"{names[index]}, {name}"

    def add_value(self, platform: Platform, value: int):
        if platform.has_names:
            raise ValueError(f"{platform.value} aliases need a name")
        _ensure_group(self.values, platform).append(value)


class LogicalKeyData:
    def __init__(self, entries: collections.abc.Iterable[LogicalKeyEntry] = ()):
        self._data: dict[str, LogicalKeyEntry] = {}
        self._names_by_value: dict[int, str] = {}
        self._stages = []
        self.finalized = False
        for entry in entries:
            self.add(entry)

    def __contains__(self, name: str):
        return name in self._data

    def __len__(self):
        return len(self._data)

    @property
    def entries(self) -> collections.abc.Iterable[LogicalKeyEntry]:
        return self._data.values()

    def get(self, name: str) -> typing.Optional[LogicalKeyEntry]:
        return self._data.get(name)

    def entry_by_name(self, name: str, source: str = "logical key data") -> LogicalKeyEntry:
        try:
            return self._data[name]
        except KeyError:
            raise InvalidCanonicalReference(name, source) from None

    def _check_mutable(self):
        if self.finalized:
            raise KeymapError("The registry has been finalized")

    def add(self, entry: LogicalKeyEntry) -> LogicalKeyEntry:
        self._check_mutable()
        if entry.name in self._data:
            raise DuplicateName(entry.name)
        existing = self._names_by_value.get(entry.value)
        if existing is not None:
            raise DuplicateValue(entry.value, existing, entry.name)
        self._data[entry.name] = entry
        self._names_by_value[entry.value] = entry.name
        return entry

    def add_if_absent(self, entry: LogicalKeyEntry) -> LogicalKeyEntry:
        "Insert unless the name is taken; the first writer wins. Returns whichever entry holds the name afterwards."
        if entry.name in self._data:
            logger.debug("Keeping existing entry %s over %s", self._data[entry.name], entry)
            return self._data[entry.name]
        return self.add(entry)

    @property
    def stages(self):
        return tuple(self._stages)

    def has_run(self, stage) -> bool:
        return stage in self._stages

    def mark_stage(self, stage):
        self._check_mutable()
        if self._stages and stage <= self._stages[-1]:
            raise StageOrderError(stage, self._stages[-1])
        self._stages.append(stage)

    def finalize(self):
        "Sort entries by ascending value and stop accepting new entries."
        self._data = dict(sorted(self._data.items(), key=lambda item: item[1].value))
        self.finalized = True
        return self

    def to_json(self) -> dict[str, typing.Any]:
        return {entry.name: msgspec.to_builtins(entry) for entry in self._data.values()}

    @classmethod
    def from_json(cls, content: collections.abc.Mapping[str, typing.Any]) -> LogicalKeyData:
        entries = (msgspec.convert(value, LogicalKeyEntry) for value in content.values())
        return cls(entries).finalize()

    def dumps(self) -> bytes:
        return msgspec.json.format(msgspec.json.encode(self.to_json()), indent=2) + b"\n"

    @classmethod
    def loads(cls, raw: typing.Union[bytes, str]) -> LogicalKeyData:
        return cls.from_json(msgspec.json.decode(raw))
