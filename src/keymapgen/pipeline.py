# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""One batch run from raw sources to a finalized logical key registry."""
from __future__ import annotations

import enum
import logging
import pathlib
import typing

import msgspec

from .importers.apple import read_ios_key_codes, read_macos_key_codes
from .importers.chromium import read_chromium_keys
from .importers.fuchsia import read_fuchsia_key_codes
from .importers.platforms import read_android_key_codes, read_gtk_key_codes, read_windows_key_codes
from .logical import LogicalKeyData

if typing.TYPE_CHECKING:
    from .physical import PhysicalKeyData
    from .settings import SideTables

logger = logging.getLogger(__name__)

SOURCE_FILES = {
    "chromium_keys": ("dom_key_data.inc", "supplemental_key_data.inc"),
    "gtk_header": ("gtk_key_codes.h",),
    "gtk_name_map": ("gtk_logical_name_mapping.json",),
    "windows_header": ("windows_key_codes.h",),
    "windows_name_map": ("windows_logical_name_mapping.json",),
    "android_header": ("android_key_codes.h",),
    "android_name_map": ("android_logical_name_mapping.json",),
    "macos_logical_to_physical": ("macos_logical_to_physical.json",),
    "ios_logical_to_physical": ("ios_logical_to_physical.json",),
}


class Stage(enum.IntEnum):
    # Chromium seeds the canonical names, so it goes first.
    SEED = 1
    WINDOWS = 2
    GTK = 3
    ANDROID = 4
    # macOS and iOS go through the physical keys.
    MACOS = 5
    IOS = 6
    # Needs the printable table, the physical keys and every seeded entry.
    FUCHSIA = 7
    FINALIZE = 8


class KeySources(msgspec.Struct, kw_only=True, frozen=True):
    chromium_keys: str
    gtk_header: str = ""
    gtk_name_map: dict[str, list[str]] = {}
    windows_header: str = ""
    windows_name_map: dict[str, list[str]] = {}
    android_header: str = ""
    android_name_map: dict[str, list[str]] = {}
    macos_logical_to_physical: dict[str, list[str]] = {}
    ios_logical_to_physical: dict[str, list[str]] = {}

    @classmethod
    def load(cls, data_root: pathlib.Path):
        raw = {}
        for field_name, filenames in SOURCE_FILES.items():
            paths = [data_root / filename for filename in filenames]
            if paths[0].suffix != ".json":
                # only the first file is required; the rest are supplements
                texts = [paths[0].read_text(encoding="utf-8")]
                texts.extend(p.read_text(encoding="utf-8") for p in paths[1:] if p.exists())
                raw[field_name] = "\n".join(texts)
            else:
                raw[field_name] = msgspec.json.decode(paths[0].read_bytes(), type=dict[str, list[str]])
        return cls(**raw)


def _run_stage(data: LogicalKeyData, stage: Stage, func, *args):
    data.mark_stage(stage)
    func(data, *args)
    logger.debug("Stage %s done, %d entries", stage.name, len(data))


def build_logical_key_data(sources: KeySources, side_tables: SideTables, physical_data: PhysicalKeyData) -> LogicalKeyData:
    data = LogicalKeyData()
    _run_stage(data, Stage.SEED, read_chromium_keys, sources.chromium_keys, side_tables)
    _run_stage(data, Stage.WINDOWS, read_windows_key_codes, sources.windows_header, sources.windows_name_map)
    _run_stage(data, Stage.GTK, read_gtk_key_codes, sources.gtk_header, sources.gtk_name_map)
    _run_stage(data, Stage.ANDROID, read_android_key_codes, sources.android_header, sources.android_name_map)
    _run_stage(data, Stage.MACOS, read_macos_key_codes, physical_data, sources.macos_logical_to_physical)
    _run_stage(data, Stage.IOS, read_ios_key_codes, physical_data, sources.ios_logical_to_physical)
    _run_stage(data, Stage.FUCHSIA, read_fuchsia_key_codes, side_tables, physical_data)
    data.mark_stage(Stage.FINALIZE)
    return data.finalize()
