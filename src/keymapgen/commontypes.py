# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum


class Platform(str, enum.Enum):
    # The values double as the keys of the persisted JSON format.
    WEB = "web"
    MACOS = "macOs"
    IOS = "ios"
    GTK = "gtk"
    WINDOWS = "windows"
    ANDROID = "android"
    FUCHSIA = "fuchsia"

    @property
    def has_names(self):
        # Fuchsia has no stable key names, only values.
        return self is not Platform.FUCHSIA


class KeymapError(Exception):
    pass


class InvalidCanonicalReference(KeymapError):
    def __init__(self, name: str, source: str):
        self.name = name
        self.source = source
        super().__init__(f"Unable to find entry by name {name!r} (from {source})")


class MissingRequiredPhysicalData(KeymapError):
    def __init__(self, physical_name: str, platform: Platform):
        self.physical_name = physical_name
        self.platform = platform
        super().__init__(f"Physical entry {physical_name!r} does not have a {platform.value} scan code")


class DuplicateName(KeymapError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"An entry named {name!r} already exists")


class DuplicateValue(KeymapError):
    def __init__(self, value: int, existing_name: str, new_name: str):
        self.value = value
        self.existing_name = existing_name
        self.new_name = new_name
        super().__init__(f"Value 0x{value:x} of {new_name!r} is already taken by {existing_name!r}")


class DuplicateTargetCode(KeymapError):
    def __init__(self, map_name: str, code, existing_name: str, new_name: str):
        self.map_name = map_name
        self.code = code
        self.existing_name = existing_name
        self.new_name = new_name
        super().__init__(f"{map_name}: code {code!r} is claimed by both {existing_name!r} and {new_name!r}")


class SideTableError(KeymapError):
    def __init__(self, table: str, detail: str):
        self.table = table
        self.detail = detail
        super().__init__(f"{table}: {detail}")


class StageOrderError(KeymapError):
    def __init__(self, stage, last_stage):
        self.stage = stage
        self.last_stage = last_stage
        super().__init__(f"Stage {stage.name} cannot run after {last_stage.name}")


class UnknownPlaceholder(KeymapError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Template references unknown map {name!r}")
