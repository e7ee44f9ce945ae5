# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import argparse
import logging
import pathlib
import sys

from .codegen import KeyboardMapsGenerator
from .logical import LogicalKeyData
from .physical import PhysicalKeyData
from .pipeline import KeySources, build_logical_key_data
from .settings import SideTables

logger = logging.getLogger(__name__)


def generate(
    data_root: pathlib.Path,
    physical_path: pathlib.Path,
    logical_path: pathlib.Path,
    from_json: bool,
    template_path: pathlib.Path | None,
) -> str | None:
    side_tables = SideTables.load(data_root)
    physical_data = PhysicalKeyData.load(physical_path)
    if from_json:
        logical_data = LogicalKeyData.loads(logical_path.read_bytes())
        logger.info("Loaded %d logical keys from %s", len(logical_data), logical_path)
    else:
        logical_data = build_logical_key_data(KeySources.load(data_root), side_tables, physical_data)
        logical_path.write_bytes(logical_data.dumps())
        logger.info("Wrote %d logical keys to %s", len(logical_data), logical_path)
    if template_path is None:
        return None
    generator = KeyboardMapsGenerator(physical_data, logical_data, side_tables)
    return generator.generate(template_path.read_text(encoding="utf-8"))


generate_parser = argparse.ArgumentParser(description="Merge platform key code tables and generate keyboard maps.")
generate_parser.add_argument("--data-root", type=pathlib.Path, required=True)
generate_parser.add_argument("--physical", type=pathlib.Path, help="defaults to physical_key_data.json in the data root")
generate_parser.add_argument("--logical-json", type=pathlib.Path, help="defaults to logical_key_data.json in the data root")
generate_parser.add_argument("--from-json", action="store_true", help="read the logical keys from --logical-json instead of the sources")
generate_parser.add_argument("--template", type=pathlib.Path)
generate_parser.add_argument("--output", type=pathlib.Path)
generate_parser.add_argument("--verbose", "-v", action="store_true")


def generate_cli(argv=None):
    args = generate_parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    data_root = args.data_root
    output = generate(
        data_root=data_root,
        physical_path=args.physical or data_root / "physical_key_data.json",
        logical_path=args.logical_json or data_root / "logical_key_data.json",
        from_json=args.from_json,
        template_path=args.template,
    )
    if output is None:
        return
    if args.output is None:
        sys.stdout.write(output)
    else:
        args.output.write_text(output, encoding="utf-8")
