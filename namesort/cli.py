"""
Sort a name list by stroke ordering codes.

Reads data.json, compound_surnames.txt and names.txt from the data directory and
writes out.txt, one name per line. Every file name can be overridden.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from namesort.name_sorter import NameSortError, NameSorter, SortConfig


def build_parser() -> argparse.ArgumentParser:
    defaults = SortConfig.create_default()
    parser = argparse.ArgumentParser(prog="namesort", description="Sort names by per-character ordering codes.")
    parser.add_argument("--data-dir", type=Path, default=defaults.data_dir, help="Directory holding the input files.")
    parser.add_argument("--code-table", default=defaults.code_table_file, help="JSON list of {word, order} records.")
    parser.add_argument("--surnames", default=defaults.compound_surnames_file, help="Compound surnames, one per line.")
    parser.add_argument(
        "--builtin-surnames",
        action="store_true",
        help="Use the built-in compound surname list instead of --surnames.",
    )
    parser.add_argument("--names", default=defaults.names_file, help="Names to sort, one per line.")
    parser.add_argument("--output", default=defaults.output_file, help="Where to write the sorted names.")
    parser.add_argument(
        "--report-missing",
        action="store_true",
        help="Print characters with no ordering code (with pinyin) after sorting.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def config_from_args(args: argparse.Namespace) -> SortConfig:
    return (
        SortConfig.create_default()
        .with_data_dir(args.data_dir)
        .with_files(
            code_table_file=args.code_table,
            compound_surnames_file=None if args.builtin_surnames else args.surnames,
            names_file=args.names,
            output_file=args.output,
        )
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s %(levelname)s %(message)s"
    )
    config = config_from_args(args)

    try:
        sorter = NameSorter.from_config(config)
        names = sorter.run(config)
    except NameSortError as e:
        logging.error(f"Sorting failed: {e}")
        return 1

    print(f"Sorted {len(names)} names into {config.path_for(config.output_file)}")

    if args.report_missing:
        report = sorter.missing_code_report(names)
        if report:
            print(f"Characters without an ordering code ({len(report.characters)}):")
            for line in report.format_lines():
                print(line)
        else:
            print("Every character has an ordering code")

    return 0


if __name__ == "__main__":
    sys.exit(main())
