#!/usr/bin/env python3
"""
Combine a per-subdirectory data file into one wide tab-separated table.

Looks for FILE in every immediate subdirectory of DIR, merges the files by
row key (line number or explicit first field) and writes
DIR/combined_FILE with one column per subdirectory.
"""
import argparse
import sys
from pathlib import Path

from combine_errors import CombineError
from key_matrix import KeyMatrix
from row_parse import load_column
from subdir_scan import scan_subdirs
from table_write import write_combined

__version__ = "0.1.0"


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="combine-subdirs",
        description="Merge FILE from each subdirectory of DIR into DIR/combined_FILE.",
    )
    p.add_argument("-f", "--file", required=True, help="Name of the file to combine in child directories")
    p.add_argument("-d", "--dir", type=Path, default=None,
                   help="Directory to search for subdirectories in (default: current directory)")
    p.add_argument("-k", "--keep-order", action="store_true",
                   help="Keep first-seen row order instead of sorting keys")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def combine(root: Path, filename: str, keep_order: bool = False) -> Path:
    """
    Run the whole pipeline: scan, parse every column, write the table.

    Returns:
        Path of the written combined file

    Raises:
        CombineError: On any configuration, parse or I/O failure. Nothing is
            written unless every input parsed.
    """
    root = Path(root)
    columns, dirs = scan_subdirs(root, filename)
    matrix = KeyMatrix(columns)

    for i, subdir in enumerate(dirs):
        file_path = subdir / filename
        print(f"Processing file: {file_path}")
        load_column(matrix, file_path, i)

    out_name = f"combined_{filename}"
    print(f"Writing to {out_name}")
    out_path = root / out_name
    write_combined(matrix, out_path, keep_order)
    print(f"Completed writing to {out_name}")
    return out_path


def main(argv=None) -> int:
    args = parse_args(argv)
    root = args.dir if args.dir is not None else Path.cwd()
    try:
        combine(root, args.file, args.keep_order)
    except CombineError as e:
        sys.exit(f"ERROR: {e}")
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
