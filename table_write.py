"""
Order the combined rows and write them as a tab-separated table.

Three row orders:
  keep-order     first-seen key order across the scan
  numeric        every key is an integer; compared as integers
  lexicographic  otherwise; compared as strings
"""
from pathlib import Path

import polars as pl

from combine_errors import CombineIOError
from key_matrix import KeyMatrix
from row_parse import parse_int

KEEP_ORDER = "keep-order"
NUMERIC = "numeric"
LEXICOGRAPHIC = "lexicographic"


def resolve_order(keys: list[str], keep_order: bool = False) -> str:
    if keep_order:
        return KEEP_ORDER
    if all(parse_int(k) is not None for k in keys):
        return NUMERIC
    return LEXICOGRAPHIC


def build_frame(matrix: KeyMatrix) -> pl.DataFrame:
    """One row per key in first-seen order; value columns are named by position."""
    keys = matrix.insertion_order()
    data = {"key": keys}
    schema = {"key": pl.Utf8}
    for i in range(matrix.width):
        data[f"col_{i}"] = [matrix.rows[k][i] for k in keys]
        schema[f"col_{i}"] = pl.Int64
    return pl.DataFrame(data, schema=schema)


def order_frame(df: pl.DataFrame, order: str) -> pl.DataFrame:
    if order == KEEP_ORDER:
        return df
    if order == NUMERIC:
        sort_key = pl.Series("_sort_key", [parse_int(k) for k in df.get_column("key").to_list()], dtype=pl.Int64)
        return (
            df.with_columns(sort_key)
              .sort("_sort_key", maintain_order=True)
              .drop("_sort_key")
        )
    if order == LEXICOGRAPHIC:
        return df.sort("key", maintain_order=True)
    raise ValueError(f"Unknown row order: {order}")


def write_table(df: pl.DataFrame, columns: list[str], out_path: Path) -> None:
    """
    Write header and rows to out_path, replacing any existing file.

    The header is written by hand so a column may itself be called "key".
    A partially written file is removed on failure.
    """
    out_path = Path(out_path)
    try:
        f = open(out_path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise CombineIOError(f"Failed to create output file '{out_path}': {e}") from e

    try:
        with f:
            f.write("\t".join(["key", *columns]) + "\n")
            f.flush()
            df.write_csv(f, separator="\t", include_header=False, quote_style="never")
    except (OSError, pl.exceptions.PolarsError) as e:
        out_path.unlink(missing_ok=True)
        raise CombineIOError(f"Failed to write output file '{out_path}': {e}") from e


def write_combined(matrix: KeyMatrix, out_path: Path, keep_order: bool = False) -> str:
    """
    Serialize matrix to out_path.

    Returns:
        The row order that was applied
    """
    order = resolve_order(matrix.insertion_order(), keep_order)
    df = order_frame(build_frame(matrix), order)
    write_table(df, matrix.columns, out_path)
    return order
