"""
Parse one subdirectory's data file into (row key, value) pairs.

Lines are either `<value>` (keyed by zero-based line number) or
`<key><TAB><value>`. A file that is a single line is read as tab-separated
values, one per row.
"""
import re
import sys
from pathlib import Path

from combine_errors import CombineIOError, ParseError
from key_matrix import KeyMatrix

INT_RE = re.compile(r"[+-]?[0-9]+")
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_int(text: str) -> int | None:
    """Parse a signed decimal that fits in 64 bits, else None."""
    if not INT_RE.fullmatch(text):
        return None
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def split_lines(content: str) -> tuple[list[str], bool]:
    """
    Split file content into data lines.

    Returns:
        (lines, normalized) where normalized is True when the content was a
        single line and got rewritten as one tab-separated value per line
    """
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    # Only \n and \r\n end a line
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if len(lines) == 1:
        return lines[0].strip().split("\t"), True
    return lines, False


def parse_line(index: int, line: str) -> tuple[str, int]:
    parts = line.strip().split("\t")
    if len(parts) == 1:
        key, raw = str(index), parts[0]
    elif len(parts) == 2:
        key, raw = parts
    else:
        raise ParseError("Line has more than two parts", line)

    value = parse_int(raw)
    if value is None:
        raise ParseError("Invalid number in line", line)
    return key, value


def parse_rows(lines: list[str]):
    """Yield (key, value) for each line in order."""
    for i, line in enumerate(lines):
        yield parse_line(i, line)


def read_text(path: Path) -> str:
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CombineIOError(f"Failed to read file '{path}': {e}") from e


def load_column(matrix: KeyMatrix, path: Path, col: int) -> int:
    """
    Read path and write its values into column col of matrix.

    Later lines overwrite earlier ones for the same key.

    Returns:
        Number of lines parsed
    """
    lines, normalized = split_lines(read_text(path))
    if normalized:
        print(f"WARNING: {path} has a single line; reading it as {len(lines)} tab-separated values",
              file=sys.stderr)

    n = 0
    for key, value in parse_rows(lines):
        matrix.set(key, col, value)
        n += 1
    return n
