"""
Sparse key x column accumulator for one combine run.

Rows are created zero-filled on first sight of a key; the dict keeps
first-seen order, which is what --keep-order emits.
"""


class KeyMatrix:
    """Per-run table of row key -> one integer slot per column."""

    def __init__(self, columns: list[str]):
        self.columns = list(columns)
        self.rows: dict[str, list[int]] = {}

    @property
    def width(self) -> int:
        return len(self.columns)

    def row(self, key: str) -> list[int]:
        """Return the row for key, creating a zero-filled one if it is new."""
        values = self.rows.get(key)
        if values is None:
            values = [0] * self.width
            self.rows[key] = values
        return values

    def set(self, key: str, col: int, value: int) -> None:
        if not 0 <= col < self.width:
            raise IndexError(f"column {col} out of range for {self.width} columns")
        self.row(key)[col] = value

    def insertion_order(self) -> list[str]:
        return list(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __contains__(self, key) -> bool:
        return key in self.rows
