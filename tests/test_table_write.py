import tempfile
import unittest
from pathlib import Path
from unittest import mock

import polars as pl

from combine_errors import CombineIOError
from key_matrix import KeyMatrix
from table_write import (
    KEEP_ORDER,
    LEXICOGRAPHIC,
    NUMERIC,
    build_frame,
    order_frame,
    resolve_order,
    write_combined,
    write_table,
)


def matrix_from(columns, rows):
    m = KeyMatrix(columns)
    for key, values in rows:
        for i, v in enumerate(values):
            m.set(key, i, v)
    return m


class ResolveOrderTests(unittest.TestCase):
    def test_keep_order_wins(self):
        self.assertEqual(resolve_order(["1", "2"], keep_order=True), KEEP_ORDER)

    def test_numeric_when_all_keys_are_integers(self):
        self.assertEqual(resolve_order(["10", "-2", "+3"]), NUMERIC)
        self.assertEqual(resolve_order([]), NUMERIC)

    def test_lexicographic_when_any_key_is_not(self):
        self.assertEqual(resolve_order(["10", "x", "2"]), LEXICOGRAPHIC)


class OrderFrameTests(unittest.TestCase):
    def keys(self, m, order):
        return order_frame(build_frame(m), order).get_column("key").to_list()

    def test_numeric(self):
        m = matrix_from(["a"], [("10", [1]), ("9", [2]), ("-1", [3])])
        self.assertEqual(self.keys(m, NUMERIC), ["-1", "9", "10"])

    def test_numeric_ties_keep_first_seen(self):
        m = matrix_from(["a"], [("05", [1]), ("5", [2]), ("+5", [3]), ("4", [4])])
        self.assertEqual(self.keys(m, NUMERIC), ["4", "05", "5", "+5"])

    def test_lexicographic(self):
        m = matrix_from(["a"], [("b", [1]), ("a", [2]), ("10", [3]), ("9", [4])])
        self.assertEqual(self.keys(m, LEXICOGRAPHIC), ["10", "9", "a", "b"])

    def test_keep_order(self):
        m = matrix_from(["a"], [("z", [1]), ("b", [2]), ("a", [3])])
        self.assertEqual(self.keys(m, KEEP_ORDER), ["z", "b", "a"])

    def test_values_follow_their_keys(self):
        m = matrix_from(["a", "b"], [("y", [2, 3]), ("x", [1, 4])])
        df = order_frame(build_frame(m), LEXICOGRAPHIC)
        self.assertEqual(df.rows(), [("x", 1, 4), ("y", 2, 3)])

    def test_unknown_order(self):
        with self.assertRaises(ValueError):
            order_frame(build_frame(KeyMatrix(["a"])), "random")


class WriteTableTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.out = Path(self.tmp.name) / "combined_f.txt"

    def tearDown(self):
        self.tmp.cleanup()

    def test_format(self):
        m = matrix_from(["a", "b"], [("1", [5, -5]), ("0", [7, 0])])
        order = write_combined(m, self.out)
        self.assertEqual(order, NUMERIC)
        self.assertEqual(self.out.read_text(), "key\ta\tb\n0\t7\t0\n1\t5\t-5\n")

    def test_column_named_key(self):
        m = matrix_from(["key", "z"], [("r", [1, 2])])
        write_combined(m, self.out)
        self.assertEqual(self.out.read_text(), "key\tkey\tz\nr\t1\t2\n")

    def test_keys_are_not_quoted(self):
        m = matrix_from(["a"], [('say "hi"', [1]), ("a,b", [2])])
        write_combined(m, self.out, keep_order=True)
        self.assertEqual(self.out.read_text(), 'key\ta\nsay "hi"\t1\na,b\t2\n')

    def test_empty_matrix_writes_header_only(self):
        write_combined(KeyMatrix(["a", "b"]), self.out)
        self.assertEqual(self.out.read_text(), "key\ta\tb\n")

    def test_failed_write_leaves_no_file(self):
        df = build_frame(matrix_from(["a"], [("0", [1])]))
        with mock.patch.object(pl.DataFrame, "write_csv", side_effect=pl.exceptions.ComputeError("boom")):
            with self.assertRaises(CombineIOError):
                write_table(df, ["a"], self.out)
        self.assertFalse(self.out.exists())

    def test_overwrites_existing(self):
        self.out.write_text("stale\n" * 10)
        write_table(build_frame(matrix_from(["a"], [("0", [1])])), ["a"], self.out)
        self.assertEqual(self.out.read_text(), "key\ta\n0\t1\n")


if __name__ == "__main__":
    unittest.main()
