"""Frame construction tests for the prompt row and the result window."""

from __future__ import annotations

import unittest

from coco.render import (
    CLEAR_TO_END,
    CLEAR_TO_EOL,
    HOME,
    RESET,
    REVERSE,
    build_frame,
    build_prompt_line,
    visible_height,
    visible_rows,
)

LINES = ["alpha", "beta", "gamma", "delta", "epsilon"]


def frame_rows(frame: str) -> list[str]:
    body = frame[len(HOME):]
    if body.endswith(CLEAR_TO_END):
        body = body[: -len(CLEAR_TO_END)]
    return [row.replace(CLEAR_TO_EOL, "") for row in body.split("\r\n")]


class RenderContractTests(unittest.TestCase):
    def test_prompt_row_then_visible_slice(self) -> None:
        frame = build_frame("QUERY> ", "a", LINES, cursor=0, offset=1, columns=20, rows=4)
        rows = frame_rows(frame)
        self.assertEqual(rows[0], "QUERY> a")
        self.assertEqual(len(rows), 4)
        self.assertEqual(rows[1], REVERSE + "beta".ljust(20) + RESET)
        self.assertEqual(rows[2:], ["gamma", "delta"])

    def test_cursor_row_is_highlighted(self) -> None:
        rows = frame_rows(build_frame("> ", "", LINES, cursor=2, offset=0, columns=10, rows=6))
        self.assertEqual(rows[3], REVERSE + "gamma".ljust(10) + RESET)
        self.assertEqual(rows[1], "alpha")

    def test_short_result_list_draws_only_available_rows(self) -> None:
        rows = frame_rows(build_frame("> ", "x", LINES[:2], cursor=0, offset=0, columns=10, rows=10))
        self.assertEqual(len(rows), 3)

    def test_empty_results_draw_only_prompt(self) -> None:
        rows = frame_rows(build_frame("> ", "zz", [], cursor=0, offset=0, columns=10, rows=10))
        self.assertEqual(rows, ["> zz"])

    def test_rows_are_clipped_to_width(self) -> None:
        rows = frame_rows(build_frame("QUERY> ", "abc", ["0123456789"], cursor=5, offset=0, columns=6, rows=3))
        self.assertEqual(rows[0], "QUERY>")
        self.assertEqual(rows[1], "012345")

    def test_one_row_terminal_shows_selection_after_query(self) -> None:
        frame = build_frame("> ", "a", LINES, cursor=0, offset=2, columns=20, rows=1)
        rows = frame_rows(frame)
        self.assertEqual(rows, ["> a > " + REVERSE + "gamma" + RESET])

    def test_one_row_terminal_without_matches_shows_only_prompt(self) -> None:
        rows = frame_rows(build_frame("> ", "zz", [], cursor=0, offset=0, columns=20, rows=1))
        self.assertEqual(rows, ["> zz"])

    def test_no_rows_renders_nothing(self) -> None:
        self.assertEqual(build_frame("> ", "", LINES, 0, 0, columns=10, rows=0), HOME)

    def test_invalid_pattern_marker_follows_query(self) -> None:
        line = build_prompt_line("> ", "(", 40, pattern_error="invalid pattern")
        self.assertTrue(line.startswith("> ("))
        self.assertIn("[invalid pattern]", line)
        self.assertEqual(build_prompt_line("> ", "(", 3, pattern_error="invalid pattern"), "> (")


class VisibleRowsTests(unittest.TestCase):
    def test_visible_height_reserves_prompt_row(self) -> None:
        self.assertEqual(visible_height(24), 23)
        self.assertEqual(visible_height(1), 0)
        self.assertEqual(visible_height(0), 0)

    def test_visible_rows_never_reads_past_end(self) -> None:
        self.assertEqual(visible_rows(LINES, 3, 10), ["delta", "epsilon"])
        self.assertEqual(visible_rows(LINES, 5, 10), [])
        self.assertEqual(visible_rows(LINES, 0, 0), [])


if __name__ == "__main__":
    unittest.main()
