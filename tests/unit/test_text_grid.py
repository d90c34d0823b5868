"""Tests for text-grid ingestion"""

import io

import pytest

from ndgrid.array import TextGridError, char_grid_from_lines, read_char_grid
from ndgrid.core.domain import Coord


class TestCharGridFromLines:
    def test_rows_become_y(self) -> None:
        grid = char_grid_from_lines(["ab", "cd", "ef"])
        assert grid.dims == (2, 3)
        assert grid.get((0, 0)) == "a"
        assert grid.get((0, 1)) == "c"
        assert grid.get((1, 2)) == "f"

    def test_line_terminators_stripped(self) -> None:
        grid = char_grid_from_lines(["ab\n", "cd\r\n"])
        assert grid.dims == (2, 2)
        assert list(grid) == ["a", "b", "c", "d"]

    def test_no_lines(self) -> None:
        with pytest.raises(TextGridError, match="at least one line"):
            char_grid_from_lines([])

    def test_ragged_lines(self) -> None:
        with pytest.raises(TextGridError, match="Line 1 has width 1, expected 2"):
            char_grid_from_lines(["ab", "c"])

    def test_empty_lines(self) -> None:
        with pytest.raises(TextGridError, match="empty"):
            char_grid_from_lines(["", ""])

    def test_error_is_value_error(self) -> None:
        assert issubclass(TextGridError, ValueError)


class TestReadCharGrid:
    def test_stream(self) -> None:
        grid = read_char_grid(io.StringIO("#.#\n...\n"))
        assert grid.dims == (3, 2)
        assert grid.find("#") == Coord(0, 0)
        assert grid.find_last("#") == Coord(2, 0)
        assert grid.find_all(".") == [Coord(1, 0), Coord(0, 1), Coord(1, 1), Coord(2, 1)]

    def test_grid_is_mutable_array(self) -> None:
        grid = read_char_grid(io.StringIO("..\n..\n"))
        grid.draw_line(Coord(0, 0), Coord(1, 1), "#")
        assert list(grid) == ["#", ".", ".", "#"]

    def test_empty_stream(self) -> None:
        with pytest.raises(TextGridError):
            read_char_grid(io.StringIO(""))
