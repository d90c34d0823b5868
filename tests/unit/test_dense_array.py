"""
Tests for ArrayND

Проверки:
1. Создание и проверка формы (ShapeError)
2. Точечный доступ: None/False вне массива
3. Resize/pad (новый буфер, содержимое сдвинуто на offset)
4. Поиск по возрастанию и убыванию
5. Преобразования map/replace/shift
6. Заполнение блоков по осям-шаблонам
7. Рисование линий и соседи в границах массива
"""

import itertools
import logging

import pytest

from ndgrid.array import ArrayND
from ndgrid.core.config import ENV_MAX_CELLS, reload_settings
from ndgrid.core.domain import Coord, LinearIndex, Shape, ShapeError
from ndgrid.core.math import OrderedFloat
from ndgrid.raster import Line

# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def numbered() -> ArrayND:
    """Массив (3, 2), хранящий собственные линейные смещения."""
    return ArrayND.from_data((3, 2), range(6))


@pytest.fixture
def cell_limit(monkeypatch):
    """Ограничение массивов 10 ячейками на время теста."""
    monkeypatch.setenv(ENV_MAX_CELLS, "10")
    reload_settings()
    yield 10
    monkeypatch.undo()
    reload_settings()


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestConstruction:
    def test_fill(self) -> None:
        a = ArrayND((3, 2), 0)
        assert len(a) == 6
        assert list(a) == [0] * 6

    def test_metadata(self) -> None:
        a = ArrayND((3, 2), 0)
        assert a.dims == (3, 2)
        assert a.strides == (1, 3)
        assert a.ndim == 2
        assert a.width == 3
        assert a.height == 2
        assert a.shape == Shape(3, 2)
        assert a.cardinality == 6

    def test_missing_axis_name(self) -> None:
        with pytest.raises(ValueError, match="has no depth"):
            ArrayND((3, 2), 0).depth

    def test_three_dimensional_strides(self) -> None:
        assert ArrayND((4, 3, 2), None).strides == (1, 4, 12)
        assert ArrayND((4, 3, 2), None).depth == 2

    def test_convertible_extents(self) -> None:
        assert ArrayND((3.0, OrderedFloat(2.0)), 0).dims == (3, 2)
        assert ArrayND(Shape(3, 2), 0).dims == (3, 2)

    @pytest.mark.parametrize(
        "extents,message",
        [
            ((0, 2), "must be positive"),
            ((3, -1), "must be positive"),
            ((2.5, 2), "not integral"),
            ((OrderedFloat(1.5), 2), "not integral"),
            (("3", 2), "must be numeric"),
            ((True, 2), "must be numeric"),
            ((None, 2), "not convertible"),
        ],
    )
    def test_invalid_extents(self, extents, message) -> None:
        with pytest.raises(ShapeError, match=message):
            ArrayND(extents, 0)

    def test_from_data_copies(self) -> None:
        source = [1, 2, 3, 4]
        a = ArrayND.from_data((2, 2), source)
        source[0] = 99
        assert a.get((0, 0)) == 1

    def test_from_data_length_mismatch(self) -> None:
        with pytest.raises(ShapeError, match="Data length 5"):
            ArrayND.from_data((3, 2), range(5))

    def test_cell_limit(self, cell_limit: int) -> None:
        assert len(ArrayND((2, 5), 0)) == 10
        with pytest.raises(ShapeError, match="exceeds the configured limit of 10"):
            ArrayND((4, 4), 0)
        with pytest.raises(ShapeError, match="exceeds the configured limit"):
            ArrayND.from_data((11,), range(11))

    def test_is_linear_index(self) -> None:
        assert isinstance(ArrayND((1,), 0), LinearIndex)

    def test_logs_allocation(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="ndgrid"):
            ArrayND((2, 2), 0)
        assert "allocated array" in caplog.text


class TestValueSemantics:
    def test_equality(self, numbered: ArrayND) -> None:
        assert numbered == ArrayND.from_data((3, 2), range(6))
        assert numbered != ArrayND.from_data((2, 3), range(6))
        assert numbered != ArrayND.from_data((3, 2), range(1, 7))

    def test_unhashable(self, numbered: ArrayND) -> None:
        with pytest.raises(TypeError):
            hash(numbered)

    def test_copy_is_independent(self, numbered: ArrayND) -> None:
        clone = numbered.copy()
        clone.set((0, 0), 42)
        assert numbered.get((0, 0)) == 0
        assert clone.strides == numbered.strides

    def test_repr(self, numbered: ArrayND) -> None:
        assert repr(numbered) == "ArrayND(dims=(3, 2), strides=(1, 3))"


# =============================================================================
# POINT ACCESS
# =============================================================================


class TestPointAccess:
    def test_set_then_get(self) -> None:
        a = ArrayND((3, 2), 0)
        assert a.set(Coord(1, 1), 9)
        assert a.get(Coord(1, 1)) == 9
        assert a.get(Coord(3, 3)) is None

    def test_set_out_of_range(self) -> None:
        a = ArrayND((3, 2), 0)
        assert a.set(Coord(3, 0), 1) is False
        assert a.set(Coord(-1, 0), 1) is False
        assert list(a) == [0] * 6

    def test_plain_tuples(self, numbered: ArrayND) -> None:
        assert numbered.get((2, 1)) == 5

    def test_update(self, numbered: ArrayND) -> None:
        assert numbered.update((1, 1), lambda v: v * 10)
        assert numbered.get((1, 1)) == 40

    def test_update_out_of_range_does_not_call(self, numbered: ArrayND) -> None:
        calls = []
        assert numbered.update((5, 5), calls.append) is False
        assert calls == []

    def test_linear_access(self, numbered: ArrayND) -> None:
        numbered.set_linear(4, "x")
        assert numbered.get_linear(4) == "x"
        assert numbered.get(Coord(1, 1)) == "x"

    def test_addressing(self, numbered: ArrayND) -> None:
        assert numbered.index(Coord(2, 1)) == 5
        assert numbered.index(Coord(3, 1)) is None
        assert numbered.unindex(5) == Coord(2, 1)
        assert numbered.unindex(6) is None


# =============================================================================
# RESHAPING
# =============================================================================


class TestResize:
    def test_pad(self) -> None:
        a = ArrayND((2, 2), 5)
        padded = a.padded(1, -1)
        assert padded.dims == (4, 4)
        for x, y in itertools.product(range(4), range(4)):
            expected = -1 if x in (0, 3) or y in (0, 3) else 5
            assert padded.get((x, y)) == expected
        assert a.dims == (2, 2)
        assert list(a) == [5] * 4

    def test_offset_shifts_content(self) -> None:
        a = ArrayND.from_data((2, 1), [1, 2])
        assert list(a.resized((4, 1), 0, (1, 0))) == [0, 1, 2, 0]

    def test_negative_offset_crops(self) -> None:
        a = ArrayND.from_data((3, 1), [1, 2, 3])
        assert list(a.resized((2, 1), 0, Coord(-1, 0))) == [2, 3]

    def test_round_trip(self, numbered: ArrayND) -> None:
        bigger = numbered.resized((5, 4), None, (0, 0))
        assert bigger.get((2, 1)) == 5
        assert bigger.get((4, 3)) is None
        assert bigger.resized((3, 2), None, (0, 0)) == numbered

    def test_new_buffer(self, numbered: ArrayND) -> None:
        same = numbered.resized((3, 2), None, (0, 0))
        same.set((0, 0), "changed")
        assert numbered.get((0, 0)) == 0

    def test_arity_mismatch(self, numbered: ArrayND) -> None:
        with pytest.raises(ValueError, match="needs arity 2"):
            numbered.resized((3, 2, 1), 0, (0, 0))
        with pytest.raises(ValueError, match="needs arity 2"):
            numbered.resized((3, 2), 0, (0,))


# =============================================================================
# SEARCH
# =============================================================================


class TestSearch:
    @pytest.fixture
    def repeated(self) -> ArrayND:
        # offsets: 0 1 2 | 3 4 5
        return ArrayND.from_data((3, 2), [1, 2, 1, 2, 3, 1])

    def test_find_first(self, repeated: ArrayND) -> None:
        assert repeated.find(1) == Coord(0, 0)
        assert repeated.find(2) == Coord(1, 0)

    def test_find_last(self, repeated: ArrayND) -> None:
        assert repeated.find_last(1) == Coord(2, 1)
        assert repeated.find_last(2) == Coord(0, 1)

    def test_find_all(self, repeated: ArrayND) -> None:
        assert repeated.find_all(2) == [Coord(1, 0), Coord(0, 1)]
        assert repeated.find_all(1) == [Coord(0, 0), Coord(2, 0), Coord(2, 1)]

    def test_missing(self, repeated: ArrayND) -> None:
        assert repeated.find(9) is None
        assert repeated.find_last(9) is None
        assert repeated.find_all(9) == []


# =============================================================================
# TRANSFORMS
# =============================================================================


class TestTransforms:
    def test_map_preserves_shape(self, numbered: ArrayND) -> None:
        mapped = numbered.map(str)
        assert mapped.dims == numbered.dims
        assert mapped.strides == numbered.strides
        assert list(mapped) == ["0", "1", "2", "3", "4", "5"]
        assert list(numbered) == [0, 1, 2, 3, 4, 5]

    def test_replace_all(self) -> None:
        a = ArrayND.from_data((2, 2), "a.a.")
        assert a.replace_all(".", "#") == 2
        assert list(a) == ["a", "#", "a", "#"]
        assert a.replace_all("z", "#") == 0

    def test_shift_rows(self) -> None:
        a = ArrayND.from_data((2, 3), "abcdef")
        a.shift_rows(1, ".")
        assert list(a) == ["c", "d", "e", "f", ".", "."]
        assert a.dims == (2, 3)

    def test_shift_rows_limits(self) -> None:
        a = ArrayND.from_data((2, 3), "abcdef")
        with pytest.raises(ValueError, match="Cannot shift 4 rows"):
            a.shift_rows(4, ".")
        with pytest.raises(ValueError, match="needs a 2-D array"):
            ArrayND((2, 2, 2), 0).shift_rows(1, 0)


# =============================================================================
# BLOCKS
# =============================================================================


class TestBlocks:
    def test_fill_plane(self) -> None:
        a = ArrayND((2, 3, 2), 0)
        assert a.fill_block([None, 1, None], 7) == 4
        for x, y, z in itertools.product(range(2), range(3), range(2)):
            assert a.get((x, y, z)) == (7 if y == 1 else 0)

    def test_fill_line_and_point(self) -> None:
        a = ArrayND((2, 3, 2), 0)
        assert a.fill_block([1, None, 0], 5) == 3
        assert a.fill_block([0, 0, 0], 9) == 1
        assert a.find_all(5) == [Coord(1, 0, 0), Coord(1, 1, 0), Coord(1, 2, 0)]
        assert a.get((0, 0, 0)) == 9

    def test_fill_everything(self) -> None:
        a = ArrayND((2, 3, 2), 0)
        assert a.fill_block([None, None, None], 1) == 12
        assert set(a) == {1}

    def test_iter_block_ascending(self) -> None:
        a = ArrayND.from_data((2, 3, 2), range(12))
        assert list(a.iter_block([None, 1, None])) == [2, 3, 8, 9]

    def test_fixed_index_out_of_range(self) -> None:
        with pytest.raises(IndexError, match="Block index 3 outside axis 1"):
            ArrayND((2, 3), 0).fill_block([None, 3], 1)

    def test_pattern_arity(self) -> None:
        with pytest.raises(ValueError, match="does not match array arity"):
            list(ArrayND((2, 3), 0).iter_block([None]))


# =============================================================================
# LINES
# =============================================================================


class TestLines:
    def test_draw_diagonal(self) -> None:
        a = ArrayND((4, 4), ".")
        assert a.draw_line(Coord(0, 0), Coord(3, 3), "#") == 4
        assert a.find_all("#") == [Coord(0, 0), Coord(1, 1), Coord(2, 2), Coord(3, 3)]

    def test_unbounded_line_fails_silently_outside(self) -> None:
        a = ArrayND((3, 1), ".")
        assert a.draw_line(Coord(-2, 0), Coord(2, 0), "#") == 3
        assert list(a) == ["#"] * 3

    def test_bounded_line(self) -> None:
        a = ArrayND((3, 1), ".")
        assert a.draw_line(Coord(-2, 0), Coord(1, 0), "#", bounded=True) == 2
        assert list(a.line_iter(Coord(-2, 0), Coord(5, 0), bounded=True)) == [
            Coord(0, 0),
            Coord(1, 0),
            Coord(2, 0),
        ]

    def test_draw_line_value(self) -> None:
        a = ArrayND((3, 3), 0)
        assert a.draw(Line(Coord(0, 2), Coord(2, 2)), 1) == 3
        assert list(a.iter_block([None, 2])) == [1, 1, 1]

    def test_values_in_line(self, numbered: ArrayND) -> None:
        assert list(numbered.iter_values_in_line(Coord(-1, 1), Coord(4, 1))) == [3, 4, 5]


# =============================================================================
# NEIGHBOURS
# =============================================================================


class TestNeighbours:
    def test_corner(self) -> None:
        a = ArrayND((3, 3), 0)
        assert a.neighbours(Coord(0, 0)) == [Coord(1, 0), Coord(0, 1)]

    def test_center(self) -> None:
        a = ArrayND((3, 3), 0)
        assert len(a.neighbours(Coord(1, 1))) == 4

    def test_subset_of_unconstrained(self) -> None:
        a = ArrayND((3, 2), 0)
        for offset in range(a.cardinality):
            coord = a.unindex(offset)
            expected = [n for n in coord.neighbours() if a.is_in_bounds(n)]
            assert a.neighbours(coord) == expected
