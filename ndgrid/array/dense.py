"""
ArrayND — Dense N-Dimensional Array

Плоский список Python, адресуемый через протяжённости и шаги по осям.

Модель данных (инварианты):
- `shape: Shape`: одна положительная протяжённость на ось
- `strides: tuple[int, ...]`: stride[0] = 1, stride[k] = stride[k-1] * extent[k-1]
- `data: list`: ровно prod(extents) ячеек, ось 0 меняется быстрее всех
- shape и strides заменяются только вместе

Раскладка массива (3, 2):

    offset:  0 1 2 | 3 4 5
    coord:   (0,0) (1,0) (2,0) | (0,1) (1,1) (2,1)

Политика ошибок:
- Нарушение формы при создании: ShapeError (ошибка программиста)
- Координаты вне массива в get/set/update: None/False
- Линейный доступ доверенный и не проверяется

Массив монопольно владеет буфером: создание из сырых данных копирует
последовательность вызывающего, resize/pad строят новый массив.
"""

import itertools
import logging
import operator
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from ndgrid.core.config import get_settings
from ndgrid.core.domain.addressing import LinearIndex, ShapeError
from ndgrid.core.domain.vector import Coord, Shape
from ndgrid.core.math.scalars import I32, ScalarKind
from ndgrid.raster.line import Line, LineIterator

logger = logging.getLogger(__name__)

CoordLike = Union[Coord, Sequence[int]]
Matching = Sequence[Optional[int]]


def _to_extent(value: Any) -> int:
    """
    Приведение одной протяжённости к положительному int.

    Принимает int, объекты с __index__ и целочисленные float (включая
    OrderedFloat).

    Raises:
        ShapeError: Для нулевых, отрицательных, нецелых и нечисловых значений
    """
    if isinstance(value, (bool, str, bytes)):
        raise ShapeError(f"Extent must be numeric, got {value!r}")
    try:
        extent = operator.index(value)
    except TypeError:
        try:
            as_float = float(value)
        except (TypeError, ValueError):
            raise ShapeError(f"Extent is not convertible to an integer: {value!r}") from None
        if not as_float.is_integer():
            raise ShapeError(f"Extent is not integral: {value!r}")
        extent = int(as_float)
    if extent <= 0:
        raise ShapeError(f"Extent must be positive, got {value!r}")
    return extent


def _to_shape(extents: Union[Shape, Iterable[Any]]) -> Shape:
    if isinstance(extents, Shape):
        shape = extents
    else:
        shape = Shape([_to_extent(e) for e in extents])
    max_cells = get_settings().max_cells
    if max_cells is not None and shape.cardinality > max_cells:
        raise ShapeError(f"Array of {shape.cardinality} cells exceeds the configured limit of {max_cells}")
    return shape


class ArrayND(LinearIndex):
    """
    Плотный N-мерный массив произвольных значений.

    Args:
        extents: Положительная протяжённость по каждой оси (Shape или числовая последовательность)
        fill: Начальное значение каждой ячейки

    Raises:
        ShapeError: При нулевых, отрицательных или неприводимых протяжённостях
    """

    __slots__ = ("data", "_shape", "_strides")

    def __init__(self, extents: Union[Shape, Iterable[Any]], fill: Any) -> None:
        shape = _to_shape(extents)
        self._shape = shape
        self._strides = shape.strides
        self.data: List[Any] = [fill] * shape.cardinality
        logger.debug("allocated array shape=%s cells=%d", shape.values, len(self.data))

    @classmethod
    def from_data(cls, extents: Union[Shape, Iterable[Any]], data: Iterable[Any]) -> "ArrayND":
        """
        Массив из существующих значений ячеек (копируются).

        Raises:
            ShapeError: При некорректных протяжённостях или len(data) != prod(extents)
        """
        shape = _to_shape(extents)
        cells = list(data)
        if len(cells) != shape.cardinality:
            raise ShapeError(
                f"Data length {len(cells)} does not match extents {shape.values} "
                f"({shape.cardinality} cells)"
            )
        return cls._wrap(shape, shape.strides, cells)

    @classmethod
    def _wrap(cls, shape: Shape, strides: Tuple[int, ...], data: List[Any]) -> "ArrayND":
        array = cls.__new__(cls)
        array._shape = shape
        array._strides = strides
        array.data = data
        return array

    # ── метаданные ─────────────────────────────────────────────────
    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def dims(self) -> Tuple[int, ...]:
        return self._shape.values

    @property
    def strides(self) -> Tuple[int, ...]:
        return self._strides

    @property
    def ndim(self) -> int:
        return len(self._shape)

    def _extent(self, axis: int, name: str) -> int:
        if axis >= self.ndim:
            raise ValueError(f"{self.ndim}-D array has no {name}")
        return self._shape[axis]

    @property
    def width(self) -> int:
        return self._extent(0, "width")

    @property
    def height(self) -> int:
        return self._extent(1, "height")

    @property
    def depth(self) -> int:
        return self._extent(2, "depth")

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayND):
            return NotImplemented
        return self._shape == other._shape and self.data == other.data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ArrayND(dims={self.dims}, strides={self._strides})"

    def copy(self) -> "ArrayND":
        return self._wrap(self._shape, self._strides, list(self.data))

    # =========================================================================
    # ADDRESSING
    # =========================================================================

    @property
    def cardinality(self) -> int:
        return len(self.data)

    def index_unchecked(self, coord: CoordLike) -> Optional[int]:
        return self._shape.index_unchecked(coord)

    def unindex(self, offset: int, kind: ScalarKind = I32) -> Optional[Coord]:
        return self._shape.unindex(offset, kind)

    def is_in_bounds(self, coord: CoordLike) -> bool:
        return self._shape.is_in_bounds(coord)

    # =========================================================================
    # RESHAPING
    # =========================================================================

    def resized(self, new_extents: Union[Shape, Iterable[Any]], fill: Any, offset: CoordLike) -> "ArrayND":
        """
        Новый массив `new_extents` с содержимым, сдвинутым на `offset`.

        Ячейка d получает значение ячейки d - offset, если та лежит в
        границах этого массива, иначе `fill`. Исходный массив не меняется.
        """
        result = ArrayND(new_extents, fill)
        shift = tuple(offset)
        if len(shift) != self.ndim or result.ndim != self.ndim:
            raise ValueError(
                f"resized() needs arity {self.ndim}, got extents {result.ndim} and offset {len(shift)}"
            )

        for dest in range(result.cardinality):
            coord = result._shape.unindex(dest, kind=I32)
            if coord is None:
                # координаты за пределами i32 сохраняют fill
                continue
            source = tuple(c - s for c, s in zip(coord.values, shift))
            offset_src = self.index(source)
            if offset_src is not None:
                result.data[dest] = self.data[offset_src]

        logger.debug("resized %s -> %s offset=%s", self.dims, result.dims, shift)
        return result

    def padded(self, padding: int, fill: Any) -> "ArrayND":
        """Увеличение каждой оси на 2 * padding, содержимое по центру."""
        new_extents = [extent + 2 * padding for extent in self.dims]
        return self.resized(new_extents, fill, Coord.all(padding, self.ndim))

    # =========================================================================
    # POINT ACCESS
    # =========================================================================

    def get(self, coord: CoordLike) -> Optional[Any]:
        """Значение ячейки или None, если `coord` вне массива."""
        offset = self.index(coord)
        if offset is None:
            return None
        return self.data[offset]

    def update(self, coord: CoordLike, fn: Callable[[Any], Any]) -> bool:
        """
        Замена ячейки на fn(cell) на месте.

        Returns:
            False (fn не вызывается), если `coord` вне массива
        """
        offset = self.index(coord)
        if offset is None:
            return False
        self.data[offset] = fn(self.data[offset])
        return True

    def set(self, coord: CoordLike, value: Any) -> bool:
        """Запись ячейки; False, если `coord` вне массива."""
        offset = self.index(coord)
        if offset is None:
            return False
        self.data[offset] = value
        return True

    def get_linear(self, offset: int) -> Any:
        return self.data[offset]

    def set_linear(self, offset: int, value: Any) -> None:
        self.data[offset] = value

    # =========================================================================
    # SEARCH
    # =========================================================================

    def find(self, item: Any) -> Optional[Coord]:
        """Первая ячейка, равная `item`, в порядке возрастания смещений."""
        for offset, value in enumerate(self.data):
            if value == item:
                return self.unindex(offset)
        return None

    def find_last(self, item: Any) -> Optional[Coord]:
        """Последняя ячейка, равная `item` (обход по убыванию)."""
        for offset in range(len(self.data) - 1, -1, -1):
            if self.data[offset] == item:
                return self.unindex(offset)
        return None

    def find_all(self, item: Any) -> List[Coord]:
        """Все ячейки, равные `item`, по возрастанию смещений."""
        return [self.unindex(offset) for offset, value in enumerate(self.data) if value == item]

    # =========================================================================
    # TRANSFORMS
    # =========================================================================

    def map(self, fn: Callable[[Any], Any]) -> "ArrayND":
        """Новый массив той же формы и шагов с fn, применённой к каждой ячейке."""
        return self._wrap(self._shape, self._strides, [fn(value) for value in self.data])

    def replace_all(self, old: Any, new: Any) -> int:
        """
        Замена всех ячеек, равных `old`, на `new`.

        Returns:
            Число заменённых ячеек
        """
        count = 0
        for offset, value in enumerate(self.data):
            if value == old:
                self.data[offset] = new
                count += 1
        return count

    def shift_rows(self, n: int, fill: Any) -> None:
        """
        Только 2-D: удалить первые `n` строк и дописать `n` строк `fill`.

        Raises:
            ValueError: Для не-2-D массивов или n вне [0, height]
        """
        if self.ndim != 2:
            raise ValueError(f"shift_rows() needs a 2-D array, got {self.ndim}-D")
        if n < 0 or n > self.height:
            raise ValueError(f"Cannot shift {n} rows of a {self.height}-row array")
        cells = self.width * n
        del self.data[:cells]
        self.data.extend([fill] * cells)

    # =========================================================================
    # BLOCKS
    # =========================================================================

    def _block_offsets(self, matching: Matching) -> Iterator[int]:
        """
        Смещения всех ячеек, совпадающих с шаблоном (индекс или None по оси).

        Оси-шаблоны раскрываются декартовым произведением; последняя ось
        меняется медленнее всех, поэтому смещения идут по возрастанию.
        """
        if len(matching) != self.ndim:
            raise ValueError(f"Block pattern arity {len(matching)} does not match array arity {self.ndim}")

        axes = []
        for axis, (fixed, extent) in enumerate(zip(matching, self.dims)):
            if fixed is None:
                axes.append(range(extent))
                continue
            if not 0 <= fixed < extent:
                raise IndexError(f"Block index {fixed} outside axis {axis} of extent {extent}")
            axes.append((fixed,))

        for combo in itertools.product(*reversed(axes)):
            yield sum(c * s for c, s in zip(reversed(combo), self._strides))

    def fill_block(self, matching: Matching, value: Any) -> int:
        """
        Запись `value` во все ячейки, совпадающие с шаблоном.

        Каждый элемент `matching` — индекс по оси или None («любой индекс»).
        Например, для 3-D массива [None, 3, None] — плоскость y = 3.

        Returns:
            Число записанных ячеек

        Raises:
            IndexError: Если фиксированный индекс лежит вне своей оси
        """
        count = 0
        for offset in self._block_offsets(matching):
            self.data[offset] = value
            count += 1
        return count

    def iter_block(self, matching: Matching) -> Iterator[Any]:
        """Значения совпадающих ячеек по возрастанию смещений."""
        for offset in self._block_offsets(matching):
            yield self.data[offset]

    # =========================================================================
    # LINES
    # =========================================================================

    def line_iter(self, start: Coord, end: Coord, bounded: bool = False) -> LineIterator:
        """Ячейки между двумя координатами; `bounded` обрезает по массиву."""
        return LineIterator(start, end, self._shape if bounded else None)

    def iter_values_in_line(self, start: Coord, end: Coord) -> Iterator[Any]:
        """Значения вдоль линии, обрезанной по массиву."""
        for point in self.line_iter(start, end, bounded=True):
            yield self.data[self._shape.index_unchecked(point)]

    def draw_line(self, start: Coord, end: Coord, value: Any, bounded: bool = False) -> int:
        """
        Запись `value` в каждую ячейку растеризованного отрезка start..end.

        Необрезанная линия может выходить за массив; такие ячейки молча
        пропускаются set() и не считаются.

        Returns:
            Число записанных ячеек
        """
        written = 0
        for point in self.line_iter(start, end, bounded):
            if self.set(point, value):
                written += 1
        return written

    def draw(self, line: Line, value: Any, bounded: bool = False) -> int:
        """draw_line() для значения Line."""
        return self.draw_line(line.start, line.end, value, bounded)

    # =========================================================================
    # NEIGHBOURS
    # =========================================================================

    def neighbours(self, coord: Coord) -> List[Coord]:
        """Соседи `coord` вдоль осей, лежащие внутри массива."""
        return coord.neighbours(context=self)
