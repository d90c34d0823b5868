"""
Vector — Fixed-Arity Coordinate Algebra

Неизменяемые N-компонентные векторы над одним скалярным типом, в двух ролях:
- `Coord`: позиция в N-мерном пространстве
- `Shape`: протяжённость по каждой оси; реализует контракт адресации

Обе роли разделяют алгебру `Vector`; операции возвращают класс вызывающего,
смешивание ролей в одном арифметическом выражении — TypeError.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Арность фиксируется при создании (>= 1) и не меняется
2. Каждая компонента представима в скалярном типе вектора
3. Целочисленное переполнение — OverflowError (никогда не заворачивается);
   float-результат за пределами диапазона становится ±inf
4. Шаги к соседям, выходящие из типа, молча отбрасываются
"""

import math
import operator
from collections.abc import Iterable
from typing import Any, Callable, ClassVar, Iterator, List, Optional, Sequence, Tuple

from ndgrid.core.domain.addressing import LinearIndex, ShapeError
from ndgrid.core.math.numerical_safeguards import exceeds_epsilon
from ndgrid.core.math.scalars import I32, USIZE, ScalarConversionError, ScalarKind


# =============================================================================
# VECTOR
# =============================================================================


class Vector:
    """
    Кортеж фиксированной длины из скаляров одного типа.

    Создание из явных значений или из одного iterable:

        Coord(1, 2)
        Coord((1, 2), kind=U8)
        Coord.all(0, 3)
    """

    __slots__ = ("_values", "_kind")

    default_kind: ClassVar[ScalarKind] = I32

    def __init__(self, *values: Any, kind: Optional[ScalarKind] = None) -> None:
        if len(values) == 1 and isinstance(values[0], Iterable) and not isinstance(values[0], (str, bytes)):
            values = tuple(values[0])
        if len(values) == 0:
            raise ValueError(f"{type(self).__name__} requires at least one component")

        kind = kind if kind is not None else type(self).default_kind
        self._kind = kind
        self._values: Tuple[Any, ...] = tuple(kind.coerce(v) for v in values)

    # ── вспомогательные конструкторы ─────────────────────────────
    @classmethod
    def all(cls, value: Any, arity: int, kind: Optional[ScalarKind] = None):
        """Один скаляр, размноженный на `arity` компонент."""
        if arity < 1:
            raise ValueError(f"arity must be >= 1, got {arity}")
        return cls([value] * arity, kind=kind)

    @classmethod
    def from_xy(cls, x: Any, y: Any, kind: Optional[ScalarKind] = None):
        return cls((x, y), kind=kind)

    @classmethod
    def from_xyz(cls, x: Any, y: Any, z: Any, kind: Optional[ScalarKind] = None):
        return cls((x, y, z), kind=kind)

    @classmethod
    def from_xyzw(cls, x: Any, y: Any, z: Any, w: Any, kind: Optional[ScalarKind] = None):
        return cls((x, y, z, w), kind=kind)

    @classmethod
    def parse(cls, text: str, kind: Optional[ScalarKind] = None):
        """
        Разбор компонент через запятую, например "3, 4".

        Raises:
            ValueError: Если компонента не является числом данного типа
        """
        kind = kind if kind is not None else cls.default_kind
        convert = float if kind.is_float else int
        parts = [part.strip() for part in text.split(",")]
        try:
            values = [convert(part) for part in parts]
        except ValueError:
            raise ValueError(f"Cannot parse {cls.__name__} from {text!r}") from None
        return cls(values, kind=kind)

    @classmethod
    def _trusted(cls, values: Sequence[Any], kind: ScalarKind):
        """Вектор из уже проверенных компонент (без повторного приведения)."""
        vector = object.__new__(cls)
        vector._kind = kind
        vector._values = tuple(values)
        return vector

    def _result(self, value: Any, what: str) -> Any:
        """Результат арифметики в типе вектора; OverflowError для целых."""
        result = self._kind.arith_result(value)
        if result is None:
            raise OverflowError(f"{what} {value!r} out of range for {self._kind.name}")
        return result

    def _same(self, values: Sequence[Any]):
        """Новый вектор того же класса и типа из результатов арифметики."""
        what = f"{type(self).__name__} component"
        return type(self)([self._result(v, what) for v in values], kind=self._kind)

    def _check_compatible(self, other: Any) -> None:
        if not isinstance(other, Vector) or type(other) is not type(self):
            raise TypeError(f"Cannot combine {type(self).__name__} with {type(other).__name__}")
        if len(other) != len(self):
            raise ValueError(f"Arity mismatch: {len(self)} vs {len(other)}")
        if other._kind != self._kind:
            raise TypeError(f"Scalar kind mismatch: {self._kind.name} vs {other._kind.name}")

    # ── доступ к значениям ───────────────────────────────────────
    @property
    def values(self) -> Tuple[Any, ...]:
        return self._values

    @property
    def kind(self) -> ScalarKind:
        return self._kind

    @property
    def arity(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __getitem__(self, axis: int) -> Any:
        return self._values[axis]

    def _axis(self, axis: int, name: str) -> Any:
        if axis >= len(self._values):
            raise ValueError(f"{type(self).__name__} of arity {len(self)} has no {name} component")
        return self._values[axis]

    @property
    def x(self) -> Any:
        return self._axis(0, "x")

    @property
    def y(self) -> Any:
        return self._axis(1, "y")

    @property
    def z(self) -> Any:
        return self._axis(2, "z")

    @property
    def w(self) -> Any:
        return self._axis(3, "w")

    # ── равенство ────────────────────────────────────────────────
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return type(self) is type(other) and self._kind == other._kind and self._values == other._values

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._kind.name, self._values))

    def __repr__(self) -> str:
        body = ", ".join(repr(v) for v in self._values)
        if self._kind != type(self).default_kind:
            body += f", kind={self._kind.name}"
        return f"{type(self).__name__}({body})"

    # =========================================================================
    # ПОЭЛЕМЕНТНЫЕ / АГРЕГАТНЫЕ
    # =========================================================================

    def map(self, fn: Callable[[Any], Any]):
        """Применение `fn` к каждой компоненте."""
        return type(self)([fn(v) for v in self._values], kind=self._kind)

    def fold(self, fn: Callable[[Any, Any], Any]) -> Any:
        """
        Свёртка компонент слева направо; первая компонента — начальное значение.

        Порядок не меняется: неассоциативная `fn` вычисляется по порядку осей.
        """
        acc = self._values[0]
        for v in self._values[1:]:
            acc = fn(acc, v)
        return acc

    def zip_with(self, other: "Vector", fn: Callable[[Any, Any], Any]):
        """Покомпонентное объединение двух векторов."""
        self._check_compatible(other)
        return type(self)([fn(a, b) for a, b in zip(self._values, other._values)], kind=self._kind)

    def elementwise_min(self, other: "Vector"):
        return self.zip_with(other, min)

    def elementwise_max(self, other: "Vector"):
        return self.zip_with(other, max)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def __add__(self, other: "Vector"):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_compatible(other)
        return self._same([a + b for a, b in zip(self._values, other._values)])

    def __sub__(self, other: "Vector"):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check_compatible(other)
        return self._same([a - b for a, b in zip(self._values, other._values)])

    def __mul__(self, scalar: Any):
        if isinstance(scalar, Vector):
            return NotImplemented
        factor = self._kind.coerce(scalar)
        return self._same([v * factor for v in self._values])

    __rmul__ = __mul__

    def __neg__(self):
        return self._same([-v for v in self._values])

    def inner(self, other: "Vector") -> Any:
        """Скалярное произведение."""
        self._check_compatible(other)
        return self._result(sum(a * b for a, b in zip(self._values, other._values)), "inner product")

    def _require_float(self, operation: str) -> None:
        if not self._kind.is_float:
            raise TypeError(f"{operation} is defined only for floating kinds, not {self._kind.name}")

    def magnitude(self) -> float:
        self._require_float("magnitude")
        return math.sqrt(self.inner(self))

    def normalized(self):
        """
        Единичный вектор того же направления.

        Модуль не больше эпсилона типа даёт нулевой вектор.
        """
        self._require_float("normalized")
        magn = self.magnitude()
        if exceeds_epsilon(magn, self._kind.epsilon):
            return self * (1.0 / magn)
        return self * 0.0

    # =========================================================================
    # РАССТОЯНИЯ
    # =========================================================================

    def manhattan_distance(self, other: "Vector") -> Any:
        """Сумма модулей покомпонентных разностей."""
        self._check_compatible(other)
        total = self._kind.zero
        for a, b in zip(self._values, other._values):
            step = self._kind.absolute(b - a)
            if step is None:
                raise OverflowError(f"difference {b - a} out of range for {self._kind.name}")
            total = self._result(total + step, "manhattan distance")
        return total

    def euclidean_distance_squared(self, other: "Vector") -> Any:
        """Скалярный квадрат покомпонентной разности (без корня)."""
        self._check_compatible(other)
        total = sum((b - a) * (b - a) for a, b in zip(self._values, other._values))
        return self._result(total, "squared distance")

    # =========================================================================
    # ТОЛЬКО 2-D
    # =========================================================================

    def _require_2d(self, operation: str) -> None:
        if len(self) != 2:
            raise ValueError(f"{operation} is defined only for 2-D vectors, got arity {len(self)}")

    def winding(self, other: "Vector") -> Any:
        """Векторное произведение x1*y2 - y1*x2 (знак — направление поворота)."""
        self._require_2d("winding")
        self._check_compatible(other)
        return self._result(self.x * other.y - self.y * other.x, "winding")

    def perp(self):
        """Перпендикуляр против часовой стрелки (-y, x)."""
        self._require_2d("perp")
        return self._same([-self.y, self.x])

    def _step(self, axis: int, forward: bool):
        self._require_2d("step")
        values = list(self._values)
        if forward:
            moved = self._kind.checked_add(values[axis])
        else:
            moved = self._kind.checked_sub(values[axis])
        if moved is None:
            return None
        values[axis] = moved
        return type(self)(values, kind=self._kind)

    def step_right(self):
        return self._step(0, True)

    def step_up(self):
        return self._step(1, True)

    def step_left(self):
        return self._step(0, False)

    def step_down(self):
        return self._step(1, False)

    # =========================================================================
    # ПРЕОБРАЗОВАНИЯ
    # =========================================================================

    def convert(self, kind: ScalarKind):
        """
        Те же компоненты в другом скалярном типе.

        Расширение всегда успешно и не проверяет компоненты; сужение
        отклоняется целиком, если хотя бы одна компонента не помещается.

        Raises:
            ScalarConversionError: Если компонента непредставима
        """
        if self._kind.widens_to(kind):
            cast = float if kind.is_float else int
            return type(self)._trusted([cast(v) for v in self._values], kind)
        return type(self)(self._values, kind=kind)

    def try_convert(self, kind: ScalarKind):
        """convert() или None, если компонента не помещается."""
        try:
            return self.convert(kind)
        except ScalarConversionError:
            return None

    # =========================================================================
    # СОСЕДИ
    # =========================================================================

    def _admits(self, value: Any) -> bool:
        """Допустима ли компонента соседа в этой роли вектора."""
        return True

    def neighbours(self, context: Optional[LinearIndex] = None) -> List["Vector"]:
        """
        Соседи вдоль осей: для каждой оси сначала +1, затем -1.

        Шаги, выходящие из скалярного типа, пропускаются. С `context`
        возвращаются только соседи, для которых `context.is_in_bounds` истинно.
        """
        result = []
        for axis, value in enumerate(self._values):
            for moved in (self._kind.checked_add(value), self._kind.checked_sub(value)):
                if moved is None or not self._admits(moved):
                    continue
                values = list(self._values)
                values[axis] = moved
                result.append(type(self)(values, kind=self._kind))

        if context is not None:
            result = [n for n in result if context.is_in_bounds(n)]
        return result


# =============================================================================
# COORD
# =============================================================================


class Coord(Vector):
    """Позиция: по одной компоненте на ось."""

    __slots__ = ()

    default_kind: ClassVar[ScalarKind] = I32


# =============================================================================
# SHAPE
# =============================================================================


def _coord_components(coord: Any) -> Tuple[int, ...]:
    """Целые компоненты Coord или обычной последовательности."""
    if isinstance(coord, Vector):
        if coord.kind.is_float:
            raise TypeError(f"Cannot address cells with floating coordinates ({coord.kind.name})")
        return coord.values
    return tuple(operator.index(c) for c in coord)


class Shape(Vector, LinearIndex):
    """
    Протяжённость по каждой оси. Каждая протяжённость — положительное целое.

    Как `LinearIndex`: `self` — вектор протяжённостей, аргумент —
    преобразуемая координата.

    Raises:
        ShapeError: При нулевой, отрицательной или нецелой протяжённости
    """

    __slots__ = ()

    default_kind: ClassVar[ScalarKind] = USIZE

    def __init__(self, *values: Any, kind: Optional[ScalarKind] = None) -> None:
        if kind is not None and kind.is_float:
            raise ShapeError(f"Shape extents must use an integer kind, not {kind.name}")
        try:
            super().__init__(*values, kind=kind)
        except ScalarConversionError as e:
            raise ShapeError(f"Invalid extent: {e}") from e
        if any(v <= 0 for v in self._values):
            raise ShapeError(f"All extents must be positive, got {self._values}")

    def _same(self, values: Sequence[Any]):
        if any(v <= 0 for v in values):
            raise ShapeError(f"All extents must be positive, got {tuple(values)}")
        return super()._same(values)

    def _admits(self, value: Any) -> bool:
        return value > 0

    def convert(self, kind: ScalarKind):
        if kind.is_float:
            raise ShapeError(f"Shape extents must use an integer kind, not {kind.name}")
        return super().convert(kind)

    @property
    def strides(self) -> Tuple[int, ...]:
        """stride[0] = 1, stride[k] = stride[k-1] * extent[k-1]."""
        strides = []
        current = 1
        for extent in self._values:
            strides.append(current)
            current *= extent
        return tuple(strides)

    # ── LinearIndex ──────────────────────────────────────────────
    @property
    def cardinality(self) -> int:
        return math.prod(self._values)

    def _check_arity(self, components: Tuple[int, ...]) -> None:
        if len(components) != len(self._values):
            raise ValueError(f"Coordinate arity {len(components)} does not match shape arity {len(self)}")

    def index_unchecked(self, coord: Any) -> Optional[int]:
        components = _coord_components(coord)
        self._check_arity(components)
        result = 0
        for extent, c in zip(reversed(self._values), reversed(components)):
            result = result * extent + c
        return result

    def unindex(self, offset: int, kind: ScalarKind = I32) -> Optional[Coord]:
        """
        Координата по смещению: остаток/частное по осям, начиная с оси 0.

        Returns:
            Coord типа `kind` или None, если смещение вне [0, cardinality)
            либо компонента не помещается в `kind`
        """
        if offset < 0 or offset >= self.cardinality:
            return None
        components = []
        for extent in self._values:
            components.append(offset % extent)
            offset //= extent
        if not all(kind.fits(c) for c in components):
            return None
        return Coord(components, kind=kind)

    def is_in_bounds(self, coord: Any) -> bool:
        components = _coord_components(coord)
        self._check_arity(components)
        return all(0 <= c < e for c, e in zip(components, self._values))
