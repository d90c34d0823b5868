"""
Interval — Half-Open Range Algebra

Операции над диапазонами [lo, hi) любого полностью упорядоченного скаляра
(int, float, OrderedFloat). Диапазон — именованный кортеж `HalfOpen(lo, hi)`;
обычные пары и `range` с шагом 1 принимаются везде, где ожидается диапазон.

Диапазоны с lo >= hi вырождены (пусты) и никогда не отклоняются.

ПОЛИТИКА:
- Диапазоны, лишь касающиеся общей границей (a.hi == b.lo), НЕ пересекаются:
  intersection() возвращает None, а не диапазон нулевой ширины, при этом
  touches() истинно и union() их объединяет.

ФОРМУЛЫ (после нормализации, так что a.lo <= b.lo):
    intersection = None if a.hi <= b.lo else [b.lo, min(a.hi, b.hi))
    union        = None if a.hi <  b.lo else [a.lo, max(a.hi, b.hi))
    overlaps     = a.hi > b.lo and a.lo < b.hi
    touches      = a.hi >= b.lo and a.lo <= b.hi
    dominates    = a.lo <= b.lo and a.hi >= b.hi
    dominates_or_is_dominated_by = (b.lo - a.lo) * (b.hi - a.hi) <= 0
"""

from typing import Any, NamedTuple, Optional, Tuple, Union

from ndgrid.core.math.scalars import ScalarKind


class HalfOpen(NamedTuple):
    """Диапазон [lo, hi): lo включён, hi исключён."""

    lo: Any
    hi: Any

    @property
    def is_empty(self) -> bool:
        return not self.lo < self.hi

    def contains(self, value: Any) -> bool:
        return self.lo <= value < self.hi

    def intersection(self, other: "RangeLike") -> Optional["HalfOpen"]:
        return intersection(self, other)

    def union(self, other: "RangeLike") -> Optional["HalfOpen"]:
        return union(self, other)

    def overlaps(self, other: "RangeLike") -> bool:
        return overlaps(self, other)

    def touches(self, other: "RangeLike") -> bool:
        return touches(self, other)

    def dominates(self, other: "RangeLike") -> bool:
        return dominates(self, other)

    def dominates_or_is_dominated_by(self, other: "RangeLike") -> bool:
        return dominates_or_is_dominated_by(self, other)


RangeLike = Union[HalfOpen, Tuple[Any, Any], range]


def bounds(r: RangeLike) -> HalfOpen:
    """
    Приведение диапазоноподобного значения к HalfOpen.

    Raises:
        ValueError: Для `range` с шагом != 1
    """
    if isinstance(r, HalfOpen):
        return r
    if isinstance(r, range):
        if r.step != 1:
            raise ValueError(f"Only step-1 ranges are intervals, got step={r.step}")
        return HalfOpen(r.start, r.stop)
    lo, hi = r
    return HalfOpen(lo, hi)


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def normalize(a: RangeLike, b: RangeLike) -> Tuple[HalfOpen, HalfOpen]:
    """Упорядочить пару так, чтобы первая нижняя граница была <= второй."""
    a, b = bounds(a), bounds(b)
    if a.lo > b.lo:
        return b, a
    return a, b


# =============================================================================
# ОПЕРАЦИИ НАД МНОЖЕСТВАМИ
# =============================================================================


def intersection(a: RangeLike, b: RangeLike) -> Optional[HalfOpen]:
    """
    Общая часть двух диапазонов.

    Returns:
        [b.lo, min(a.hi, b.hi)) или None, если диапазоны не пересекаются
        или только касаются границей

    Examples:
        >>> intersection((0, 2), (1, 3))
        HalfOpen(lo=1, hi=2)
        >>> intersection((0, 2), (2, 3)) is None
        True
    """
    a, b = normalize(a, b)
    if a.hi <= b.lo:
        return None
    return HalfOpen(b.lo, min(a.hi, b.hi))


def union(a: RangeLike, b: RangeLike) -> Optional[HalfOpen]:
    """
    Наименьший диапазон, покрывающий оба, если он непрерывен.

    Returns:
        [a.lo, max(a.hi, b.hi)) или None, если между диапазонами есть разрыв

    Examples:
        >>> union((0, 2), (2, 3))
        HalfOpen(lo=0, hi=3)
        >>> union((0, 1), (2, 3)) is None
        True
    """
    a, b = normalize(a, b)
    if a.hi < b.lo:
        return None
    return HalfOpen(a.lo, max(a.hi, b.hi))


# =============================================================================
# ПРЕДИКАТЫ
# =============================================================================


def overlaps(a: RangeLike, b: RangeLike) -> bool:
    """Строгое полуоткрытое перекрытие; равносильно intersection() is not None."""
    a, b = bounds(a), bounds(b)
    return a.hi > b.lo and a.lo < b.hi


def touches(a: RangeLike, b: RangeLike) -> bool:
    """Перекрытие или общая граница."""
    a, b = bounds(a), bounds(b)
    return a.hi >= b.lo and a.lo <= b.hi


def dominates(a: RangeLike, b: RangeLike) -> bool:
    """`a` полностью содержит `b`."""
    a, b = bounds(a), bounds(b)
    return a.lo <= b.lo and a.hi >= b.hi


def dominates_or_is_dominated_by(a: RangeLike, b: RangeLike) -> bool:
    """
    Один диапазон содержит другой, в любую сторону.

    Знаковый тест по разностям границ; требует вычитания и умножения скаляра.
    """
    a, b = bounds(a), bounds(b)
    lo_delta = b.lo - a.lo
    zero = type(lo_delta)(0)
    return lo_delta * (b.hi - a.hi) <= zero


# =============================================================================
# УНИВЕРСАЛЬНЫЙ ИНТЕРВАЛ
# =============================================================================


def universal_interval(kind: ScalarKind) -> HalfOpen:
    """[infimum, supremum) скалярного типа: диапазон «всё»."""
    return HalfOpen(kind.infimum, kind.supremum)
