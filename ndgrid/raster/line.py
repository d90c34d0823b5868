"""
Line — N-Dimensional Bresenham Rasterization

Превращает две координаты в последовательность ячеек сетки между ними.

АЛГОРИТМ:
    ведущая ось k = argmax |end - start|       (при равенстве первая ось)
    err[i] = 2*|d_i| - |d_k|                    для каждой другой оси
    на шаге:  err[i] > 0 → сдвиг оси i, err[i] -= 2*|d_k|; err[i] += 2*|d_i|
              сдвиг оси k
Оба конца включены; вырожденная линия (start == end) даёт одну ячейку.
Итератор ленивый и однопроходный: для повтора создаётся новый.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from ndgrid.core.domain.vector import Coord, Shape


@dataclass(frozen=True)
class Line:
    """Отрезок между двумя координатами одной арности и типа."""

    start: Coord
    end: Coord

    def __post_init__(self) -> None:
        if len(self.start) != len(self.end):
            raise ValueError(f"Line endpoints differ in arity: {len(self.start)} vs {len(self.end)}")
        if self.start.kind != self.end.kind:
            raise TypeError(f"Line endpoints differ in kind: {self.start.kind.name} vs {self.end.kind.name}")

    def cells(self, bounds: Optional[Shape] = None) -> "LineIterator":
        return LineIterator(self.start, self.end, bounds)


class LineIterator:
    """
    Ленивый обход ячеек линии.

    Args:
        start: Первая ячейка (выдаётся всегда, если не отсечена)
        end: Последняя ячейка
        bounds: Если задано, ячейки вне этой формы пропускаются
    """

    def __init__(self, start: Coord, end: Coord, bounds: Optional[Shape] = None) -> None:
        line = Line(start, end)
        self._kind = line.start.kind
        self._bounds = bounds
        self._current: List[int] = list(line.start.values)

        deltas = [b - a for a, b in zip(line.start.values, line.end.values)]
        self._steps = [(d > 0) - (d < 0) for d in deltas]
        self._abs = [abs(d) for d in deltas]
        self._axis = max(range(len(deltas)), key=lambda i: self._abs[i])
        self._major = self._abs[self._axis]
        self._errors = [2 * a - self._major for a in self._abs]
        self._remaining = self._major + 1

    def __iter__(self) -> Iterator[Coord]:
        return self

    def __next__(self) -> Coord:
        while self._remaining > 0:
            point = Coord(self._current, kind=self._kind)
            self._remaining -= 1
            if self._remaining > 0:
                self._advance()
            if self._bounds is None or self._bounds.is_in_bounds(point):
                return point
        raise StopIteration

    def _advance(self) -> None:
        for i in range(len(self._current)):
            if i == self._axis:
                continue
            if self._errors[i] > 0:
                self._current[i] += self._steps[i]
                self._errors[i] -= 2 * self._major
            self._errors[i] += 2 * self._abs[i]
        self._current[self._axis] += self._steps[self._axis]
