"""
Addressing — Coordinate ↔ Linear Offset Contract

Любое значение с формой (`Shape`, плотный массив) реализует `LinearIndex`,
чтобы отображать координаты в смещения плоского буфера и обратно.

Раскладка: смешанная позиционная система, ось 0 меняется быстрее всех:

    offset = c[0] + e[0] * (c[1] + e[1] * (c[2] + ...))

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. index() возвращает смещение тогда и только тогда, когда is_in_bounds(), иначе None
2. Для c в границах: unindex(index_unchecked(c)) == c
3. Для o в [0, cardinality): index_unchecked(unindex(o)) == o
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


# =============================================================================
# ИСКЛЮЧЕНИЯ
# =============================================================================


class ShapeError(ValueError):
    """
    Некорректное описание формы.

    Выбрасывается для нулевых, отрицательных или неприводимых протяжённостей
    и для буферов, длина которых не совпадает с заявленной формой. Ошибка
    программиста: никогда не выбрасывается для координаты вне диапазона.
    """

    pass


# =============================================================================
# КОНТРАКТ
# =============================================================================


class LinearIndex(ABC):
    """
    Возможность адресации для значения с формой.

    Подклассы реализуют `index_unchecked`, `unindex`, `is_in_bounds` и
    `cardinality`; проверяющий границы `index` общий.
    """

    __slots__ = ()

    @abstractmethod
    def index_unchecked(self, coord: Any) -> Optional[int]:
        """
        Линейное смещение `coord` без проверки диапазона.

        Для координаты вне диапазона результат бессмыслен; в буфер он
        попадает только через `index`.
        """

    @abstractmethod
    def unindex(self, offset: int) -> Optional[Any]:
        """Координата по смещению или None вне [0, cardinality)."""

    @abstractmethod
    def is_in_bounds(self, coord: Any) -> bool:
        """True, если каждая компонента лежит в [0, протяжённость оси)."""

    @property
    @abstractmethod
    def cardinality(self) -> int:
        """Общее число адресуемых ячеек."""

    def index(self, coord: Any) -> Optional[int]:
        """
        Безопасное преобразование координаты в смещение.

        Returns:
            Линейное смещение или None, если `coord` вне границ
        """
        if self.is_in_bounds(coord):
            return self.index_unchecked(coord)
        return None
