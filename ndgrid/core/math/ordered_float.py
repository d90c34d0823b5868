"""
OrderedFloat — Totally Ordered Floating-Point Wrapper

Float, который никогда не бывает NaN, поэтому `<`, `<=`, `==` задают
полный порядок. Используется как граница интервала (включая знаковый тест
доминирования, которому нужны вычитание и умножение) и, если значение
целое, как протяжённость массива.
"""

import math
from functools import total_ordering
from typing import Any, Union

from ndgrid.core.math.numerical_safeguards import is_nan

Real = Union[int, float, "OrderedFloat"]


@total_ordering
class OrderedFloat:
    """
    Неизменяемый float без NaN с полным порядком.

    Сравнения и арифметика принимают OrderedFloat и обычные вещественные
    числа; результат арифметики — снова OrderedFloat.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Real) -> None:
        raw = float(value)
        if is_nan(raw):
            raise ValueError("OrderedFloat cannot hold NaN")
        object.__setattr__(self, "_value", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("OrderedFloat is immutable")

    @property
    def value(self) -> float:
        return self._value

    # ── преобразования ──────────────────────────────────────────
    def __float__(self) -> float:
        return self._value

    def __int__(self) -> int:
        return int(self._value)

    def is_integer(self) -> bool:
        return self._value.is_integer()

    def is_infinite(self) -> bool:
        return math.isinf(self._value)

    # ── порядок ──────────────────────────────────────────────────
    @staticmethod
    def _raw(other: Any) -> Any:
        if isinstance(other, OrderedFloat):
            return other._value
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return float(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value == raw

    def __lt__(self, other: Any) -> bool:
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value < raw

    def __hash__(self) -> int:
        return hash(self._value)

    # ── арифметика ───────────────────────────────────────────────
    def __add__(self, other: Any) -> "OrderedFloat":
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return OrderedFloat(self._value + raw)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "OrderedFloat":
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return OrderedFloat(self._value - raw)

    def __rsub__(self, other: Any) -> "OrderedFloat":
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return OrderedFloat(raw - self._value)

    def __mul__(self, other: Any) -> "OrderedFloat":
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        # inf * 0 даёт NaN: ValueError из конструктора
        return OrderedFloat(self._value * raw)

    __rmul__ = __mul__

    def __neg__(self) -> "OrderedFloat":
        return OrderedFloat(-self._value)

    def __abs__(self) -> "OrderedFloat":
        return OrderedFloat(abs(self._value))

    def __repr__(self) -> str:
        return f"OrderedFloat({self._value!r})"
