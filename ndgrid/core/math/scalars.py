"""
Scalar Kinds — Numeric Capability Interface

Единое описание всех скалярных типов, из которых строятся векторы, формы
и интервалы. Числа Python не ограничены, поэтому диапазон машинного типа
явно хранится в `ScalarKind` и проверяется при каждом входе значения в вектор.

Возможности:
- Проверка диапазона и приведение (`fits`, `coerce`, `try_coerce`)
- Результат арифметики в типе (`arith_result`: целые проверяются, float
  переполняется в ±inf как IEEE-754)
- Нейтральные элементы (`zero`, `one`)
- Проверяемые инкремент/декремент (`checked_add`, `checked_sub`)
- Проверяемый модуль (`absolute`)
- Константы infimum/supremum для универсальных интервалов

ИНВАРИАНТЫ:
1. Целый тип никогда не хранит значение вне [minimum, maximum]
2. Целый тип никогда не хранит нецелое значение
3. У float-типов infimum = -inf, supremum = +inf
4. Расширяющее преобразование (`widens_to`) никогда не завершается ошибкой
"""

import math
import operator
from dataclasses import dataclass
from typing import Any, Dict, Final, Optional

from ndgrid.core.math.numerical_safeguards import EPS_F32, EPS_F64, F32_MAX, is_valid_float


# =============================================================================
# ИСКЛЮЧЕНИЯ
# =============================================================================


class ScalarConversionError(ValueError):
    """
    Значение не помещается в целевой скалярный тип.

    Выбрасывается сужающими преобразованиями, когда вызывающий требует
    успешного результата (например, signed → unsigned с отрицательной компонентой).
    """

    pass


# =============================================================================
# SCALAR KIND
# =============================================================================


_REGISTRY: Dict[str, "ScalarKind"] = {}


@dataclass(frozen=True)
class ScalarKind:
    """
    Дескриптор одного скалярного типа.

    Attributes:
        name: Короткое имя типа ('i32', 'u8', 'f64', ...)
        bits: Разрядность машинного представления
        signed: Представимы ли отрицательные значения
        is_float: Тип с плавающей точкой (иначе целый)
    """

    name: str
    bits: int
    signed: bool
    is_float: bool = False

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(f"bits must be positive, got {self.bits}")
        if self.is_float and not self.signed:
            raise ValueError("floating kinds are always signed")

    # -------------------------------------------------------------------------
    # Реестр
    # -------------------------------------------------------------------------

    @classmethod
    def by_name(cls, name: str) -> "ScalarKind":
        """
        Поиск предопределённого типа по имени.

        Raises:
            KeyError: Если тип с таким именем не зарегистрирован
        """
        try:
            return _REGISTRY[name]
        except KeyError:
            raise KeyError(f"Unknown scalar kind: {name!r}") from None

    # -------------------------------------------------------------------------
    # Диапазон
    # -------------------------------------------------------------------------

    @property
    def minimum(self) -> Any:
        if self.is_float:
            return -math.inf
        if self.signed:
            return -(1 << (self.bits - 1))
        return 0

    @property
    def maximum(self) -> Any:
        if self.is_float:
            return math.inf
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    @property
    def infimum(self) -> Any:
        return self.minimum

    @property
    def supremum(self) -> Any:
        return self.maximum

    @property
    def epsilon(self) -> float:
        """
        Машинный эпсилон float-типа.

        Raises:
            TypeError: Для целых типов
        """
        if not self.is_float:
            raise TypeError(f"epsilon is defined only for floating kinds, not {self.name}")
        return EPS_F32 if self.bits == 32 else EPS_F64

    @property
    def zero(self) -> Any:
        return 0.0 if self.is_float else 0

    @property
    def one(self) -> Any:
        return 1.0 if self.is_float else 1

    def widens_to(self, other: "ScalarKind") -> bool:
        """
        True, если любое значение этого типа представимо в `other`.

        Целый → float считается расширением, только если мантисса float
        точно вмещает все целые этого типа.
        """
        if self == other:
            return True
        if other.is_float:
            if self.is_float:
                return other.bits >= self.bits
            mantissa = 24 if other.bits == 32 else 53
            return self.bits - (1 if self.signed else 0) <= mantissa
        if self.is_float:
            return False
        return other.minimum <= self.minimum and self.maximum <= other.maximum

    # -------------------------------------------------------------------------
    # Приведение
    # -------------------------------------------------------------------------

    def fits(self, value: Any) -> bool:
        """Представимо ли `value` в этом типе."""
        return self.try_coerce(value) is not None

    def try_coerce(self, value: Any) -> Optional[Any]:
        """
        Приведение `value` к Python-представлению типа.

        Returns:
            int для целых типов, float для float-типов,
            None если значение непредставимо
        """
        if isinstance(value, (bool, str, bytes)):
            return None

        if self.is_float:
            try:
                result = float(value)
            except (TypeError, ValueError, OverflowError):
                return None
            if self.bits == 32 and math.isfinite(result) and abs(result) > F32_MAX:
                return None
            return result

        try:
            result = operator.index(value)
        except TypeError:
            try:
                as_float = float(value)
            except (TypeError, ValueError):
                return None
            if not is_valid_float(as_float) or not as_float.is_integer():
                return None
            result = int(as_float)

        if result < self.minimum or result > self.maximum:
            return None
        return result

    def coerce(self, value: Any) -> Any:
        """
        Приведение `value` к типу с ошибкой при неудаче.

        Raises:
            ScalarConversionError: Если значение непредставимо
        """
        result = self.try_coerce(value)
        if result is None:
            raise ScalarConversionError(f"Value {value!r} does not fit scalar kind {self.name}")
        return result

    def arith_result(self, value: Any) -> Optional[Any]:
        """
        Результат арифметической операции, приведённый к типу.

        Для float-типов конечный результат за пределами диапазона
        округляется до ±inf (как в IEEE-754), а не отклоняется.

        Returns:
            Значение типа или None при переполнении целого типа
        """
        result = self.try_coerce(value)
        if result is None and self.is_float and isinstance(value, (int, float)):
            if value != value:
                return result
            return math.inf if value > 0 else -math.inf
        return result

    # -------------------------------------------------------------------------
    # Проверяемая арифметика
    # -------------------------------------------------------------------------

    def checked_add(self, value: Any, step: Any = None) -> Optional[Any]:
        """value + step (по умолчанию one) или None при выходе из типа."""
        if step is None:
            step = self.one
        return self.arith_result(value + step)

    def checked_sub(self, value: Any, step: Any = None) -> Optional[Any]:
        """value - step (по умолчанию one) или None при выходе из типа."""
        if step is None:
            step = self.one
        return self.arith_result(value - step)

    def absolute(self, value: Any) -> Optional[Any]:
        """abs(value) или None при переполнении (например, минимум знакового типа)."""
        return self.arith_result(abs(value))

    def __repr__(self) -> str:
        return f"ScalarKind({self.name})"


def _register(kind: ScalarKind) -> ScalarKind:
    _REGISTRY[kind.name] = kind
    return kind


# =============================================================================
# ПРЕДОПРЕДЕЛЁННЫЕ ТИПЫ
# =============================================================================

I8: Final[ScalarKind] = _register(ScalarKind("i8", 8, True))
I16: Final[ScalarKind] = _register(ScalarKind("i16", 16, True))
I32: Final[ScalarKind] = _register(ScalarKind("i32", 32, True))
I64: Final[ScalarKind] = _register(ScalarKind("i64", 64, True))
I128: Final[ScalarKind] = _register(ScalarKind("i128", 128, True))
ISIZE: Final[ScalarKind] = _register(ScalarKind("isize", 64, True))

U8: Final[ScalarKind] = _register(ScalarKind("u8", 8, False))
U16: Final[ScalarKind] = _register(ScalarKind("u16", 16, False))
U32: Final[ScalarKind] = _register(ScalarKind("u32", 32, False))
U64: Final[ScalarKind] = _register(ScalarKind("u64", 64, False))
U128: Final[ScalarKind] = _register(ScalarKind("u128", 128, False))
USIZE: Final[ScalarKind] = _register(ScalarKind("usize", 64, False))

F32: Final[ScalarKind] = _register(ScalarKind("f32", 32, True, is_float=True))
F64: Final[ScalarKind] = _register(ScalarKind("f64", 64, True, is_float=True))
