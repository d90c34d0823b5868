"""
Numerical Safeguards — Float Constants and Guards

Машинные константы и небольшие проверки для float-части векторной алгебры:
- Машинный эпсилон каждого float-типа (порог нормализации)
- Детекция NaN/Inf
- Сравнение с эпсилоном перед делением
"""

import math
from typing import Final

# =============================================================================
# МАШИННЫЕ КОНСТАНТЫ
# =============================================================================

# Машинный эпсилон IEEE-754 binary32 (2**-23)
EPS_F32: Final[float] = 1.1920928955078125e-07

# Машинный эпсилон IEEE-754 binary64 (2**-52)
EPS_F64: Final[float] = 2.220446049250313e-16

# Наибольшее конечное значение binary32
F32_MAX: Final[float] = 3.4028234663852886e38


# =============================================================================
# ПРОВЕРКИ NaN/Inf
# =============================================================================


def is_nan(value: float) -> bool:
    """True для NaN (единственное значение, не равное самому себе)."""
    return value != value


def is_valid_float(value: float) -> bool:
    """
    Проверка, что float конечен (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если конечно, False для NaN или Inf
    """
    return not is_nan(value) and not math.isinf(value)


# =============================================================================
# СРАВНЕНИЯ С ЭПСИЛОНОМ
# =============================================================================


def exceeds_epsilon(value: float, eps: float) -> bool:
    """
    Строгая проверка `value > eps` перед делением на `value`.

    Args:
        value: Неотрицательная величина
        eps: Порог (должен быть положительным)

    Returns:
        True если деление на `value` безопасно

    Raises:
        ValueError: Если eps не положителен

    Examples:
        >>> exceeds_epsilon(1.0, 1e-7)
        True
        >>> exceeds_epsilon(1e-9, 1e-7)
        False
        >>> exceeds_epsilon(1e-7, 1e-7)
        False
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")
    return value > eps
