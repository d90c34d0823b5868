"""
Core math modules for ndgrid

Скалярные возможности и числовые проверки, общие для векторов, форм и интервалов.
"""

# Numerical Safeguards
from ndgrid.core.math.numerical_safeguards import (
    EPS_F32,
    EPS_F64,
    F32_MAX,
    exceeds_epsilon,
    is_nan,
    is_valid_float,
)

# Scalar Kinds
from ndgrid.core.math.scalars import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    ScalarConversionError,
    ScalarKind,
)

# Ordered Float
from ndgrid.core.math.ordered_float import OrderedFloat

__all__ = [
    # Numerical Safeguards — Constants
    "EPS_F32",
    "EPS_F64",
    "F32_MAX",
    # Numerical Safeguards — Functions
    "exceeds_epsilon",
    "is_nan",
    "is_valid_float",
    # Scalar Kinds — Types
    "ScalarKind",
    "ScalarConversionError",
    # Scalar Kinds — Predefined
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "ISIZE",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "USIZE",
    "F32",
    "F64",
    # Ordered Float
    "OrderedFloat",
]
