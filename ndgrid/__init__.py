"""
ndgrid — Spatial Indexing Toolkit

Координатные векторы фиксированной размерности, плотные N-мерные массивы
с адресацией по шагам и алгебра полуоткрытых интервалов.
"""

from ndgrid.array import (
    ArrayND,
    ArrayRecord,
    TextGridError,
    char_grid_from_lines,
    from_record,
    read_char_grid,
    to_record,
)
from ndgrid.core.domain import (
    Coord,
    HalfOpen,
    LinearIndex,
    Shape,
    ShapeError,
    Vector,
    dominates,
    dominates_or_is_dominated_by,
    intersection,
    overlaps,
    touches,
    union,
    universal_interval,
)
from ndgrid.core.math import OrderedFloat, ScalarConversionError, ScalarKind
from ndgrid.raster import Line, LineIterator

__version__ = "0.1.0"

__all__ = [
    "ArrayND",
    "ArrayRecord",
    "Coord",
    "HalfOpen",
    "Line",
    "LineIterator",
    "LinearIndex",
    "OrderedFloat",
    "ScalarConversionError",
    "ScalarKind",
    "Shape",
    "ShapeError",
    "TextGridError",
    "Vector",
    "char_grid_from_lines",
    "dominates",
    "dominates_or_is_dominated_by",
    "from_record",
    "intersection",
    "overlaps",
    "read_char_grid",
    "to_record",
    "touches",
    "union",
    "universal_interval",
]
