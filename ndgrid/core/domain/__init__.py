"""
Domain value objects.

Координатные векторы, формы, контракт адресации и алгебра
полуоткрытых интервалов.
"""

from ndgrid.core.domain.addressing import LinearIndex, ShapeError
from ndgrid.core.domain.interval import (
    HalfOpen,
    bounds,
    dominates,
    dominates_or_is_dominated_by,
    intersection,
    normalize,
    overlaps,
    touches,
    union,
    universal_interval,
)
from ndgrid.core.domain.vector import Coord, Shape, Vector

__all__ = [
    # Addressing
    "LinearIndex",
    "ShapeError",
    # Vectors
    "Vector",
    "Coord",
    "Shape",
    # Intervals
    "HalfOpen",
    "bounds",
    "normalize",
    "intersection",
    "union",
    "overlaps",
    "touches",
    "dominates",
    "dominates_or_is_dominated_by",
    "universal_interval",
]
