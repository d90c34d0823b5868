"""
Плотные N-мерные массивы и их текстовые/структурные представления.
"""

from ndgrid.array.dense import ArrayND
from ndgrid.array.record import ArrayRecord, from_record, to_record
from ndgrid.array.text_grid import TextGridError, char_grid_from_lines, read_char_grid

__all__ = [
    # Dense array
    "ArrayND",
    # Text grids
    "TextGridError",
    "char_grid_from_lines",
    "read_char_grid",
    # Records
    "ArrayRecord",
    "to_record",
    "from_record",
]
