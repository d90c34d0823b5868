"""
Rasterization of coordinate pairs into cell sequences.

Растеризация пары координат в последовательность ячеек.
"""

from ndgrid.raster.line import Line, LineIterator

__all__ = ["Line", "LineIterator"]
