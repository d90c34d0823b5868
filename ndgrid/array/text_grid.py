"""
Text Grids — 2-D Character Arrays from Line-Oriented Text

Строка i становится рядом y = i, символ j строки — столбцом x = j,
поэтому у массива протяжённости (width, height).
"""

import logging
from typing import Iterable, TextIO

from ndgrid.array.dense import ArrayND

logger = logging.getLogger(__name__)


class TextGridError(ValueError):
    """Пустой или неровный текстовый ввод."""

    pass


def char_grid_from_lines(lines: Iterable[str]) -> ArrayND:
    """
    Массив одиночных символов с протяжённостями (width, height).

    Завершающие '\\n' / '\\r\\n' отбрасываются.

    Raises:
        TextGridError: Если строк нет, строки пусты или различаются
            по ширине
    """
    rows = [line.rstrip("\r\n") for line in lines]
    if not rows:
        raise TextGridError("Text grid needs at least one line")

    width = max(len(row) for row in rows)
    for y, row in enumerate(rows):
        if len(row) != width:
            raise TextGridError(f"Line {y} has width {len(row)}, expected {width}")
    if width == 0:
        raise TextGridError("Text grid lines are empty")

    logger.debug("text grid %dx%d", width, len(rows))
    return ArrayND.from_data((width, len(rows)), "".join(rows))


def read_char_grid(stream: TextIO) -> ArrayND:
    """Чтение всего текстового потока (одно блокирующее чтение) в сетку символов."""
    return char_grid_from_lines(stream.read().splitlines())
