"""
ArrayRecord — Structured Record of a Dense Array

Неизменяемая Pydantic модель с буфером, протяжённостями и шагами
`ArrayND`. Совместима с JSON Schema контрактом
(ndgrid/core/contracts/schema/array_record.json).

Валидация модели повторяет инварианты массива, поэтому запись, прочитанная
из JSON, всегда превращается обратно в корректный массив:
- каждая протяжённость положительна
- len(data) == prod(dims)
- dim_strides[0] == 1, dim_strides[k] == dim_strides[k-1] * dims[k-1]
"""

import logging
import math
from typing import Any, List

from pydantic import BaseModel, Field, model_validator

from ndgrid.array.dense import ArrayND
from ndgrid.core.domain.vector import Shape

logger = logging.getLogger(__name__)


class ArrayRecord(BaseModel):
    """
    Сериализуемый снимок ArrayND.

    Неизменяемая (frozen=True): для изменённого массива строится новая запись.
    """

    data: List[Any] = Field(..., description="Ячейки в линейном порядке (ось 0 быстрее всех)")
    dims: List[int] = Field(..., min_length=1, description="Протяжённость по оси")
    dim_strides: List[int] = Field(..., min_length=1, description="Шаг по оси")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_layout(self) -> "ArrayRecord":
        if any(d <= 0 for d in self.dims):
            raise ValueError(f"dims must be positive, got {self.dims}")
        if len(self.dim_strides) != len(self.dims):
            raise ValueError(
                f"dim_strides has {len(self.dim_strides)} entries for {len(self.dims)} dims"
            )
        expected = list(Shape(self.dims).strides)
        if self.dim_strides != expected:
            raise ValueError(f"dim_strides {self.dim_strides} inconsistent with dims, expected {expected}")
        cells = math.prod(self.dims)
        if len(self.data) != cells:
            raise ValueError(f"data has {len(self.data)} cells, dims require {cells}")
        return self


def to_record(array: ArrayND) -> ArrayRecord:
    """Снимок массива (буфер копируется)."""
    logger.debug("record of array dims=%s", array.dims)
    return ArrayRecord(data=list(array.data), dims=list(array.dims), dim_strides=list(array.strides))


def from_record(record: ArrayRecord) -> ArrayND:
    """Восстановление массива из валидированной записи."""
    logger.debug("array from record dims=%s", record.dims)
    return ArrayND.from_data(record.dims, record.data)
