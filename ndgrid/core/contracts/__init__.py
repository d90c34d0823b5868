"""
Contract Validation Module

Валидация JSON контрактов ndgrid.
"""

from .validators import (
    ArrayRecordValidator,
    ContractValidator,
    SchemaLoader,
    validate_array_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ArrayRecordValidator",
    # Functions
    "validate_array_record",
]
