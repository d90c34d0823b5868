"""
JSON Schema Contract Validators

Валидация JSON-данных по формальным JSON Schema контрактам,
поставляемым с пакетом, с помощью библиотеки jsonschema (Draft 2020-12).

Схемы:
- array_record.json (структурированная запись плотного массива)

Схема проверяет структуру и типы; межполевые инварианты (длина data
против dims, согласованность шагов) проверяет модель ArrayRecord.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Ищет схемы в директории `schema/` рядом с этим модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'array_record')

        Returns:
            Схема в виде dict

        Raises:
            FileNotFoundError: Если файл схемы не существует
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Мета-валидация самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug("loaded schema %s from %s", schema_name, schema_path)
        self._schemas[schema_name] = schema
        return schema


# Загрузчик уровня модуля
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс валидаторов контрактов.

    Оборачивает валидацию данных по одной JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных по схеме.

        Raises:
            ValidationError: Если данные нарушают схему
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности без исключения."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Итерация по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class ArrayRecordValidator(ContractValidator):
    """Валидатор контракта array_record."""

    def __init__(self):
        super().__init__("array_record")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_array_record(data: Dict[str, Any]) -> None:
    """
    Валидация данных array_record.

    Raises:
        ValidationError: Если данные нарушают схему
    """
    ArrayRecordValidator().validate(data)
