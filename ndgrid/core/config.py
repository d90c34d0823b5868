"""
Settings — Environment-Driven Configuration

Неизменяемый снимок настроек, читаемый из переменных окружения один раз
и кэшируемый. Некорректные значения заменяются значениями по умолчанию.

Переменные:
- NDGRID_LOG_LEVEL: уровень для setup_default_logging (по умолчанию WARNING)
- NDGRID_MAX_CELLS: верхняя граница числа ячеек массива (по умолчанию без ограничения)
"""

import logging
import os
from dataclasses import dataclass
from typing import Final, Optional

ENV_LOG_LEVEL: Final[str] = "NDGRID_LOG_LEVEL"
ENV_MAX_CELLS: Final[str] = "NDGRID_MAX_CELLS"

DEFAULT_LOG_LEVEL: Final[str] = "WARNING"


@dataclass(frozen=True)
class Settings:
    """
    Настройки библиотеки.

    Attributes:
        log_level: Имя уровня логирования (например, 'DEBUG', 'INFO')
        max_cells: Наибольший буфер, который может выделить массив; None = без ограничения
    """

    log_level: str = DEFAULT_LOG_LEVEL
    max_cells: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_cells is not None and self.max_cells <= 0:
            raise ValueError(f"max_cells must be positive, got {self.max_cells}")

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING


def _env_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    level = raw.strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return default


def _env_positive_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def load_settings() -> Settings:
    """Снимок Settings из текущего окружения."""
    return Settings(
        log_level=_env_level(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
        max_cells=_env_positive_int(ENV_MAX_CELLS),
    )


_settings: Settings = load_settings()


def get_settings() -> Settings:
    """Текущий снимок настроек."""
    return _settings


def reload_settings() -> Settings:
    """Перечитать окружение и заменить кэшированный снимок."""
    global _settings
    _settings = load_settings()
    return _settings
