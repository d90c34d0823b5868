"""
Logging — Lightweight Logging Helper

Модули получают логгер через `logging.getLogger(__name__)`; при импорте
ничего не настраивается. Приложения (или тесты), которым нужен вывод,
один раз вызывают `setup_default_logging()`.
"""

import logging
from typing import Optional, Union

from ndgrid.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_default_logging(level: Optional[Union[int, str]] = None) -> bool:
    """
    Однократная минимальная настройка логирования.

    Ничего не делает, если у корневого логгера уже есть обработчики
    (приложение настроило логирование само).

    Args:
        level: Номер или имя уровня; по умолчанию Settings.log_level

    Returns:
        True, если настройка применена, False, если вызов ничего не сделал
    """
    if level is None:
        lvl = get_settings().log_level_number
    elif isinstance(level, str):
        lvl = getattr(logging, level.upper(), logging.INFO)
    else:
        lvl = int(level)

    root = logging.getLogger()
    if root.handlers:
        return False
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    return True


__all__ = ["setup_default_logging", "LOG_FORMAT"]
