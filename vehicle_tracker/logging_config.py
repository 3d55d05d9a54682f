"""Настройки логирования для сервиса."""
import logging

from .config import Settings


def configure_logging(settings: Settings) -> None:
    """
    Включает базовое логирование в stdout.

    Уровень и формат можно задать через переменные окружения:
    LOG_LEVEL и LOG_FORMAT.
    """
    logging.basicConfig(
        level=settings.log_level,
        format=settings.log_format,
        handlers=[logging.StreamHandler()],
    )
