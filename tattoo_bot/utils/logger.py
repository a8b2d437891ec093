"""Логирование: консоль и ротируемый файл в каталоге settings.log_dir."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from tattoo_bot.config import settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE = "bot.log"
MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5

# Пишут в те же handlers, но только предупреждения и ошибки
THIRD_PARTY_LOGGERS = ("aiogram", "tortoise", "aiosqlite")


def setup_logger(
    name: str = "tattoo-bot",
    level: str | None = None,
    log_dir: str | Path | None = None,
    to_file: bool | None = None,
    libraries: tuple[str, ...] = THIRD_PARTY_LOGGERS,
) -> logging.Logger:
    """
    Настраивает логгер приложения.

    Args:
        name: Имя логгера
        level: Уровень (по умолчанию LOG_LEVEL)
        log_dir: Каталог для bot.log (по умолчанию LOG_DIR)
        to_file: Писать ли в файл (по умолчанию LOG_TO_FILE)
        libraries: Логгеры библиотек, которые получают те же handlers

    Returns:
        Настроенный логгер
    """
    logger: logging.Logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, (level or settings.log_level).upper()))
    logger.propagate = False

    # Удаляем существующие handlers (если есть)
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler: logging.StreamHandler[Any] = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [console_handler]

    if settings.log_to_file if to_file is None else to_file:
        logs_dir = Path(log_dir or settings.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_dir / LOG_FILE,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for handler in handlers:
        logger.addHandler(handler)

    for library in libraries:
        library_logger = logging.getLogger(library)
        library_logger.setLevel(logging.WARNING)
        library_logger.handlers = list(handlers)

    return logger


# Глобальный логгер
logger = setup_logger()
