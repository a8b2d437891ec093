"""Подключение Tortoise ORM и создание схемы."""

from pathlib import Path
from typing import Any

from tortoise import Tortoise

from tattoo_bot.config import settings
from tattoo_bot.utils.logger import logger

MODELS_MODULE = "tattoo_bot.database.models"


def build_tortoise_config(database_url: str) -> dict[str, Any]:
    # AICODE-NOTE: Tortoise ORM требует специфическую структуру конфига,
    # поэтому используем dict[str, Any] вместо TypedDict
    return {
        "connections": {"default": database_url},
        "apps": {
            "models": {
                "models": [MODELS_MODULE],
                "default_connection": "default",
            }
        },
        "use_tz": False,
        "timezone": "UTC",
    }


def sqlite_path(database_url: str) -> Path | None:
    """Путь к файлу SQLite из DATABASE_URL, None для in-memory и других СУБД."""
    if not database_url.startswith("sqlite://") or ":memory:" in database_url:
        return None
    return Path(database_url.removeprefix("sqlite://"))


async def init_db(database_url: str | None = None) -> None:
    """
    Подключается к БД и создаёт недостающие таблицы
    (users, tattoo_requests, master_replies).
    """
    url = database_url or settings.database_url

    db_file = sqlite_path(url)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    await Tortoise.init(config=build_tortoise_config(url))
    await Tortoise.generate_schemas(safe=True)
    logger.info(f"✅ База данных подключена: {db_file or url}")


async def close_db() -> None:
    await Tortoise.close_connections()
    logger.info("✅ База данных отключена")
