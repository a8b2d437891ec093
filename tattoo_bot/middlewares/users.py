"""Middleware, сохраняющий профиль отправителя при каждом апдейте."""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from aiogram.types import User as TelegramUser

from tattoo_bot.database.repository import upsert_user
from tattoo_bot.utils.logger import logger


class UserTrackingMiddleware(BaseMiddleware):
    """Создаёт или обновляет пользователя в БД.

    AICODE-NOTE: Регистрируется как outer middleware на update, после
    встроенного UserContextMiddleware, который кладёт event_from_user в data.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        user: TelegramUser | None = data.get("event_from_user")

        if user is not None and not user.is_bot:
            try:
                await upsert_user(
                    telegram_id=user.id,
                    username=user.username,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    language_code=user.language_code,
                    is_premium=bool(user.is_premium),
                )
            except Exception as e:
                # Апдейт обрабатываем даже без сохранённого профиля
                logger.error(f"Ошибка сохранения пользователя {user.id}: {e}", exc_info=True)

        return await handler(event, data)
