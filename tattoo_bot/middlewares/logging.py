"""Middleware для логирования входящих сообщений и нажатий кнопок."""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from tattoo_bot.utils.logger import logger

PREVIEW_LENGTH = 100


def describe_event(event: TelegramObject) -> str | None:
    """
    Краткое описание события для лога.

    Returns:
        Строка вида «<что> от <username> (ID: <id>)» или None для прочих событий
    """
    if isinstance(event, Message):
        if event.text:
            content = event.text[:PREVIEW_LENGTH]
        elif event.photo:
            group = f" group={event.media_group_id}" if event.media_group_id else ""
            caption = f" caption={event.caption[:PREVIEW_LENGTH]!r}" if event.caption else ""
            content = f"<photo{group}{caption}>"
        elif event.sticker:
            content = "<sticker>"
        else:
            content = "<non-text message>"
        prefix = "📨 Message"
    elif isinstance(event, CallbackQuery):
        content = f"<button {event.data}>"
        prefix = "🔘 Callback"
    else:
        return None

    user = event.from_user
    username = (user.username or user.first_name) if user else "Unknown"
    user_id = user.id if user else "Unknown"
    return f"{prefix} from {username} (ID: {user_id}): {content}"


class LoggingMiddleware(BaseMiddleware):
    """Логирует сообщения и callback-и до передачи в хендлеры."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        description = describe_event(event)
        if description:
            logger.info(description)

        return await handler(event, data)
