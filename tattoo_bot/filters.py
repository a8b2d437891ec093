"""Фильтры aiogram."""

from aiogram.filters import BaseFilter
from aiogram.types import Message


class NotCommand(BaseFilter):
    """Текст или подпись не начинаются с '/'."""

    async def __call__(self, message: Message) -> bool:
        content = message.text or message.caption or ""
        return not content.startswith("/")
