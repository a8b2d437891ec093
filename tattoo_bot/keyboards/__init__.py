"""Модуль для создания inline клавиатур."""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from tattoo_bot.config import settings
from tattoo_bot.types import ReplyTarget

REPLY_CALLBACK_PREFIX = "reply"


def build_reply_callback(client_id: int, request_id: int | None = None) -> str:
    """Формирует callback_data кнопки ответа: reply:<client_id>:<request_id>."""
    return f"{REPLY_CALLBACK_PREFIX}:{client_id}:{request_id if request_id is not None else ''}"


def parse_reply_callback(data: str | None) -> ReplyTarget | None:
    """
    Разбирает callback_data кнопки ответа.

    Args:
        data: Строка вида reply:<client_id>:<request_id>

    Returns:
        Кортеж (client_id, request_id) или None, если формат неверный
    """
    if not data:
        return None

    parts = data.split(":")
    if len(parts) != 3 or parts[0] != REPLY_CALLBACK_PREFIX:
        return None

    try:
        client_id = int(parts[1])
        request_id = int(parts[2]) if parts[2] else None
    except ValueError:
        return None

    return client_id, request_id


def get_reply_keyboard(client_id: int, request_id: int | None = None) -> InlineKeyboardMarkup:
    """Кнопка «Ответить клиенту» под заявкой в чате мастера."""
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text="💬 Ответить клиенту",
                    callback_data=build_reply_callback(client_id, request_id),
                )
            ],
        ]
    )


def get_contact_keyboard() -> InlineKeyboardMarkup:
    """Ссылки на салон для /contact."""
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text="📷 Instagram",
                    url=f"https://instagram.com/{settings.salon_instagram}",
                )
            ],
            [
                InlineKeyboardButton(
                    text="🗺 Открыть на карте",
                    url=(
                        "https://yandex.ru/maps/?pt="
                        f"{settings.salon_longitude},{settings.salon_latitude}&z=16"
                    ),
                )
            ],
        ]
    )


__all__ = [
    "REPLY_CALLBACK_PREFIX",
    "build_reply_callback",
    "get_contact_keyboard",
    "get_reply_keyboard",
    "parse_reply_callback",
]
