"""Сервис уведомлений: заявки мастеру, ответы мастера клиентам."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import Bot
from aiogram.exceptions import TelegramNetworkError, TelegramRetryAfter
from aiogram.types import InputMediaPhoto
from tenacity import (
    RetryCallState,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tattoo_bot import texts
from tattoo_bot.config import settings
from tattoo_bot.database.models import TattooRequest
from tattoo_bot.keyboards import get_reply_keyboard
from tattoo_bot.services.sessions import ClientProfile
from tattoo_bot.utils.logger import logger

# Лимит Telegram на длину подписи к фото
CAPTION_LIMIT = 1024

_BACKOFF = wait_exponential(multiplier=1, min=1, max=10)


def wait_telegram(retry_state: RetryCallState) -> float:
    """
    Пауза перед повтором вызова Telegram API.

    При flood wait ждём ровно retry_after из ответа Telegram,
    при сетевых сбоях экспоненциальная пауза.
    """
    error = retry_state.outcome.exception() if retry_state.outcome else None
    if isinstance(error, TelegramRetryAfter):
        return float(error.retry_after)
    return _BACKOFF(retry_state)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_telegram,
    retry=retry_if_exception_type((TelegramNetworkError, TelegramRetryAfter)),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _call(method: Callable[..., Awaitable[Any]], **kwargs: Any) -> Any:
    """Вызов Telegram API с повтором при сетевых сбоях и flood wait."""
    return await method(**kwargs)


async def notify_master_about_request(
    bot: Bot,
    request: TattooRequest,
    profile: ClientProfile,
) -> bool:
    """
    Отправляет мастеру карточку новой заявки с кнопкой ответа.

    Одно фото уходит с подписью, несколько уходят альбомом с отдельным
    сообщением для кнопки, без фото отправляется только текст.

    Args:
        bot: Aiogram Bot instance
        request: Сохранённая заявка
        profile: Профиль клиента

    Returns:
        True, если уведомление доставлено
    """
    master_chat_id = settings.master_chat_id
    photos: list[str] = list(request.photos or [])

    card = texts.master_request_card(
        request_id=request.id,
        profile=profile,
        description=request.description,
        photos_count=len(photos),
        created_at=request.created_at,
    )
    keyboard = get_reply_keyboard(profile.id, request.id)
    caption_fits = len(card) <= CAPTION_LIMIT

    try:
        if len(photos) == 1:
            if caption_fits:
                await _call(
                    bot.send_photo,
                    chat_id=master_chat_id,
                    photo=photos[0],
                    caption=card,
                    reply_markup=keyboard,
                )
            else:
                await _call(bot.send_photo, chat_id=master_chat_id, photo=photos[0])
                await _call(
                    bot.send_message, chat_id=master_chat_id, text=card, reply_markup=keyboard
                )

        elif photos:
            media = [InputMediaPhoto(media=file_id) for file_id in photos]
            if caption_fits:
                media[0] = InputMediaPhoto(media=photos[0], caption=card)
            await _call(bot.send_media_group, chat_id=master_chat_id, media=media)

            # К альбому нельзя прикрепить кнопку, она уходит отдельным сообщением
            await _call(
                bot.send_message,
                chat_id=master_chat_id,
                text=texts.REPLY_BUTTON_PROMPT if caption_fits else card,
                reply_markup=keyboard,
            )

        else:
            await _call(
                bot.send_message, chat_id=master_chat_id, text=card, reply_markup=keyboard
            )

    except Exception as e:
        logger.error(
            f"❌ Не удалось отправить заявку #{request.id} мастеру "
            f"(master_chat_id={master_chat_id}, user_id={profile.id}, "
            f"photos={len(photos)}): {e}",
            exc_info=True,
        )
        return False

    logger.info(
        f"Заявка #{request.id} отправлена мастеру "
        f"(master_chat_id={master_chat_id}, user_id={profile.id}, photos={len(photos)})"
    )
    return True


async def deliver_reply_to_client(bot: Bot, client_id: int, message: str, reply_id: int) -> None:
    """
    Доставляет ответ мастера клиенту.

    Raises:
        Exception: Ошибка Telegram API пробрасывается вызывающему
    """
    await _call(bot.send_message, chat_id=client_id, text=texts.reply_for_client(message))
    logger.info(f"Ответ #{reply_id} доставлен клиенту {client_id}")
