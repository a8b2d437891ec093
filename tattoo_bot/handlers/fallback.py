"""Ответы на сообщения вне диалогов: ключевые слова, стикеры, фото."""

from aiogram import F, Router
from aiogram.types import CallbackQuery, Message

from tattoo_bot import texts

router = Router(name="fallback")

# Ключевое слово (подстрока) → ответ; проверяются по порядку
KEYWORD_REPLIES: list[tuple[tuple[str, ...], str]] = [
    (("тату", "татуировк"), texts.KEYWORD_TATTOO),
    (("цена", "стоимость", "сколько стоит"), texts.KEYWORD_PRICE),
    (("контакт", "связаться", "адрес"), texts.KEYWORD_CONTACT),
]


def pick_canned_reply(text: str) -> str:
    """Подбирает ответ по ключевым словам, иначе приветствие."""
    lowered = text.lower()
    for keywords, reply in KEYWORD_REPLIES:
        if any(keyword in lowered for keyword in keywords):
            return reply
    return texts.GREETING


@router.message(F.text)
async def handle_text(message: Message) -> None:
    await message.answer(pick_canned_reply(message.text or ""))


@router.message(F.sticker)
async def handle_sticker(message: Message) -> None:
    await message.answer(texts.STICKER)


@router.message(F.photo)
async def handle_photo(message: Message) -> None:
    """Фото без активной заявки."""
    await message.answer(texts.PHOTO_OUTSIDE_FLOW)


@router.callback_query()
async def handle_stale_callback(callback: CallbackQuery) -> None:
    """Кнопки, для которых нет обработчика."""
    await callback.answer(texts.STALE_BUTTON)
