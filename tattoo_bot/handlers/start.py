"""Handler для информационных команд: /start, /help, /contact, /prices и др."""

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from tattoo_bot import texts
from tattoo_bot.config import settings
from tattoo_bot.database.repository import list_user_requests
from tattoo_bot.keyboards import get_contact_keyboard
from tattoo_bot.utils.logger import logger

router = Router(name="start")


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    """Обработка команды /start."""
    await message.answer(texts.WELCOME)


@router.message(Command("help"))
async def cmd_help(message: Message) -> None:
    """Обработка команды /help."""
    await message.answer(texts.HELP)


@router.message(Command("contact"))
async def cmd_contact(message: Message) -> None:
    """
    Команда /contact — контакты салона и его геолокация.
    """
    await message.answer(texts.CONTACT, reply_markup=get_contact_keyboard())

    try:
        await message.answer_location(
            latitude=settings.salon_latitude, longitude=settings.salon_longitude
        )
    except Exception as e:
        logger.error(f"Ошибка при отправке геолокации салона: {e}", exc_info=True)


@router.message(Command("prices"))
async def cmd_prices(message: Message) -> None:
    """Обработка команды /prices."""
    await message.answer(texts.PRICES)


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext) -> None:
    """
    Команда /cancel — прерывает текущую заявку или ответ мастера.
    """
    if not message.from_user:
        return

    current_state = await state.get_state()
    if current_state is None:
        await message.answer(texts.NOTHING_TO_CANCEL)
        return

    await state.clear()
    logger.info(f"Пользователь {message.from_user.id} отменил {current_state}")
    await message.answer(texts.CANCELLED)


@router.message(Command("myrequests"))
async def cmd_my_requests(message: Message) -> None:
    """Команда /myrequests — последние заявки пользователя."""
    if not message.from_user:
        return

    requests = await list_user_requests(message.from_user.id)
    if not requests:
        await message.answer(texts.NO_REQUESTS)
        return

    await message.answer(texts.requests_list(requests))
