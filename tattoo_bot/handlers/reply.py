"""Handler для ответов мастера клиентам (/reply и кнопка под заявкой)."""

from aiogram import Bot, F, Router
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from tattoo_bot import texts
from tattoo_bot.exceptions import (
    AccessDeniedError,
    ClientNotFoundError,
    InvalidCommandError,
    RequestNotFoundError,
    TattooBotError,
)
from tattoo_bot.filters import NotCommand
from tattoo_bot.keyboards import REPLY_CALLBACK_PREFIX, parse_reply_callback
from tattoo_bot.services.replies import complete_reply, is_master, parse_reply_args, start_reply
from tattoo_bot.services.sessions import ReplyIntake, get_session
from tattoo_bot.states import ReplyFlow
from tattoo_bot.utils.logger import logger

router = Router(name="reply")


def _error_text(error: TattooBotError) -> str:
    """Текст ошибки открытия сессии для мастера."""
    if isinstance(error, AccessDeniedError):
        return texts.ACCESS_DENIED
    if isinstance(error, ClientNotFoundError):
        return texts.client_not_found(error.client_id)
    if isinstance(error, RequestNotFoundError):
        return texts.request_not_found(error.request_id)
    return texts.REPLY_USAGE


@router.message(Command("reply"))
async def cmd_reply(message: Message, command: CommandObject, state: FSMContext) -> None:
    """
    Команда /reply <client_id> [request_id] — только для мастера.
    """
    if not message.from_user:
        await message.answer(texts.UNKNOWN_USER)
        return

    master_id = message.from_user.id

    # Права проверяем до разбора аргументов, чтобы не показывать справку чужим
    if not is_master(master_id):
        logger.warning(f"Попытка доступа к /reply от не-мастера: {master_id}")
        await message.answer(texts.ACCESS_DENIED)
        return

    try:
        client_id, request_id = parse_reply_args(command.args)
    except InvalidCommandError:
        await message.answer(texts.REPLY_USAGE)
        return

    try:
        session = await start_reply(state, master_id, client_id, request_id)
    except TattooBotError as e:
        logger.info(f"Сессия ответа не открыта: {e.message}")
        await message.answer(_error_text(e))
        return

    await message.answer(texts.reply_prompt(session.client, session.request_id))


@router.callback_query(F.data.startswith(f"{REPLY_CALLBACK_PREFIX}:"))
async def handle_reply_callback(callback: CallbackQuery, state: FSMContext) -> None:
    """Кнопка «Ответить клиенту» под заявкой."""
    if not callback.from_user:
        return

    target = parse_reply_callback(callback.data)
    if target is None:
        await callback.answer(texts.STALE_BUTTON, show_alert=True)
        return

    client_id, request_id = target

    try:
        session = await start_reply(state, callback.from_user.id, client_id, request_id)
    except TattooBotError as e:
        logger.info(f"Сессия ответа через кнопку не открыта: {e.message}")
        await callback.answer(_error_text(e), show_alert=True)
        return

    if isinstance(callback.message, Message):
        await callback.message.answer(texts.reply_prompt(session.client, session.request_id))
    await callback.answer("✅ Готов к ответу")


@router.message(ReplyFlow.awaiting_message, F.text, NotCommand())
async def handle_reply_text(message: Message, bot: Bot, state: FSMContext) -> None:
    """Текст мастера в сессии ответа уходит клиенту."""
    if not message.from_user or not message.text:
        return

    session = await get_session(state)
    if not isinstance(session, ReplyIntake):
        logger.warning(
            f"Нет данных ответа в state {await state.get_state()} (chat={message.chat.id})"
        )
        await state.clear()
        await message.answer(texts.REPLY_SAVE_FAILED)
        return

    try:
        result = await complete_reply(bot, state, message.from_user.id, session, message.text)
    except Exception as e:
        logger.error(
            f"❌ Ошибка сохранения ответа клиенту {session.client.id}: {e}", exc_info=True
        )
        await message.answer(texts.REPLY_SAVE_FAILED)
        return

    if not result.delivered:
        await message.answer(texts.reply_delivery_failed(session.client.id, session.request_id))
        return

    await message.answer(texts.REPLY_SENT)


@router.message(ReplyFlow.awaiting_message, ~F.text)
async def handle_reply_non_text(message: Message) -> None:
    """В сессии ответа принимаем только текст."""
    await message.answer(texts.REPLY_TEXT_ONLY)
