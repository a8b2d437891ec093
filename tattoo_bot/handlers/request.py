"""Handler для создания заявки на татуировку (/request)."""

from functools import partial

from aiogram import Bot, Dispatcher, F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from tattoo_bot import texts
from tattoo_bot.filters import NotCommand
from tattoo_bot.services.intake import start_intake, submit_request
from tattoo_bot.services.media_groups import MediaGroupBuffer, MediaGroupCollector
from tattoo_bot.services.sessions import ClientProfile, RequestIntake, get_session, save_session
from tattoo_bot.states import RequestFlow
from tattoo_bot.utils.logger import logger

router = Router(name="request")


@router.message(Command("request"))
async def cmd_request(message: Message, state: FSMContext) -> None:
    """
    Команда /request — инструкция и начало сбора заявки.
    Предыдущая сессия пользователя (если была) заменяется.
    """
    if not message.from_user:
        await message.answer(texts.UNKNOWN_USER)
        return

    await start_intake(state, ClientProfile.from_telegram(message.from_user))
    await message.answer(texts.REQUEST_INSTRUCTIONS)


async def _request_session(message: Message, state: FSMContext) -> RequestIntake | None:
    session = await get_session(state)
    if isinstance(session, RequestIntake):
        return session

    # State уже проверен фильтром, данные потеряны
    logger.warning(f"Нет данных заявки в state {await state.get_state()} (chat={message.chat.id})")
    await state.clear()
    await message.answer(texts.REQUEST_FAILED)
    return None


async def _finish_request(
    message: Message,
    bot: Bot,
    state: FSMContext,
    session: RequestIntake,
    description: str,
) -> None:
    """Отправляет заявку и сообщает клиенту результат."""
    if not description.strip():
        await message.answer(texts.EMPTY_DESCRIPTION)
        return

    try:
        await submit_request(bot, state, session, description)
    except Exception as e:
        logger.error(
            f"❌ Ошибка сохранения заявки пользователя {session.profile.id}: {e}", exc_info=True
        )
        await message.answer(texts.REQUEST_FAILED)
        return

    await message.answer(texts.REQUEST_SENT)


@router.message(RequestFlow.awaiting_description, F.text, NotCommand())
async def handle_request_text(message: Message, bot: Bot, state: FSMContext) -> None:
    """Текст во время заявки — это описание, заявка отправляется."""
    session = await _request_session(message, state)
    if session is None:
        return

    await _finish_request(message, bot, state, session, message.text or "")


@router.message(RequestFlow.awaiting_description, F.photo)
async def handle_request_photo(
    message: Message,
    bot: Bot,
    state: FSMContext,
    dispatcher: Dispatcher,
    media_groups: MediaGroupCollector,
) -> None:
    """
    Фото во время заявки.

    Берём самый большой размер. Фото альбома копятся в MediaGroupCollector,
    одиночное фото с подписью сразу завершает заявку.
    """
    if not message.from_user or not message.photo:
        await message.answer(texts.PHOTO_ERROR)
        return

    session = await _request_session(message, state)
    if session is None:
        return

    if session.photos_left == 0:
        await message.answer(texts.PHOTO_LIMIT)
        return

    file_id = message.photo[-1].file_id

    if message.media_group_id:
        media_groups.add(
            group_id=message.media_group_id,
            user_id=message.from_user.id,
            file_id=file_id,
            on_flush=partial(merge_media_group, bot=bot, dispatcher=dispatcher),
            caption=message.caption,
            message=message,
        )
        return

    session.add_photos([file_id])
    await save_session(state, session)
    logger.info(f"Фото добавлено пользователем {session.profile.id}, всего: {len(session.photos)}")

    caption = (message.caption or "").strip()
    if caption:
        await _finish_request(message, bot, state, session, caption)
        return

    await message.answer(texts.photo_added(1, session.photos_left))


async def merge_media_group(buffer: MediaGroupBuffer, bot: Bot, dispatcher: Dispatcher) -> None:
    """
    Переносит собранный альбом в сессию заявки.

    Вызывается коллектором один раз на альбом, после задержки. Работает под
    блокировкой FSM-ключа пользователя, как и обработка его апдейтов.
    """
    message: Message = buffer.message
    state = dispatcher.fsm.get_context(bot=bot, chat_id=message.chat.id, user_id=buffer.user_id)

    async with dispatcher.fsm.events_isolation.lock(state.key):
        session = await get_session(state)

        if not isinstance(session, RequestIntake):
            logger.info(
                f"Альбом {buffer.group_id} не прикреплён: у пользователя {buffer.user_id} "
                f"нет активной заявки"
            )
            await message.answer(texts.ALBUM_NOT_ATTACHED)
            return

        accepted, rejected = session.add_photos(buffer.file_ids)
        await save_session(state, session)
        logger.info(
            f"Альбом {buffer.group_id}: добавлено {len(accepted)}, отклонено {len(rejected)} "
            f"(user_id={buffer.user_id}, всего: {len(session.photos)})"
        )

        if rejected:
            await message.answer(texts.photos_rejected(len(rejected)))

        if buffer.caption:
            await _finish_request(message, bot, state, session, buffer.caption)
            return

        if accepted:
            await message.answer(texts.photo_added(len(accepted), session.photos_left))
