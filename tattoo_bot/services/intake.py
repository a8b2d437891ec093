"""Сбор заявки клиента: описание и фото-референсы."""

from dataclasses import dataclass

from aiogram import Bot
from aiogram.fsm.context import FSMContext

from tattoo_bot.database.models import TattooRequest
from tattoo_bot.database.repository import create_request
from tattoo_bot.services.notifier import notify_master_about_request
from tattoo_bot.services.sessions import ClientProfile, RequestIntake, close_session, open_session
from tattoo_bot.utils.logger import logger


@dataclass(frozen=True)
class SubmitResult:
    """Итог отправки заявки."""

    request: TattooRequest
    delivered: bool


async def start_intake(state: FSMContext, profile: ClientProfile) -> RequestIntake:
    """Начинает новую заявку, заменяя любую активную сессию пользователя."""
    session = RequestIntake(profile=profile)
    await open_session(state, session)
    logger.info(f"Пользователь {profile.id} начал заявку")
    return session


async def submit_request(
    bot: Bot,
    state: FSMContext,
    session: RequestIntake,
    description: str,
) -> SubmitResult:
    """
    Сохраняет заявку, отправляет её мастеру и закрывает сессию.

    Ошибка сохранения пробрасывается, сессия при этом остаётся.
    Ошибка доставки мастеру только логируется: заявка уже в базе.

    Args:
        bot: Aiogram Bot instance
        state: FSM context клиента
        session: Сессия заявки
        description: Описание идеи

    Returns:
        SubmitResult с сохранённой заявкой
    """
    user_id = session.profile.id
    session.description = description.strip()

    request = await create_request(
        user_id=user_id,
        description=session.description,
        photos=session.photos,
    )
    logger.info(f"Заявка #{request.id} сохранена (user_id={user_id}, photos={len(request.photos)})")

    delivered = await notify_master_about_request(bot, request, session.profile)

    await close_session(state, session)
    return SubmitResult(request=request, delivered=delivered)
