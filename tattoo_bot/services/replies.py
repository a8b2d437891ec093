"""Ответ мастера клиенту через бота."""

import re
from dataclasses import dataclass

from aiogram import Bot
from aiogram.fsm.context import FSMContext

from tattoo_bot.config import settings
from tattoo_bot.database.models import MasterReply
from tattoo_bot.database.repository import create_reply, get_request, get_user
from tattoo_bot.exceptions import (
    AccessDeniedError,
    ClientNotFoundError,
    InvalidCommandError,
    RequestNotFoundError,
)
from tattoo_bot.services.notifier import deliver_reply_to_client
from tattoo_bot.services.sessions import ClientProfile, ReplyIntake, close_session, open_session
from tattoo_bot.types import ReplyTarget
from tattoo_bot.utils.logger import logger

_REPLY_ARGS_RE = re.compile(r"^\s*(\d+)(?:\s+(\d+))?\s*$")


@dataclass(frozen=True)
class ReplyResult:
    """Итог ответа мастера."""

    reply: MasterReply
    delivered: bool


def is_master(user_id: int | None) -> bool:
    """Проверяет, что пользователь является мастером салона."""
    return user_id is not None and user_id == settings.master_telegram_id


def parse_reply_args(args: str | None) -> ReplyTarget:
    """
    Разбирает аргументы команды /reply <client_id> [request_id].

    Raises:
        InvalidCommandError: Аргументы не указаны или не являются числами
    """
    match = _REPLY_ARGS_RE.match(args or "")
    if not match:
        raise InvalidCommandError(f"Некорректные аргументы /reply: {args!r}")

    client_id = int(match.group(1))
    request_id = int(match.group(2)) if match.group(2) else None
    return client_id, request_id


async def start_reply(
    state: FSMContext,
    master_id: int,
    client_id: int,
    request_id: int | None = None,
) -> ReplyIntake:
    """
    Открывает сессию ответа мастера клиенту.

    Args:
        state: FSM context мастера
        master_id: Telegram ID того, кто отвечает
        client_id: Telegram ID клиента
        request_id: Номер заявки (опционально)

    Returns:
        Созданная сессия ответа

    Raises:
        AccessDeniedError: Пользователь не мастер
        ClientNotFoundError: Клиента нет в базе
        RequestNotFoundError: Заявки нет или она чужая
    """
    if not is_master(master_id):
        logger.warning(f"Попытка ответа клиенту от не-мастера: {master_id}")
        raise AccessDeniedError(master_id)

    client = await get_user(client_id)
    if client is None:
        raise ClientNotFoundError(client_id)

    if request_id is not None:
        request = await get_request(request_id)
        if request is None or request.user_id != client_id:
            raise RequestNotFoundError(request_id, client_id)

    session = ReplyIntake(client=ClientProfile.from_model(client), request_id=request_id)
    await open_session(state, session)

    logger.info(
        f"Сессия ответа открыта (master_id={master_id}, client_id={client_id}, "
        f"request_id={request_id})"
    )
    return session


async def complete_reply(
    bot: Bot,
    state: FSMContext,
    master_id: int,
    session: ReplyIntake,
    message: str,
) -> ReplyResult:
    """
    Сохраняет ответ, доставляет его клиенту и закрывает сессию.

    Ошибка сохранения пробрасывается, сессия остаётся. После сохранения
    сессия закрывается в любом случае, даже если доставить не удалось.

    Returns:
        ReplyResult с сохранённым ответом и признаком доставки
    """
    client_id = session.client.id

    reply = await create_reply(
        client_id=client_id,
        master_id=master_id,
        message=message,
        request_id=session.request_id,
    )

    await close_session(state, session)

    try:
        await deliver_reply_to_client(bot, client_id, message, reply.id)
    except Exception as e:
        logger.error(
            f"❌ Ответ #{reply.id} не доставлен клиенту {client_id} "
            f"(master_id={master_id}, request_id={session.request_id}): {e}",
            exc_info=True,
        )
        return ReplyResult(reply=reply, delivered=False)

    logger.info(
        f"Ответ #{reply.id} отправлен (master_id={master_id}, client_id={client_id}, "
        f"request_id={session.request_id})"
    )
    return ReplyResult(reply=reply, delivered=True)
