"""FSM States для диалогов клиента и мастера."""

from aiogram.fsm.state import State, StatesGroup


class RequestFlow(StatesGroup):
    """Клиент собирает заявку.

    Поток: /request → awaiting_description → (заявка отправлена, state очищен)
    """

    # Ждём описание идеи; фото можно присылать в любом порядке
    awaiting_description = State()


class ReplyFlow(StatesGroup):
    """Мастер отвечает клиенту через бота."""

    # Ждём текст ответа
    awaiting_message = State()
