"""Обработчик ошибок на границе диспетчера."""

from aiogram import Router
from aiogram.types import ErrorEvent

from tattoo_bot import texts
from tattoo_bot.utils.logger import logger

router = Router(name="errors")


@router.errors()
async def handle_error(event: ErrorEvent) -> bool:
    """
    Логирует необработанное исключение и извиняется перед пользователем.

    Returns:
        True: ошибка обработана, polling продолжается
    """
    update = event.update
    source = update.message or update.callback_query
    user_id = source.from_user.id if source and source.from_user else "Unknown"

    logger.error(
        f"❌ Ошибка при обработке update {update.update_id} (user_id={user_id}): {event.exception}",
        exc_info=event.exception,
    )

    try:
        if update.message:
            await update.message.answer(texts.GENERIC_ERROR)
        elif update.callback_query:
            await update.callback_query.answer(texts.GENERIC_ERROR, show_alert=True)
    except Exception as e:
        logger.error(f"Не удалось сообщить пользователю {user_id} об ошибке: {e}")

    return True
