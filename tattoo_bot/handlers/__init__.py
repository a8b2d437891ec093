"""Telegram handlers - обработчики команд и сообщений."""

from aiogram import Router

from tattoo_bot.handlers import errors, fallback, reply, request, start


def register_all_handlers(router: Router) -> None:
    """
    Регистрирует все handlers в главный роутер.

    Порядок задаёт приоритет: команды, затем сессия ответа мастера,
    сессия заявки, кнопки и в конце ответы по ключевым словам.

    Args:
        router: Главный роутер aiogram
    """
    router.include_router(errors.router)
    router.include_router(start.router)
    router.include_router(reply.router)
    router.include_router(request.router)
    # Последний, чтобы обрабатывал все остальные сообщения
    router.include_router(fallback.router)


__all__ = ["register_all_handlers"]
