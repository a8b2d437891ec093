"""Режим webhook: aiohttp-сервер для приёма обновлений от Telegram."""

from aiogram import Bot, Dispatcher
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web  # type: ignore[import-not-found]

from tattoo_bot.services.sessions import count_sessions
from tattoo_bot.utils.logger import logger

HEALTH_PATH = "/health"
DISPATCHER_KEY = web.AppKey("dispatcher", Dispatcher)


async def health(request: web.Request) -> web.Response:
    """
    Проверка живости для Docker/балансировщика.

    Отдаёт число открытых диалогов в FSM-хранилище и альбомов в обработке.
    """
    dp: Dispatcher = request.app[DISPATCHER_KEY]
    return web.json_response(
        {
            "status": "ok",
            "sessions": count_sessions(dp.storage),
            "media_groups": dp["media_groups"].pending,
        }
    )


def build_webhook_app(
    bot: Bot,
    dp: Dispatcher,
    webhook_path: str,
    secret_token: str | None = None,
) -> web.Application:
    """
    Собирает aiohttp-приложение с webhook и health-check.

    Запросы к webhook_path без правильного
    X-Telegram-Bot-Api-Secret-Token отклоняются, если секрет задан.
    """
    app = web.Application()
    app[DISPATCHER_KEY] = dp
    app.router.add_get(HEALTH_PATH, health)

    SimpleRequestHandler(dispatcher=dp, bot=bot, secret_token=secret_token).register(
        app, path=webhook_path
    )
    setup_application(app, dp, bot=bot)
    return app


async def setup_webhook(
    bot: Bot,
    dp: Dispatcher,
    webhook_url: str,
    webhook_path: str,
    port: int,
    secret_token: str | None = None,
) -> web.AppRunner:
    """
    Регистрирует webhook в Telegram и запускает веб-сервер.

    Args:
        bot: Aiogram Bot instance
        dp: Aiogram Dispatcher instance
        webhook_url: Полный URL webhook (https://domain.com/webhook)
        webhook_path: Путь webhook (/webhook)
        port: Порт для веб-сервера
        secret_token: Секрет для заголовка X-Telegram-Bot-Api-Secret-Token

    Returns:
        web.AppRunner для graceful shutdown
    """
    logger.info(f"🔗 Настройка webhook: {webhook_url} (secret: {'да' if secret_token else 'нет'})")

    # Обновления, накопившиеся за время рестарта, сохраняются
    await bot.set_webhook(
        url=webhook_url,
        allowed_updates=dp.resolve_used_update_types(),
        secret_token=secret_token,
    )

    runner = web.AppRunner(build_webhook_app(bot, dp, webhook_path, secret_token))
    await runner.setup()
    await web.TCPSite(runner, "0.0.0.0", port).start()

    logger.info(f"✅ Webhook сервер на порту {port}: {webhook_path}, health-check: {HEALTH_PATH}")
    return runner


async def remove_webhook(bot: Bot) -> None:
    """Снимает webhook в Telegram при остановке."""
    await bot.delete_webhook()
    logger.info("✅ Webhook удалён")
