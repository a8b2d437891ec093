"""Главный модуль запуска Telegram-бота тату-салона."""

import asyncio

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.memory import MemoryStorage, SimpleEventIsolation
from aiogram.types import BotCommand

from tattoo_bot.config import settings
from tattoo_bot.database.config import close_db, init_db
from tattoo_bot.handlers import register_all_handlers
from tattoo_bot.middlewares.logging import LoggingMiddleware
from tattoo_bot.middlewares.users import UserTrackingMiddleware
from tattoo_bot.services.media_groups import MediaGroupCollector
from tattoo_bot.utils.logger import logger
from tattoo_bot.webhook import remove_webhook, setup_webhook

BOT_COMMANDS = [
    BotCommand(command="start", description="Начать работу с ботом"),
    BotCommand(command="request", description="Создать запрос на татуировку"),
    BotCommand(command="myrequests", description="Мои запросы"),
    BotCommand(command="prices", description="Цены на услуги"),
    BotCommand(command="contact", description="Контактная информация"),
    BotCommand(command="cancel", description="Отменить текущее действие"),
    BotCommand(command="help", description="Помощь и инструкции"),
]


async def on_startup() -> None:
    """Действия при запуске бота."""
    logger.info(f"🚀 Запуск бота {settings.salon_name}...")
    logger.info(f"⚙️  Режим: {settings.mode}")
    logger.info(f"👨‍🎨 Чат мастера: {settings.master_chat_id}")

    await init_db()


async def on_shutdown() -> None:
    """Действия при остановке бота."""
    logger.info("🛑 Остановка бота...")

    await close_db()


def create_dispatcher() -> Dispatcher:
    """
    Собирает диспетчер: FSM-хранилище, коллектор альбомов, middleware, handlers.

    Returns:
        Готовый к запуску Dispatcher
    """
    # AICODE-NOTE: MemoryStorage не переживает рестарт, незавершённые диалоги теряются.
    # SimpleEventIsolation обрабатывает апдейты одного пользователя по очереди.
    dp = Dispatcher(storage=MemoryStorage(), events_isolation=SimpleEventIsolation())

    # Общие объекты доступны в хендлерах по имени аргумента
    dp["media_groups"] = MediaGroupCollector(delay=settings.media_group_delay)

    # Регистрация middleware
    dp.update.outer_middleware(UserTrackingMiddleware())
    dp.message.middleware(LoggingMiddleware())
    dp.callback_query.middleware(LoggingMiddleware())

    # Регистрация handlers
    register_all_handlers(dp)

    return dp


async def main() -> None:
    """Главная функция запуска бота."""

    # Инициализация бота и диспетчера
    bot = Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = create_dispatcher()
    media_groups: MediaGroupCollector = dp["media_groups"]

    webhook_runner = None

    try:
        # Startup
        await on_startup()
        await bot.set_my_commands(BOT_COMMANDS)

        # Определяем режим работы бота
        if settings.bot_mode == "webhook":
            # Webhook режим
            if not settings.webhook_url:
                raise ValueError("WEBHOOK_URL не установлен в .env для режима webhook")

            logger.info("🔗 Режим работы: WEBHOOK")
            webhook_runner = await setup_webhook(
                bot=bot,
                dp=dp,
                webhook_url=settings.webhook_url,
                webhook_path=settings.webhook_path,
                port=settings.webhook_port,
                secret_token=settings.webhook_secret,
            )
            logger.info("✅ Бот запущен в режиме webhook! Ожидание обновлений...")

            # В webhook режиме бот просто ждёт (сервер уже запущен)
            await asyncio.Event().wait()

        else:
            # Polling режим (по умолчанию)
            logger.info("🔄 Режим работы: POLLING")
            logger.info("✅ Бот запущен! Ожидание сообщений...")
            await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())

    except KeyboardInterrupt:
        logger.info("⏸️  Прервано пользователем (Ctrl+C)")

    except Exception as e:
        logger.error(f"❌ Критическая ошибка: {e}", exc_info=True)

    finally:
        # Незавершённые альбомы теряются вместе с сессиями
        await media_groups.close()

        # Graceful shutdown webhook
        if webhook_runner:
            logger.info("⏹️  Останавливаем webhook сервер...")
            await remove_webhook(bot)
            await webhook_runner.cleanup()
            logger.info("✅ Webhook сервер остановлен")

        # Shutdown
        await on_shutdown()
        await bot.session.close()


def run() -> None:
    """Точка входа консольной команды tattoo-bot."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("👋 Бот остановлен")


if __name__ == "__main__":
    run()
