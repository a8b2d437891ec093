"""Pytest конфигурация и фикстуры."""

import os
from collections.abc import AsyncGenerator
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Устанавливаем тестовые переменные окружения
os.environ["TELEGRAM_BOT_TOKEN"] = "test_token_123456"
os.environ["MASTER_CHAT_ID"] = "123456789"
os.environ["DATABASE_URL"] = "sqlite://:memory:"
os.environ["SALON_NAME"] = "Test Tattoo"
os.environ["MODE"] = "test"
os.environ["LOG_TO_FILE"] = "false"

from aiogram import Dispatcher  # noqa: E402
from aiogram.fsm.context import FSMContext  # noqa: E402
from aiogram.fsm.storage.base import StorageKey  # noqa: E402
from aiogram.fsm.storage.memory import MemoryStorage, SimpleEventIsolation  # noqa: E402
from aiogram.types import PhotoSize, User  # noqa: E402

from tattoo_bot.database.config import close_db, init_db  # noqa: E402

MASTER_ID = 123456789
CLIENT_ID = 555
BOT_ID = 42


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Backend для anyio (используется pytest-asyncio)."""
    return "asyncio"


@pytest.fixture(autouse=True)
async def initialize_db() -> AsyncGenerator[None, None]:
    """
    Инициализация тестовой БД перед каждым тестом.

    Используется in-memory SQLite для скорости.
    После каждого теста БД очищается.
    """
    await init_db("sqlite://:memory:")

    yield

    await close_db()


@pytest.fixture
def storage() -> MemoryStorage:
    """FSM-хранилище, общее для всех пользователей теста."""
    return MemoryStorage()


def make_state(storage: MemoryStorage, user_id: int = CLIENT_ID) -> FSMContext:
    """FSM context личного чата пользователя с ботом."""
    return FSMContext(
        storage=storage, key=StorageKey(bot_id=BOT_ID, chat_id=user_id, user_id=user_id)
    )


@pytest.fixture
def client_state(storage: MemoryStorage) -> FSMContext:
    return make_state(storage, CLIENT_ID)


@pytest.fixture
def master_state(storage: MemoryStorage) -> FSMContext:
    return make_state(storage, MASTER_ID)


@pytest.fixture
def dispatcher(storage: MemoryStorage) -> Dispatcher:
    """Диспетчер без роутеров: нужен хендлерам ради events_isolation."""
    return Dispatcher(storage=storage, events_isolation=SimpleEventIsolation())


@pytest.fixture
def bot() -> AsyncMock:
    """Бот, у которого все вызовы Telegram API — AsyncMock."""
    bot = AsyncMock()
    # Входит в ключ FSM, как у настоящего Bot
    bot.id = BOT_ID
    return bot


def make_user(user_id: int = CLIENT_ID, **kwargs: Any) -> User:
    kwargs.setdefault("first_name", "Anna")
    return User(id=user_id, is_bot=False, **kwargs)


def make_photo(file_id: str) -> list[PhotoSize]:
    """Размеры одного фото от меньшего к большему, как их присылает Telegram."""
    return [
        PhotoSize(file_id=f"{file_id}_small", file_unique_id=f"{file_id}_s", width=90, height=90),
        PhotoSize(file_id=file_id, file_unique_id=f"{file_id}_b", width=1280, height=1280),
    ]


def make_message(
    user_id: int = CLIENT_ID,
    text: str | None = None,
    photo: str | None = None,
    caption: str | None = None,
    media_group_id: str | None = None,
) -> SimpleNamespace:
    """Минимальная замена aiogram Message для вызова хендлеров напрямую."""
    return SimpleNamespace(
        from_user=make_user(user_id, username="anna_ink"),
        chat=SimpleNamespace(id=user_id),
        text=text,
        caption=caption,
        photo=make_photo(photo) if photo else None,
        media_group_id=media_group_id,
        answer=AsyncMock(),
        answer_location=AsyncMock(),
    )


def answers(message: SimpleNamespace) -> list[str]:
    """Тексты всех ответов бота на сообщение."""
    return [call.args[0] for call in message.answer.await_args_list]
