"""Тесты настройки логгера и описания событий в логах."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from aiogram.types import CallbackQuery, Chat, Message, PhotoSize, Update
from conftest import CLIENT_ID, make_user

from tattoo_bot.middlewares.logging import describe_event
from tattoo_bot.utils.logger import LOG_FILE, setup_logger


def _message(**kwargs: Any) -> Message:
    return Message(
        message_id=1,
        date=datetime.now(),
        chat=Chat(id=CLIENT_ID, type="private"),
        from_user=make_user(CLIENT_ID, username="anna_ink"),
        **kwargs,
    )


class TestSetupLogger:
    def test_writes_to_file(self, tmp_path: Path) -> None:
        logger = setup_logger(
            "tattoo-bot-test", level="debug", log_dir=tmp_path, to_file=True, libraries=()
        )

        logger.info("Заявка #1 сохранена")
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / LOG_FILE).read_text(encoding="utf-8")
        assert "[INFO] [tattoo-bot-test] Заявка #1 сохранена" in content
        assert logger.level == logging.DEBUG

    def test_console_only(self, tmp_path: Path) -> None:
        logger = setup_logger(
            "tattoo-bot-console", log_dir=tmp_path / "logs", to_file=False, libraries=()
        )

        assert len(logger.handlers) == 1
        assert not (tmp_path / "logs").exists()

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path: Path) -> None:
        setup_logger("tattoo-bot-repeat", to_file=False, libraries=())
        logger = setup_logger("tattoo-bot-repeat", to_file=False, libraries=())

        assert len(logger.handlers) == 1

    def test_libraries_limited_to_warnings(self) -> None:
        setup_logger("tattoo-bot-libs", to_file=False, libraries=("tattoo-bot-fake-lib",))

        assert logging.getLogger("tattoo-bot-fake-lib").level == logging.WARNING


class TestDescribeEvent:
    def test_text_message(self) -> None:
        description = describe_event(_message(text="Хочу тату"))

        assert description == f"📨 Message from anna_ink (ID: {CLIENT_ID}): Хочу тату"

    def test_long_text_is_cut(self) -> None:
        description = describe_event(_message(text="x" * 500))

        assert description is not None
        assert description.endswith("x" * 100)
        assert "x" * 101 not in description

    def test_album_photo(self) -> None:
        photo = [PhotoSize(file_id="p1", file_unique_id="u1", width=10, height=10)]

        description = describe_event(_message(photo=photo, media_group_id="g1", caption="koi"))

        assert description is not None
        assert "<photo group=g1 caption='koi'>" in description

    def test_callback(self) -> None:
        callback = CallbackQuery(
            id="1",
            from_user=make_user(CLIENT_ID, username="anna_ink"),
            chat_instance="ci",
            data="reply:555:7",
        )

        assert describe_event(callback) == (
            f"🔘 Callback from anna_ink (ID: {CLIENT_ID}): <button reply:555:7>"
        )

    def test_other_events_are_skipped(self) -> None:
        assert describe_event(Update(update_id=1)) is None
