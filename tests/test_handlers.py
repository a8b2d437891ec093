"""Тесты информационных команд, фильтров, fallback и middleware."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.types import User as AiogramUser
from conftest import CLIENT_ID, answers, make_message, make_user

from tattoo_bot import texts
from tattoo_bot.config import settings
from tattoo_bot.database.models import User
from tattoo_bot.database.repository import create_request, upsert_user
from tattoo_bot.filters import NotCommand
from tattoo_bot.handlers.errors import handle_error
from tattoo_bot.handlers.fallback import (
    handle_photo,
    handle_stale_callback,
    handle_sticker,
    handle_text,
    pick_canned_reply,
)
from tattoo_bot.handlers.start import cmd_cancel, cmd_contact, cmd_my_requests, cmd_start
from tattoo_bot.middlewares.users import UserTrackingMiddleware
from tattoo_bot.services.sessions import ClientProfile, ReplyIntake, RequestIntake, open_session


class TestCannedReplies:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Хочу тату на плече", texts.KEYWORD_TATTOO),
            ("Первая ТАТУИРОВКА", texts.KEYWORD_TATTOO),
            ("Какая цена?", texts.KEYWORD_PRICE),
            ("Сколько стоит рукав", texts.KEYWORD_PRICE),
            ("Как с вами связаться", texts.KEYWORD_CONTACT),
            ("Какой у вас адрес?", texts.KEYWORD_CONTACT),
            ("Привет", texts.GREETING),
            ("", texts.GREETING),
        ],
    )
    def test_keywords(self, text: str, expected: str) -> None:
        assert pick_canned_reply(text) == expected

    def test_tattoo_wins_over_price(self) -> None:
        """Ключевые слова проверяются по порядку."""
        assert pick_canned_reply("цена тату") == texts.KEYWORD_TATTOO

    @pytest.mark.asyncio
    async def test_text_handler(self) -> None:
        message = make_message(text="сколько стоит?")

        await handle_text(message)

        assert answers(message) == [texts.KEYWORD_PRICE]

    @pytest.mark.asyncio
    async def test_sticker_and_photo(self) -> None:
        sticker = make_message()
        photo = make_message(photo="p1")

        await handle_sticker(sticker)
        await handle_photo(photo)

        assert answers(sticker) == [texts.STICKER]
        assert answers(photo) == [texts.PHOTO_OUTSIDE_FLOW]

    @pytest.mark.asyncio
    async def test_stale_callback(self) -> None:
        callback = SimpleNamespace(data="old:1", answer=AsyncMock())

        await handle_stale_callback(callback)

        callback.answer.assert_awaited_once_with(texts.STALE_BUTTON)


class TestFilters:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("text", "caption", "expected"),
        [
            ("dragon", None, True),
            ("/cancel", None, False),
            (None, "/help", False),
            (None, "koi fish", True),
            (None, None, True),
        ],
    )
    async def test_not_command(self, text: str | None, caption: str | None, expected: bool) -> None:
        message = make_message(text=text, caption=caption)

        assert await NotCommand()(message) is expected


class TestInfoCommands:
    @pytest.mark.asyncio
    async def test_start(self) -> None:
        message = make_message(text="/start")

        await cmd_start(message)

        assert answers(message) == [texts.WELCOME]
        assert settings.salon_name in texts.WELCOME

    @pytest.mark.asyncio
    async def test_contact_sends_location(self) -> None:
        message = make_message(text="/contact")

        await cmd_contact(message)

        assert answers(message) == [texts.CONTACT]
        assert message.answer.await_args.kwargs["reply_markup"] is not None
        message.answer_location.assert_awaited_once_with(
            latitude=settings.salon_latitude, longitude=settings.salon_longitude
        )

    @pytest.mark.asyncio
    async def test_contact_location_failure_is_not_raised(self) -> None:
        message = make_message(text="/contact")
        message.answer_location.side_effect = RuntimeError("network")

        await cmd_contact(message)

        assert answers(message) == [texts.CONTACT]


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancels_active_request(self, client_state: FSMContext) -> None:
        await open_session(
            client_state, RequestIntake(profile=ClientProfile(id=CLIENT_ID), photos=["a"])
        )
        message = make_message(text="/cancel")

        await cmd_cancel(message, client_state)

        assert answers(message) == [texts.CANCELLED]
        assert await client_state.get_state() is None
        assert await client_state.get_data() == {}

    @pytest.mark.asyncio
    async def test_cancels_reply_session(self, master_state: FSMContext) -> None:
        await open_session(master_state, ReplyIntake(client=ClientProfile(id=CLIENT_ID)))
        message = make_message(text="/cancel")

        await cmd_cancel(message, master_state)

        assert answers(message) == [texts.CANCELLED]
        assert await master_state.get_state() is None

    @pytest.mark.asyncio
    async def test_nothing_to_cancel(self, client_state: FSMContext) -> None:
        message = make_message(text="/cancel")

        await cmd_cancel(message, client_state)

        assert answers(message) == [texts.NOTHING_TO_CANCEL]


class TestMyRequests:
    @pytest.mark.asyncio
    async def test_no_requests(self) -> None:
        message = make_message(text="/myrequests")

        await cmd_my_requests(message)

        assert answers(message) == [texts.NO_REQUESTS]

    @pytest.mark.asyncio
    async def test_lists_own_requests(self) -> None:
        await upsert_user(telegram_id=CLIENT_ID, first_name="Anna")
        await upsert_user(telegram_id=777, first_name="Boris")
        first = await create_request(user_id=CLIENT_ID, description="small rose")
        second = await create_request(user_id=CLIENT_ID, description="koi <fish>", photos=["p1"])
        foreign = await create_request(user_id=777, description="skull")
        message = make_message(text="/myrequests")

        await cmd_my_requests(message)

        text = answers(message)[0]
        assert f"#{first.id}" in text
        assert f"#{second.id}" in text
        assert f"#{foreign.id}" not in text
        assert "koi &lt;fish&gt;" in text


class TestUserTrackingMiddleware:
    @pytest.mark.asyncio
    async def test_saves_sender(self) -> None:
        handler = AsyncMock(return_value="handled")
        user = make_user(CLIENT_ID, username="anna_ink", language_code="ru")

        result = await UserTrackingMiddleware()(handler, SimpleNamespace(), {"event_from_user": user})

        assert result == "handled"
        saved = await User.get(id=CLIENT_ID)
        assert saved.username == "anna_ink"
        assert saved.language_code == "ru"

    @pytest.mark.asyncio
    async def test_skips_bots(self) -> None:
        handler = AsyncMock()
        bot_user = AiogramUser(id=42, is_bot=True, first_name="OtherBot")

        await UserTrackingMiddleware()(handler, SimpleNamespace(), {"event_from_user": bot_user})

        handler.assert_awaited_once()
        assert await User.all().count() == 0

    @pytest.mark.asyncio
    async def test_db_error_does_not_block_update(self) -> None:
        handler = AsyncMock()

        with patch(
            "tattoo_bot.middlewares.users.upsert_user",
            AsyncMock(side_effect=RuntimeError("database is locked")),
        ):
            await UserTrackingMiddleware()(
                handler, SimpleNamespace(), {"event_from_user": make_user(CLIENT_ID)}
            )

        handler.assert_awaited_once()


class TestErrorHandler:
    @pytest.mark.asyncio
    async def test_apologises_to_user(self) -> None:
        message = make_message(text="/request")
        event = SimpleNamespace(
            update=SimpleNamespace(update_id=1, message=message, callback_query=None),
            exception=RuntimeError("boom"),
        )

        assert await handle_error(event) is True
        assert answers(message) == [texts.GENERIC_ERROR]

    @pytest.mark.asyncio
    async def test_callback_error_shows_alert(self) -> None:
        callback = SimpleNamespace(from_user=make_user(CLIENT_ID), answer=AsyncMock())
        event = SimpleNamespace(
            update=SimpleNamespace(update_id=2, message=None, callback_query=callback),
            exception=RuntimeError("boom"),
        )

        assert await handle_error(event) is True
        callback.answer.assert_awaited_once_with(texts.GENERIC_ERROR, show_alert=True)
