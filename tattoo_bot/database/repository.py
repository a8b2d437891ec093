"""Операции чтения и записи пользователей, заявок и ответов мастера."""

from tattoo_bot.database.models import (
    MAX_PHOTOS,
    MasterReply,
    RequestStatus,
    TattooRequest,
    User,
)
from tattoo_bot.utils.logger import logger


async def upsert_user(
    telegram_id: int,
    username: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    language_code: str | None = None,
    is_premium: bool = False,
) -> User:
    """
    Создаёт пользователя или обновляет его профиль и время активности.

    Args:
        telegram_id: Telegram User ID
        username: @username
        first_name: Имя
        last_name: Фамилия
        language_code: Язык клиента Telegram
        is_premium: Есть ли Telegram Premium

    Returns:
        Сохранённый пользователь
    """
    user, created = await User.get_or_create(
        id=telegram_id,
        defaults={
            "username": username,
            "first_name": first_name,
            "last_name": last_name,
            "language_code": language_code,
            "is_premium": is_premium,
        },
    )

    if not created:
        user.username = username
        user.first_name = first_name
        user.last_name = last_name
        user.language_code = language_code
        user.is_premium = is_premium
        # last_activity обновится автоматически (auto_now)
        await user.save()
    else:
        logger.info(f"Новый пользователь: {user}")

    return user


async def get_user(telegram_id: int) -> User | None:
    return await User.get_or_none(id=telegram_id)


async def create_request(
    user_id: int,
    description: str,
    photos: list[str] | None = None,
    style: str | None = None,
    size: str | None = None,
    placement: str | None = None,
    budget: int | None = None,
) -> TattooRequest:
    """
    Сохраняет новую заявку в статусе pending.

    Фото сверх MAX_PHOTOS отбрасываются.

    Raises:
        ValueError: Пустое описание
    """
    description = description.strip()
    if not description:
        raise ValueError("Описание заявки не может быть пустым")

    photos = list(photos or [])
    if len(photos) > MAX_PHOTOS:
        logger.warning(
            f"Заявка пользователя {user_id}: {len(photos)} фото, сохраняем первые {MAX_PHOTOS}"
        )
        photos = photos[:MAX_PHOTOS]

    return await TattooRequest.create(
        user_id=user_id,
        description=description,
        photos=photos,
        style=style,
        size=size,
        placement=placement,
        budget=budget,
        status=RequestStatus.PENDING,
    )


async def get_request(request_id: int) -> TattooRequest | None:
    return await TattooRequest.get_or_none(id=request_id)


async def list_user_requests(user_id: int, limit: int = 10) -> list[TattooRequest]:
    """Последние заявки пользователя, новые первыми."""
    return await TattooRequest.filter(user_id=user_id).order_by("-created_at", "-id").limit(limit)


async def create_reply(
    client_id: int,
    master_id: int,
    message: str,
    request_id: int | None = None,
) -> MasterReply:
    return await MasterReply.create(
        client_id=client_id,
        master_id=master_id,
        message=message,
        request_id=request_id,
    )
