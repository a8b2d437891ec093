"""Модели базы данных Tortoise ORM."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from tortoise import Model, fields

if TYPE_CHECKING:
    from tortoise.queryset import QuerySet

# Максимальное количество фото-референсов в одной заявке
MAX_PHOTOS = 5


class RequestStatus(str, Enum):
    """Статус заявки на татуировку."""

    PENDING = "pending"  # Ждёт ответа мастера
    IN_PROGRESS = "in_progress"  # В работе
    COMPLETED = "completed"  # Выполнена
    CANCELLED = "cancelled"  # Отменена


class User(Model):
    """Пользователь бота (клиент или мастер)."""

    # AICODE-NOTE: Первичный ключ: Telegram User ID, не автоинкремент
    id = fields.BigIntField(pk=True, generated=False, description="Telegram User ID")
    username: str | None = fields.CharField(
        max_length=255, null=True, description="@username в Telegram"
    )  # type: ignore[assignment]
    first_name: str | None = fields.CharField(max_length=255, null=True, description="Имя")  # type: ignore[assignment]
    last_name: str | None = fields.CharField(max_length=255, null=True, description="Фамилия")  # type: ignore[assignment]
    language_code: str | None = fields.CharField(
        max_length=16, null=True, description="Язык клиента Telegram"
    )  # type: ignore[assignment]
    is_premium = fields.BooleanField(default=False, description="Telegram Premium")

    created_at = fields.DatetimeField(auto_now_add=True, description="Дата создания")
    last_activity = fields.DatetimeField(auto_now=True, description="Последняя активность")

    if TYPE_CHECKING:
        requests: QuerySet[TattooRequest]
        replies: QuerySet[MasterReply]

    class Meta:
        table = "users"

    @property
    def display_name(self) -> str:
        full_name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full_name or (f"@{self.username}" if self.username else f"ID: {self.id}")

    def __str__(self) -> str:
        return f"User({self.display_name}, {self.id})"


class TattooRequest(Model):
    """Заявка клиента на татуировку."""

    id = fields.IntField(pk=True)
    user: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User",
        related_name="requests",
        on_delete=fields.CASCADE,
        description="Автор заявки",
    )

    description = fields.TextField(description="Описание идеи")
    style: str | None = fields.CharField(max_length=255, null=True, description="Стиль")  # type: ignore[assignment]
    size: str | None = fields.CharField(max_length=255, null=True, description="Размер")  # type: ignore[assignment]
    placement: str | None = fields.CharField(
        max_length=255, null=True, description="Место на теле"
    )  # type: ignore[assignment]
    budget: int | None = fields.IntField(null=True, description="Бюджет")  # type: ignore[assignment]
    photos: list[str] = fields.JSONField(default=list, description="file_id фото-референсов")  # type: ignore[assignment]

    status = fields.CharEnumField(
        RequestStatus, default=RequestStatus.PENDING, description="Статус заявки"
    )

    created_at = fields.DatetimeField(auto_now_add=True, description="Дата создания")
    updated_at = fields.DatetimeField(auto_now=True, description="Дата обновления")

    if TYPE_CHECKING:
        user_id: int
        replies: QuerySet[MasterReply]

    class Meta:
        table = "tattoo_requests"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"TattooRequest(#{self.id}, {self.status.value}, photos={len(self.photos)})"


class MasterReply(Model):
    """Ответ мастера клиенту."""

    id = fields.IntField(pk=True)
    request: fields.ForeignKeyNullableRelation[TattooRequest] = fields.ForeignKeyField(
        "models.TattooRequest",
        related_name="replies",
        null=True,
        on_delete=fields.SET_NULL,
        description="Заявка, на которую отвечает мастер",
    )
    client: fields.ForeignKeyRelation[User] = fields.ForeignKeyField(
        "models.User",
        related_name="replies",
        on_delete=fields.CASCADE,
        description="Клиент",
    )
    master_id = fields.BigIntField(description="Telegram ID мастера")
    message = fields.TextField(description="Текст ответа")

    created_at = fields.DatetimeField(auto_now_add=True, description="Дата отправки")

    if TYPE_CHECKING:
        request_id: int | None
        client_id: int

    class Meta:
        table = "master_replies"
        ordering = ["created_at"]

    def __str__(self) -> str:
        preview = self.message[:50] + "..." if len(self.message) > 50 else self.message
        return f"MasterReply(#{self.id}: {preview})"
