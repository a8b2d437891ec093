"""Database модуль - модели и конфигурация Tortoise ORM."""

from tattoo_bot.database.models import MAX_PHOTOS, MasterReply, RequestStatus, TattooRequest, User

__all__ = [
    "MAX_PHOTOS",
    "MasterReply",
    "RequestStatus",
    "TattooRequest",
    "User",
]
