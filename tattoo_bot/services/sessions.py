"""Незавершённые диалоги (заявка клиента, ответ мастера) поверх FSM aiogram.

У каждого пользователя не больше одной активной сессии. Тип сессии задаёт
FSM state, а данные FSM хранят её снимок. Хранилище MemoryStorage: после
рестарта незавершённые диалоги пропадают.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar
from uuid import uuid4

from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State
from aiogram.fsm.storage.base import BaseStorage
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import User as TelegramUser

from tattoo_bot.database.models import MAX_PHOTOS, User
from tattoo_bot.states import ReplyFlow, RequestFlow
from tattoo_bot.types import FileID
from tattoo_bot.utils.logger import logger


def _new_flow_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class ClientProfile:
    """Снимок профиля пользователя на момент начала диалога."""

    id: int
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_telegram(cls, user: TelegramUser) -> ClientProfile:
        return cls(
            id=user.id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    @classmethod
    def from_model(cls, user: User) -> ClientProfile:
        return cls(
            id=user.id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    @property
    def display_name(self) -> str:
        full_name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full_name or (f"@{self.username}" if self.username else f"ID: {self.id}")


@dataclass
class RequestIntake:
    """Клиент собирает заявку: ждём описание и (опционально) фото."""

    STATE: ClassVar[State] = RequestFlow.awaiting_description

    profile: ClientProfile
    photos: list[FileID] = field(default_factory=list)
    description: str | None = None
    # Отличает эту заявку от следующей, начатой тем же пользователем
    flow_id: str = field(default_factory=_new_flow_id)

    @property
    def photos_left(self) -> int:
        return max(MAX_PHOTOS - len(self.photos), 0)

    def add_photos(self, file_ids: list[FileID]) -> tuple[list[FileID], list[FileID]]:
        """
        Добавляет фото в пределах лимита.

        Returns:
            Кортеж (добавленные, отклонённые)
        """
        accepted = file_ids[: self.photos_left]
        rejected = file_ids[len(accepted) :]
        self.photos.extend(accepted)
        return accepted, rejected

    def to_data(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> RequestIntake:
        return cls(
            profile=ClientProfile(**data["profile"]),
            photos=list(data.get("photos", [])),
            description=data.get("description"),
            flow_id=data["flow_id"],
        )


@dataclass(frozen=True)
class ReplyIntake:
    """Мастер отвечает клиенту: ждём текст ответа."""

    STATE: ClassVar[State] = ReplyFlow.awaiting_message

    client: ClientProfile
    request_id: int | None = None
    flow_id: str = field(default_factory=_new_flow_id)

    def to_data(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> ReplyIntake:
        return cls(
            client=ClientProfile(**data["client"]),
            request_id=data.get("request_id"),
            flow_id=data["flow_id"],
        )


Session = RequestIntake | ReplyIntake

_SESSION_TYPES: dict[str, type[RequestIntake] | type[ReplyIntake]] = {
    RequestIntake.STATE.state: RequestIntake,
    ReplyIntake.STATE.state: ReplyIntake,
}


async def get_session(state: FSMContext) -> Session | None:
    """Текущая сессия пользователя или None, если диалог не начат."""
    current = await state.get_state()
    session_type = _SESSION_TYPES.get(current) if current else None
    if session_type is None:
        return None
    return session_type.from_data(await state.get_data())


async def open_session(state: FSMContext, session: Session) -> None:
    """Открывает сессию, заменяя предыдущую (замена логируется)."""
    previous = await state.get_state()
    if previous is not None:
        logger.info(
            f"Сессия пользователя {state.key.user_id} заменена: "
            f"{previous} → {session.STATE.state}"
        )

    await state.set_state(session.STATE)
    await state.set_data(session.to_data())


async def save_session(state: FSMContext, session: Session) -> None:
    """Записывает изменённую сессию обратно в FSM."""
    await state.set_data(session.to_data())


async def close_session(state: FSMContext, session: Session) -> bool:
    """
    Закрывает сессию, если в FSM всё ещё она.

    AICODE-NOTE: Между await пользователь мог начать новый диалог.
    Сравниваем state и flow_id, чтобы не закрыть чужую сессию.

    Returns:
        True, если state очищен
    """
    if await state.get_state() != session.STATE.state:
        return False
    if await state.get_value("flow_id") != session.flow_id:
        return False

    await state.clear()
    return True


def count_sessions(storage: BaseStorage) -> int | None:
    """Число открытых диалогов; None, если хранилище не умеет их перечислять."""
    if not isinstance(storage, MemoryStorage):
        return None
    return sum(1 for record in storage.storage.values() if record.state is not None)
