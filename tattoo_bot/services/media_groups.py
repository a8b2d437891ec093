"""Сборка альбомов (media group) из отдельных апдейтов.

Telegram присылает каждое фото альбома отдельным сообщением с общим
media_group_id. Коллектор копит фото группы и через небольшую задержку
отдаёт их обработчику одним пакетом.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from tattoo_bot.types import FileID
from tattoo_bot.utils.logger import logger


@dataclass
class MediaGroupBuffer:
    """Накопленные фото одного альбома."""

    group_id: str
    user_id: int
    file_ids: list[FileID] = field(default_factory=list)
    caption: str | None = None
    # Последнее сообщение альбома, на него отвечаем пользователю
    message: Any = None


FlushCallback = Callable[[MediaGroupBuffer], Awaitable[None]]


class MediaGroupCollector:
    """Копит фото альбомов и сливает каждый альбом ровно один раз."""

    def __init__(self, delay: float = 0.5) -> None:
        self.delay = delay
        self._buffers: dict[str, MediaGroupBuffer] = {}
        self._tasks: set[asyncio.Task[None]] = set()

    def add(
        self,
        group_id: str,
        user_id: int,
        file_id: FileID,
        on_flush: FlushCallback,
        caption: str | None = None,
        message: Any = None,
    ) -> MediaGroupBuffer:
        """
        Добавляет фото в буфер альбома.

        Первое фото группы запускает отложенную задачу слива.

        Args:
            group_id: media_group_id из сообщения
            user_id: Telegram ID отправителя
            file_id: file_id самого большого размера фото
            on_flush: Обработчик собранного альбома
            caption: Подпись к фото (если есть)
            message: Сообщение, на которое отвечать

        Returns:
            Текущий буфер альбома
        """
        buffer = self._buffers.get(group_id)
        if buffer is None:
            buffer = MediaGroupBuffer(group_id=group_id, user_id=user_id)
            self._buffers[group_id] = buffer

            task = asyncio.create_task(self._flush_later(group_id, on_flush))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        buffer.file_ids.append(file_id)
        if caption and caption.strip():
            buffer.caption = caption.strip()
        if message is not None:
            buffer.message = message

        return buffer

    def claim(self, group_id: str) -> MediaGroupBuffer | None:
        """Забирает буфер альбома. Второй вызов для той же группы вернёт None."""
        return self._buffers.pop(group_id, None)

    @property
    def pending(self) -> int:
        return len(self._buffers)

    async def _flush_later(self, group_id: str, on_flush: FlushCallback) -> None:
        await asyncio.sleep(self.delay)

        buffer = self.claim(group_id)
        if buffer is None:
            return

        logger.info(
            f"📸 Альбом {group_id} от пользователя {buffer.user_id}: {len(buffer.file_ids)} фото"
        )

        # AICODE-NOTE: Исключения фоновой задачи не доходят до errors-хендлера диспетчера
        try:
            await on_flush(buffer)
        except Exception as e:
            logger.error(f"❌ Ошибка обработки альбома {group_id}: {e}", exc_info=True)

    async def close(self) -> None:
        """Отменяет ожидающие задачи (при остановке бота)."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._buffers.clear()
