"""Типы данных для типизации проекта."""

# Алиасы типов для улучшения читаемости
TelegramID = int
FileID = str
RequestID = int

# Кому и на какую заявку отвечает мастер: (client_id, request_id)
ReplyTarget = tuple[TelegramID, RequestID | None]
