"""Исключения предметной области бота."""


class TattooBotError(Exception):
    """Базовое исключение бота."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCommandError(TattooBotError):
    """Некорректные аргументы команды."""


class AccessDeniedError(TattooBotError):
    """Действие доступно только мастеру."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"Пользователь {user_id} не является мастером")


class ClientNotFoundError(TattooBotError):
    """Клиент не найден в базе."""

    def __init__(self, client_id: int) -> None:
        self.client_id = client_id
        super().__init__(f"Клиент с ID {client_id} не найден")


class RequestNotFoundError(TattooBotError):
    """Заявка не найдена или принадлежит другому клиенту."""

    def __init__(self, request_id: int, client_id: int | None = None) -> None:
        self.request_id = request_id
        self.client_id = client_id
        super().__init__(f"Заявка #{request_id} не найдена")
