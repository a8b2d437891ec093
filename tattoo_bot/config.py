"""Конфигурация приложения через .env файл."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки приложения из переменных окружения."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Игнорируем лишние переменные из .env
    )

    # Telegram Bot
    telegram_bot_token: str

    # Чат мастера, куда пересылаются заявки
    master_chat_id: int

    # Telegram ID мастера (если не задан, совпадает с master_chat_id)
    master_id: int | None = None

    # Database
    database_url: str = "sqlite://data/tattoo_bot.sqlite3"

    # Application
    mode: str = "development"
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = True

    # Bot Mode
    bot_mode: Literal["polling", "webhook"] = "polling"

    # Webhook настройки (только для bot_mode=webhook)
    webhook_url: str | None = None  # https://yourdomain.com/webhook
    webhook_path: str = "/webhook"
    webhook_port: int = 8080
    webhook_secret: str | None = None

    # Сколько ждать остальные фото альбома (секунды)
    media_group_delay: float = 0.5

    # Информация о салоне
    salon_name: str = "Tattoo Salon"
    salon_address: str = "ул. Примерная, 123, г. Москва"
    salon_hours: str = "Пн-Вс 10:00 - 22:00"
    salon_phone: str = "+7 (999) 123-45-67"
    salon_instagram: str = "tattoo_salon_moscow"
    salon_email: str = "info@tattoo-salon.ru"
    salon_latitude: float = 55.7558
    salon_longitude: float = 37.6176

    @property
    def master_telegram_id(self) -> int:
        """Telegram ID пользователя, которому разрешено отвечать клиентам."""
        return self.master_id if self.master_id is not None else self.master_chat_id


# Глобальный экземпляр настроек
# AICODE-NOTE: Settings автоматически загружает переменные из .env
settings = Settings(_env_file=".env")  # type: ignore[call-arg]
