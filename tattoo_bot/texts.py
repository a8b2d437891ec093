"""Тексты сообщений бота (HTML-разметка)."""

from datetime import datetime

from aiogram.utils.text_decorations import html_decoration

from tattoo_bot.config import settings
from tattoo_bot.database.models import MAX_PHOTOS, RequestStatus, TattooRequest
from tattoo_bot.services.sessions import ClientProfile

WELCOME = f"""🎨 <b>Добро пожаловать в {settings.salon_name}!</b>

Я помогу вам:
• Найти идеальную татуировку
• Связаться с мастером
• Записаться на консультацию
• Узнать о ценах и услугах

📋 <b>Доступные команды:</b>
/start - Начать работу с ботом
/help - Помощь и инструкции
/request - Создать запрос на татуировку
/myrequests - Мои запросы
/contact - Контактная информация
/prices - Цены на услуги

Выберите нужную команду или просто напишите мне, что вас интересует 😊"""

HELP = """❓ <b>Как пользоваться ботом</b>

<b>Запрос на татуировку:</b>
1️⃣ Отправьте команду /request
2️⃣ Прикрепите до {max_photos} фото-референсов (по одному или альбомом)
3️⃣ Опишите идею текстом или в подписи к фото

Мастер получит ваш запрос и ответит прямо в этом чате.

<b>Команды:</b>
/request - Создать запрос на татуировку
/cancel - Отменить текущий запрос
/myrequests - Мои запросы и их статусы
/prices - Цены на услуги
/contact - Контакты и адрес салона
/start - Главное меню""".format(max_photos=MAX_PHOTOS)

CONTACT = f"""📞 <b>Контактная информация</b>

<b>🏪 Наш салон:</b>
📍 Адрес: {settings.salon_address}
🕒 Время работы: {settings.salon_hours}
📱 Телефон: {settings.salon_phone}

<b>📱 Способы связи:</b>
• Instagram: @{settings.salon_instagram}
• Email: {settings.salon_email}

<b>📝 Запись на консультацию:</b>
• Через бота командой /request
• По телефону: {settings.salon_phone}

<b>💡 Дополнительно:</b>
• Бесплатная консультация при первом визите
• Гарантия на все работы

Ждем вас в нашем салоне! 🎨✨"""

PRICES = """💰 <b>Цены на услуги</b>

• Мини-тату (до 5 см) — от 3 000 ₽
• Маленькая (5-10 см) — от 5 000 ₽
• Средняя (10-20 см) — от 10 000 ₽
• Большая (от 20 см) — от 20 000 ₽
• Рукав / спина — по договорённости, сеанс от 15 000 ₽
• Перекрытие старой татуировки — от 7 000 ₽
• Разработка эскиза — бесплатно при записи

<i>Точная стоимость зависит от стиля, детализации и места на теле.
Опишите идею командой /request — мастер назовёт цену.</i>"""

REQUEST_INSTRUCTIONS = f"""🎨 <b>Создание запроса на татуировку</b>

Пожалуйста, опишите вашу идею татуировки. Включите следующую информацию:

📝 <b>Обязательно укажите:</b>
• Описание желаемой татуировки
• Стиль (реализм, минимализм, олдскул, и т.д.)
• Размер (маленькая, средняя, большая)
• Место на теле
• Бюджет (если есть предпочтения)

📸 <b>Дополнительно:</b>
• Можете прикрепить фотографии-референсы (максимум {MAX_PHOTOS} фото)

<b>Способы отправки запроса:</b>
1️⃣ Отправьте фото с подписью (текст в описании фото)
2️⃣ Отправьте фото, затем отдельно текстовое описание
3️⃣ Отправьте только текстовое описание

Передумали? Отправьте /cancel

<i>Пример: "Хочу татуировку дракона в стиле реализм на плече, размер средний, бюджет до 50000 рублей"</i>"""

REQUEST_SENT = (
    "✅ <b>Запрос отправлен!</b>\n\n"
    "Ваш запрос был передан мастеру. Мы свяжемся с вами в ближайшее время "
    "для обсуждения деталей.\n\nСпасибо за обращение! 🎨"
)

REQUEST_FAILED = (
    "❌ <b>Произошла ошибка</b>\n\n"
    "Не удалось сохранить запрос. Отправьте описание ещё раз или начните заново командой /request"
)

EMPTY_DESCRIPTION = "✍️ Опишите, пожалуйста, вашу идею текстом — пустой запрос отправить нельзя."

PHOTO_LIMIT = (
    f"❌ <b>Превышен лимит фотографий</b>\n\n"
    f"Максимальное количество фотографий: {MAX_PHOTOS}\n\n"
    f"Отправьте текстовое описание запроса, чтобы завершить создание заявки."
)

PHOTO_ERROR = "❌ Ошибка при обработке фотографии"

ALBUM_NOT_ATTACHED = (
    "⚠️ Запрос уже отправлен или отменён, поэтому эти фото к нему не прикреплены.\n\n"
    "Чтобы отправить их мастеру, начните новый запрос командой /request"
)

CANCELLED = "🚫 Действие отменено. Чтобы создать новый запрос, используйте /request"

NOTHING_TO_CANCEL = "Нечего отменять 🙂"

NO_REQUESTS = "У вас пока нет запросов. Создайте первый командой /request 🎨"

UNKNOWN_USER = "❌ Ошибка: не удалось определить пользователя"

REPLY_USAGE = """💬 <b>Команда ответа клиенту</b>

<b>Использование:</b>
<code>/reply &lt;ID_клиента&gt; [ID_запроса]</code>

<b>Примеры:</b>
<code>/reply 123456789</code> - ответить клиенту с ID 123456789
<code>/reply 123456789 5</code> - ответить на запрос #5 клиенту 123456789

<b>После ввода команды:</b>
1. Введите ваше сообщение
2. Нажмите "Отправить"
3. Клиент получит ваш ответ"""

ACCESS_DENIED = "❌ У вас нет прав для использования этой команды"

REPLY_SENT = "✅ <b>Ответ отправлен клиенту!</b>\n\nВаше сообщение было доставлено."

REPLY_SAVE_FAILED = "❌ <b>Ошибка</b>\n\nНе удалось сохранить ответ. Отправьте сообщение ещё раз."

REPLY_TEXT_ONLY = "✍️ Ответ клиенту должен быть текстом. Отправьте сообщение или /cancel"

GENERIC_ERROR = "Произошла ошибка. Попробуйте позже или обратитесь к администратору."

STALE_BUTTON = "Эта кнопка больше не активна"

REPLY_BUTTON_PROMPT = "💬 Ответить клиенту:"

KEYWORD_TATTOO = (
    "🎨 Отлично! Я помогу вам с татуировкой. "
    "Используйте команду /request для создания запроса на консультацию."
)
KEYWORD_PRICE = "💰 Информацию о ценах вы можете получить командой /prices"
KEYWORD_CONTACT = "📞 Контактную информацию можно получить командой /contact"
GREETING = "Привет! 👋 Я бот для тату-салона. Используйте /help чтобы узнать, что я умею!"
STICKER = "😄 Крутой стикер! А теперь расскажите, какую татуировку вы хотите?"
PHOTO_OUTSIDE_FLOW = (
    "📸 Отличная фотография! Это референс для будущей татуировки? "
    "Отправьте /request, и я передам её мастеру вместе с вашим запросом."
)

STATUS_LABELS: dict[RequestStatus, str] = {
    RequestStatus.PENDING: "⏳ Ожидает ответа",
    RequestStatus.IN_PROGRESS: "🛠 В работе",
    RequestStatus.COMPLETED: "✅ Выполнен",
    RequestStatus.CANCELLED: "🚫 Отменён",
}


def photo_added(added: int, photos_left: int) -> str:
    """Подтверждение добавления фото с остатком лимита."""
    title = "📸 <b>Фото добавлено!</b>" if added == 1 else "📸 <b>Фотографии добавлены!</b>"
    counter = f"\n\nДобавлено: {added} фото" if added > 1 else ""

    if photos_left > 0:
        return (
            f"{title}{counter}\n\nМожете добавить ещё: {photos_left} фото\n\n"
            f"Отправьте еще фото или текстовое описание запроса."
        )
    return (
        f"{title}{counter}\n\nДостигнут лимит фотографий ({MAX_PHOTOS}). "
        f"Отправьте текстовое описание запроса для завершения."
    )


def photos_rejected(rejected: int) -> str:
    return f"{PHOTO_LIMIT}\n\n<i>Не добавлено фото: {rejected}</i>"


def master_request_card(
    request_id: int,
    profile: ClientProfile,
    description: str,
    photos_count: int,
    created_at: datetime | None = None,
) -> str:
    """Карточка новой заявки для мастера."""
    created_at = created_at or datetime.now()
    name = html_decoration.quote(
        f"{profile.first_name or ''} {profile.last_name or ''}".strip() or "не указано"
    )
    username = f"@{profile.username}" if profile.username else "не указан"
    photos_line = f"📸 <b>Прикрепленные фотографии:</b> {photos_count} шт.\n" if photos_count else ""

    return (
        f"🎨 <b>Новый запрос на татуировку #{request_id}</b>\n\n"
        f"👤 <b>Клиент:</b>\n"
        f"• Имя: {name}\n"
        f"• Username: {username}\n"
        f"• ID: <code>{profile.id}</code>\n\n"
        f"📝 <b>Описание запроса:</b>\n"
        f"{html_decoration.quote(description)}\n\n"
        f"{photos_line}"
        f"📅 <b>Дата создания:</b> {created_at.strftime('%d.%m.%Y %H:%M')}\n\n"
        f"💬 <b>Для ответа клиенту:</b> кнопка ниже или "
        f"<code>/reply {profile.id} {request_id}</code>"
    )


def reply_prompt(client: ClientProfile, request_id: int | None) -> str:
    request_line = f"📝 <b>Запрос:</b> #{request_id}\n" if request_id else ""
    return (
        f"💬 <b>Ответ клиенту</b>\n\n"
        f"👤 <b>Клиент:</b> {html_decoration.quote(client.display_name)}\n"
        f"{request_line}\n"
        f"<b>Введите ваше сообщение для клиента:</b>\n\n"
        f"<i>После ввода сообщения оно будет отправлено клиенту. Отмена — /cancel</i>"
    )


def reply_for_client(message: str) -> str:
    return (
        f"💬 <b>Ответ от мастера</b>\n\n"
        f"{html_decoration.quote(message)}\n\n"
        f"---\n"
        f"<i>Это ответ на ваш запрос в тату-салоне. "
        f"Если у вас есть дополнительные вопросы, используйте команду /request</i>"
    )


def reply_delivery_failed(client_id: int, request_id: int | None) -> str:
    retry = f"/reply {client_id} {request_id}" if request_id else f"/reply {client_id}"
    return (
        f"⚠️ <b>Ответ сохранён, но не доставлен</b>\n\n"
        f"Клиент мог заблокировать бота. Попробуйте ещё раз: <code>{retry}</code>"
    )


def client_not_found(client_id: int) -> str:
    return f"❌ Клиент с ID {client_id} не найден в базе данных"


def request_not_found(request_id: int) -> str:
    return f"❌ Запрос #{request_id} не найден у этого клиента"


def requests_list(requests: list[TattooRequest]) -> str:
    """Список заявок пользователя для /myrequests."""
    lines = ["📋 <b>Ваши запросы</b>\n"]
    for request in requests:
        description = request.description
        if len(description) > 60:
            description = description[:60] + "..."
        photos = f" · 📸 {len(request.photos)}" if request.photos else ""
        lines.append(
            f"<b>#{request.id}</b> · {request.created_at.strftime('%d.%m.%Y')} · "
            f"{STATUS_LABELS[request.status]}{photos}\n"
            f"{html_decoration.quote(description)}\n"
        )
    return "\n".join(lines)
