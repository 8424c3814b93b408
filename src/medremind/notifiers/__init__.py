from medremind.notifiers.base import Notifier, NotificationPermission
from medremind.notifiers.log_notifier import LogNotifier
from medremind.notifiers.telegram_notifier import TelegramNotifier


def create_notifier(kind: str, telegram_token: str = "", telegram_chat_id: int = 0) -> Notifier:
    """根据配置创建通知实例"""
    if kind == "log":
        return LogNotifier()
    if kind == "telegram":
        return TelegramNotifier(token=telegram_token, chat_id=telegram_chat_id)
    raise ValueError(f"不支持的 NOTIFIER: {kind}")


__all__ = ["Notifier", "NotificationPermission", "LogNotifier", "TelegramNotifier", "create_notifier"]
