from medremind.logger import logger
from medremind.notifiers.base import Notifier, NotificationPermission


class LogNotifier(Notifier):
    """把提醒写进日志，适合本地调试"""

    @property
    def permission(self) -> NotificationPermission:
        return "granted"

    async def emit(self, title: str, body: str) -> None:
        logger.info(f"[{title}] {body}")
