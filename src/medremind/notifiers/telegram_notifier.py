import telegram
from telegram.error import TelegramError

from medremind.logger import logger
from medremind.notifiers.base import Notifier, NotificationPermission


class TelegramNotifier(Notifier):
    """通过 Telegram Bot 给指定 chat 发送提醒"""

    def __init__(self, token: str, chat_id: int) -> None:
        self._token = token
        self._chat_id = chat_id
        self._permission: NotificationPermission = "default" if token and chat_id else "denied"

    @property
    def permission(self) -> NotificationPermission:
        return self._permission

    async def request_permission(self) -> NotificationPermission:
        """用 getMe 校验 token，结果决定之后能否发送"""
        if not self._token or not self._chat_id:
            self._permission = "denied"
            return self._permission
        try:
            async with telegram.Bot(self._token) as bot:
                me = await bot.get_me()
            logger.info(f"Telegram 通知已就绪: bot=@{me.username}, chat_id={self._chat_id}")
            self._permission = "granted"
        except TelegramError as e:
            logger.warning(f"Telegram token 校验失败，通知将被跳过: {e}")
            self._permission = "denied"
        return self._permission

    async def emit(self, title: str, body: str) -> None:
        async with telegram.Bot(self._token) as bot:
            await bot.send_message(chat_id=self._chat_id, text=f"{title}\n{body}")
        logger.trace(f"已发送 Telegram 提醒: chat_id={self._chat_id}")
