from abc import ABC, abstractmethod
from typing import Literal

__all__ = ["Notifier", "NotificationPermission"]

NotificationPermission = Literal["granted", "denied", "default"]


class Notifier(ABC):
    @property
    @abstractmethod
    def permission(self) -> NotificationPermission:
        pass

    async def request_permission(self) -> NotificationPermission:
        return self.permission

    @abstractmethod
    async def emit(self, title: str, body: str) -> None:
        pass
