"""事件总线模块，定义了事件总线类 Bus 及事件名集合 E
目前只有提醒创建/触发两类普通事件，供日志、指标等旁路逻辑订阅
"""

from __future__ import annotations
from pyee.asyncio import AsyncIOEventEmitter
from typing import Any, Callable

from medremind.logger import logger

Handler = Callable[..., Any]

# 事件名集中定义
class E:
    REMINDER_CREATED = "reminder.created"
    REMINDER_TRIGGERED = "reminder.triggered"


class Bus(AsyncIOEventEmitter):
    def __init__(self) -> None:
        super().__init__()
        # 订阅者抛出的异常只记日志，不回传给 emit 的调用方
        super().on("error", self._log_handler_error)

    @staticmethod
    def _log_handler_error(exc: BaseException) -> None:
        logger.opt(exception=exc).error(f"事件处理器异常: {exc}")

    def on(self, event: str) -> Callable[[Handler], Handler]:
        """注册事件处理器装饰器"""
        def decorator(handler: Handler) -> Handler:
            logger.debug(f"注册事件处理器: {event} -> {handler.__name__}")
            super(Bus, self).on(event, handler)
            return handler

        return decorator


bus = Bus()

__all__ = ["bus", "E", "Bus"]
