"""提醒扫描器

每隔固定间隔读取全部提醒，触发 (date, time) 与当前分钟完全相同的待发送通知，并将其标记为 shown。
扫描器未运行期间错过的通知不会补发。
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Callable, List, Tuple

import medremind.storage.reminder as reminder_storage
from medremind.datamodel import *
from medremind.events import bus, E
from medremind.logger import logger
from medremind.metrics import runtime_metrics
from medremind.notifiers.base import Notifier
from medremind.utils import date_str, min_str, now_local

NOTIFICATION_TITLE = "Medication Reminder"


def notification_body(reminder: Reminder) -> str:
    return f"Time to take {reminder.medication_name} - {reminder.dosage}"


class ReminderSweeper:
    def __init__(
        self,
        notifier: Notifier,
        interval_seconds: float = 60.0,
        clock: Callable[[], datetime] = now_local,
    ) -> None:
        self.notifier = notifier
        self.interval_seconds = interval_seconds
        self.clock = clock
        self._task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None
        self._last_sweep_at_epoch: float | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def get_status(self) -> dict[str, object]:
        return {
            "running": self.running,
            "interval_seconds": self.interval_seconds,
            "last_sweep_at_epoch": self._last_sweep_at_epoch,
        }

    def start(self) -> bool:
        """启动扫描循环；已在运行时不重复启动，返回是否新建了任务"""
        if self.running:
            return False
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._stop_event), name="reminder-sweeper")
        return True

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self._stop_event = None

    async def _run(self, stop_event: asyncio.Event) -> None:
        logger.info(f"Reminder 扫描循环已启动, interval={self.interval_seconds}s")
        try:
            loop = asyncio.get_running_loop()
            next_at = loop.time()
            while not stop_event.is_set():
                # 按固定节拍调度，扫描耗时不累积到周期里，避免漏掉某一分钟
                next_at += self.interval_seconds
                try:
                    await self.sweep()
                except Exception as e:
                    runtime_metrics.record_sweep(error=True)
                    logger.opt(exception=e).error(f"提醒扫描失败: {e}")

                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=max(0.0, next_at - loop.time()))
                except asyncio.TimeoutError:
                    pass
        finally:
            logger.info("Reminder 扫描循环已关闭")

    async def sweep(self, now: datetime | None = None) -> List[Tuple[Reminder, NotificationSlot]]:
        """执行一次扫描，返回本次触发的 (reminder, slot)"""
        now = now or self.clock()
        current_date = date_str(now)
        current_time = min_str(now)
        self._last_sweep_at_epoch = time.time()

        reminders = await reminder_storage.get_reminders()
        fired: List[Tuple[Reminder, NotificationSlot]] = []
        for reminder in reminders:
            for slot in reminder.notifications:
                if (
                    slot.status == SlotStatus.PENDING.value
                    and slot.date == current_date
                    and slot.time == current_time
                ):
                    slot.status = SlotStatus.SHOWN.value
                    fired.append((reminder, slot))

        # 先落盘再发通知: 读-改-写之间不出现网络等待
        await reminder_storage.write_reminders(reminders)

        for reminder, slot in fired:
            await self._show_notification(reminder)
            bus.emit(E.REMINDER_TRIGGERED, reminder=reminder, slot=slot)

        runtime_metrics.record_sweep()
        if fired:
            logger.info(f"提醒扫描 {current_date} {current_time}: 触发 {len(fired)} 条通知")
        else:
            logger.trace(f"提醒扫描 {current_date} {current_time}: 无到期通知")
        return fired

    async def _show_notification(self, reminder: Reminder) -> None:
        """发送通知；没有权限或发送失败时只记录日志，不影响状态流转"""
        if self.notifier.permission != "granted":
            logger.warning(
                f"通知权限不可用({self.notifier.permission})，跳过提醒: reminder_id={reminder.id}"
            )
            runtime_metrics.record_notification(delivered=False)
            return

        try:
            await self.notifier.emit(NOTIFICATION_TITLE, notification_body(reminder))
        except Exception as e:
            logger.opt(exception=e).error(f"发送提醒失败: reminder_id={reminder.id}, error={e}")
            runtime_metrics.record_notification(delivered=False, error=True)
            return
        runtime_metrics.record_notification(delivered=True)


__all__ = ["ReminderSweeper", "NOTIFICATION_TITLE", "notification_body"]
