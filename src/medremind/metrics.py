"""
一个简单的运行时指标收集类，用于统计提醒扫描次数、通知送达情况等信息。
"""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass
class RuntimeMetrics:
    sweep_count: int = 0
    sweep_error_count: int = 0
    reminder_created_count: int = 0
    notification_fired_count: int = 0
    notification_delivered_count: int = 0
    notification_suppressed_count: int = 0
    notification_error_count: int = 0
    last_sweep_at: float | None = None

    def record_sweep(self, error: bool = False) -> None:
        self.sweep_count += 1
        self.last_sweep_at = time.time()
        if error:
            self.sweep_error_count += 1

    def record_reminder_created(self) -> None:
        self.reminder_created_count += 1

    def record_notification(self, delivered: bool, error: bool = False) -> None:
        self.notification_fired_count += 1
        if delivered:
            self.notification_delivered_count += 1
        elif error:
            self.notification_error_count += 1
        else:
            self.notification_suppressed_count += 1

    def snapshot(self) -> dict:
        return {
            "sweep_count": self.sweep_count,
            "sweep_error_count": self.sweep_error_count,
            "reminder_created_count": self.reminder_created_count,
            "notification_fired_count": self.notification_fired_count,
            "notification_delivered_count": self.notification_delivered_count,
            "notification_suppressed_count": self.notification_suppressed_count,
            "notification_error_count": self.notification_error_count,
            "last_sweep_at_epoch": self.last_sweep_at,
            "last_sweep_at_utc": (
                time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(self.last_sweep_at))
                if self.last_sweep_at is not None
                else None
            ),
        }


runtime_metrics = RuntimeMetrics()


__all__ = ["RuntimeMetrics", "runtime_metrics"]
