from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

__all__ = [
    "Frequency", "SlotStatus",
    "NotificationSlot", "Reminder", "ReminderInput",
]


# ----------------- 频率 ----------------
class Frequency(str, Enum):
    DAILY = "daily"
    TWICE = "twice"
    WEEKLY = "weekly"
    UNKNOWN = "unknown"  # 未识别的频率，按 daily 处理

    @classmethod
    def parse(cls, raw: str | None) -> "Frequency":
        try:
            value = cls(raw)
        except ValueError:
            return cls.UNKNOWN
        return value


class SlotStatus(str, Enum):
    PENDING = "pending"
    SHOWN = "shown"
    DISMISSED = "dismissed"  # 保留值，目前没有任何流程会产生该状态


# ----------------- Reminder 数据模型 ----------------
@dataclass
class NotificationSlot:
    id: int
    date: str  # 格式: "YYYY-MM-DD"
    time: str  # 格式: "HH:MM"
    status: str = SlotStatus.PENDING.value

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "date": self.date, "time": self.time, "status": self.status}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationSlot":
        return cls(
            id=data["id"],
            date=data["date"],
            time=data["time"],
            status=data.get("status", SlotStatus.PENDING.value),
        )


@dataclass
class ReminderInput:
    medication_name: str
    dosage: str
    frequency: str
    start_date: str  # 格式: "YYYY-MM-DD"
    end_date: str  # 格式: "YYYY-MM-DD"


@dataclass
class Reminder:
    id: int
    medication_name: str
    dosage: str
    frequency: str  # 保留用户输入的原始字符串
    start_date: str
    end_date: str
    notifications: List[NotificationSlot] = field(default_factory=list)

    def has_pending(self) -> bool:
        return any(n.status == SlotStatus.PENDING.value for n in self.notifications)

    def to_dict(self) -> Dict[str, Any]:
        """持久化格式，字段名与存储中的 JSON 保持一致"""
        return {
            "id": self.id,
            "medicationName": self.medication_name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "notifications": [n.to_dict() for n in self.notifications],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reminder":
        return cls(
            id=data["id"],
            medication_name=data["medicationName"],
            dosage=data["dosage"],
            frequency=data["frequency"],
            start_date=data["startDate"],
            end_date=data["endDate"],
            notifications=[NotificationSlot.from_dict(n) for n in data.get("notifications") or []],
        )
