"""提醒存储

所有提醒作为一个 JSON 数组整体保存在 kv_store 的 "reminders" 键下。
读-改-写整体进行，没有加锁: 扫描和新建提醒在同一时刻交错时，后写入者会覆盖先写入者的修改。
"""

import json
from typing import List

import medremind.storage.db_config as db_config
from medremind.datamodel import *
from medremind.events import bus, E
from medremind.logger import logger
from medremind.metrics import runtime_metrics
from medremind.utils import next_id
from medremind.world.schedule import generate_notification_schedule

STORAGE_KEY = "reminders"


async def get_reminders() -> List[Reminder]:
    """获取全部提醒；从未写入或数据损坏时返回空列表"""
    raw = await db_config.kv_get(STORAGE_KEY)
    if raw is None:
        return []
    try:
        data = json.loads(raw)
        return [Reminder.from_dict(item) for item in data]
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"提醒数据损坏，按空列表处理: {e}")
        return []


async def write_reminders(reminders: List[Reminder]) -> None:
    """整体覆盖写回"""
    await db_config.kv_set(
        STORAGE_KEY,
        json.dumps([r.to_dict() for r in reminders], ensure_ascii=False),
    )


async def save_reminder(data: ReminderInput) -> Reminder:
    """创建提醒。日期范围由调用方负责校验"""
    reminders = await get_reminders()
    reminder = Reminder(
        id=next_id(),
        medication_name=data.medication_name,
        dosage=data.dosage,
        frequency=data.frequency,
        start_date=data.start_date,
        end_date=data.end_date,
        notifications=generate_notification_schedule(data),
    )
    reminders.append(reminder)
    await write_reminders(reminders)

    runtime_metrics.record_reminder_created()
    bus.emit(E.REMINDER_CREATED, reminder=reminder)
    logger.info(
        f"创建提醒: reminder_id={reminder.id}, medication={reminder.medication_name}, "
        f"{reminder.start_date} ~ {reminder.end_date}, slots={len(reminder.notifications)}"
    )
    return reminder


async def has_active_reminders() -> bool:
    """是否仍有待触发的通知"""
    reminders = await get_reminders()
    return any(r.has_pending() for r in reminders)

__all__ = ["STORAGE_KEY", "get_reminders", "write_reminders", "save_reminder", "has_active_reminders"]
