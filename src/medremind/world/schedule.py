"""
注意: 通知时间只精确到分钟，日期格式为 "YYYY-MM-DD"，时间格式为 "HH:MM"
"""

from datetime import datetime, timedelta
from typing import Dict, List, Tuple

from medremind.datamodel import *
from medremind.utils import DATE_FORMAT, next_id

__all__ = ["FREQUENCY_TIMES", "get_times_for_frequency", "generate_notification_schedule"]

# weekly 目前与 daily 相同，每天都会提醒
FREQUENCY_TIMES: Dict[Frequency, Tuple[str, ...]] = {
    Frequency.DAILY: ("09:00",),
    Frequency.TWICE: ("09:00", "21:00"),
    Frequency.WEEKLY: ("09:00",),
    Frequency.UNKNOWN: ("09:00",),
}


def get_times_for_frequency(frequency: str) -> Tuple[str, ...]:
    return FREQUENCY_TIMES[Frequency.parse(frequency)]


def generate_notification_schedule(data: ReminderInput) -> List[NotificationSlot]:
    """按天展开 [start_date, end_date] 闭区间，每天按频率对应的时间列表生成通知"""
    start = datetime.strptime(data.start_date, DATE_FORMAT)
    end = datetime.strptime(data.end_date, DATE_FORMAT)
    day_diff = (end - start).days
    times = get_times_for_frequency(data.frequency)

    schedule: List[NotificationSlot] = []
    for day in range(day_diff + 1):
        date = (start + timedelta(days=day)).strftime(DATE_FORMAT)
        for time in times:
            schedule.append(NotificationSlot(id=next_id(), date=date, time=time))
    return schedule
