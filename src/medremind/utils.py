import threading
import time
from datetime import datetime

__all__ = ["now_local", "date_str", "min_str", "IdGenerator", "next_id"]

DATE_FORMAT = "%Y-%m-%d"
TIME_MIN_FORMAT = "%H:%M"


def now_local() -> datetime:
    """获取当前本地挂钟时间(不做时区换算)"""
    return datetime.now()

def date_str(dt: datetime) -> str:
    """格式: 'YYYY-MM-DD'"""
    return dt.strftime(DATE_FORMAT)

def min_str(dt: datetime) -> str:
    """格式: 'HH:MM'，精确到分钟"""
    return dt.strftime(TIME_MIN_FORMAT)


class IdGenerator:
    """毫秒时间戳 * 1000 作为种子，同一毫秒内靠递增计数保证不重复"""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            seed = time.time_ns() // 1_000_000 * 1000
            self._last = max(seed, self._last + 1)
            return self._last


_id_generator = IdGenerator()

def next_id() -> int:
    return _id_generator.next_id()
