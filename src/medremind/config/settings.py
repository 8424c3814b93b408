import os
import sys
from dotenv import load_dotenv
from medremind.logger import logger
load_dotenv()

__all__ = [
    "MEDREMIND_DB_PATH",
    "LOG_FILE", "LOG_LEVEL", "CONSOLE_LOG_LEVEL",
    "REMINDER_CHECK_INTERVAL_SECONDS",
    "NOTIFIER", "TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID",
    "ENABLE_ADMIN_HTTP", "ADMIN_HTTP_HOST", "ADMIN_HTTP_PORT", "ADMIN_AUTH_TOKEN",
]


def _parse_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on", "y")


# 存储
MEDREMIND_DB_PATH = os.getenv("MEDREMIND_DB_PATH", "data/medremind.db")

# 日志
LOG_FILE = os.getenv("LOG_FILE", "logs/medremind.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").strip().upper()
CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "INFO").strip().upper()

# 提醒扫描
try:
    REMINDER_CHECK_INTERVAL_SECONDS = float(os.getenv("REMINDER_CHECK_INTERVAL_SECONDS", "60"))
except ValueError:
    REMINDER_CHECK_INTERVAL_SECONDS = 60.0
    logger.warning("REMINDER_CHECK_INTERVAL_SECONDS 非法, 已回退到 60 秒")

if REMINDER_CHECK_INTERVAL_SECONDS <= 0:
    REMINDER_CHECK_INTERVAL_SECONDS = 60.0
    logger.warning("REMINDER_CHECK_INTERVAL_SECONDS 必须为正数, 已回退到 60 秒")

# 通知方式: "log" 或 "telegram"
NOTIFIER = os.getenv("NOTIFIER", "log").strip().lower()
if NOTIFIER not in ("log", "telegram"):
    logger.critical(f"NOTIFIER 非法: {NOTIFIER}, 仅支持 log 或 telegram")
    sys.exit(1)

TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
TELEGRAM_CHAT_ID = int(os.getenv("TELEGRAM_CHAT_ID", "0"))
if NOTIFIER == "telegram" and (TELEGRAM_BOT_TOKEN == "" or TELEGRAM_CHAT_ID == 0):
    logger.warning("NOTIFIER=telegram, 但 TELEGRAM_BOT_TOKEN 或 TELEGRAM_CHAT_ID 未设置, 提醒将无法送达")


# Admin API
ENABLE_ADMIN_HTTP = _parse_bool("ENABLE_ADMIN_HTTP", True)
ADMIN_HTTP_HOST = os.getenv("ADMIN_HTTP_HOST", "127.0.0.1")
ADMIN_HTTP_PORT = int(os.getenv("ADMIN_HTTP_PORT", "18080"))
ADMIN_AUTH_TOKEN = os.getenv("ADMIN_AUTH_TOKEN", "")
