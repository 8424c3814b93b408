from medremind.logger import setup_logging, logger
from medremind.config.settings import *

import asyncio
import signal

import medremind.storage.db_config as db_config
from medremind.admin.http_server import main_loop as admin_http_main
from medremind.events import bus, E
from medremind.notifiers import create_notifier
from medremind.world.reminder import ReminderSweeper

shutdown_event = asyncio.Event()

def signal_handler(sig, frame):
    """处理 SIGINT (Ctrl+C) / SIGTERM 信号"""
    logger.info("收到中断信号,正在依次关闭组件...")
    shutdown_event.set()


@bus.on(E.REMINDER_TRIGGERED)
def _log_triggered(reminder, slot) -> None:
    logger.debug(f"通知已触发: reminder_id={reminder.id}, slot_id={slot.id}, at={slot.date} {slot.time}")


async def main():
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    await db_config.init_db(MEDREMIND_DB_PATH)

    notifier = create_notifier(NOTIFIER, TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID)
    permission = await notifier.request_permission()
    if permission != "granted":
        logger.warning(f"通知权限不可用({permission})，提醒仍会按时标记但不会送达")

    sweeper = ReminderSweeper(notifier, interval_seconds=REMINDER_CHECK_INTERVAL_SECONDS)
    sweeper.start()

    try:
        if ENABLE_ADMIN_HTTP:
            await admin_http_main(shutdown_event, sweeper)
        else:
            logger.warning("HTTP 服务已禁用")
            await shutdown_event.wait()
    finally:
        logger.info("关闭 MedRemind...")
        await sweeper.stop()

        logger.info("关闭数据库连接...")
        await db_config.close_db()
        logger.info("MedRemind 已关闭")


def run() -> None:
    setup_logging(
        log_level=LOG_LEVEL,
        log_file=LOG_FILE,
        console_level=CONSOLE_LOG_LEVEL,
    )
    logger.info("启动 MedRemind...")
    asyncio.run(main())


if __name__ == "__main__":
    run()
