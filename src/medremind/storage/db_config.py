import aiosqlite
import os
from pathlib import Path

from medremind.logger import logger

_SQL_DIR = Path(__file__).with_name("sql")

conn: aiosqlite.Connection | None = None


def _ensure_conn():
    if conn is None:
        raise RuntimeError("数据库未初始化，请先调用 init_db()")


async def init_db(db_path: str) -> None:
    db_dir = os.path.dirname(db_path)
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir, exist_ok=True)
    global conn
    conn = await aiosqlite.connect(db_path)

    async with conn.execute("PRAGMA user_version") as cursor:
        row = await cursor.fetchone()
        user_version = row[0]

    if user_version == 0:
        init_sql = (_SQL_DIR / "db_init_v1.sql").read_text(encoding="utf-8")
        await conn.executescript(init_sql)
        await conn.execute("PRAGMA user_version = 1")
        logger.info(f"数据库已初始化: {db_path}")

    # 数据库升级逻辑可以在这里继续添加
    await conn.commit()


async def close_db() -> None:
    global conn
    if conn is not None:
        await conn.close()
        conn = None


async def kv_get(key: str) -> str | None:
    """读取键对应的原始值，不存在时返回 None"""
    _ensure_conn()
    async with conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)) as cursor:
        row = await cursor.fetchone()
    return row[0] if row else None


async def kv_set(key: str, value: str) -> None:
    """整体覆盖写入"""
    _ensure_conn()
    await conn.execute(
        "INSERT INTO kv_store (key, value, updated_at_utc) VALUES (?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at_utc = CURRENT_TIMESTAMP",
        (key, value),
    )
    await conn.commit()
    logger.trace(f"写入 kv_store: key={key}, size={len(value)}")

__all__ = ["conn", "init_db", "close_db", "kv_get", "kv_set"]
