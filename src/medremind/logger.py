"""日志模块

级别支持: TRACE/DEBUG/INFO/WARNING/ERROR/CRITICAL (兼容别名 FATAL -> CRITICAL)

使用：进程入口调用一次 setup_logging，其余模块直接 from medremind.logger import logger。
uvicorn 等走标准库 logging 的日志也会被转发到 loguru。
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterable, Literal, Union

from loguru import logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "FATAL"]

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level:<8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | "
    "{name}:{function}:{line} - {message}"
)

_LEVEL_ALIAS = {"FATAL": "CRITICAL"}

INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")


def _normalize_level(level: Union[str, LogLevel]) -> str:
    return _LEVEL_ALIAS.get(str(level).upper(), str(level).upper())


class InterceptHandler(logging.Handler):
    """把标准库 logging 记录转交给 loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # 跳过 logging 模块自身的栈帧，让 loguru 显示真实调用位置
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _intercept_std_logging(names: Iterable[str]) -> None:
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def _file_handler(
    path: Path,
    *,
    level: str,
    retention: str,
) -> dict:
    return {
        "sink": path,
        "level": level,
        "format": FILE_FORMAT,
        "rotation": "10 MB",
        "retention": retention,
        "compression": "zip",
        "encoding": "utf-8",
    }


def setup_logging(
    log_level: LogLevel,
    log_file: Union[str, Path],
    console_level: LogLevel = "INFO",
) -> None:
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # 通知发送失败、扫描异常等单独落盘
    error_log_file = log_file.with_name(f"{log_file.stem}_error{log_file.suffix}")

    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "level": _normalize_level(console_level),
                "format": CONSOLE_FORMAT,
                "colorize": True,
            },
            _file_handler(log_file, level=_normalize_level(log_level), retention="30 days"),
            _file_handler(error_log_file, level="ERROR", retention="90 days"),
        ]
    )
    _intercept_std_logging(INTERCEPTED_LOGGERS)


__all__ = ["setup_logging", "logger", "LogLevel", "InterceptHandler"]
