from __future__ import annotations

import time
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse

import medremind.storage.db_config as db_config
import medremind.storage.reminder as reminder_storage
from medremind import __version__
from medremind.config import settings
from medremind.logger import logger
from medremind.metrics import runtime_metrics
from medremind.world.tips import get_daily_tip

from .auth import require_admin_auth
from .schemas import ReminderCreateRequest, RuntimeControl, ShutdownRequest


def create_app(control: RuntimeControl) -> FastAPI:
    app = FastAPI(title="MedRemind API", version=__version__)

    if not settings.ADMIN_AUTH_TOKEN:
        logger.warning("未配置 ADMIN_AUTH_TOKEN，提醒 API 将不可访问")

    def health_payload() -> dict[str, Any]:
        return {
            "status": "ok",
            "now_utc": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "uptime_seconds": max(0.0, time.time() - control.started_at),
            "db_connected": db_config.conn is not None,
            "sweeper_running": control.sweeper.running,
            "shutdown_requested": control.shutdown_event.is_set(),
        }

    @app.get("/healthz", include_in_schema=False)
    async def healthz() -> PlainTextResponse:
        return PlainTextResponse("ok")

    @app.get("/api/v1/health")
    async def api_health() -> dict[str, Any]:
        return health_payload()

    @app.get("/api/v1/metrics")
    async def get_metrics(request: Request) -> dict[str, Any]:
        await require_admin_auth(request)
        return {
            "runtime": runtime_metrics.snapshot(),
            "components": {
                "db": {"connected": db_config.conn is not None},
                "reminder": control.sweeper.get_status(),
                "notifier": {
                    "type": type(control.sweeper.notifier).__name__,
                    "permission": control.sweeper.notifier.permission,
                },
            },
        }

    @app.get("/api/v1/reminders")
    async def list_reminders(request: Request) -> dict[str, Any]:
        await require_admin_auth(request)
        reminders = await reminder_storage.get_reminders()
        return {
            "items": [r.to_dict() for r in reminders],
            "total": len(reminders),
            "has_active": any(r.has_pending() for r in reminders),
        }

    @app.post("/api/v1/reminders")
    async def create_reminder(payload: ReminderCreateRequest, request: Request) -> dict[str, Any]:
        await require_admin_auth(request)
        if payload.end_date < payload.start_date:
            logger.info(
                f"拒绝创建提醒: end_date={payload.end_date} 早于 start_date={payload.start_date}"
            )
            raise HTTPException(status_code=400, detail="End date must be after start date")

        reminder = await reminder_storage.save_reminder(payload.to_input())
        # 与前端行为一致：保存后确保扫描器在运行
        control.sweeper.start()
        return {
            "ok": True,
            "message": (
                f"Reminder set for {reminder.medication_name} "
                f"from {reminder.start_date} to {reminder.end_date}"
            ),
            "reminder": reminder.to_dict(),
            "tip": get_daily_tip(reminder.medication_name),
        }

    @app.get("/api/v1/tips")
    async def get_tip(request: Request, medication_name: str = "") -> dict[str, str]:
        await require_admin_auth(request)
        return {"tip": get_daily_tip(medication_name)}

    @app.post("/api/v1/admin/shutdown")
    async def admin_shutdown(payload: ShutdownRequest, request: Request) -> dict[str, Any]:
        auth_info = await require_admin_auth(request)
        logger.warning(f"收到远程关闭请求: by={auth_info['user']}, reason={payload.reason}")
        control.shutdown_event.set()
        return {"ok": True, "action": "shutdown", "reason": payload.reason}

    return app
