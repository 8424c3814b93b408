from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from medremind.datamodel import ReminderInput
from medremind.world.reminder import ReminderSweeper


@dataclass
class RuntimeControl:
    shutdown_event: asyncio.Event
    sweeper: ReminderSweeper
    started_at: float


class ShutdownRequest(BaseModel):
    reason: str = Field(default="manual")


class ReminderCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    medication_name: str = Field(alias="medicationName", min_length=1)
    dosage: str
    frequency: str = "daily"
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")

    def to_input(self) -> ReminderInput:
        return ReminderInput(
            medication_name=self.medication_name,
            dosage=self.dosage,
            frequency=self.frequency,
            start_date=self.start_date.isoformat(),
            end_date=self.end_date.isoformat(),
        )
