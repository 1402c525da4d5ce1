from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class HealthResponse(BaseModel):
    status: str
    database: str
    version: str


class ImpactRecordedResponse(BaseModel):
    message: str
    event_id: int
    impact: int
    light_state: str


class EventSnapshot(BaseModel):
    impact: int
    light_state: str
    g_force: Optional[float] = None
    light_raw: Optional[float] = None
    created_at: datetime


class EventWithOwner(BaseModel):
    nickname: Optional[str] = None
    owner_name: Optional[str] = None
    impact: int
    light_state: str
    g_force: Optional[float] = None
    created_at: datetime


class ClearEventsResponse(BaseModel):
    message: str
    deleted: int


class HardHatUpdatedResponse(BaseModel):
    updated: bool
