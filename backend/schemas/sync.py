from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from core.config import REFRESH_INTERVALS


class ConnectRequest(BaseModel):
    """Clover credentials as entered in the settings form. Kept in memory only."""

    token: str
    merchant_id: str
    sandbox: bool = True

    @field_validator("token", "merchant_id")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v


class SchedulerUpdate(BaseModel):
    auto_refresh: Optional[bool] = None
    interval: Optional[int] = None

    @field_validator("interval")
    @classmethod
    def _allowed_interval(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return None
        if v not in REFRESH_INTERVALS:
            raise ValueError(f"interval must be one of {list(REFRESH_INTERVALS)}")
        return v


class SyncStatus(BaseModel):
    connected: bool
    demo_mode: bool
    syncing: bool
    last_synced: Optional[datetime] = None
    sandbox: Optional[bool] = None
    merchant_id: Optional[str] = None
    scheduler_state: Literal["idle", "active"]
    auto_refresh: bool
    interval: int
    countdown: int


class SyncResult(BaseModel):
    status: Literal["merged", "demo", "discarded", "failed"]
    message: str
    item_count: int = 0
    category_count: int = 0
    last_synced: Optional[datetime] = None
