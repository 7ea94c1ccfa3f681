from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..models.outbox_event import OutboxStatus


class OutboxEventRead(BaseModel):
    id: int
    topic: str
    payload_json: Dict[str, Any]
    status: OutboxStatus
    attempt_count: int
    last_error: Optional[str] = None
    delivered_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}
