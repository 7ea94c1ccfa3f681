from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.proposal import ProposalStatus


class LineItem(BaseModel):
    id: int
    service: str
    price: Decimal


class ProposalCreate(BaseModel):
    client_id: int
    title: Optional[str] = None
    status: ProposalStatus = ProposalStatus.DRAFT
    line_items: List[LineItem] = Field(default_factory=list)
    notes: Optional[str] = None


class ProposalRead(BaseModel):
    id: int
    client_id: Optional[int] = None
    client_name: str
    title: Optional[str] = None
    status: ProposalStatus
    line_items: List[LineItem] = Field(default_factory=list)
    total: Decimal
    notes: Optional[str] = None
    date_sent: Optional[datetime] = None
    job_id: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}
