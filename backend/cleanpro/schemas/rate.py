from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ..models.rate import AdjustmentType, RateCategory, ServiceFrequency


class RateBase(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    min_sq_ft: Optional[int] = Field(default=None, ge=0)
    max_sq_ft: Optional[int] = Field(default=None, ge=0)
    base_price: Optional[Decimal] = Field(default=None, ge=0)
    surcharge_type: Optional[AdjustmentType] = None
    surcharge_value: Optional[Decimal] = Field(default=None, ge=0)
    frequency: Optional[ServiceFrequency] = None
    discount_type: Optional[AdjustmentType] = None
    discount_value: Optional[Decimal] = Field(default=None, ge=0)


class RateCreate(RateBase):
    category: RateCategory


class RateUpdate(RateBase):
    """Partial update; only fields present in the payload are merged."""

    is_active: Optional[bool] = None


class RateRead(RateBase):
    id: int
    category: RateCategory
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BasePriceOut(BaseModel):
    square_footage: int
    base_price: Decimal
