from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.config import settings
from ..models.quote import QuoteStatus
from ..models.rate import ServiceFrequency


class QuoteRequest(BaseModel):
    """Inputs that drive pricing."""

    square_footage: int
    service_frequency: Optional[ServiceFrequency] = None
    add_ons: List[str] = Field(default_factory=list)


class PricedQuote(BaseModel):
    base_price: Decimal
    surcharges: Decimal
    discounts: Decimal
    total_price: Decimal


class QuoteCreate(BaseModel):
    # Required-ness is checked by crud_quote.create_quote so that blank
    # strings and missing values fail the same way.
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    square_footage: Optional[int] = None
    service_frequency: Optional[ServiceFrequency] = None
    add_ons: List[str] = Field(default_factory=list)


class QuoteUpdate(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    square_footage: Optional[int] = Field(default=None, gt=0)
    service_frequency: Optional[ServiceFrequency] = None
    add_ons: Optional[List[str]] = None
    status: Optional[QuoteStatus] = None


class QuoteRead(PricedQuote):
    id: int
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    square_footage: int
    service_frequency: Optional[ServiceFrequency] = None
    add_ons: List[str] = Field(default_factory=list)
    status: QuoteStatus
    prospect_id: Optional[int] = None
    proposal_id: Optional[int] = None
    # Single fixed currency for every priced field
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
