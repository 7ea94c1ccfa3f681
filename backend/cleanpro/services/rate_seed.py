"""Default cleaning catalog loaded into an empty ``rates`` table."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from .. import models, schemas
from ..crud import crud_rate

logger = logging.getLogger(__name__)

DEFAULT_RATES: list[dict] = [
    {"category": "squareFootage", "name": "Small Home", "min_sq_ft": 0, "max_sq_ft": 999, "base_price": 80},
    {"category": "squareFootage", "name": "Medium Home", "min_sq_ft": 1000, "max_sq_ft": 1999, "base_price": 120},
    {"category": "squareFootage", "name": "Large Home", "min_sq_ft": 2000, "max_sq_ft": None, "base_price": 160},
    {
        "category": "surcharge",
        "name": "Deep Cleaning",
        "description": "Baseboards, inside appliances and detailed scrubbing",
        "surcharge_type": "fixed",
        "surcharge_value": 40,
    },
    {
        "category": "surcharge",
        "name": "Pet Hair Cleanup",
        "description": "Extra vacuuming and lint removal for homes with pets",
        "surcharge_type": "fixed",
        "surcharge_value": 25,
    },
    {
        "category": "surcharge",
        "name": "Cleaning Supplies",
        "description": "We bring all cleaning products and equipment",
        "surcharge_type": "fixed",
        "surcharge_value": 15,
    },
    {"category": "discount", "name": "Weekly Discount", "frequency": "weekly", "discount_type": "percentage", "discount_value": 15},
    {"category": "discount", "name": "Bi-Weekly Discount", "frequency": "biweekly", "discount_type": "percentage", "discount_value": 10},
    {"category": "discount", "name": "Monthly Discount", "frequency": "monthly", "discount_type": "percentage", "discount_value": 5},
]


def seed_default_rates(db: Session) -> int:
    """Insert :data:`DEFAULT_RATES` when the catalog has no rows at all.

    Returns the number of rates created.
    """
    if db.query(models.Rate.id).first() is not None:
        return 0
    for data in DEFAULT_RATES:
        crud_rate.create_rate(db, schemas.RateCreate(**data))
    logger.info("Seeded %d default rates", len(DEFAULT_RATES))
    return len(DEFAULT_RATES)
