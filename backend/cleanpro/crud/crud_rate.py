from decimal import Decimal
from typing import Any, List
import logging

from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import write_lock
from ..services import quote_pricing
from ..utils.errors import NotFoundError, ValidationError, coerce_id

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    models.RateCategory.SQUARE_FOOTAGE: ("min_sq_ft", "max_sq_ft", "base_price"),
    models.RateCategory.SURCHARGE: ("surcharge_type", "surcharge_value"),
    models.RateCategory.DISCOUNT: ("discount_type", "discount_value", "frequency"),
}

# Fields where an explicit null is a value: no upper bound on the tier
NULLABLE_WHEN_GIVEN = {"max_sq_ft"}

_REQUIRED_MESSAGES = {
    models.RateCategory.SQUARE_FOOTAGE: "Square footage rates require minSqFt, maxSqFt, and basePrice",
    models.RateCategory.SURCHARGE: "Surcharges require surchargeType and surchargeValue",
    models.RateCategory.DISCOUNT: "Discounts require discountType, discountValue, and frequency",
}


def _active(db: Session, category: models.RateCategory):
    return (
        db.query(models.Rate)
        .filter(models.Rate.category == category, models.Rate.is_active.is_(True))
    )


def get_all_rates(db: Session) -> List[models.Rate]:
    return db.query(models.Rate).order_by(models.Rate.id).all()


def get_rates_by_category(db: Session, category: models.RateCategory) -> List[models.Rate]:
    return _active(db, models.RateCategory(category)).order_by(models.Rate.id).all()


def get_square_footage_tiers(db: Session) -> List[models.Rate]:
    return (
        _active(db, models.RateCategory.SQUARE_FOOTAGE)
        .order_by(models.Rate.min_sq_ft, models.Rate.id)
        .all()
    )


def get_surcharges(db: Session) -> List[models.Rate]:
    return get_rates_by_category(db, models.RateCategory.SURCHARGE)


def get_discounts(db: Session) -> List[models.Rate]:
    return get_rates_by_category(db, models.RateCategory.DISCOUNT)


def get_rate(db: Session, rate_id: Any) -> models.Rate:
    numeric_id = coerce_id(rate_id, "rate_id", "Rate")
    rate = db.query(models.Rate).filter(models.Rate.id == numeric_id).first()
    if rate is None:
        raise NotFoundError(f"Rate with ID {numeric_id} not found", {"rate_id": "not_found"})
    return rate


def _check_required(category: models.RateCategory, values: dict, given: set) -> None:
    missing = [
        f
        for f in REQUIRED_FIELDS[category]
        if values.get(f) is None and not (f in NULLABLE_WHEN_GIVEN and f in given)
    ]
    if missing:
        raise ValidationError(
            _REQUIRED_MESSAGES[category],
            {f: "required" for f in missing},
        )


def create_rate(db: Session, rate_in: schemas.RateCreate) -> models.Rate:
    data = rate_in.model_dump()
    category = models.RateCategory(data.pop("category"))
    _check_required(category, data, rate_in.model_fields_set)
    with write_lock:
        rate = models.Rate(category=category, is_active=True, **data)
        rate.stamp_created()
        db.add(rate)
        db.commit()
        db.refresh(rate)
    logger.info("Created %s rate %s", category.value, rate.id)
    return rate


def update_rate(db: Session, rate_id: Any, rate_in: schemas.RateUpdate) -> models.Rate:
    with write_lock:
        rate = get_rate(db, rate_id)
        for key, value in rate_in.model_dump(exclude_unset=True).items():
            setattr(rate, key, value)
        rate.touch()
        db.commit()
        db.refresh(rate)
    return rate


def delete_rate(db: Session, rate_id: Any) -> models.Rate:
    """Soft delete: the row stays, it just stops pricing anything."""
    with write_lock:
        rate = get_rate(db, rate_id)
        rate.is_active = False
        rate.touch()
        db.commit()
        db.refresh(rate)
    logger.info("Deactivated rate %s", rate.id)
    return rate


def get_catalog_snapshot(db: Session) -> quote_pricing.RateCatalogSnapshot:
    tiers = [
        quote_pricing.TierRule(
            rate_id=r.id,
            min_sq_ft=r.min_sq_ft or 0,
            max_sq_ft=r.max_sq_ft,
            base_price=Decimal(str(r.base_price or 0)),
        )
        for r in get_square_footage_tiers(db)
    ]
    surcharges = [
        quote_pricing.SurchargeRule(
            rate_id=r.id,
            name=r.name or "",
            surcharge_type=r.surcharge_type or models.AdjustmentType.FIXED,
            value=Decimal(str(r.surcharge_value or 0)),
        )
        for r in get_surcharges(db)
    ]
    discounts = [
        quote_pricing.DiscountRule(
            rate_id=r.id,
            frequency=r.frequency,
            discount_type=r.discount_type or models.AdjustmentType.FIXED,
            value=Decimal(str(r.discount_value or 0)),
        )
        for r in get_discounts(db)
        if r.frequency is not None
    ]
    return quote_pricing.build_snapshot(tiers, surcharges, discounts)


def calculate_base_price(db: Session, square_footage: Any) -> Decimal:
    return quote_pricing.calculate_base_price(get_catalog_snapshot(db), square_footage)
