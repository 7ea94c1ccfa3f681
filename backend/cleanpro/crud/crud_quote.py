from typing import Any, List, Optional
import logging

from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.config import settings
from ..database import write_lock
from ..services import quote_pricing
from ..utils.addon_keys import unique_addons
from ..utils.errors import NotFoundError, ValidationError, coerce_id

logger = logging.getLogger(__name__)

# A patch touching any of these re-prices the quote
PRICING_FIELDS = ("square_footage", "service_frequency", "add_ons")


def _apply_pricing(quote: models.Quote, priced: schemas.PricedQuote) -> None:
    quote.base_price = priced.base_price
    quote.surcharges = priced.surcharges
    quote.discounts = priced.discounts
    quote.total_price = priced.total_price


def _request_for(quote: models.Quote) -> schemas.QuoteRequest:
    return schemas.QuoteRequest(
        square_footage=quote.square_footage,
        service_frequency=quote.service_frequency,
        add_ons=list(quote.add_ons or []),
    )


def _validate_new_quote(quote_in: schemas.QuoteCreate) -> None:
    field_errors = {}
    if not (quote_in.customer_name or "").strip():
        field_errors["customer_name"] = "required"
    if not (quote_in.customer_email or "").strip():
        field_errors["customer_email"] = "required"
    if not quote_in.square_footage or quote_in.square_footage <= 0:
        field_errors["square_footage"] = "required"
    if field_errors:
        raise ValidationError(
            "Customer name, email, and square footage are required", field_errors
        )


def create_quote(db: Session, quote_in: schemas.QuoteCreate) -> models.Quote:
    """Price and store a quote, then hand it to the CRM bridge.

    The returned quote carries ``prospect_id`` only when the bridge created
    both the prospect and the draft proposal.
    """
    from ..services import quote_bridge

    _validate_new_quote(quote_in)
    with write_lock:
        quote = models.Quote(
            customer_name=quote_in.customer_name.strip(),
            customer_email=quote_in.customer_email.strip(),
            customer_phone=quote_in.customer_phone,
            square_footage=quote_in.square_footage,
            service_frequency=quote_in.service_frequency,
            add_ons=unique_addons(quote_in.add_ons),
            status=models.QuoteStatus.PENDING,
        )
        _apply_pricing(quote, quote_pricing.calculate_quote_for_db(db, _request_for(quote)))
        quote.stamp_created()
        db.add(quote)
        db.commit()
        db.refresh(quote)
        logger.info(
            "Created quote %s sqft=%s frequency=%s total=%s",
            quote.id,
            quote.square_footage,
            quote.service_frequency.value if quote.service_frequency else None,
            quote.total_price,
        )

        try:
            quote = quote_bridge.run_quote_bridge(db, quote)
        except Exception:
            # The quote is committed; bridge bookkeeping must not undo that.
            logger.exception("Quote bridge could not run for quote %s", quote.id)
            db.rollback()
            db.refresh(quote)
    return quote


def get_quote(db: Session, quote_id: Any) -> models.Quote:
    numeric_id = coerce_id(quote_id, "quote_id", "Quote")
    quote = db.query(models.Quote).filter(models.Quote.id == numeric_id).first()
    if quote is None:
        raise NotFoundError(f"Quote with ID {numeric_id} not found", {"quote_id": "not_found"})
    return quote


def get_all_quotes(db: Session) -> List[models.Quote]:
    return db.query(models.Quote).order_by(models.Quote.id).all()


def update_quote(db: Session, quote_id: Any, quote_in: schemas.QuoteUpdate) -> models.Quote:
    patch = quote_in.model_dump(exclude_unset=True)
    with write_lock:
        quote = get_quote(db, quote_id)
        blanked = [
            f for f in ("customer_name", "customer_email", "square_footage", "status")
            if f in patch and (patch[f] is None or not str(patch[f]).strip())
        ]
        if blanked:
            raise ValidationError(
                "Required quote fields cannot be cleared",
                {f: "required" for f in blanked},
            )
        if "add_ons" in patch:
            patch["add_ons"] = unique_addons(patch["add_ons"])
        for key, value in patch.items():
            setattr(quote, key, value)
        if any(field in patch for field in PRICING_FIELDS):
            _apply_pricing(quote, quote_pricing.calculate_quote_for_db(db, _request_for(quote)))
            logger.info("Re-priced quote %s total=%s", quote.id, quote.total_price)
        quote.touch()
        db.commit()
        db.refresh(quote)
    return quote


def delete_quote(db: Session, quote_id: Any) -> None:
    with write_lock:
        quote = get_quote(db, quote_id)
        db.delete(quote)
        db.commit()
    logger.info("Deleted quote %s", quote_id)


def get_quotes_by_status(db: Session, status: models.QuoteStatus) -> List[models.Quote]:
    return (
        db.query(models.Quote)
        .filter(models.Quote.status == models.QuoteStatus(status))
        .order_by(models.Quote.id)
        .all()
    )


def get_recent_quotes(db: Session, limit: Optional[int] = None) -> List[models.Quote]:
    if limit is None:
        limit = settings.RECENT_QUOTES_LIMIT
    return (
        db.query(models.Quote)
        .order_by(models.Quote.created_at.desc(), models.Quote.id.desc())
        .limit(max(0, int(limit)))
        .all()
    )
