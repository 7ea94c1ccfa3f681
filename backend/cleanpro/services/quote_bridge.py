"""Turn a stored quote into CRM records: a prospect client and a draft proposal.

The bridge runs after the quote has been committed, as the delivery of a
``quote.created`` outbox event. It is best-effort: a failure marks the event
as failed and leaves the quote exactly as it was stored, without a
``prospect_id``. Nothing is rolled back across the two CRM writes; if the
prospect was created and the proposal then failed, the prospect stays.

Proposal line items are re-derived from the catalog at bridge time. Add-ons
are priced at the surcharge's configured value, not at the share of
``surcharges`` the quote was charged, so a percentage surcharge or a rate
edited in between will show a different figure than the quote.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from .. import models, schemas
from ..core.config import settings
from ..crud import crud_client, crud_proposal, crud_rate
from ..utils import metrics, outbox
from ..utils.addon_keys import decamelize, unique_addons
from ..utils.errors import NotFoundError, ValidationError
from .quote_pricing import RateCatalogSnapshot

logger = logging.getLogger(__name__)

QUOTE_CREATED_TOPIC = "quote.created"
QUOTE_SOURCE = "quote_generator"

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}


def frequency_label(frequency: models.ServiceFrequency) -> str:
    return models.FREQUENCY_LABELS.get(frequency, decamelize(frequency.value))


def addon_labels(snapshot: RateCatalogSnapshot, add_ons) -> List[str]:
    labels = []
    for raw in unique_addons(add_ons):
        surcharge = snapshot.find_surcharge(raw)
        labels.append(surcharge.name if surcharge is not None else decamelize(raw))
    return labels


def format_money(amount) -> str:
    """``$130.50`` for USD; codes without a known symbol read ``CAD 130.50``."""
    currency = settings.DEFAULT_CURRENCY
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol is None:
        return f"{currency} {amount:.2f}"
    return f"{symbol}{amount:.2f}"


def build_summary(quote: models.Quote, snapshot: RateCatalogSnapshot) -> str:
    labels = addon_labels(snapshot, quote.add_ons)
    return (
        f"Quote #{quote.id}: {frequency_label(quote.service_frequency)} cleaning service "
        f"for {quote.square_footage} sq ft. "
        f"Add-ons: {', '.join(labels) if labels else 'None'}. "
        f"Estimated total: {format_money(quote.total_price)}"
    )


def build_line_items(quote: models.Quote, snapshot: RateCatalogSnapshot) -> List[schemas.LineItem]:
    items = [
        schemas.LineItem(
            id=1,
            service=f"{frequency_label(quote.service_frequency)} Cleaning Service ({quote.square_footage} sq ft)",
            price=quote.base_price,
        )
    ]
    for raw in unique_addons(quote.add_ons):
        surcharge = snapshot.find_surcharge(raw)
        if surcharge is None:
            continue
        items.append(
            schemas.LineItem(id=len(items) + 1, service=surcharge.name, price=surcharge.value)
        )
    return items


def bridge_quote(db: Session, quote: models.Quote) -> Tuple[models.Client, models.Proposal]:
    if quote.service_frequency is None:
        raise ValidationError(
            "Service frequency is required to create a proposal",
            {"service_frequency": "required"},
        )
    snapshot = crud_rate.get_catalog_snapshot(db)
    summary = build_summary(quote, snapshot)

    prospect = crud_client.create_prospect(
        db,
        schemas.ClientCreate(
            name=quote.customer_name,
            email=quote.customer_email,
            phone=quote.customer_phone or "",
            source=QUOTE_SOURCE,
            notes=summary,
        ),
    )
    proposal = crud_proposal.create_proposal(
        db,
        schemas.ProposalCreate(
            client_id=prospect.id,
            title=f"Cleaning Proposal for {quote.customer_name}",
            status=models.ProposalStatus.DRAFT,
            line_items=build_line_items(quote, snapshot),
            notes=summary,
        ),
    )

    quote.prospect_id = prospect.id
    quote.proposal_id = proposal.id
    db.commit()
    logger.info(
        "Quote %s bridged to prospect %s and proposal %s", quote.id, prospect.id, proposal.id
    )
    return prospect, proposal


def handle_quote_created(db: Session, event: models.OutboxEvent):
    quote_id = (event.payload_json or {}).get("quote_id")
    quote = db.get(models.Quote, quote_id) if quote_id is not None else None
    if quote is None:
        raise NotFoundError(f"Quote with ID {quote_id} not found", {"quote_id": "not_found"})
    return bridge_quote(db, quote)


def run_quote_bridge(db: Session, quote: models.Quote) -> models.Quote:
    """Record the ``quote.created`` event and deliver it right away.

    Always returns ``quote`` reloaded from the database; bridge errors end up
    on the outbox event, not with the caller.
    """
    event = outbox.enqueue_outbox(
        db,
        QUOTE_CREATED_TOPIC,
        {"quote_id": quote.id, "customer_email": quote.customer_email},
    )
    if not settings.QUOTE_BRIDGE_ENABLED:
        logger.info("Quote bridge disabled; event %s left pending", event.id)
        return quote

    with metrics.Timer("quote.bridge.ms", tags={"topic": QUOTE_CREATED_TOPIC}):
        result = outbox.deliver(db, event, handle_quote_created)
    if result is None:
        logger.warning("Quote %s stored without prospect; see outbox event %s", quote.id, event.id)
    db.refresh(quote)
    return quote
