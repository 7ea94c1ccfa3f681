from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from .. import models, schemas
from ..utils.errors import NotFoundError, coerce_id

logger = logging.getLogger(__name__)


def calculate_total(line_items: List[schemas.LineItem]) -> Decimal:
    return sum((item.price for item in line_items), Decimal("0"))


def create_proposal(db: Session, proposal_in: schemas.ProposalCreate) -> models.Proposal:
    total = calculate_total(proposal_in.line_items)
    line_items = [
        {"id": item.id, "service": item.service, "price": float(item.price)}
        for item in proposal_in.line_items
    ]
    proposal = models.Proposal(
        client_id=proposal_in.client_id,
        title=proposal_in.title,
        status=proposal_in.status,
        line_items=line_items,
        total=total,
        notes=proposal_in.notes,
        date_sent=datetime.utcnow(),
        job_id=None,
    )
    proposal.stamp_created()
    db.add(proposal)
    db.commit()
    db.refresh(proposal)
    logger.info("Created proposal %s for client %s total=%s", proposal.id, proposal.client_id, total)
    return proposal


def get_proposal(db: Session, proposal_id) -> models.Proposal:
    numeric_id = coerce_id(proposal_id, "proposal_id", "Proposal")
    proposal = db.query(models.Proposal).filter(models.Proposal.id == numeric_id).first()
    if proposal is None:
        raise NotFoundError("Proposal not found", {"proposal_id": "not_found"})
    return proposal


def get_proposals(db: Session, client_id: Optional[int] = None) -> List[models.Proposal]:
    query = db.query(models.Proposal)
    if client_id is not None:
        query = query.filter(models.Proposal.client_id == client_id)
    return query.order_by(models.Proposal.id).all()
