"""Read-only views of the records the quote bridge creates."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from .. import crud, models, schemas
from ..utils import outbox

router = APIRouter()


@router.get("/clients", response_model=list[schemas.ClientRead], tags=["clients"])
def list_clients(
    status: Optional[models.ClientStatus] = Query(default=None),
    db: Session = Depends(get_db),
):
    return crud.crud_client.get_clients(db, status)


@router.get("/clients/{client_id}", response_model=schemas.ClientRead, tags=["clients"])
def read_client(client_id: str, db: Session = Depends(get_db)):
    return crud.crud_client.get_client(db, client_id)


@router.get("/proposals", response_model=list[schemas.ProposalRead], tags=["proposals"])
def list_proposals(client_id: Optional[int] = None, db: Session = Depends(get_db)):
    return crud.crud_proposal.get_proposals(db, client_id)


@router.get("/proposals/{proposal_id}", response_model=schemas.ProposalRead, tags=["proposals"])
def read_proposal(proposal_id: str, db: Session = Depends(get_db)):
    return crud.crud_proposal.get_proposal(db, proposal_id)


@router.get("/outbox", response_model=list[schemas.OutboxEventRead], tags=["ops"])
def list_outbox_events(
    status: Optional[models.OutboxStatus] = Query(default=None),
    topic: Optional[str] = None,
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Bridge deliveries, newest first; ``status=failed`` lists quotes left without a prospect."""
    return outbox.list_events(db, status=status, topic=topic, limit=limit)
