from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from .. import crud, models, schemas
from ..services import quote_pricing

logger = logging.getLogger(__name__)

router = APIRouter(tags=["quotes"])


@router.post("/quotes/calculate", response_model=schemas.PricedQuote)
def calculate_quote(request: schemas.QuoteRequest, db: Session = Depends(get_db)):
    """Price a request against the live catalog without storing anything."""
    return quote_pricing.calculate_quote_for_db(db, request)


@router.post("/quotes", response_model=schemas.QuoteRead, status_code=status.HTTP_201_CREATED)
def create_quote(quote_in: schemas.QuoteCreate, db: Session = Depends(get_db)):
    return crud.crud_quote.create_quote(db, quote_in)


@router.get("/quotes", response_model=list[schemas.QuoteRead])
def list_quotes(
    status: Optional[models.QuoteStatus] = Query(default=None),
    db: Session = Depends(get_db),
):
    if status is None:
        return crud.crud_quote.get_all_quotes(db)
    return crud.crud_quote.get_quotes_by_status(db, status)


@router.get("/quotes/recent", response_model=list[schemas.QuoteRead])
def recent_quotes(
    limit: Optional[int] = Query(default=None, ge=0, le=100),
    db: Session = Depends(get_db),
):
    return crud.crud_quote.get_recent_quotes(db, limit)


@router.get("/quotes/{quote_id}", response_model=schemas.QuoteRead)
def read_quote(quote_id: str, db: Session = Depends(get_db)):
    return crud.crud_quote.get_quote(db, quote_id)


@router.patch("/quotes/{quote_id}", response_model=schemas.QuoteRead)
def update_quote(quote_id: str, quote_in: schemas.QuoteUpdate, db: Session = Depends(get_db)):
    return crud.crud_quote.update_quote(db, quote_id, quote_in)


@router.delete("/quotes/{quote_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quote(quote_id: str, db: Session = Depends(get_db)):
    crud.crud_quote.delete_quote(db, quote_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
