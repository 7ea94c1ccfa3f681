from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from .. import crud, models, schemas

router = APIRouter(tags=["rates"])


@router.get("/rates", response_model=list[schemas.RateRead])
def list_rates(
    category: Optional[models.RateCategory] = Query(default=None),
    db: Session = Depends(get_db),
):
    """Every rate, or only the active rates of ``category`` when given."""
    if category is None:
        return crud.crud_rate.get_all_rates(db)
    return crud.crud_rate.get_rates_by_category(db, category)


@router.get("/rates/tiers", response_model=list[schemas.RateRead])
def list_square_footage_tiers(db: Session = Depends(get_db)):
    return crud.crud_rate.get_square_footage_tiers(db)


@router.get("/rates/surcharges", response_model=list[schemas.RateRead])
def list_surcharges(db: Session = Depends(get_db)):
    return crud.crud_rate.get_surcharges(db)


@router.get("/rates/discounts", response_model=list[schemas.RateRead])
def list_discounts(db: Session = Depends(get_db)):
    return crud.crud_rate.get_discounts(db)


@router.get("/rates/base-price", response_model=schemas.BasePriceOut)
def base_price(square_footage: int, db: Session = Depends(get_db)):
    return schemas.BasePriceOut(
        square_footage=square_footage,
        base_price=crud.crud_rate.calculate_base_price(db, square_footage),
    )


@router.get("/rates/{rate_id}", response_model=schemas.RateRead)
def read_rate(rate_id: str, db: Session = Depends(get_db)):
    return crud.crud_rate.get_rate(db, rate_id)


@router.post("/rates", response_model=schemas.RateRead, status_code=status.HTTP_201_CREATED)
def create_rate(rate_in: schemas.RateCreate, db: Session = Depends(get_db)):
    return crud.crud_rate.create_rate(db, rate_in)


@router.patch("/rates/{rate_id}", response_model=schemas.RateRead)
def update_rate(rate_id: str, rate_in: schemas.RateUpdate, db: Session = Depends(get_db)):
    return crud.crud_rate.update_rate(db, rate_id, rate_in)


@router.delete("/rates/{rate_id}", response_model=schemas.RateRead)
def delete_rate(rate_id: str, db: Session = Depends(get_db)):
    """Deactivate a rate. The record stays visible in ``GET /rates``."""
    return crud.crud_rate.delete_rate(db, rate_id)
