import enum
from sqlalchemy import (
    Boolean,
    Column,
    Integer,
    Numeric,
    String,
    Enum as SQLAlchemyEnum,
)

from .base import BaseModel


class RateCategory(str, enum.Enum):
    SQUARE_FOOTAGE = "squareFootage"
    SURCHARGE = "surcharge"
    DISCOUNT = "discount"


class AdjustmentType(str, enum.Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class ServiceFrequency(str, enum.Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ONE_TIME = "oneTime"


FREQUENCY_LABELS = {
    ServiceFrequency.WEEKLY: "Weekly",
    ServiceFrequency.BIWEEKLY: "Bi-Weekly",
    ServiceFrequency.MONTHLY: "Monthly",
    ServiceFrequency.ONE_TIME: "One-Time",
}


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class Rate(BaseModel):
    """One priced rule of the catalog.

    ``category`` tags which group of columns is meaningful:

    - ``squareFootage``: ``min_sq_ft``/``max_sq_ft``/``base_price``
      (a NULL ``max_sq_ft`` means the tier has no upper bound)
    - ``surcharge``: ``surcharge_type``/``surcharge_value``
    - ``discount``: ``frequency``/``discount_type``/``discount_value``

    Rows are never deleted; ``is_active`` is cleared instead.
    """

    __tablename__ = "rates"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(
        SQLAlchemyEnum(RateCategory, name="ratecategory", values_callable=_enum_values),
        nullable=False,
        index=True,
    )
    name = Column(String, nullable=True)
    description = Column(String, nullable=True)

    min_sq_ft = Column(Integer, nullable=True)
    max_sq_ft = Column(Integer, nullable=True)
    base_price = Column(Numeric(10, 2), nullable=True)

    surcharge_type = Column(
        SQLAlchemyEnum(AdjustmentType, name="surchargetype", values_callable=_enum_values),
        nullable=True,
    )
    surcharge_value = Column(Numeric(10, 2), nullable=True)

    frequency = Column(
        SQLAlchemyEnum(ServiceFrequency, name="servicefrequency", values_callable=_enum_values),
        nullable=True,
    )
    discount_type = Column(
        SQLAlchemyEnum(AdjustmentType, name="discounttype", values_callable=_enum_values),
        nullable=True,
    )
    discount_value = Column(Numeric(10, 2), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, index=True)
