import enum
from sqlalchemy import (
    Column,
    Integer,
    ForeignKey,
    Numeric,
    String,
    JSON,
    Enum as SQLAlchemyEnum,
)
from sqlalchemy.orm import relationship

from .base import BaseModel
from .rate import ServiceFrequency


class QuoteStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class Quote(BaseModel):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False, index=True)
    customer_phone = Column(String, nullable=True)

    square_footage = Column(Integer, nullable=False)
    service_frequency = Column(
        SQLAlchemyEnum(
            ServiceFrequency,
            name="quotefrequency",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        nullable=True,
    )
    # Requested add-ons as spelled by the caller, deduplicated on their
    # normalized key, e.g. ["deepCleaning", "Pet Hair Cleanup"]
    add_ons = Column(JSON, nullable=False, default=list)

    base_price = Column(Numeric(10, 2), nullable=False, default=0)
    surcharges = Column(Numeric(10, 2), nullable=False, default=0)
    discounts = Column(Numeric(10, 2), nullable=False, default=0)
    total_price = Column(Numeric(10, 2), nullable=False, default=0)

    status = Column(
        SQLAlchemyEnum(
            QuoteStatus,
            name="quotestatus",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        nullable=False,
        default=QuoteStatus.PENDING,
        index=True,
    )

    # Only set once both the prospect and the draft proposal exist
    prospect_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    proposal_id = Column(Integer, ForeignKey("proposals.id", ondelete="SET NULL"), nullable=True)

    prospect = relationship("Client", foreign_keys=[prospect_id])
    proposal = relationship("Proposal", foreign_keys=[proposal_id])
