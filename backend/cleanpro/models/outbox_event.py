import enum
from sqlalchemy import Column, DateTime, Integer, String, Text, JSON, Enum as SQLAlchemyEnum

from .base import BaseModel


class OutboxStatus(str, enum.Enum):
    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"


class OutboxEvent(BaseModel):
    """A follow-up step recorded after its triggering write was committed."""

    __tablename__ = "outbox_events"

    id = Column(Integer, primary_key=True, index=True)
    topic = Column(String(255), nullable=False, index=True)
    payload_json = Column(JSON, nullable=False, default=dict)
    status = Column(
        SQLAlchemyEnum(
            OutboxStatus,
            name="outboxstatus",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        nullable=False,
        default=OutboxStatus.PENDING,
        index=True,
    )
    attempt_count = Column(Integer, nullable=False, default=0)
    last_error = Column(Text, nullable=True)
    delivered_at = Column(DateTime, nullable=True)
