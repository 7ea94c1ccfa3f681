import enum
from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    ForeignKey,
    Numeric,
    String,
    Text,
    JSON,
    Enum as SQLAlchemyEnum,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class ProposalStatus(str, enum.Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    APPROVED = "Approved"
    DECLINED = "Declined"


class Proposal(BaseModel):
    __tablename__ = "proposals"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    title = Column(String, nullable=True)
    status = Column(
        SQLAlchemyEnum(
            ProposalStatus,
            name="proposalstatus",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        nullable=False,
        default=ProposalStatus.DRAFT,
    )
    # [{"id": 1, "service": "Weekly Cleaning Service", "price": 120.0}, ...]
    line_items = Column(JSON, nullable=False, default=list)
    total = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    date_sent = Column(DateTime, nullable=True)
    # Jobs are scheduled elsewhere; proposals created here never carry one
    job_id = Column(Integer, nullable=True)

    client = relationship("Client", back_populates="proposals")

    @property
    def client_name(self) -> str:
        if self.client is not None and self.client.name:
            return self.client.name
        return "Unknown Client"
