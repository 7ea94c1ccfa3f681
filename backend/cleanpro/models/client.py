import enum
from sqlalchemy import Column, Integer, String, Text, Enum as SQLAlchemyEnum
from sqlalchemy.orm import relationship

from .base import BaseModel


class ClientStatus(str, enum.Enum):
    CLIENT = "client"
    PROSPECT = "prospect"


class Client(BaseModel):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True, index=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    status = Column(
        SQLAlchemyEnum(
            ClientStatus,
            name="clientstatus",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        nullable=False,
        default=ClientStatus.CLIENT,
    )
    # Where the record came from, e.g. "quote_generator"
    source = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    proposals = relationship("Proposal", back_populates="client")
