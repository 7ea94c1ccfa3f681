from datetime import datetime
from sqlalchemy import Column, DateTime
from ..database import Base  # This is the same Base created by declarative_base()


class BaseModel(Base):
    __abstract__ = True

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def stamp_created(self) -> None:
        """Set both timestamps to the same instant before the first flush."""
        now = datetime.utcnow()
        self.created_at = now
        self.updated_at = now

    def touch(self) -> None:
        # Explicit so no-op merges still refresh the timestamp
        self.updated_at = datetime.utcnow()
