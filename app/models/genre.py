import uuid

from sqlalchemy import Column, String, Uuid
from app.database import Base

class Genre(Base):
    """Read-only reference table, seeded outside the API"""
    __tablename__ = "genres"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, index=True)

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"
